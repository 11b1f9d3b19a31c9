"""
Tests for the saved profile record and its SQLite store.
"""

from datetime import datetime, timedelta, timezone

import pytest

from trader.database import Database, get_database_url
from trader.models import SavedProfileRow
from trader.profiles.schema import (
    ProfileNotFound,
    SavedProfile,
    SavedProfileError,
    load_saved_profile,
)
from trader.profiles.store import ProfileStore

pytestmark = pytest.mark.anyio


def make_profile(**overrides) -> SavedProfile:
    fields = {
        "team_a": "Arsenal",
        "team_b": "Chelsea",
        "profile_text": "Full match profile",
        "sources": [{"uri": "https://news.example/a", "title": "Team news A"}],
        "inputs": {"team_a": "Arsenal", "team_b": "Chelsea", "ppg_block": "PPG  1.85  1.10"},
    }
    fields.update(overrides)
    return SavedProfile(**fields)


@pytest.fixture
async def database():
    db = Database("sqlite:///:memory:")
    await db.init()
    yield db
    await db.close()


@pytest.fixture
def store(database):
    return ProfileStore(database)


class TestLoadSavedProfile:
    """Tagged, versioned payload validation."""

    async def test_round_trip_through_json(self):
        """A dumped profile loads back unchanged."""
        profile = make_profile(key_learnings="Back the over")
        loaded = load_saved_profile(profile.model_dump(mode="json"))
        assert loaded.id == profile.id
        assert loaded.key_learnings == "Back the over"
        assert loaded.inputs.ppg_block == "PPG  1.85  1.10"
        assert loaded.created_at == profile.created_at

    @pytest.mark.parametrize("change", [
        {"kind": "team_profile"},
        {"version": 2},
        {"unexpected": True},
        {"profile_text": ""},
    ])
    async def test_rejects_invalid_payloads(self, change):
        """Wrong tag, version, extra or blank fields fail."""
        payload = make_profile().model_dump(mode="json")
        payload.update(change)
        with pytest.raises(SavedProfileError):
            load_saved_profile(payload)

    async def test_rejects_missing_tag(self):
        """A payload without kind fails."""
        payload = make_profile().model_dump(mode="json")
        del payload["kind"]
        with pytest.raises(SavedProfileError, match="kind"):
            load_saved_profile(payload)

    async def test_rejects_non_object(self):
        """Only objects are loaded."""
        with pytest.raises(SavedProfileError):
            load_saved_profile(["not", "a", "profile"])

    async def test_defaults(self):
        """New profiles get a tag, version and id."""
        profile = make_profile()
        assert profile.kind == "match_profile"
        assert profile.version == 1
        assert len(profile.id) == 32
        assert profile.team_news is None


class TestProfileStore:
    """save / list / get / delete."""

    async def test_save_and_get(self, store):
        """A saved profile reads back."""
        profile = await store.save(make_profile())
        loaded = await store.get(profile.id)
        assert loaded.team_a == "Arsenal"
        assert loaded.sources[0].title == "Team news A"

    async def test_save_replaces_by_id(self, store):
        """Saving the same id overwrites."""
        profile = await store.save(make_profile())
        await store.save(profile.model_copy(update={"follow_up_answer": "Yes"}))
        assert len(await store.list()) == 1
        assert (await store.get(profile.id)).follow_up_answer == "Yes"

    async def test_list_newest_first(self, store):
        """Listing is newest first."""
        now = datetime.now(timezone.utc)
        older = await store.save(make_profile(created_at=now - timedelta(days=1)))
        newer = await store.save(make_profile(team_a="Leeds", created_at=now))
        assert [p.id for p in await store.list()] == [newer.id, older.id]

    async def test_list_skips_unreadable_rows(self, store, database):
        """Bad rows are left out of the list but fail on get."""
        await store.save(make_profile())
        async with database.session() as session:
            session.add(SavedProfileRow(
                id="broken",
                kind="match_profile",
                version=1,
                team_a="x",
                team_b="y",
                created_at=datetime.now(timezone.utc),
                payload={"kind": "something_else"},
            ))
            await session.commit()

        profiles = await store.list()
        assert len(profiles) == 1
        with pytest.raises(SavedProfileError):
            await store.get("broken")

    async def test_get_missing(self, store):
        """Unknown ids raise ProfileNotFound."""
        with pytest.raises(ProfileNotFound):
            await store.get("nope")

    async def test_delete(self, store):
        """Deleted profiles are gone."""
        profile = await store.save(make_profile())
        await store.delete(profile.id)
        assert await store.list() == []
        with pytest.raises(ProfileNotFound):
            await store.delete(profile.id)


class TestDatabaseUrl:
    """Sync URLs are converted to their async drivers."""

    @pytest.mark.parametrize("url,expected", [
        ("sqlite:///./trader.db", "sqlite+aiosqlite:///./trader.db"),
        ("sqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
        ("postgres://u:p@host/db", "postgresql+asyncpg://u:p@host/db"),
        ("postgresql://u:p@host/db", "postgresql+asyncpg://u:p@host/db"),
        ("sqlite+aiosqlite:///x.db", "sqlite+aiosqlite:///x.db"),
    ])
    async def test_conversion(self, url, expected):
        """Sync URLs map to async drivers."""
        assert get_database_url(url) == expected
