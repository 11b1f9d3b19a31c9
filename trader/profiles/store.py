"""Saved profile store: save / list / get / delete over SavedProfileRow."""

import logging

from sqlmodel import select

from trader.database import Database
from trader.models import SavedProfileRow
from trader.profiles.schema import ProfileNotFound, SavedProfile, SavedProfileError, load_saved_profile

logger = logging.getLogger(__name__)


class ProfileStore:
    def __init__(self, database: Database):
        self.database = database

    async def save(self, profile: SavedProfile) -> SavedProfile:
        """Insert or replace a profile by id."""
        payload = profile.model_dump(mode="json")
        async with self.database.session() as session:
            row = await session.get(SavedProfileRow, profile.id)
            if row is None:
                row = SavedProfileRow(id=profile.id)
            row.kind = profile.kind
            row.version = profile.version
            row.team_a = profile.team_a
            row.team_b = profile.team_b
            row.created_at = profile.created_at
            row.payload = payload
            session.add(row)
            await session.commit()
        logger.info(f"Saved profile {profile.id} ({profile.team_a} v {profile.team_b})")
        return profile

    async def list(self) -> list[SavedProfile]:
        """
        All saved profiles, newest first.

        Rows whose payload no longer validates are skipped with a warning.
        """
        async with self.database.session() as session:
            result = await session.execute(
                select(SavedProfileRow).order_by(SavedProfileRow.created_at.desc())
            )
            rows = result.scalars().all()

        profiles = []
        for row in rows:
            try:
                profiles.append(load_saved_profile(row.payload))
            except SavedProfileError as e:
                logger.warning(f"Skipping unreadable saved profile {row.id}: {e}")
        return profiles

    async def get(self, profile_id: str) -> SavedProfile:
        """
        Raises:
            ProfileNotFound: no row with this id.
            SavedProfileError: the stored payload is malformed.
        """
        async with self.database.session() as session:
            row = await session.get(SavedProfileRow, profile_id)
        if row is None:
            raise ProfileNotFound(profile_id)
        return load_saved_profile(row.payload)

    async def delete(self, profile_id: str) -> None:
        async with self.database.session() as session:
            row = await session.get(SavedProfileRow, profile_id)
            if row is None:
                raise ProfileNotFound(profile_id)
            await session.delete(row)
            await session.commit()
        logger.info(f"Deleted profile {profile_id}")
