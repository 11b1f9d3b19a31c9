"""Database models using SQLModel."""

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class SavedProfileRow(SQLModel, table=True):
    """A saved match profile session. The full record lives in `payload`."""

    __tablename__ = "saved_profiles"

    id: str = Field(primary_key=True, max_length=36)
    kind: str = Field(max_length=50, description="Record tag, 'match_profile'")
    version: int = Field(description="Record schema version")
    team_a: str = Field(max_length=255)
    team_b: str = Field(max_length=255)
    created_at: datetime = Field(index=True)
    payload: Optional[dict] = Field(
        default=None, sa_column=Column(JSON), description="SavedProfile as JSON"
    )
