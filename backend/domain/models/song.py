from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel

from domain.constants import DEFAULT_PROGRESS
from utils.identifiers import generate_id, now

class Song(SQLModel, table=True):
    """
    楽曲の現在状態。履歴は Version 側に追記される。
    """
    __tablename__ = "songs"
    id: str = Field(default_factory=generate_id, primary_key=True)
    album_id: str = Field(foreign_key="albums.id", index=True)

    title: str = Field(default="Untitled")
    lyrics: str = Field(default="")
    lyrics_user: Optional[str] = None
    lyrics_updated_at: Optional[datetime] = None
    notes: str = Field(default="")
    notes_user: Optional[str] = None
    notes_updated_at: Optional[datetime] = None
    progress: str = Field(default=DEFAULT_PROGRESS)
    origin: str = Field(default="")

    # アルバム内の並び順 (0始まり)
    display_order: int = Field(default=0)

    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)
