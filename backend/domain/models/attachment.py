from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel

from utils.identifiers import generate_id, now

class SongFile(SQLModel, table=True):
    __tablename__ = "files"
    id: str = Field(default_factory=generate_id, primary_key=True)
    song_id: str = Field(foreign_key="songs.id", index=True)
    name: str
    type: str  # logic, audio
    url: str
    external_id: Optional[str] = None
    mime_type: str = Field(default="application/octet-stream")
    size: int = Field(default=0)
    created_at: datetime = Field(default_factory=now)

class SongReference(SQLModel, table=True):
    __tablename__ = "song_references"
    id: str = Field(default_factory=generate_id, primary_key=True)
    song_id: str = Field(foreign_key="songs.id", index=True)
    type: str  # spotify, youtube
    title: str
    artist: str = Field(default="")
    url: str
    thumbnail: Optional[str] = None
    user: Optional[str] = None
    created_at: datetime = Field(default_factory=now)

class Comment(SQLModel, table=True):
    __tablename__ = "comments"
    id: str = Field(default_factory=generate_id, primary_key=True)
    song_id: str = Field(foreign_key="songs.id", index=True)
    user: str
    text: str
    created_at: datetime = Field(default_factory=now)
