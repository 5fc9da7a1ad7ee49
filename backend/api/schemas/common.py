from pydantic import BaseModel, Field
from typing import List, Literal, Optional

ProgressStage = Literal["Not Started", "In Progress", "Recording", "Mixing", "Mastering", "Complete"]

class AlbumCreate(BaseModel):
    name: str

class AlbumUpdate(BaseModel):
    name: str

class SongCreate(BaseModel):
    title: Optional[str] = None
    user: Optional[str] = None

class SongUpdate(BaseModel):
    title: Optional[str] = None
    lyrics: Optional[str] = None
    notes: Optional[str] = None
    progress: Optional[ProgressStage] = None
    origin: Optional[str] = None
    user: Optional[str] = None

class SongOrderUpdate(BaseModel):
    song_ids: List[str]

class VersionUserUpdate(BaseModel):
    user: str = Field(min_length=1)

class FileCreate(BaseModel):
    name: str
    type: Literal["logic", "audio"]
    url: str
    mime_type: str = "application/octet-stream"
    size: int = Field(default=0, ge=0)
    external_id: Optional[str] = None
    user: Optional[str] = None

class ReferenceCreate(BaseModel):
    type: Literal["spotify", "youtube"]
    title: str
    artist: str = ""
    url: str
    thumbnail: Optional[str] = None
    user: Optional[str] = None

class CommentCreate(BaseModel):
    user: str
    text: str

class CommentUpdate(BaseModel):
    user: Optional[str] = None
    text: Optional[str] = None
