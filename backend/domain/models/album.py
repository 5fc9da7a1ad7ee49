from datetime import datetime
from sqlmodel import Field, SQLModel

from utils.identifiers import generate_id, now

class Album(SQLModel, table=True):
    __tablename__ = "albums"
    id: str = Field(default_factory=generate_id, primary_key=True)
    name: str
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now, index=True)
