from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel

from utils.identifiers import generate_id, now

class Version(SQLModel, table=True):
    """
    楽曲履歴の1エントリ。user 以外は作成後に変更しない。
    snapshot は変更「前」の状態を JSON 文字列で保持する。
    """
    __tablename__ = "versions"
    id: str = Field(default_factory=generate_id, primary_key=True)
    song_id: str = Field(foreign_key="songs.id", index=True)
    changes: str
    comment: str = Field(default="")
    user: str
    # 同一時刻のエントリを挿入順で並べるための連番 (楽曲ごと)
    sequence: int = Field(default=0)
    snapshot: Optional[str] = None
    created_at: datetime = Field(default_factory=now)
