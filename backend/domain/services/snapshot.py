from typing import Any, Dict, List, Optional, Sequence
from pydantic import BaseModel, ValidationError

from domain.errors import InvalidStateError
from domain.models.attachment import SongFile, SongReference
from domain.models.song import Song
from utils.identifiers import now, to_iso

# 復元で上書きされるフィールド
RESTORABLE_FIELDS = ("title", "lyrics", "notes", "progress")

class SongSnapshot(BaseModel):
    """
    変更直前の楽曲状態。Version.snapshot に JSON 文字列として保存される。
    files / references は参照用で、復元では使わない。
    """
    title: str
    lyrics: str = ""
    notes: str = ""
    progress: str
    files: Optional[List[Dict[str, Any]]] = None
    references: Optional[List[Dict[str, Any]]] = None
    timestamp: str

    def restorable_values(self) -> Dict[str, str]:
        return {field: getattr(self, field) for field in RESTORABLE_FIELDS}

def _file_entry(f: SongFile) -> Dict[str, Any]:
    return {"id": f.id, "name": f.name, "type": f.type, "url": f.url}

def _reference_entry(r: SongReference) -> Dict[str, Any]:
    return {"id": r.id, "type": r.type, "title": r.title, "artist": r.artist, "url": r.url}

def capture_snapshot(
    song: Song,
    files: Sequence[SongFile] = (),
    references: Sequence[SongReference] = (),
) -> SongSnapshot:
    return SongSnapshot(
        title=song.title,
        lyrics=song.lyrics,
        notes=song.notes,
        progress=song.progress,
        files=[_file_entry(f) for f in files],
        references=[_reference_entry(r) for r in references],
        timestamp=to_iso(now()),
    )

def serialize_snapshot(snapshot: SongSnapshot) -> str:
    # 旧データとの互換のため、未設定の項目は出力しない
    return snapshot.model_dump_json(exclude_none=True)

def parse_snapshot(raw: Optional[str]) -> SongSnapshot:
    if not raw:
        raise InvalidStateError("This history entry cannot be restored")
    try:
        return SongSnapshot.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidStateError(f"This history entry has an unreadable snapshot: {e.error_count()} error(s)")
