from typing import Dict, List, Optional, Sequence
from sqlmodel import Session, select, func

from domain.models.song import Song
from utils.identifiers import now

class SongRepository:
    """
    楽曲の現在状態を扱う。コミットは呼び出し側 (AppService) の責務。
    """
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, song_id: str) -> Optional[Song]:
        return self.session.get(Song, song_id)

    def find_by_album(self, album_id: str) -> List[Song]:
        query = (
            select(Song)
            .where(Song.album_id == album_id)
            .order_by(Song.display_order, Song.created_at)
        )
        return self.session.exec(query).all()

    def next_order(self, album_id: str) -> int:
        max_order = self.session.exec(
            select(func.max(Song.display_order)).where(Song.album_id == album_id)
        ).one()
        return 0 if max_order is None else max_order + 1

    def add(self, song: Song) -> Song:
        self.session.add(song)
        self.session.flush()
        return song

    def save(self, song: Song) -> Song:
        song.updated_at = now()
        self.session.add(song)
        self.session.flush()
        return song

    def overwrite_fields(self, song: Song, values: Dict[str, str]) -> Song:
        """
        スナップショットや編集者情報を残さずに値を上書きする (復元用の生の更新経路)
        """
        for key, value in values.items():
            setattr(song, key, value)
        return self.save(song)

    def assign_order(self, songs: Sequence[Song]):
        stamp = now()
        for position, song in enumerate(songs):
            song.display_order = position
            song.updated_at = stamp
            self.session.add(song)
        self.session.flush()

    def delete(self, song: Song):
        self.session.delete(song)
        self.session.flush()
