from typing import Any, Dict, List
from sqlmodel import Session

from config import settings
from domain.errors import NotFoundError
from domain.models.album import Album
from domain.mutations import LyricsChanged, NotesChanged, OriginChanged, ProgressChanged
from infra.repositories.album_repository import AlbumRepository
from infra.repositories.song_repository import SongRepository
from app.services.song_app_service import SongAppService
from app.services.unit_of_work import run_in_transaction
from utils.identifiers import now
from utils.logger import get_logger

logger = get_logger(__name__)

class AlbumAppService:
    def __init__(self, session: Session):
        self.session = session
        self.repository = AlbumRepository(session)
        self.song_repository = SongRepository(session)
        self.song_service = SongAppService(session)

    def _get_album(self, album_id: str) -> Album:
        album = self.repository.get_by_id(album_id)
        if not album:
            raise NotFoundError(f"Album not found: {album_id}")
        return album

    def get_albums(self) -> List[Dict[str, Any]]:
        """更新日時の新しい順。各アルバムに並び順どおりの楽曲を含める"""
        result = []
        for album in self.repository.find_all():
            a_dict = album.model_dump()
            a_dict["songs"] = [s.model_dump() for s in self.song_repository.find_by_album(album.id)]
            result.append(a_dict)
        return result

    def get_album(self, album_id: str) -> Dict[str, Any]:
        album = self._get_album(album_id)
        a_dict = album.model_dump()
        a_dict["songs"] = [
            self.song_service.to_detail(song) for song in self.song_repository.find_by_album(album_id)
        ]
        return a_dict

    def create_album(self, name: str) -> Album:
        album = run_in_transaction(
            self.session,
            lambda: self.repository.add(Album(name=name)),
            description="create album",
        )
        self.session.refresh(album)
        logger.info(f"Created album {album.id} ({name})")
        return album

    def rename_album(self, album_id: str, name: str) -> Album:
        def operation() -> Album:
            album = self._get_album(album_id)
            album.name = name
            album.updated_at = now()
            self.session.add(album)
            return album

        album = run_in_transaction(self.session, operation, description=f"rename album {album_id}")
        self.session.refresh(album)
        return album

    def delete_album(self, album_id: str):
        def operation():
            album = self._get_album(album_id)
            for song in self.song_repository.find_by_album(album_id):
                self.song_service.delete_song_in_transaction(song.id)
            self.repository.delete(album)

        run_in_transaction(self.session, operation, description=f"delete album {album_id}")
        logger.info(f"Deleted album {album_id}")

    def duplicate_album(self, album_id: str) -> Album:
        """
        楽曲のタイトル・歌詞・メモ・進捗・出自をコピーした新しいアルバムを作る。
        ファイル・リファレンス・コメントはコピーしない。
        コピー先の履歴は "Song created" から始まる。
        """
        editor = settings.DEFAULT_USER

        def operation() -> Album:
            original = self._get_album(album_id)
            copy = self.repository.add(Album(name=f"Copy of {original.name}"))
            for song in self.song_repository.find_by_album(album_id):
                new_song = self.song_service.create_song_in_transaction(copy.id, song.title, editor)
                mutations = [
                    LyricsChanged(song.lyrics),
                    NotesChanged(song.notes),
                    ProgressChanged(song.progress),
                    OriginChanged(song.origin),
                ]
                self.song_service.update_fields_in_transaction(new_song.id, mutations, editor)
            return copy

        album = run_in_transaction(self.session, operation, description=f"duplicate album {album_id}")
        self.session.refresh(album)
        logger.info(f"Duplicated album {album_id} as {album.id}")
        return album
