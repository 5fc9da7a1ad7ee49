from typing import Any, Dict, List, Optional
from sqlmodel import Session

from config import settings
from domain.constants import LABEL_REFERENCE_ADDED, file_uploaded_label
from domain.errors import NotFoundError
from domain.models.attachment import SongFile, SongReference, Comment
from domain.models.song import Song
from infra.repositories.album_repository import AlbumRepository
from infra.repositories.attachment_repository import AttachmentRepository
from infra.repositories.song_repository import SongRepository
from app.services.unit_of_work import run_in_transaction
from app.services.version_ledger_app_service import VersionLedgerAppService
from utils.logger import get_logger

logger = get_logger(__name__)

class AttachmentAppService:
    """
    ファイル・リファレンス・コメントの操作。
    ファイルとリファレンスの追加は楽曲の履歴に記録する (スナップショットなし)。
    コメントは履歴に関与しない。
    """
    def __init__(self, session: Session):
        self.session = session
        self.repository = AttachmentRepository(session)
        self.song_repository = SongRepository(session)
        self.album_repository = AlbumRepository(session)
        self.ledger = VersionLedgerAppService(session)

    def _get_song(self, song_id: str) -> Song:
        song = self.song_repository.get_by_id(song_id)
        if not song:
            raise NotFoundError(f"Song not found: {song_id}")
        return song

    # --- Files ---

    def get_files(self, song_id: str) -> List[SongFile]:
        return self.repository.find_files(song_id)

    def add_file(self, song_id: str, file_data: Dict[str, Any], editor: Optional[str] = None) -> SongFile:
        def operation() -> SongFile:
            song = self._get_song(song_id)
            song_file = self.repository.add(SongFile(song_id=song_id, **file_data))
            self.ledger.append(song_id, file_uploaded_label(song_file.type), song_file.name, editor)
            self.album_repository.touch(song.album_id)
            return song_file

        song_file = run_in_transaction(self.session, operation, description=f"add file to song {song_id}")
        self.session.refresh(song_file)
        logger.info(f"Attached {song_file.type} file '{song_file.name}' to song {song_id}")
        return song_file

    def delete_file(self, file_id: str):
        def operation():
            song_file = self.repository.get_file(file_id)
            if not song_file:
                raise NotFoundError(f"File not found: {file_id}")
            song = self.song_repository.get_by_id(song_file.song_id)
            self.repository.delete(song_file)
            if song:
                self.album_repository.touch(song.album_id)

        run_in_transaction(self.session, operation, description=f"delete file {file_id}")

    # --- References ---

    def get_references(self, song_id: str) -> List[SongReference]:
        return self.repository.find_references(song_id)

    def add_reference(self, song_id: str, reference_data: Dict[str, Any]) -> SongReference:
        def operation() -> SongReference:
            song = self._get_song(song_id)
            reference = self.repository.add(SongReference(song_id=song_id, **reference_data))
            self.ledger.append(
                song_id,
                LABEL_REFERENCE_ADDED,
                reference.title,
                reference.user or settings.DEFAULT_USER,
            )
            self.album_repository.touch(song.album_id)
            return reference

        reference = run_in_transaction(self.session, operation, description=f"add reference to song {song_id}")
        self.session.refresh(reference)
        return reference

    def delete_reference(self, reference_id: str):
        def operation():
            reference = self.repository.get_reference(reference_id)
            if not reference:
                raise NotFoundError(f"Reference not found: {reference_id}")
            song = self.song_repository.get_by_id(reference.song_id)
            self.repository.delete(reference)
            if song:
                self.album_repository.touch(song.album_id)

        run_in_transaction(self.session, operation, description=f"delete reference {reference_id}")

    # --- Comments ---

    def get_comments(self, song_id: str) -> List[Comment]:
        return self.repository.find_comments(song_id)

    def add_comment(self, song_id: str, user: str, text: str) -> Comment:
        def operation() -> Comment:
            self._get_song(song_id)
            return self.repository.add(Comment(song_id=song_id, user=user, text=text))

        comment = run_in_transaction(self.session, operation, description=f"add comment to song {song_id}")
        self.session.refresh(comment)
        return comment

    def update_comment(self, comment_id: str, text: Optional[str] = None, user: Optional[str] = None) -> Comment:
        def operation() -> Comment:
            comment = self.repository.get_comment(comment_id)
            if not comment:
                raise NotFoundError(f"Comment not found: {comment_id}")
            if text is not None:
                comment.text = text
            if user is not None:
                comment.user = user
            return self.repository.add(comment)

        comment = run_in_transaction(self.session, operation, description=f"update comment {comment_id}")
        self.session.refresh(comment)
        return comment

    def delete_comment(self, comment_id: str):
        def operation():
            comment = self.repository.get_comment(comment_id)
            if not comment:
                raise NotFoundError(f"Comment not found: {comment_id}")
            self.repository.delete(comment)

        run_in_transaction(self.session, operation, description=f"delete comment {comment_id}")
