from typing import Any, Dict, List, Optional, Sequence
from sqlmodel import Session

from config import settings
from domain.constants import COMMENT_SONG_CREATED, DEFAULT_SONG_TITLE, LABEL_SONG_CREATED
from domain.errors import InvalidStateError, NotFoundError
from domain.models.song import Song
from domain.mutations import LyricsChanged, NotesChanged, SongMutation, describe_changes
from domain.services.snapshot import capture_snapshot
from infra.repositories.album_repository import AlbumRepository
from infra.repositories.attachment_repository import AttachmentRepository
from infra.repositories.song_repository import SongRepository
from infra.repositories.version_repository import VersionRepository
from app.services.unit_of_work import run_in_transaction
from app.services.version_ledger_app_service import VersionLedgerAppService
from utils.identifiers import now
from utils.logger import get_logger

logger = get_logger(__name__)

class SongAppService:
    def __init__(self, session: Session):
        self.session = session
        self.repository = SongRepository(session)
        self.album_repository = AlbumRepository(session)
        self.attachment_repository = AttachmentRepository(session)
        self.version_repository = VersionRepository(session)
        self.ledger = VersionLedgerAppService(session)

    def get_song(self, song_id: str) -> Song:
        song = self.repository.get_by_id(song_id)
        if not song:
            raise NotFoundError(f"Song not found: {song_id}")
        return song

    def get_songs(self, album_id: str) -> List[Song]:
        if not self.album_repository.get_by_id(album_id):
            raise NotFoundError(f"Album not found: {album_id}")
        return self.repository.find_by_album(album_id)

    def get_song_detail(self, song_id: str) -> Dict[str, Any]:
        song = self.get_song(song_id)
        return self.to_detail(song)

    def to_detail(self, song: Song) -> Dict[str, Any]:
        s_dict = song.model_dump()
        s_dict["files"] = [f.model_dump() for f in self.attachment_repository.find_files(song.id)]
        s_dict["references"] = [r.model_dump() for r in self.attachment_repository.find_references(song.id)]
        s_dict["comments"] = [c.model_dump() for c in self.attachment_repository.find_comments(song.id)]
        s_dict["versions"] = [v.model_dump() for v in self.version_repository.find_by_song(song.id)]
        return s_dict

    # --- Create ---

    def create_song_in_transaction(self, album_id: str, title: str, editor: str) -> Song:
        if not self.album_repository.get_by_id(album_id):
            raise NotFoundError(f"Album not found: {album_id}")

        song = Song(
            album_id=album_id,
            title=title,
            display_order=self.repository.next_order(album_id),
        )
        self.repository.add(song)
        # 作成前の状態は存在しないのでスナップショットなし
        self.ledger.append(song.id, LABEL_SONG_CREATED, COMMENT_SONG_CREATED, editor)
        self.album_repository.touch(album_id)
        return song

    def create_song(self, album_id: str, title: Optional[str] = None, editor: Optional[str] = None) -> Song:
        song = run_in_transaction(
            self.session,
            lambda: self.create_song_in_transaction(
                album_id, title or DEFAULT_SONG_TITLE, editor or settings.DEFAULT_USER
            ),
            description=f"create song in album {album_id}",
        )
        self.session.refresh(song)
        logger.info(f"Created song {song.id} in album {album_id} (order {song.display_order})")
        return song

    # --- Update ---

    def update_fields_in_transaction(self, song_id: str, mutations: Sequence[SongMutation], editor: str) -> Song:
        song = self.get_song(song_id)
        if not mutations:
            return song

        # 変更前の状態を記録 (復元用)
        snapshot = capture_snapshot(
            song,
            self.attachment_repository.find_files(song_id),
            self.attachment_repository.find_references(song_id),
        )
        label = describe_changes(mutations)

        stamp = now()
        for mutation in mutations:
            setattr(song, mutation.field, mutation.value)
            if isinstance(mutation, LyricsChanged):
                song.lyrics_user = editor
                song.lyrics_updated_at = stamp
            elif isinstance(mutation, NotesChanged):
                song.notes_user = editor
                song.notes_updated_at = stamp

        self.repository.save(song)
        self.ledger.append(song_id, label, "", editor, snapshot)
        self.album_repository.touch(song.album_id)
        return song

    def update_fields(self, song_id: str, mutations: Sequence[SongMutation], editor: Optional[str] = None) -> Song:
        editor = editor or settings.DEFAULT_USER
        song = run_in_transaction(
            self.session,
            lambda: self.update_fields_in_transaction(song_id, mutations, editor),
            description=f"update song {song_id}",
        )
        self.session.refresh(song)
        if mutations:
            logger.info(f"{editor} updated song {song_id}: {describe_changes(mutations)}")
        return song

    # --- Reorder ---

    def reorder(self, album_id: str, ordered_song_ids: Sequence[str]) -> List[Song]:
        def operation() -> List[Song]:
            current = {s.id: s for s in self.get_songs(album_id)}
            requested = list(ordered_song_ids)
            # アルバムの楽曲と完全一致するリストのみ受け付ける
            if len(requested) != len(set(requested)) or set(requested) != set(current):
                raise InvalidStateError("Song order must list every song of the album exactly once")
            self.repository.assign_order([current[song_id] for song_id in requested])
            self.album_repository.touch(album_id)
            return [current[song_id] for song_id in requested]

        songs = run_in_transaction(self.session, operation, description=f"reorder album {album_id}")
        return songs

    # --- Delete ---

    def delete_song_in_transaction(self, song_id: str) -> str:
        song = self.get_song(song_id)
        album_id = song.album_id
        # 子データを先に削除 (孤立行を残さない)
        self.attachment_repository.delete_for_song(song_id)
        self.version_repository.delete_for_song(song_id)
        self.repository.delete(song)
        return album_id

    def delete_song(self, song_id: str):
        def operation():
            album_id = self.delete_song_in_transaction(song_id)
            self.album_repository.touch(album_id)

        run_in_transaction(self.session, operation, description=f"delete song {song_id}")
        logger.info(f"Deleted song {song_id}")
