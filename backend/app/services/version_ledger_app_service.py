from typing import List, Optional, Union
from sqlmodel import Session

from config import settings
from domain.constants import LABEL_RESTORED, SYSTEM_USER
from domain.errors import NotFoundError
from domain.models.song import Song
from domain.models.version import Version
from domain.services.snapshot import SongSnapshot, parse_snapshot, serialize_snapshot
from infra.repositories.album_repository import AlbumRepository
from infra.repositories.song_repository import SongRepository
from infra.repositories.version_repository import VersionRepository
from app.services.unit_of_work import run_in_transaction
from utils.identifiers import monotonic_now
from utils.logger import get_logger

logger = get_logger(__name__)

class VersionLedgerAppService:
    """
    楽曲ごとの追記専用の履歴 (バージョン台帳)。

    - 既存エントリは user 以外を変更しない
    - snapshot は変更前の状態
    - 復元は履歴を巻き戻さず、新しいエントリとして先頭に追記する
    """
    def __init__(self, session: Session):
        self.session = session
        self.repository = VersionRepository(session)
        self.song_repository = SongRepository(session)
        self.album_repository = AlbumRepository(session)

    def append(
        self,
        song_id: str,
        changes: str,
        comment: str = "",
        editor: Optional[str] = None,
        snapshot: Union[SongSnapshot, str, None] = None,
    ) -> Version:
        """コミットせずに1件追記する。呼び出し側のトランザクション内で使う"""
        if not self.song_repository.get_by_id(song_id):
            raise NotFoundError(f"Song not found: {song_id}")

        if isinstance(snapshot, SongSnapshot):
            snapshot = serialize_snapshot(snapshot)

        latest = self.repository.latest_for_song(song_id)
        version = Version(
            song_id=song_id,
            changes=changes,
            comment=comment or "",
            user=editor or settings.DEFAULT_USER,
            sequence=(latest.sequence + 1) if latest else 1,
            snapshot=snapshot,
            # 追記順で created_at が逆転しないようにする
            created_at=monotonic_now(latest.created_at if latest else None),
        )
        return self.repository.add(version)

    def record(
        self,
        song_id: str,
        changes: str,
        comment: str = "",
        editor: Optional[str] = None,
        snapshot: Union[SongSnapshot, str, None] = None,
    ) -> Version:
        version = run_in_transaction(
            self.session,
            lambda: self.append(song_id, changes, comment, editor, snapshot),
            description=f"record version for song {song_id}",
        )
        self.session.refresh(version)
        return version

    def list_for_song(self, song_id: str) -> List[Version]:
        # 削除済み・未知の楽曲は空リスト
        return self.repository.find_by_song(song_id)

    def restore(self, song_id: str, version_id: str) -> Song:
        def operation() -> Song:
            song = self.song_repository.get_by_id(song_id)
            if not song:
                raise NotFoundError(f"Song not found: {song_id}")

            target = self.repository.get_by_id(version_id)
            if not target or target.song_id != song_id:
                raise NotFoundError(f"Version not found: {version_id}")

            # スナップショットが無い (作成・ファイル追加など) 場合は InvalidStateError
            snapshot = parse_snapshot(target.snapshot)

            # updateFields 経由ではなく生の上書き (二重記録を避ける)
            self.song_repository.overwrite_fields(song, snapshot.restorable_values())
            self.append(
                song_id,
                LABEL_RESTORED,
                f"Restored to {target.created_at:%Y-%m-%d %H:%M:%S}",
                SYSTEM_USER,
                target.snapshot,
            )
            self.album_repository.touch(song.album_id)
            return song

        song = run_in_transaction(self.session, operation, description=f"restore song {song_id}")
        self.session.refresh(song)
        logger.info(f"Restored song {song_id} from version {version_id}")
        return song

    def update_attribution(self, version_id: str, new_editor: str) -> Version:
        def operation() -> Version:
            version = self.repository.get_by_id(version_id)
            if not version:
                raise NotFoundError(f"Version not found: {version_id}")
            return self.repository.update_user(version, new_editor)

        version = run_in_transaction(self.session, operation, description=f"update attribution of {version_id}")
        self.session.refresh(version)
        return version
