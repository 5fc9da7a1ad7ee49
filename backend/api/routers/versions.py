from fastapi import APIRouter, Depends
from sqlmodel import Session

from infra.database.connection import get_session
from api.errors import to_http_exception
from api.schemas.common import VersionUserUpdate
from app.services.song_app_service import SongAppService
from app.services.version_ledger_app_service import VersionLedgerAppService
from domain.errors import AlbumerError

router = APIRouter()

@router.get("/api/songs/{song_id}/versions")
def get_versions(song_id: str, session: Session = Depends(get_session)):
    """新しい順の履歴"""
    service = VersionLedgerAppService(session)
    return service.list_for_song(song_id)

@router.post("/api/songs/{song_id}/versions/{version_id}/restore")
def restore_version(song_id: str, version_id: str, session: Session = Depends(get_session)):
    """
    指定した履歴の状態に戻す。履歴は削除せず、復元エントリを新たに追記する。
    スナップショットを持たない履歴 (作成・ファイル追加など) は 409。
    """
    service = VersionLedgerAppService(session)
    try:
        song = service.restore(song_id, version_id)
        return SongAppService(session).get_song_detail(song.id)
    except AlbumerError as e:
        raise to_http_exception(e)

@router.patch("/api/versions/{version_id}/user")
def update_version_user(version_id: str, body: VersionUserUpdate, session: Session = Depends(get_session)):
    service = VersionLedgerAppService(session)
    try:
        return service.update_attribution(version_id, body.user)
    except AlbumerError as e:
        raise to_http_exception(e)
