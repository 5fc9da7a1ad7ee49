from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from infra.database.connection import get_session
from api.errors import to_http_exception
from api.schemas.common import SongUpdate
from app.services.song_app_service import SongAppService
from domain.errors import AlbumerError
from domain.mutations import mutations_from_fields

router = APIRouter()

@router.get("/api/songs/{song_id}")
def get_song(song_id: str, session: Session = Depends(get_session)):
    service = SongAppService(session)
    try:
        return service.get_song_detail(song_id)
    except AlbumerError as e:
        raise to_http_exception(e)

@router.patch("/api/songs/{song_id}")
def update_song(song_id: str, song: SongUpdate, session: Session = Depends(get_session)):
    """
    送られたフィールドだけを更新し、変更前の状態を履歴に残す。
    """
    fields = song.model_dump(exclude_unset=True, exclude={"user"})
    try:
        mutations = mutations_from_fields(**fields)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    service = SongAppService(session)
    try:
        service.update_fields(song_id, mutations, song.user)
        return service.get_song_detail(song_id)
    except AlbumerError as e:
        raise to_http_exception(e)

@router.delete("/api/songs/{song_id}")
def delete_song(song_id: str, session: Session = Depends(get_session)):
    service = SongAppService(session)
    try:
        service.delete_song(song_id)
    except AlbumerError as e:
        raise to_http_exception(e)
    return {"ok": True}
