from fastapi import APIRouter, Depends
from sqlmodel import Session

from infra.database.connection import get_session
from api.errors import to_http_exception
from api.schemas.common import AlbumCreate, AlbumUpdate, SongCreate, SongOrderUpdate
from app.services.album_app_service import AlbumAppService
from app.services.song_app_service import SongAppService
from domain.errors import AlbumerError

router = APIRouter()

@router.get("/api/albums")
def get_albums(session: Session = Depends(get_session)):
    service = AlbumAppService(session)
    return service.get_albums()

@router.post("/api/albums")
def create_album(album: AlbumCreate, session: Session = Depends(get_session)):
    service = AlbumAppService(session)
    try:
        return service.create_album(album.name)
    except AlbumerError as e:
        raise to_http_exception(e)

@router.get("/api/albums/{album_id}")
def get_album(album_id: str, session: Session = Depends(get_session)):
    """楽曲ごとのファイル・リファレンス・コメント・履歴を含むアルバム詳細"""
    service = AlbumAppService(session)
    try:
        return service.get_album(album_id)
    except AlbumerError as e:
        raise to_http_exception(e)

@router.put("/api/albums/{album_id}")
def rename_album(album_id: str, album: AlbumUpdate, session: Session = Depends(get_session)):
    service = AlbumAppService(session)
    try:
        return service.rename_album(album_id, album.name)
    except AlbumerError as e:
        raise to_http_exception(e)

@router.delete("/api/albums/{album_id}")
def delete_album(album_id: str, session: Session = Depends(get_session)):
    service = AlbumAppService(session)
    try:
        service.delete_album(album_id)
    except AlbumerError as e:
        raise to_http_exception(e)
    return {"ok": True}

@router.post("/api/albums/{album_id}/duplicate")
def duplicate_album(album_id: str, session: Session = Depends(get_session)):
    service = AlbumAppService(session)
    try:
        return service.duplicate_album(album_id)
    except AlbumerError as e:
        raise to_http_exception(e)

@router.get("/api/albums/{album_id}/songs")
def get_album_songs(album_id: str, session: Session = Depends(get_session)):
    service = SongAppService(session)
    try:
        return service.get_songs(album_id)
    except AlbumerError as e:
        raise to_http_exception(e)

@router.post("/api/albums/{album_id}/songs")
def create_song(album_id: str, song: SongCreate, session: Session = Depends(get_session)):
    service = SongAppService(session)
    try:
        return service.create_song(album_id, song.title, song.user)
    except AlbumerError as e:
        raise to_http_exception(e)

@router.put("/api/albums/{album_id}/songs/order")
def reorder_songs(album_id: str, order: SongOrderUpdate, session: Session = Depends(get_session)):
    """
    並べ替え。song_ids はアルバムの全楽曲をちょうど1回ずつ含む必要がある (不一致は 409)。
    """
    service = SongAppService(session)
    try:
        return service.reorder(album_id, order.song_ids)
    except AlbumerError as e:
        raise to_http_exception(e)
