from fastapi import APIRouter, Depends
from sqlmodel import Session

from infra.database.connection import get_session
from api.errors import to_http_exception
from api.schemas.common import CommentCreate, CommentUpdate, FileCreate, ReferenceCreate
from app.services.attachment_app_service import AttachmentAppService
from domain.errors import AlbumerError

router = APIRouter()

# --- Files ---

@router.get("/api/songs/{song_id}/files")
def get_files(song_id: str, session: Session = Depends(get_session)):
    service = AttachmentAppService(session)
    return service.get_files(song_id)

@router.post("/api/songs/{song_id}/files")
def add_file(song_id: str, song_file: FileCreate, session: Session = Depends(get_session)):
    """
    アップロード済みファイルのメタデータを登録する (バイナリの転送は対象外)
    """
    service = AttachmentAppService(session)
    try:
        return service.add_file(song_id, song_file.model_dump(exclude={"user"}), song_file.user)
    except AlbumerError as e:
        raise to_http_exception(e)

@router.delete("/api/files/{file_id}")
def delete_file(file_id: str, session: Session = Depends(get_session)):
    service = AttachmentAppService(session)
    try:
        service.delete_file(file_id)
    except AlbumerError as e:
        raise to_http_exception(e)
    return {"ok": True}

# --- References ---

@router.get("/api/songs/{song_id}/references")
def get_references(song_id: str, session: Session = Depends(get_session)):
    service = AttachmentAppService(session)
    return service.get_references(song_id)

@router.post("/api/songs/{song_id}/references")
def add_reference(song_id: str, reference: ReferenceCreate, session: Session = Depends(get_session)):
    service = AttachmentAppService(session)
    try:
        return service.add_reference(song_id, reference.model_dump())
    except AlbumerError as e:
        raise to_http_exception(e)

@router.delete("/api/references/{reference_id}")
def delete_reference(reference_id: str, session: Session = Depends(get_session)):
    service = AttachmentAppService(session)
    try:
        service.delete_reference(reference_id)
    except AlbumerError as e:
        raise to_http_exception(e)
    return {"ok": True}

# --- Comments ---

@router.get("/api/songs/{song_id}/comments")
def get_comments(song_id: str, session: Session = Depends(get_session)):
    service = AttachmentAppService(session)
    return service.get_comments(song_id)

@router.post("/api/songs/{song_id}/comments")
def add_comment(song_id: str, comment: CommentCreate, session: Session = Depends(get_session)):
    service = AttachmentAppService(session)
    try:
        return service.add_comment(song_id, comment.user, comment.text)
    except AlbumerError as e:
        raise to_http_exception(e)

@router.patch("/api/comments/{comment_id}")
def update_comment(comment_id: str, comment: CommentUpdate, session: Session = Depends(get_session)):
    service = AttachmentAppService(session)
    try:
        return service.update_comment(comment_id, text=comment.text, user=comment.user)
    except AlbumerError as e:
        raise to_http_exception(e)

@router.delete("/api/comments/{comment_id}")
def delete_comment(comment_id: str, session: Session = Depends(get_session)):
    service = AttachmentAppService(session)
    try:
        service.delete_comment(comment_id)
    except AlbumerError as e:
        raise to_http_exception(e)
    return {"ok": True}
