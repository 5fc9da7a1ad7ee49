from fastapi import HTTPException

from domain.errors import AlbumerError, InvalidStateError, NotFoundError

def to_http_exception(e: AlbumerError) -> HTTPException:
    """ドメイン例外を HTTP エラーに変換する"""
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, InvalidStateError):
        return HTTPException(status_code=409, detail=str(e))
    # StorageError: 利用者には再試行を促す
    return HTTPException(status_code=503, detail="Storage is temporarily unavailable, please try again")
