from fastapi import APIRouter, HTTPException, Query
from typing import Literal

from app.services.catalog_app_service import CatalogAppService

router = APIRouter()

@router.get("/api/catalog/search")
async def search_catalog(
    q: str = Query(..., description="Free-text query"),
    source: Literal["spotify", "youtube"] = Query("spotify"),
):
    """
    Spotify / YouTube を検索してリファレンス候補を返す。
    認証情報が未設定、または外部APIが失敗した場合は空リスト。
    """
    service = CatalogAppService()
    try:
        return await service.search(q, source)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
