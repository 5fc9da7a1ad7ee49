from typing import Any, Dict, List

from domain.constants import REFERENCE_SOURCES
from utils import catalog_search

class CatalogAppService:
    """外部カタログ (Spotify / YouTube) の検索。結果はリファレンス追加に使われる"""

    async def search(self, query: str, source: str) -> List[Dict[str, Any]]:
        if source not in REFERENCE_SOURCES:
            raise ValueError(f"Unknown catalog source: {source}")
        query = query.strip()
        if not query:
            return []
        if source == "spotify":
            return await catalog_search.search_spotify(query)
        return await catalog_search.search_youtube(query)
