import aiohttp
import asyncio
import base64
import urllib.parse
from typing import Any, Dict, List, Optional

from config import settings
from utils.logger import get_logger

logger = get_logger(__name__)

SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_SEARCH_URL = "https://api.spotify.com/v1/search"
YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
RESULT_LIMIT = 5

def _timeout() -> aiohttp.ClientTimeout:
    return aiohttp.ClientTimeout(total=settings.CATALOG_TIMEOUT_SECONDS)

async def _get_json(url: str, headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    async with aiohttp.ClientSession(timeout=_timeout()) as session:
        async with session.get(url, headers=headers) as response:
            response.raise_for_status()
            return await response.json(content_type=None)

async def _post_form(url: str, data: Dict[str, str], headers: Dict[str, str]) -> Dict[str, Any]:
    async with aiohttp.ClientSession(timeout=_timeout()) as session:
        async with session.post(url, data=data, headers=headers) as response:
            response.raise_for_status()
            return await response.json(content_type=None)

def parse_spotify_tracks(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    results = []
    for track in payload.get("tracks", {}).get("items", []):
        images = track.get("album", {}).get("images") or []
        results.append({
            "title": track.get("name", ""),
            "artist": ", ".join(a.get("name", "") for a in track.get("artists", [])),
            "url": track.get("external_urls", {}).get("spotify", ""),
            "thumbnail": images[0].get("url") if images else None,
        })
    return results

def parse_youtube_videos(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    results = []
    for item in payload.get("items", []):
        video_id = item.get("id", {}).get("videoId")
        if not video_id:
            continue
        snippet = item.get("snippet", {})
        thumbnails = snippet.get("thumbnails", {})
        thumbnail = (thumbnails.get("medium") or thumbnails.get("default") or {}).get("url")
        results.append({
            "title": snippet.get("title", ""),
            "artist": snippet.get("channelTitle", ""),
            "url": f"https://www.youtube.com/watch?v={video_id}",
            "thumbnail": thumbnail,
        })
    return results

async def search_spotify(query: str) -> List[Dict[str, Any]]:
    """
    Client Credentials フローでトークンを取得して楽曲検索する。
    認証情報が無い、または通信に失敗した場合は空リスト。
    """
    if not settings.SPOTIFY_CLIENT_ID or not settings.SPOTIFY_CLIENT_SECRET:
        logger.warning("Spotify credentials are not configured; skipping search")
        return []

    credentials = f"{settings.SPOTIFY_CLIENT_ID}:{settings.SPOTIFY_CLIENT_SECRET}"
    auth_header = base64.b64encode(credentials.encode("utf-8")).decode("ascii")

    try:
        token = await _post_form(
            SPOTIFY_TOKEN_URL,
            {"grant_type": "client_credentials"},
            {"Authorization": f"Basic {auth_header}"},
        )
        params = urllib.parse.urlencode({"q": query, "type": "track", "limit": RESULT_LIMIT})
        payload = await _get_json(
            f"{SPOTIFY_SEARCH_URL}?{params}",
            {"Authorization": f"Bearer {token['access_token']}"},
        )
    except (aiohttp.ClientError, asyncio.TimeoutError, KeyError) as e:
        logger.error(f"Spotify search failed for '{query}': {e}")
        return []

    return parse_spotify_tracks(payload)

async def search_youtube(query: str) -> List[Dict[str, Any]]:
    if not settings.YOUTUBE_API_KEY:
        logger.warning("YouTube API key is not configured; skipping search")
        return []

    params = urllib.parse.urlencode({
        "part": "snippet",
        "q": query,
        "type": "video",
        "maxResults": RESULT_LIMIT,
        "key": settings.YOUTUBE_API_KEY,
    })
    try:
        payload = await _get_json(f"{YOUTUBE_SEARCH_URL}?{params}")
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"YouTube search failed for '{query}': {e}")
        return []

    return parse_youtube_videos(payload)
