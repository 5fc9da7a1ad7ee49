import secrets
import string
import time
from datetime import datetime
from typing import Optional

_ALPHABET = string.ascii_lowercase + string.digits

def generate_id() -> str:
    """
    `<epoch millis>_<9 random chars>` 形式のIDを生成する。
    既存の永続データと同じ形式なので、ミリ秒順でおおよそソート可能。
    """
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
    return f"{int(time.time() * 1000)}_{suffix}"

def now() -> datetime:
    return datetime.now()

def monotonic_now(floor: Optional[datetime]) -> datetime:
    """現在時刻を返す。ただし floor より前にはならない (時計の巻き戻り対策)"""
    current = now()
    if floor is not None and current < floor:
        return floor
    return current

def to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
