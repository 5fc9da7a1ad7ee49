from typing import Callable, Optional, TypeVar
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlmodel import Session

from config import settings
from domain.errors import AlbumerError, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

def run_in_transaction(
    session: Session,
    operation: Callable[[], T],
    description: str = "operation",
    attempts: Optional[int] = None,
) -> T:
    """
    operation を1トランザクションで実行してコミットする。

    楽曲の状態変更と履歴の追記は必ず同じ operation 内で行うこと。
    失敗時は必ずロールバックするので、片方だけが残ることはない。
    OperationalError (I/O, 接続断) のみ attempts 回まで再実行し、
    それでも失敗した場合は StorageError を送出する。
    """
    max_attempts = attempts or settings.STORAGE_RETRY_ATTEMPTS
    last_error: Optional[Exception] = None

    for attempt in range(1, max_attempts + 1):
        try:
            result = operation()
            session.commit()
            return result
        except AlbumerError:
            session.rollback()
            raise
        except OperationalError as e:
            session.rollback()
            last_error = e
            logger.warning(f"{description} failed (attempt {attempt}/{max_attempts}): {e}")
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"{description} failed: {e}")
            raise StorageError(f"{description} failed") from e
        except Exception:
            session.rollback()
            raise

    logger.error(f"{description} gave up after {max_attempts} attempts")
    raise StorageError(f"{description} failed") from last_error
