from sqlmodel import create_engine, Session
import os
import threading
from config import settings
from infra.database.schema import init_raw_db
from utils.logger import get_logger

logger = get_logger(__name__)

# DBパス設定
DB_PATH = settings.DB_PATH
DATABASE_URL = settings.DATABASE_URL

def _build_engine(url: str):
    if url.startswith("duckdb:"):
        os.makedirs(os.path.dirname(DB_PATH), exist_ok=True)
        # エンジン初期化 (設定を固定)
        connect_args = {'config': {'worker_threads': 4, 'access_mode': 'READ_WRITE'}}
        return create_engine(url, pool_size=5, max_overflow=10, connect_args=connect_args)
    return create_engine(url)

engine = _build_engine(DATABASE_URL)

db_lock = threading.RLock()

def init_db():
    """
    アプリケーション起動時のDB初期化フロー。
    Raw SQL でテーブルを作成し、スキーマバージョンを記録する。
    """
    with db_lock:
        try:
            init_raw_db(engine)
        except Exception as e:
            logger.error(f"Error during database initialization: {e}")
            raise e

def close_db():
    """
    データベース接続を終了する。
    main.py の lifespan イベントから呼び出されます。
    """
    engine.dispose()

def get_session():
    with Session(engine) as session:
        yield session
