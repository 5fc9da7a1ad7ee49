from sqlalchemy import text
from sqlalchemy.engine import Engine
from utils.logger import get_logger

logger = get_logger(__name__)

# 現在のスキーマバージョン
CURRENT_SCHEMA_VERSION = 1

def get_db_schema_sql() -> str:
    """
    DuckDBの制約回避：
    外部キー(FK)付きテーブルの UPDATE が失敗しやすいため、物理的な FOREIGN KEY 句は付けず、
    親子関係はアプリケーション側 (カスケード削除) で維持する。
    "user" は予約語のため引用符で囲む。
    """
    return """
    CREATE TABLE IF NOT EXISTS albums (
        id VARCHAR PRIMARY KEY,
        name VARCHAR NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS songs (
        id VARCHAR PRIMARY KEY,
        album_id VARCHAR NOT NULL,
        title VARCHAR DEFAULT 'Untitled',
        lyrics VARCHAR DEFAULT '',
        lyrics_user VARCHAR,
        lyrics_updated_at TIMESTAMP,
        notes VARCHAR DEFAULT '',
        notes_user VARCHAR,
        notes_updated_at TIMESTAMP,
        progress VARCHAR DEFAULT 'Not Started',
        origin VARCHAR DEFAULT '',
        display_order INTEGER DEFAULT 0,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS versions (
        id VARCHAR PRIMARY KEY,
        song_id VARCHAR NOT NULL,
        changes VARCHAR NOT NULL,
        comment VARCHAR DEFAULT '',
        "user" VARCHAR NOT NULL,
        sequence INTEGER DEFAULT 0,
        snapshot VARCHAR,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS files (
        id VARCHAR PRIMARY KEY,
        song_id VARCHAR NOT NULL,
        name VARCHAR NOT NULL,
        type VARCHAR NOT NULL,
        url VARCHAR NOT NULL,
        external_id VARCHAR,
        mime_type VARCHAR DEFAULT 'application/octet-stream',
        size BIGINT DEFAULT 0,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS song_references (
        id VARCHAR PRIMARY KEY,
        song_id VARCHAR NOT NULL,
        type VARCHAR NOT NULL,
        title VARCHAR NOT NULL,
        artist VARCHAR DEFAULT '',
        url VARCHAR NOT NULL,
        thumbnail VARCHAR,
        "user" VARCHAR,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS comments (
        id VARCHAR PRIMARY KEY,
        song_id VARCHAR NOT NULL,
        "user" VARCHAR NOT NULL,
        text VARCHAR NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE INDEX IF NOT EXISTS idx_songs_album_id ON songs (album_id);
    CREATE INDEX IF NOT EXISTS idx_versions_song_id ON versions (song_id);
    CREATE INDEX IF NOT EXISTS idx_files_song_id ON files (song_id);
    CREATE INDEX IF NOT EXISTS idx_song_references_song_id ON song_references (song_id);
    CREATE INDEX IF NOT EXISTS idx_comments_song_id ON comments (song_id);

    CREATE TABLE IF NOT EXISTS schema_info (
        key VARCHAR PRIMARY KEY,
        value VARCHAR NOT NULL
    );
    """

def get_current_schema_version(conn) -> int:
    try:
        result = conn.execute(text("SELECT value FROM schema_info WHERE key = 'version'"))
        row = result.fetchone()
        return int(row[0]) if row else 0
    except Exception: return 0

def set_schema_version(conn, version: int):
    conn.execute(text("""
        INSERT INTO schema_info (key, value) VALUES ('version', :version)
        ON CONFLICT (key) DO UPDATE SET value = :version
    """), {"version": str(version)})

def init_raw_db(conn_engine: Engine):
    logger.info("Initializing database schema...")
    try:
        with conn_engine.begin() as conn:
            statements = [s.strip() for s in get_db_schema_sql().split(';') if s.strip()]
            for stmt in statements:
                conn.execute(text(stmt))

            current_version = get_current_schema_version(conn)
            if current_version < CURRENT_SCHEMA_VERSION:
                set_schema_version(conn, CURRENT_SCHEMA_VERSION)
    except Exception as e:
        logger.error(f"Failed to initialize database schema: {e}")
        raise e
