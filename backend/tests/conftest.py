import os
import pytest
import sys
import tempfile
import uuid
from typing import Generator
from sqlmodel import Session, create_engine

# 1. パス解決: backendディレクトリをsys.pathに追加
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.dirname(CURRENT_DIR)
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import infra.database.connection as db_connection
from infra.database.schema import init_raw_db

@pytest.fixture(name="session", scope="function")
def session_fixture(mocker) -> Generator[Session, None, None]:
    """
    テストごとに完全に独立したDB環境（物理ファイル）を構築する。
    """

    # ユニークなDBファイルパスを生成
    unique_id = str(uuid.uuid4())
    test_db_path = os.path.join(tempfile.gettempdir(), f"albumer_test_{unique_id}.duckdb")

    # テスト用エンジンの作成 (設定を固定)
    connect_args = {'config': {'worker_threads': 4, 'access_mode': 'READ_WRITE'}}
    engine = create_engine(
        f"duckdb:///{test_db_path}",
        connect_args=connect_args
    )

    # アプリケーション全体で使用されるエンジングローバル変数をテスト用に差し替え
    mocker.patch.object(db_connection, "engine", engine)
    mocker.patch.object(db_connection, "DB_PATH", test_db_path)
    mocker.patch.object(db_connection, "DATABASE_URL", f"duckdb:///{test_db_path}")

    # Raw SQLでテーブルを直接作成
    init_raw_db(engine)

    # アプリ起動/終了時の処理がテスト中に走って競合しないようモック化
    mocker.patch("infra.database.connection.init_db")
    mocker.patch("infra.database.connection.close_db")

    # テスト実行用のセッションを提供
    with Session(engine) as session:
        yield session

    # テスト終了後のクリーンアップ
    engine.dispose()
    if os.path.exists(test_db_path):
        try:
            os.remove(test_db_path)
        except OSError:
            pass

@pytest.fixture(name="client")
def client_fixture(session: Session) -> Generator:
    """FastAPIのTestClientを提供し、DBセッションをDIで差し替える"""
    from fastapi.testclient import TestClient
    from main import app
    from infra.database.connection import get_session

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()

@pytest.fixture(autouse=True)
def no_catalog_network(mocker):
    """
    外部カタログAPIへの通信をグローバルに遮断する。
    個別のテストで戻り値を上書きして使う。
    """
    get_json = mocker.patch("utils.catalog_search._get_json", new_callable=mocker.AsyncMock)
    post_form = mocker.patch("utils.catalog_search._post_form", new_callable=mocker.AsyncMock)
    return get_json, post_form

@pytest.fixture(name="album")
def album_fixture(session: Session):
    from app.services.album_app_service import AlbumAppService
    return AlbumAppService(session).create_album("Demo")
