import os
from pydantic_settings import BaseSettings
from pydantic import Field
import platformdirs

APP_NAME = "Albumer"
APP_AUTHOR = "AlbumerDev"

class Settings(BaseSettings):
    # App Info
    APP_NAME: str = APP_NAME
    APP_AUTHOR: str = APP_AUTHOR
    ENV: str = "prod"

    # Paths
    # デフォルトは platformdirs を使用するが、環境変数 DB_PATH があればそれを優先する
    USER_DATA_DIR: str = Field(default_factory=lambda: platformdirs.user_data_dir(APP_NAME, APP_AUTHOR))
    DB_PATH: str | None = None
    # 別のバックエンド (sqlite 等) を使う場合は DATABASE_URL を直接指定する
    DATABASE_URL: str | None = None

    # Network
    ALBUMER_PORT: int = 8001
    FRONTEND_PORT: int = 3000

    # Storage
    STORAGE_RETRY_ATTEMPTS: int = 3

    # Attribution
    DEFAULT_USER: str = "User"

    # Catalog search (Spotify / YouTube)
    SPOTIFY_CLIENT_ID: str | None = None
    SPOTIFY_CLIENT_SECRET: str | None = None
    YOUTUBE_API_KEY: str | None = None
    CATALOG_TIMEOUT_SECONDS: float = 10.0

    # Logging
    ALBUMER_LOG_DIR: str | None = None

    class Config:
        env_file = ".env"
        extra = "ignore"

    def model_post_init(self, __context):
        # DB_PATHが未設定ならデフォルト値を設定
        if not self.DB_PATH:
            self.DB_PATH = os.path.join(self.USER_DATA_DIR, "albumer.duckdb")

        if not self.DATABASE_URL:
            self.DATABASE_URL = f"duckdb:///{self.DB_PATH}"

        # ログディレクトリ
        if not self.ALBUMER_LOG_DIR:
            self.ALBUMER_LOG_DIR = os.path.join(self.USER_DATA_DIR, "logs")

    def setup_environment(self):
        """ロガーが参照する環境変数を設定する"""
        if self.ALBUMER_LOG_DIR:
            os.environ["ALBUMER_LOG_DIR"] = self.ALBUMER_LOG_DIR

settings = Settings()
