from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    DB_HOST: str = "db"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "fittrack"
    DB_URL: str | None = None  # full override, e.g. sqlite+aiosqlite:///./dev.db

    # Identity tokens are issued by the auth service; we only verify them
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"

    # Demo (trial) identities keep their sessions in a local bucket
    EPHEMERAL_BUCKET_NAME: str = "demo_workout_sessions"
    EPHEMERAL_STORE_DIR: str | None = None  # unset -> in-memory bucket

    DEFAULT_PAGE_SIZE: int = 10
    LOG_LEVEL: str = "INFO"
    ALLOW_ORIGINS: str = "*"
    API_VERSION: str = "dev"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

@lru_cache
def get_settings() -> Settings:
    return Settings()
