"""Application settings using Pydantic Settings"""
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./academy_admin.db"
    DB_AUTO_CREATE: bool = True

    APP_ENV: str = "dev"

    API_BASE_URL: str = "http://localhost:4000/api"
    API_TIMEOUT_SECONDS: float = 30.0

    IMPORT_MAX_UPLOAD_MB: int = 10
    IMPORT_PREVIEW_ROWS: int = 10
    IMPORT_PAGE_SIZE: int = 10

    PREFERENCES_PATH: str = ".academy_admin/preferences.json"

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        allowed = ["dev", "staging", "prod"]
        if v not in allowed:
            raise ValueError(f"APP_ENV must be one of: {allowed}")
        return v

    @field_validator("IMPORT_PAGE_SIZE", "IMPORT_PREVIEW_ROWS")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @property
    def max_upload_bytes(self) -> int:
        return self.IMPORT_MAX_UPLOAD_MB * 1024 * 1024

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()


def get_settings() -> Settings:
    return settings
