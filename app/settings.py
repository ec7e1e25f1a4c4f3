from typing import Optional

from pydantic import Field, PostgresDsn, RedisDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: PostgresDsn = Field(..., alias="DATABASE_URL")
    DEBUG: bool = Field(..., alias="DEBUG")
    REDIS_URL: RedisDsn = Field(..., alias="REDIS_URL")  # celery broker and result backend
    SUPABASE_URL: str = Field(..., alias="SUPABASE_URL")
    SUPABASE_SERVICE_KEY: str = Field(..., alias="SUPABASE_SERVICE_KEY")
    RECORDINGS_BUCKET: str = Field(default="call-recordings", alias="RECORDINGS_BUCKET")
    GOOGLE_API_KEY: str = Field(..., alias="GOOGLE_API_KEY")

    # Model Configuration
    GEMINI_MODEL: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    DEFAULT_AUDIO_MIME_TYPE: str = Field(
        default="audio/opus", alias="DEFAULT_AUDIO_MIME_TYPE"
    )

    # Upload / client Configuration
    MAX_UPLOAD_SIZE: int = Field(
        default=25 * 1024 * 1024, alias="MAX_UPLOAD_SIZE"
    )  # 25MB per recording
    POLL_INTERVAL_SECONDS: float = Field(default=5, alias="POLL_INTERVAL_SECONDS")

    # Google Sheets Configuration
    GOOGLE_SERVICE_ACCOUNT_JSON: Optional[str] = Field(
        default=None, alias="GOOGLE_SERVICE_ACCOUNT_JSON"
    )
    SPREADSHEET_ID: Optional[str] = Field(default=None, alias="SPREADSHEET_ID")
    SHEET_RANGE: str = Field(default="Sheet1!A1", alias="SHEET_RANGE")
    SHEET_TIMEZONE: str = Field(default="Asia/Kolkata", alias="SHEET_TIMEZONE")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
