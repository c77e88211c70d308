from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(default="dev", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    http_host: str = Field(default="0.0.0.0", alias="HTTP_HOST")
    http_port: int = Field(default=8000, alias="HTTP_PORT")

    # request size limits for the HTTP surface
    max_courses: int = Field(default=100_000, alias="MAX_COURSES")
    max_prerequisites: int = Field(default=500_000, alias="MAX_PREREQUISITES")
    max_body_bytes: int = Field(default=16 * 1024 * 1024, alias="MAX_BODY_BYTES")


settings = Settings()
