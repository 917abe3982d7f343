from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = Field(default="dev", alias="APP_ENV")
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    quiz_api_url: str = Field(
        default="https://quizapi.io/api/v1/questions",
        alias="QUIZ_API_URL",
    )
    quiz_api_key: str = Field(default="", alias="QUIZ_API_KEY")
    quiz_api_enabled: bool = Field(default=True, alias="QUIZ_API_ENABLED")
    quiz_api_category: str = Field(default="code", alias="QUIZ_API_CATEGORY")
    quiz_api_request_delay_ms: int = Field(default=500, ge=0, alias="QUIZ_API_REQUEST_DELAY_MS")
    quiz_api_max_limit: int = Field(default=20, ge=1, alias="QUIZ_API_MAX_LIMIT")
    quiz_api_timeout_seconds: float = Field(default=5.0, gt=0, alias="QUIZ_API_TIMEOUT_SECONDS")
    quiz_api_tag_overrides_json: str = Field(default="", alias="QUIZ_API_TAG_OVERRIDES_JSON")
    quiz_api_ping_cache_seconds: float = Field(default=30.0, ge=0, alias="QUIZ_API_PING_CACHE_SECONDS")

    question_cache_ttl_seconds: int = Field(default=3600, alias="QUESTION_CACHE_TTL_SECONDS")
    question_preload_count: int = Field(default=5, ge=1, alias="QUESTION_PRELOAD_COUNT")
    question_cache_eviction_interval_seconds: float = Field(
        default=300.0,
        gt=0,
        alias="QUESTION_CACHE_EVICTION_INTERVAL_SECONDS",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
