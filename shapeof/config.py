from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for structured JSON, False for colored console output
    TRACE_EVALUATION: bool = False  # Emit a debug event per top-level validation call

    # Serialization
    SERIALIZE_INDENT: int | None = 4  # None for compact JSON

    class Config:
        env_prefix = "SHAPEOF_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
