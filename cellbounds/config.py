"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    cellbounds_env: str = "development"
    cellbounds_log_level: str = "info"

    # CORS (the canvas demo runs on a dev server)
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Memoized boundary computations kept by the API
    boundary_cache_size: int = 256

    # "nearest" or "ignore"; see PipelineConfig.orphan_policy
    orphan_policy: str = "nearest"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
