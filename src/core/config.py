"""
Centralised application settings loaded from environment / .env file.
"""
from __future__ import annotations

from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load .env from project root (two levels up from this file)
_ENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseSettings):
    # ── Interpreter ──────────────────────────────────────
    default_limit: int = 10
    max_limit: int = 1000
    role_min_count: int = 3
    role_ratio: float = 0.5
    fuzzy_entity_min_length: int = 1

    # ── Upload ───────────────────────────────────────────
    max_upload_mb: int = 50

    # ── Provider tag ─────────────────────────────────────
    openai_api_key: str = ""

    # ── App ──────────────────────────────────────────────
    api_host: str = "localhost"
    api_port: int = 8000
    log_level: str = "INFO"

    @property
    def api_base_url(self) -> str:
        return f"http://{self.api_host}:{self.api_port}"

    @property
    def provider(self) -> str:
        return "heuristic+openai-optional" if self.openai_api_key else "heuristic"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
