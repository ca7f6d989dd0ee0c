import os
from pathlib import Path

from pydantic_settings import BaseSettings

_DEFAULT_DATA_PATH = Path(__file__).resolve().parent / "data" / "sample_jobs.json"


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    debug: bool = False
    log_level: str = "INFO"

    # Job data backing the search collaborator
    jobs_data_path: str = str(_DEFAULT_DATA_PATH)

    # Assistant behaviour
    search_limit: int = 10  # jobs fetched per assistant search
    chat_card_limit: int = 5  # job cards shown per assistant reply
    recommendation_card_limit: int = 3
    max_query_length: int = 1000
    chat_rate_limit: str = "30/minute"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
