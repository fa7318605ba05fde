import os
from pydantic_settings import BaseSettings


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
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"

    # Match generation policy
    match_min_score: int = 30  # drafts below this total are never stored
    match_top_n: int = 20  # stored matches per (startup, kind)
    scoring_concurrency: int = 8  # candidates scored in parallel per kind

    # Semantic scoring
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    preload_embedder: bool = False  # load at startup instead of first use

    profiles_path: str = ""  # optional JSON seed for the profile store
    generate_rate_limit: str = "10/minute"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
