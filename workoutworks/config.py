from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the Workout Works backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("WW_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("WW_DB_PATH") or (self.data_root / "workoutworks.db")
        ).expanduser()
        self.log_level: str = (os.environ.get("WW_LOG_LEVEL") or "INFO").upper()

        # In production you MUST set WW_JWT_SECRET. The dev secret keeps local demos easy.
        self.jwt_secret: str = os.environ.get("WW_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("WW_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("WW_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}

        self.auth_burst_window_sec: float = float(os.environ.get("WW_AUTH_BURST_WINDOW_SEC") or "10")
        self.auth_burst_threshold: int = int(os.environ.get("WW_AUTH_BURST_THRESHOLD") or "10")
        self.auth_history_size: int = int(os.environ.get("WW_AUTH_HISTORY_SIZE") or "100")

        self.protein_goal_default: int = int(os.environ.get("WW_PROTEIN_GOAL_DEFAULT") or "160")

        # OpenAI-compatible chat completions endpoint.
        self.llm_api_key: str | None = os.environ.get("LLM_API_KEY")
        self.llm_base_url: str = os.environ.get("LLM_BASE_URL", "https://api.openai.com/v1")
        self.llm_model: str = os.environ.get("LLM_MODEL", "gpt-4o-mini")
        self.llm_timeout: float = float(os.environ.get("LLM_TIMEOUT", "30"))
        self.llm_max_tokens: int = int(os.environ.get("LLM_MAX_TOKENS", "512"))

        cors = os.environ.get("WW_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
