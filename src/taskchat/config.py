# src/taskchat/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time.
- The composition root accepts injected settings, so tests never read the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKCHAT"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Identities ----
    owner_id: str
    console_user_id: str

    # ---- LLM backend (OpenAI-compatible) ----
    llm_api_key: str | None
    llm_base_url: str
    llm_model: str
    llm_max_tokens: int
    llm_temperature: float
    llm_top_p: float
    llm_timeout_seconds: float
    llm_connect_timeout_seconds: float
    extra_headers: dict[str, str]

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    state_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskchat") or "taskchat"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        owner_id = (_env(_k("OWNER_ID"), "owner") or "owner").strip()
        console_user_id = (_first_env(_k("CONSOLE_USER_ID"), default=owner_id) or owner_id).strip()

        llm_api_key = _first_env(_k("LLM_API_KEY"), "OPENAI_API_KEY", default=None)
        llm_base_url = _env(_k("LLM_BASE_URL"), "https://openrouter.ai/api/v1")
        llm_model = _env(_k("LLM_MODEL"), "meta-llama/llama-3.1-8b-instruct")

        http_referer = _env(_k("HTTP_REFERER"), "")
        title = _env(_k("APP_TITLE"), app_name)
        extra_headers = {"X-Title": title}
        if http_referer:
            extra_headers["HTTP-Referer"] = http_referer

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskchat"))
        state_path = _env_path(_k("STATE_PATH"), data_dir / "state.json")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            owner_id=owner_id,
            console_user_id=console_user_id,
            llm_api_key=llm_api_key,
            llm_base_url=llm_base_url,
            llm_model=llm_model,
            llm_max_tokens=_env_int(_k("LLM_MAX_TOKENS"), 1000),
            llm_temperature=_env_float(_k("LLM_TEMPERATURE"), 0.7),
            llm_top_p=_env_float(_k("LLM_TOP_P"), 0.9),
            llm_timeout_seconds=_env_float(_k("LLM_TIMEOUT_SECONDS"), 30.0),
            llm_connect_timeout_seconds=_env_float(_k("LLM_CONNECT_TIMEOUT_SECONDS"), 5.0),
            extra_headers=extra_headers,
            data_dir=data_dir,
            state_path=state_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
