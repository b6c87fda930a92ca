# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Use .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKCHAT_APP_NAME": "App display name (default: taskchat).",
    "TASKCHAT_LOG_LEVEL": "Console logging level (default: INFO).",
    # Identities
    "TASKCHAT_OWNER_ID": "The only identity allowed to grant/revoke access (default: owner).",
    "TASKCHAT_CONSOLE_USER_ID": "Identity the console starts as (default: owner id).",
    # LLM (OpenAI-compatible)
    "TASKCHAT_LLM_API_KEY": "API key; OPENAI_API_KEY is also accepted. Unset => offline demo backend.",
    "TASKCHAT_LLM_BASE_URL": "Base URL (default: https://openrouter.ai/api/v1).",
    "TASKCHAT_LLM_MODEL": "Model name (default: meta-llama/llama-3.1-8b-instruct).",
    "TASKCHAT_LLM_MAX_TOKENS": "max_tokens per completion (default: 1000).",
    "TASKCHAT_LLM_TEMPERATURE": "Sampling temperature (default: 0.7).",
    "TASKCHAT_LLM_TOP_P": "Nucleus sampling top_p (default: 0.9).",
    "TASKCHAT_LLM_TIMEOUT_SECONDS": "Per-call timeout before the fallback reply (default: 30).",
    "TASKCHAT_LLM_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    "TASKCHAT_HTTP_REFERER": "Optional OpenRouter metadata header.",
    "TASKCHAT_APP_TITLE": "Optional OpenRouter metadata header title.",
    # Paths (gitignored)
    "TASKCHAT_DATA_DIR": "Local data directory (default: .local/taskchat).",
    "TASKCHAT_STATE_PATH": "Restart snapshot JSON (default: <data_dir>/state.json).",
}
