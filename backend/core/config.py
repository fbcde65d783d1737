"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# SQLite database (relative to project root unless absolute)
DATABASE_PATH: str = os.getenv("DATABASE_PATH", "data/app.db").strip() or "data/app.db"

# Photo storage: files live on disk and are served read-only under PUBLIC_UPLOAD_PREFIX
UPLOAD_DIR_NAME: str = "data/uploads"
PUBLIC_UPLOAD_PREFIX: str = "/uploads"
MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

# Cookie session
SESSION_COOKIE_NAME: str = "session"
ROLE_COOKIE_NAME: str = "user_role"
SESSION_MAX_AGE: int = 60 * 60 * 24 * 7
APP_ENV: str = os.getenv("APP_ENV", "development").strip().lower()
COOKIE_SECURE: bool = APP_ENV == "production"

# Roles and their dashboards
USER_ROLES: tuple[str, ...] = ("cliente", "arquitecto", "gestor")
DASHBOARD_PATHS: dict[str, str] = {
    "cliente": "/dashboard/cliente",
    "arquitecto": "/dashboard/arquitecto",
    "gestor": "/dashboard/gestor",
}

# OpenAI (avatar chat). When set, chat uses OpenAI instead of Hugging Face.
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
CHAT_MODEL: str = os.getenv("CHAT_MODEL", "gpt-4o-mini").strip() or "gpt-4o-mini"

# Replies are spoken aloud, keep them short
CHAT_MAX_TOKENS: int = 200
CHAT_TEMPERATURE: float = 0.7

# Hugging Face chat (fallback LLM)
HF_API_KEY: str = os.getenv("HF_API_KEY", "").strip()
HF_CHAT_URL: str = "https://router.huggingface.co/v1/chat/completions"
HF_LLM_MODEL: str = (
    os.getenv("HF_LLM_MODEL", "meta-llama/Llama-3.2-3B-Instruct").strip()
    or "meta-llama/Llama-3.2-3B-Instruct"
)

# API timeouts (seconds)
LLM_API_TIMEOUT: float = 60.0
