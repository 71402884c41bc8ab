"""Runtime settings read from the environment (.env is loaded on import).

Values are looked up on every call so a changed environment takes effect
without re-importing the module.
"""

import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

SESSION_COOKIE_NAME = "sessionId"
SESSION_HEADER_NAME = "X-Session-Id"

FALLBACK_TARGET_DATE = "2027-01-01T00:00:00Z"
FALLBACK_PROJECT_NAME = "LOGO"
FALLBACK_SITE_TITLE = "Coming Soon"

_TRUTHY = {"1", "true", "yes", "on"}


def _env(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def admin_username() -> str:
    return _env("ADMIN_USERNAME", "admin")


def admin_password() -> str:
    return _env("ADMIN_PASSWORD")


def session_ttl() -> timedelta:
    raw = _env("SESSION_TTL_HOURS")
    if not raw:
        return timedelta(hours=24)
    try:
        hours = float(raw)
    except ValueError:
        return timedelta(hours=24)
    return timedelta(hours=hours) if hours > 0 else timedelta(hours=24)


def cookie_secure() -> bool:
    return _env("COOKIE_SECURE").lower() in _TRUTHY


def cors_allow_origins() -> list[str]:
    raw = _env("CORS_ALLOW_ORIGINS")
    if not raw:
        return ["http://localhost:3000", "http://127.0.0.1:3000"]
    return [x.strip() for x in raw.split(",") if x.strip()]


def default_target_date() -> str:
    return _env("DEFAULT_TARGET_DATE", FALLBACK_TARGET_DATE)


def default_project_name() -> str:
    return _env("DEFAULT_PROJECT_NAME", FALLBACK_PROJECT_NAME)


def default_site_title() -> str:
    return _env("DEFAULT_SITE_TITLE", FALLBACK_SITE_TITLE)


def log_level() -> str:
    return _env("LOG_LEVEL", "INFO").upper()
