import logging
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.orm import Session

from comingsoon.core import config
from comingsoon.core.errors import InvalidInput
from comingsoon.models.site_config import SiteConfig

logger = logging.getLogger(__name__)

TARGET_DATE = "target_date"
PROJECT_NAME = "project_name"
SITE_TITLE = "site_title"

_ISO_Z = "%Y-%m-%dT%H:%M:%SZ"


def parse_target_date(value) -> str:
    """Normalize an ISO-8601 instant to UTC ``YYYY-MM-DDTHH:MM:SSZ``; naive values are UTC."""
    raw = str(value or "").strip()
    if not raw:
        raise InvalidInput("Target date is required")
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(raw)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        # Shifting to UTC can leave the year 1..9999 range
        dt = dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        raise InvalidInput("Invalid target date")
    return dt.strftime(_ISO_Z)


def _bounded_text(label: str, max_len: int) -> Callable[[object], str]:
    def validate(value) -> str:
        text = str(value or "").strip()
        if not text:
            raise InvalidInput(f"{label} is required")
        if len(text) > max_len:
            raise InvalidInput(f"{label} must be at most {max_len} characters")
        return text

    return validate


VALIDATORS: dict[str, Callable[[object], str]] = {
    TARGET_DATE: parse_target_date,
    PROJECT_NAME: _bounded_text("Project name", 50),
    SITE_TITLE: _bounded_text("Site title", 100),
}

DEFAULTS: dict[str, Callable[[], str]] = {
    TARGET_DATE: config.default_target_date,
    PROJECT_NAME: config.default_project_name,
    SITE_TITLE: config.default_site_title,
}

FALLBACKS = {
    TARGET_DATE: config.FALLBACK_TARGET_DATE,
    PROJECT_NAME: config.FALLBACK_PROJECT_NAME,
    SITE_TITLE: config.FALLBACK_SITE_TITLE,
}


def _fallback(key: str) -> str:
    # A bad DEFAULT_* env value must not break first-run bootstrap.
    value = DEFAULTS[key]()
    try:
        return VALIDATORS[key](value)
    except InvalidInput:
        logger.warning("Ignoring invalid default for %s: %r", key, value)
        return FALLBACKS[key]


def get_value(db: Session, key: str) -> str:
    if key not in DEFAULTS:
        raise InvalidInput(f"Unknown config key: {key}")
    row = db.get(SiteConfig, key)
    if row:
        return row.value

    value = _fallback(key)
    db.add(SiteConfig(key=key, value=value))
    db.commit()
    logger.info("Config %s initialized to default %r", key, value)
    return value


def set_value(db: Session, key: str, value) -> str:
    validator = VALIDATORS.get(key)
    if validator is None:
        raise InvalidInput(f"Unknown config key: {key}")
    normalized = validator(value)

    row = db.get(SiteConfig, key)
    if row:
        row.value = normalized
        row.updated_at = datetime.now(timezone.utc)
    else:
        db.add(SiteConfig(key=key, value=normalized))
    db.commit()
    logger.info("Config %s updated", key)
    return normalized


def bootstrap(db: Session) -> None:
    for key in DEFAULTS:
        get_value(db, key)


def public_config(db: Session) -> dict:
    return {
        "siteTitle": get_value(db, SITE_TITLE),
        "targetDate": get_value(db, TARGET_DATE),
        "projectName": get_value(db, PROJECT_NAME),
        "serverTime": datetime.now(timezone.utc).strftime(_ISO_Z),
    }
