import logging
import os

import requests
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _bot_token() -> str:
    return (os.getenv("TELEGRAM_BOT_TOKEN") or os.getenv("TG_MONITOR_BOT_TOKEN") or "").strip()


def _chat_id() -> str:
    return (
        os.getenv("TELEGRAM_MONITOR_CHAT_ID")
        or os.getenv("TG_MONITOR_CHAT_ID")
        or os.getenv("TELEGRAM_CHAT_ID")
        or ""
    ).strip()


def notify_monitor(message: str) -> bool:
    """Post a message to the monitoring Telegram chat.

    Returns False when notifications are not configured or the call failed;
    a signup never fails because of this.
    """
    token = _bot_token()
    chat_id = _chat_id()
    if not token or not chat_id:
        return False

    payload = {
        "chat_id": chat_id,
        "text": message,
        "parse_mode": "HTML",
    }

    try:
        r = requests.post(f"https://api.telegram.org/bot{token}/sendMessage", json=payload, timeout=5)
        r.raise_for_status()
    except requests.RequestException as e:
        logger.warning("Telegram notify failed: %s", e)
        return False
    return True
