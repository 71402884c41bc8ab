from fastapi import Cookie, Depends, Header, Request

from comingsoon.core.config import SESSION_COOKIE_NAME, SESSION_HEADER_NAME
from comingsoon.services.session_store import SessionStore


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_session_token(
    session_id: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    x_session_id: str | None = Header(default=None, alias=SESSION_HEADER_NAME),
) -> str | None:
    # Cookie first, explicit header as fallback for non-browser clients
    return session_id or x_session_id or None


def admin_auth(
    token: str | None = Depends(get_session_token),
    store: SessionStore = Depends(get_session_store),
) -> dict:
    return store.validate(token)
