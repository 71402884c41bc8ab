import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from comingsoon.core import config
from comingsoon.core.errors import Unauthorized
from comingsoon.middleware.admin_auth import admin_auth, get_session_store, get_session_token
from comingsoon.services.session_store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


def _credentials_match(username: str, password: str) -> bool:
    expected_password = config.admin_password()
    if not expected_password:
        logger.warning("ADMIN_PASSWORD is not set; admin login is disabled")
        return False
    user_ok = hmac.compare_digest(username.encode(), config.admin_username().encode())
    pass_ok = hmac.compare_digest(password.encode(), expected_password.encode())
    return user_ok and pass_ok


@router.post("/login")
def login(
    data: LoginRequest,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    if not _credentials_match(data.username or "", data.password or ""):
        logger.info("Failed admin login for %r", data.username)
        raise Unauthorized("Invalid username or password")

    session_id = store.create({"username": config.admin_username()})
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=session_id,
        max_age=int(store.ttl.total_seconds()),
        httponly=True,
        secure=config.cookie_secure(),
        samesite="lax",
    )
    return {"success": True, "message": "Login successful", "sessionId": session_id}


@router.post("/logout")
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    store: SessionStore = Depends(get_session_store),
):
    store.destroy(token)
    response.delete_cookie(config.SESSION_COOKIE_NAME)
    return {"success": True, "message": "Logged out"}


@router.get("/check-auth")
def check_auth(user: dict = Depends(admin_auth)):
    return {"success": True, "message": "Authorized", "user": user}
