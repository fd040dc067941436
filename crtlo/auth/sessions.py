"""
Per-request session handling.

The cookie carries `<sid>.<signature>` where the signature is an HMAC-SHA256
of the sid under SESSION_SECRET. Cookies with a bad signature are treated
as absent.
"""

import base64
import hashlib
import hmac
import secrets
from dataclasses import dataclass, field

from fastapi import Request, Response

from crtlo.auth.config import AuthSettings
from crtlo.auth.schemas import SessionData
from crtlo.auth.session_store import SessionStore
from crtlo.utils.logger import logger

_ephemeral_secret: str | None = None


def _get_ephemeral_secret() -> str:
    global _ephemeral_secret
    if _ephemeral_secret is None:
        _ephemeral_secret = secrets.token_urlsafe(32)
        logger.warning(
            "SESSION_SECRET is not set; sessions will not survive a restart"
        )
    return _ephemeral_secret


def _signature(sid: str, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), sid.encode("utf-8"), hashlib.sha256)
    return base64.urlsafe_b64encode(digest.digest()).rstrip(b"=").decode("ascii")


def sign_session_id(sid: str, secret: str) -> str:
    return f"{sid}.{_signature(sid, secret)}"


def unsign_session_id(value: str, secret: str) -> str | None:
    sid, _, signature = value.rpartition(".")
    if not sid or not signature:
        return None
    if not hmac.compare_digest(signature, _signature(sid, secret)):
        return None
    return sid


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


@dataclass
class RequestSession:
    """Session state loaded for a single request."""

    sid: str
    data: SessionData = field(default_factory=SessionData)
    is_new: bool = True


class SessionManager:
    """Loads, saves and destroys sessions and manages the cookie."""

    def __init__(self, store: SessionStore, settings: AuthSettings):
        self.store = store
        self.settings = settings

    @property
    def secret(self) -> str:
        return self.settings.session_secret or _get_ephemeral_secret()

    async def load(self, request: Request) -> RequestSession:
        """Load the caller's session, or start an empty one."""
        cookie = request.cookies.get(self.settings.cookie_name)
        sid = unsign_session_id(cookie, self.secret) if cookie else None
        if sid:
            payload = await self.store.get(sid)
            if payload is not None:
                return RequestSession(
                    sid=sid, data=SessionData.model_validate(payload), is_new=False
                )
        return RequestSession(sid=new_session_id())

    async def save(self, session: RequestSession) -> None:
        await self.store.set(
            session.sid,
            session.data.model_dump(mode="json"),
            self.settings.session_ttl_seconds,
        )

    async def regenerate(self, session: RequestSession) -> None:
        """Move the session to a fresh id, dropping the old one."""
        if not session.is_new:
            await self.store.destroy(session.sid)
        session.sid = new_session_id()
        session.is_new = True

    async def destroy(self, session: RequestSession) -> None:
        await self.store.destroy(session.sid)
        session.data = SessionData()

    def set_cookie(self, response: Response, session: RequestSession) -> None:
        response.set_cookie(
            key=self.settings.cookie_name,
            value=sign_session_id(session.sid, self.secret),
            max_age=self.settings.session_ttl_seconds,
            httponly=self.settings.cookie_httponly,
            secure=self.settings.cookie_secure,
            samesite=self.settings.cookie_samesite.value,
        )

    def clear_cookie(self, response: Response) -> None:
        response.delete_cookie(self.settings.cookie_name)
