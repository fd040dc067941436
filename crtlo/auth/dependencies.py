"""
Authentication dependencies.

This module provides FastAPI dependencies for loading the caller's session,
enforcing authentication and ChittyID presence, and resolving the owner id
used by the data routes.
"""

from fastapi import Depends, HTTPException, Request, status

from crtlo.auth.chittyid import validate_chittyid_format
from crtlo.auth.config import AuthSettings, get_auth_settings
from crtlo.auth.oidc import OIDCClient
from crtlo.auth.schemas import SessionUser
from crtlo.auth.service import AuthService
from crtlo.auth.session_store import DatabaseSessionStore, SessionStore
from crtlo.auth.sessions import RequestSession, SessionManager
from crtlo.config import AppSettings, get_app_settings
from crtlo.db.database import get_async_session_local
from crtlo.exceptions import AuthError

_oidc_client: OIDCClient | None = None
_session_store: SessionStore | None = None


def get_oidc_client() -> OIDCClient:
    """Shared OIDC client; its discovery cache lives as long as the process."""
    global _oidc_client
    if _oidc_client is None:
        _oidc_client = OIDCClient(settings=get_auth_settings())
    return _oidc_client


async def close_oidc_client() -> None:
    global _oidc_client
    if _oidc_client is not None:
        await _oidc_client.close()
        _oidc_client = None


def get_session_store() -> SessionStore:
    global _session_store
    if _session_store is None:
        _session_store = DatabaseSessionStore(get_async_session_local())
    return _session_store


def get_session_manager(
    store: SessionStore = Depends(get_session_store),
    settings: AuthSettings = Depends(get_auth_settings),
) -> SessionManager:
    return SessionManager(store=store, settings=settings)


def get_auth_service(
    oidc: OIDCClient = Depends(get_oidc_client),
    settings: AuthSettings = Depends(get_auth_settings),
) -> AuthService:
    return AuthService(oidc=oidc, settings=settings)


async def get_request_session(
    request: Request,
    manager: SessionManager = Depends(get_session_manager),
) -> RequestSession:
    """
    Load the caller's session once per request.

    Args:
        request: The HTTP request carrying the session cookie
        manager: Session manager

    Returns:
        RequestSession: The stored session, or a new empty one
    """
    return await manager.load(request)


async def _authenticate(
    session: RequestSession, manager: SessionManager, service: AuthService
) -> SessionUser:
    try:
        user, refreshed = await service.ensure_authenticated(session)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message
        ) from e

    if refreshed:
        await manager.save(session)
    return user


async def require_authenticated_user(
    session: RequestSession = Depends(get_request_session),
    manager: SessionManager = Depends(get_session_manager),
    service: AuthService = Depends(get_auth_service),
) -> SessionUser:
    """
    Require a live session, refreshing an expired access token once.

    Raises:
        HTTPException: 401 "Unauthorized" when there is no usable session
    """
    return await _authenticate(session, manager, service)


async def require_chittyid(
    user: SessionUser = Depends(require_authenticated_user),
) -> SessionUser:
    """
    Require an authenticated user whose ChittyID is well formed.

    Raises:
        HTTPException: 401 "Valid ChittyID required"
    """
    if not validate_chittyid_format(user.chitty_id):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Valid ChittyID required",
        )
    return user


async def get_data_owner_id(
    request: Request,
    app_settings: AppSettings = Depends(get_app_settings),
    manager: SessionManager = Depends(get_session_manager),
    service: AuthService = Depends(get_auth_service),
) -> str:
    """
    Owner id for records created and listed by the data routes.

    With open access every record belongs to the configured data user and
    the session is never touched. Otherwise the caller must be logged in.
    """
    if app_settings.open_access:
        return app_settings.data_user_id

    session = await manager.load(request)
    user = await _authenticate(session, manager, service)
    if not user.sub:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )
    return user.sub
