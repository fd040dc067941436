"""
Auth router with login, callback, logout and identity endpoints.

The OIDC flow redirects the browser; every other endpoint returns JSON.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from crtlo.auth.chittyid import validate_chittyid_format
from crtlo.auth.dependencies import (
    get_auth_service,
    get_request_session,
    get_session_manager,
    require_authenticated_user,
    require_chittyid,
)
from crtlo.auth.exceptions import OIDCError
from crtlo.auth.schemas import ChittyIDResponse, ChittyIDValidationResponse, SessionUser
from crtlo.auth.service import AuthService
from crtlo.auth.sessions import RequestSession, SessionManager
from crtlo.db.dependencies import get_user_repository
from crtlo.db.users.repository import UserRepository
from crtlo.db.users.schemas import UserResponse
from crtlo.exceptions import AuthError
from crtlo.utils.logger import logger

router = APIRouter(tags=["Authentication"])

LOGIN_PATH = "/api/login"


@router.get("/login")
async def login(
    request: Request,
    session: RequestSession = Depends(get_request_session),
    manager: SessionManager = Depends(get_session_manager),
    auth_service: AuthService = Depends(get_auth_service),
) -> RedirectResponse:
    """
    Start the authorization code flow.

    Stores state, nonce and the PKCE verifier in a fresh session and
    redirects to the provider's authorization endpoint.
    """
    authorization_url = await auth_service.begin_login(session, request.url.hostname)

    await manager.regenerate(session)
    await manager.save(session)

    response = RedirectResponse(url=authorization_url, status_code=HTTPStatus.FOUND)
    manager.set_cookie(response, session)
    return response


@router.get("/callback")
async def oauth_callback(
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    session: RequestSession = Depends(get_request_session),
    manager: SessionManager = Depends(get_session_manager),
    auth_service: AuthService = Depends(get_auth_service),
    user_repository: UserRepository = Depends(get_user_repository),
) -> RedirectResponse:
    """
    OAuth2 callback endpoint.

    On success the session holds the user's tokens and the browser goes to
    `/`. Any failure sends the browser back to the login route.
    """
    try:
        await auth_service.complete_login(
            session, user_repository, code=code, state=state, error=error
        )
        await user_repository.session.commit()
    except (AuthError, OIDCError, SQLAlchemyError) as e:
        await user_repository.session.rollback()
        logger.warning("Login callback failed", error=str(e))
        await manager.save(session)
        response = RedirectResponse(url=LOGIN_PATH, status_code=HTTPStatus.FOUND)
        manager.set_cookie(response, session)
        return response

    await manager.regenerate(session)
    await manager.save(session)

    response = RedirectResponse(url="/", status_code=HTTPStatus.FOUND)
    manager.set_cookie(response, session)
    return response


@router.get("/logout")
async def logout(
    request: Request,
    session: RequestSession = Depends(get_request_session),
    manager: SessionManager = Depends(get_session_manager),
    auth_service: AuthService = Depends(get_auth_service),
) -> RedirectResponse:
    """
    Destroy the session and redirect through the provider's end-session endpoint.
    """
    redirect_url = await auth_service.logout_url(
        request.url.scheme, request.url.hostname
    )
    await manager.destroy(session)

    response = RedirectResponse(url=redirect_url, status_code=HTTPStatus.FOUND)
    manager.clear_cookie(response)
    return response


@router.get("/chittyid/validate/{chitty_id}", response_model=ChittyIDValidationResponse)
async def validate_chittyid(chitty_id: str) -> ChittyIDValidationResponse:
    """Check the format of a ChittyID. No registry lookup is made."""
    return ChittyIDValidationResponse(
        id=chitty_id, valid=validate_chittyid_format(chitty_id)
    )


@router.get("/auth/user", response_model=UserResponse)
async def get_current_user_info(
    current_user: SessionUser = Depends(require_authenticated_user),
    user_repository: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Profile of the logged-in user as stored at login."""
    user = await user_repository.get_user(current_user.sub)
    if user is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="User not found")
    return UserResponse.model_validate(user)


@router.get("/auth/chittyid", response_model=ChittyIDResponse)
async def get_current_chittyid(
    current_user: SessionUser = Depends(require_chittyid),
) -> ChittyIDResponse:
    """The caller's ChittyID; requires one in valid format."""
    return ChittyIDResponse(chitty_id=current_user.chitty_id)
