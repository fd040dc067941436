"""
Login, callback, refresh and logout on top of the OIDC client.

Session lifecycle:

    Anonymous -> Authenticating (login redirect, pending_login stored)
              -> Authenticated (tokens stored)
              -> Expired (now > expires_at)
              -> Refreshing (one refresh_token grant)
              -> Authenticated | Unauthenticated
"""

import secrets
import time

from crtlo.auth.chittyid import validate_chittyid_format
from crtlo.auth.config import AuthSettings
from crtlo.auth.exceptions import OIDCError
from crtlo.auth.oidc import OIDCClient, generate_code_verifier
from crtlo.auth.schemas import PendingLogin, SessionUser, TokenSet
from crtlo.auth.sessions import RequestSession
from crtlo.db.users.repository import UserRepository
from crtlo.db.users.schemas import UserUpsert
from crtlo.exceptions import AuthError, ValidationError
from crtlo.utils.logger import logger


class AuthService:
    """OIDC session lifecycle for a single request."""

    def __init__(self, oidc: OIDCClient, settings: AuthSettings):
        self.oidc = oidc
        self.settings = settings

    def callback_url(self, host: str | None) -> str:
        """
        Callback URL for the host the login started on.

        Raises:
            ValidationError: The host is not an allowed domain
        """
        if not host or host not in self.settings.get_allowed_domains():
            raise ValidationError(f"Unknown authentication domain: {host}")
        return f"{self.settings.callback_scheme}://{host}/api/callback"

    async def begin_login(self, session: RequestSession, host: str | None) -> str:
        """Store login verifiers in the session and return the provider URL."""
        redirect_uri = self.callback_url(host)
        pending = PendingLogin(
            state=secrets.token_urlsafe(24),
            nonce=secrets.token_urlsafe(24),
            code_verifier=generate_code_verifier(),
            redirect_uri=redirect_uri,
        )
        url = await self.oidc.build_authorization_url(
            redirect_uri=pending.redirect_uri,
            state=pending.state,
            nonce=pending.nonce,
            code_verifier=pending.code_verifier,
        )
        session.data.pending_login = pending
        return url

    async def complete_login(
        self,
        session: RequestSession,
        user_repository: UserRepository,
        code: str | None,
        state: str | None,
        error: str | None = None,
    ) -> SessionUser:
        """
        Finish the authorization code flow and upsert the user.

        Raises:
            AuthError: The provider returned an error or the state does not match
            OIDCError: The code exchange or ID token validation failed
        """
        pending = session.data.pending_login
        session.data.pending_login = None

        if error:
            raise AuthError(f"Provider returned an error: {error}")
        if pending is None or not code:
            raise AuthError("No login in progress")
        if not state or not secrets.compare_digest(state, pending.state):
            raise AuthError("State mismatch")

        tokens = await self.oidc.exchange_code(
            code=code,
            redirect_uri=pending.redirect_uri,
            code_verifier=pending.code_verifier,
        )
        if not tokens.id_token:
            raise AuthError("Provider did not return an ID token")
        claims = await self.oidc.decode_id_token(tokens.id_token, nonce=pending.nonce)
        if not claims.get("sub"):
            raise AuthError("ID token has no subject")

        user = self._session_user(tokens, claims)
        await user_repository.upsert_user(UserUpsert.from_claims(claims))

        session.data.user = user
        logger.info(
            "User authenticated",
            user_id=user.sub,
            has_valid_chittyid=validate_chittyid_format(user.chitty_id),
        )
        return user

    async def ensure_authenticated(
        self, session: RequestSession, now: int | None = None
    ) -> tuple[SessionUser, bool]:
        """
        Return the session's user, refreshing an expired access token once.

        Returns:
            tuple: (user, whether the session was refreshed and must be saved)

        Raises:
            AuthError: No usable session
        """
        user = session.data.user
        if user is None or user.expires_at is None:
            raise AuthError()

        current = int(time.time()) if now is None else now
        if not user.is_expired(current):
            return user, False

        if not user.refresh_token:
            raise AuthError()

        try:
            tokens = await self.oidc.refresh(user.refresh_token)
            claims = (
                await self.oidc.decode_id_token(tokens.id_token)
                if tokens.id_token
                else None
            )
        except OIDCError as e:
            logger.warning("Token refresh failed", user_id=user.sub, error=str(e))
            raise AuthError() from e

        refreshed = self._session_user(tokens, claims, previous=user, now=current)
        session.data.user = refreshed
        logger.info("Session refreshed", user_id=refreshed.sub)
        return refreshed, True

    async def logout_url(self, scheme: str, host: str | None) -> str:
        """Provider end-session URL, or the site root when unavailable."""
        post_logout = f"{scheme}://{host}" if host else "/"
        try:
            url = await self.oidc.build_end_session_url(post_logout)
        except OIDCError as e:
            logger.warning("Could not build end-session URL", error=str(e))
            return "/"
        return url or "/"

    def _session_user(
        self,
        tokens: TokenSet,
        claims: dict | None,
        previous: SessionUser | None = None,
        now: int | None = None,
    ) -> SessionUser:
        if claims is not None:
            expires_at = claims.get("exp")
        elif tokens.expires_in is not None:
            expires_at = (int(time.time()) if now is None else now) + tokens.expires_in
        else:
            expires_at = None

        claims = claims if claims is not None else (previous.claims if previous else {})
        return SessionUser(
            claims=claims,
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token
            or (previous.refresh_token if previous else None),
            id_token=tokens.id_token or (previous.id_token if previous else None),
            expires_at=expires_at,
            chitty_id=claims.get("chitty_id")
            or (previous.chitty_id if previous else None)
            or claims.get("sub"),
        )
