"""Identity provider exceptions."""

from crtlo.exceptions import UpstreamError


class OIDCError(UpstreamError):
    """Base exception for OpenID Connect provider failures."""


class OIDCDiscoveryError(OIDCError):
    """The discovery document or JWKS could not be fetched or parsed."""


class OIDCTokenError(OIDCError):
    """A token grant failed or returned an unusable token."""
