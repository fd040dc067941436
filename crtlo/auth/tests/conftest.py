import httpx
import pytest

from crtlo.auth.config import AuthSettings

from .fakes import CLIENT_ID, ISSUER, FakeProvider


@pytest.fixture
def auth_settings():
    return AuthSettings(
        issuer_url=ISSUER,
        client_id=CLIENT_ID,
        allowed_domains="testserver, crtlo.example.com",
        session_secret="test-session-secret",
        cookie_secure=False,
    )


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def transport(provider):
    return httpx.MockTransport(provider.handler)
