"""
Unit tests for OIDCClient against a fake provider.
"""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from crtlo.auth.exceptions import OIDCDiscoveryError, OIDCTokenError
from crtlo.auth.oidc import OIDCClient, code_challenge_s256, generate_code_verifier

from .fakes import CLIENT_ID, ISSUER, make_id_token


@pytest.fixture
def oidc(auth_settings, transport):
    return OIDCClient(auth_settings, transport=transport)


def test_code_challenge_matches_rfc7636_example():
    verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
    assert code_challenge_s256(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"


def test_code_verifier_length():
    assert 43 <= len(generate_code_verifier()) <= 128


@pytest.mark.asyncio
async def test_discovery_is_memoized(oidc, provider):
    first = await oidc.get_provider_metadata()
    second = await oidc.get_provider_metadata()

    assert first.issuer == ISSUER
    assert second is first
    assert provider.count("/.well-known/openid-configuration") == 1


@pytest.mark.asyncio
async def test_discovery_failure(auth_settings):
    def handler(request):
        return httpx.Response(503, text="down")

    client = OIDCClient(auth_settings, transport=httpx.MockTransport(handler))
    with pytest.raises(OIDCDiscoveryError):
        await client.get_provider_metadata()


@pytest.mark.asyncio
async def test_build_authorization_url(oidc):
    url = await oidc.build_authorization_url(
        redirect_uri="https://testserver/api/callback",
        state="state-1",
        nonce="nonce-1",
        code_verifier="dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk",
    )

    parsed = urlparse(url)
    params = parse_qs(parsed.query)
    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == f"{ISSUER}/authorize"
    assert params["response_type"] == ["code"]
    assert params["client_id"] == [CLIENT_ID]
    assert params["scope"] == ["openid email profile offline_access"]
    assert params["prompt"] == ["login consent"]
    assert params["state"] == ["state-1"]
    assert params["nonce"] == ["nonce-1"]
    assert params["code_challenge_method"] == ["S256"]
    assert params["code_challenge"] == ["E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"]


@pytest.mark.asyncio
async def test_exchange_code_posts_pkce_verifier(oidc, provider):
    provider.token_response = {
        "access_token": "access-1",
        "refresh_token": "refresh-1",
        "id_token": "id-1",
        "expires_in": 3600,
        "token_type": "Bearer",
    }

    tokens = await oidc.exchange_code(
        code="code-1",
        redirect_uri="https://testserver/api/callback",
        code_verifier="verifier-1",
    )

    assert tokens.access_token == "access-1"
    assert tokens.refresh_token == "refresh-1"
    sent = provider.token_requests[0]
    assert sent["grant_type"] == ["authorization_code"]
    assert sent["code"] == ["code-1"]
    assert sent["code_verifier"] == ["verifier-1"]
    assert sent["client_id"] == [CLIENT_ID]


@pytest.mark.asyncio
async def test_refresh_failure_raises_token_error(oidc, provider):
    provider.token_status = 400
    provider.token_response = {"error": "invalid_grant"}

    with pytest.raises(OIDCTokenError):
        await oidc.refresh("stale-refresh-token")

    assert provider.token_requests[0]["grant_type"] == ["refresh_token"]


@pytest.mark.asyncio
async def test_decode_id_token(oidc, provider):
    token = make_id_token({"sub": "user-1", "nonce": "nonce-1", "email": "a@b.com"})

    claims = await oidc.decode_id_token(token, nonce="nonce-1")

    assert claims["sub"] == "user-1"
    assert claims["email"] == "a@b.com"
    assert provider.count("/jwks") == 1


@pytest.mark.asyncio
async def test_decode_id_token_nonce_mismatch(oidc):
    token = make_id_token({"sub": "user-1", "nonce": "nonce-1"})

    with pytest.raises(OIDCTokenError):
        await oidc.decode_id_token(token, nonce="other-nonce")


@pytest.mark.asyncio
async def test_decode_id_token_wrong_audience(oidc):
    token = make_id_token({"sub": "user-1", "aud": "someone-else"})

    with pytest.raises(OIDCTokenError):
        await oidc.decode_id_token(token)


@pytest.mark.asyncio
async def test_decode_id_token_bad_signature(oidc):
    token = make_id_token({"sub": "user-1"}, key=b"another-key-that-is-long-enough-000000")

    with pytest.raises(OIDCTokenError):
        await oidc.decode_id_token(token)


@pytest.mark.asyncio
async def test_end_session_url(oidc):
    url = await oidc.build_end_session_url("https://testserver")

    params = parse_qs(urlparse(url).query)
    assert url.startswith(f"{ISSUER}/logout?")
    assert params["post_logout_redirect_uri"] == ["https://testserver"]
    assert params["client_id"] == [CLIENT_ID]


@pytest.mark.asyncio
async def test_end_session_url_missing_endpoint(auth_settings, provider, transport):
    provider.end_session = False
    client = OIDCClient(auth_settings, transport=transport)

    assert await client.build_end_session_url("https://testserver") is None
