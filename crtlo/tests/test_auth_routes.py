"""
Tests for the login flow and identity endpoints.

The identity provider is the fake from crtlo.auth.tests.fakes and sessions
live in an InMemorySessionStore.
"""

import asyncio
import time
from datetime import datetime, timezone
from urllib.parse import parse_qs, urlparse

import httpx
from sqlalchemy.exc import IntegrityError

from crtlo.auth.dependencies import get_oidc_client
from crtlo.auth.oidc import OIDCClient
from crtlo.auth.schemas import SessionData, SessionUser
from crtlo.auth.sessions import sign_session_id
from crtlo.auth.tests.fakes import ISSUER, make_id_token
from crtlo.db.users.model import User
from crtlo.main import app


def login(client) -> dict[str, list[str]]:
    response = client.get("/api/login", follow_redirects=False)
    assert response.status_code == 302
    return parse_qs(urlparse(response.headers["location"]).query)


def store_session(client, session_store, auth_settings, user: SessionUser) -> str:
    sid = "preloaded-session-id"
    asyncio.run(
        session_store.set(
            sid, SessionData(user=user).model_dump(mode="json"), ttl_seconds=600
        )
    )
    client.cookies.set(
        auth_settings.cookie_name,
        sign_session_id(sid, auth_settings.session_secret),
    )
    return sid


def session_user(**overrides) -> SessionUser:
    fields = {
        "claims": {"sub": "user-1"},
        "access_token": "access-1",
        "refresh_token": "refresh-1",
        "expires_at": int(time.time()) + 600,
        "chitty_id": "CHITTY-PEO-ABCD1234-WXYZ",
    }
    fields.update(overrides)
    return SessionUser(**fields)


def test_login_redirects_to_provider(client, auth_settings):
    response = client.get("/api/login", follow_redirects=False)

    assert response.status_code == 302
    location = response.headers["location"]
    params = parse_qs(urlparse(location).query)
    assert location.startswith(f"{ISSUER}/authorize?")
    assert params["redirect_uri"] == ["https://testserver/api/callback"]
    assert params["code_challenge_method"] == ["S256"]
    assert auth_settings.cookie_name in response.cookies


def test_login_from_unknown_host_is_rejected(client):
    response = client.get(
        "/api/login", headers={"host": "evil.example.net"}, follow_redirects=False
    )

    assert response.status_code == 400
    assert "evil.example.net" in response.json()["message"]


def test_callback_completes_login(client, provider, repositories):
    params = login(client)
    provider.token_response = {
        "access_token": "access-1",
        "refresh_token": "refresh-1",
        "id_token": make_id_token(
            {
                "sub": "user-1",
                "nonce": params["nonce"][0],
                "email": "tenant@example.com",
                "chitty_id": "CHITTY-PEO-ABCD1234-WXYZ",
            }
        ),
        "expires_in": 3600,
    }
    repositories["users"].get_user.return_value = User(
        id="user-1",
        email="tenant@example.com",
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )

    response = client.get(
        "/api/callback",
        params={"code": "code-1", "state": params["state"][0]},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/"
    repositories["users"].upsert_user.assert_called_once()
    repositories["users"].session.commit.assert_called_once()

    me = client.get("/api/auth/user")
    assert me.status_code == 200
    assert me.json()["email"] == "tenant@example.com"

    chitty = client.get("/api/auth/chittyid")
    assert chitty.json() == {"chittyId": "CHITTY-PEO-ABCD1234-WXYZ", "valid": True}


def test_callback_with_wrong_state_restarts_login(client, provider, repositories):
    login(client)

    response = client.get(
        "/api/callback",
        params={"code": "code-1", "state": "forged"},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/api/login"
    assert provider.token_requests == []
    repositories["users"].upsert_user.assert_not_called()


def test_callback_with_provider_error_restarts_login(client):
    login(client)

    response = client.get(
        "/api/callback", params={"error": "access_denied"}, follow_redirects=False
    )

    assert response.headers["location"] == "/api/login"


def test_login_when_provider_is_unreachable(client, auth_settings):
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("provider unreachable", request=request)

    oidc = OIDCClient(auth_settings, transport=httpx.MockTransport(unreachable))
    app.dependency_overrides[get_oidc_client] = lambda: oidc

    response = client.get("/api/login", follow_redirects=False)

    assert response.status_code == 500
    assert "provider unreachable" in response.json()["message"]


def test_callback_without_subject_restarts_login(client, provider, repositories):
    params = login(client)
    provider.token_response = {
        "access_token": "access-1",
        "id_token": make_id_token({"nonce": params["nonce"][0]}),
        "expires_in": 3600,
    }

    response = client.get(
        "/api/callback",
        params={"code": "code-1", "state": params["state"][0]},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/api/login"
    repositories["users"].upsert_user.assert_not_called()


def test_callback_with_failed_user_upsert_restarts_login(
    client, provider, repositories
):
    params = login(client)
    provider.token_response = {
        "access_token": "access-1",
        "id_token": make_id_token(
            {"sub": "user-2", "nonce": params["nonce"][0], "email": "taken@example.com"}
        ),
        "expires_in": 3600,
    }
    repositories["users"].upsert_user.side_effect = IntegrityError(
        "INSERT INTO users", {}, Exception("duplicate key value violates users_email_key")
    )

    response = client.get(
        "/api/callback",
        params={"code": "code-1", "state": params["state"][0]},
        follow_redirects=False,
    )

    assert response.status_code == 302
    assert response.headers["location"] == "/api/login"
    repositories["users"].session.rollback.assert_called_once()
    repositories["users"].session.commit.assert_not_called()
    assert client.get("/api/auth/user").status_code == 401


def test_auth_user_requires_session(client):
    response = client.get("/api/auth/user")

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}


def test_expired_session_is_refreshed(
    client, provider, session_store, auth_settings, repositories
):
    sid = store_session(
        client,
        session_store,
        auth_settings,
        session_user(expires_at=int(time.time()) - 60),
    )
    provider.token_response = {"access_token": "access-2", "expires_in": 900}

    response = client.get("/api/auth/chittyid")

    assert response.status_code == 200
    assert provider.token_requests[0]["grant_type"] == ["refresh_token"]
    stored = asyncio.run(session_store.get(sid))
    assert stored["user"]["access_token"] == "access-2"
    assert stored["user"]["refresh_token"] == "refresh-1"


def test_expired_session_without_refresh_token(client, session_store, auth_settings):
    store_session(
        client,
        session_store,
        auth_settings,
        session_user(expires_at=int(time.time()) - 60, refresh_token=None),
    )

    response = client.get("/api/auth/chittyid")

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}


def test_chittyid_route_requires_valid_chittyid(client, session_store, auth_settings):
    store_session(client, session_store, auth_settings, session_user(chitty_id="user-1"))

    response = client.get("/api/auth/chittyid")

    assert response.status_code == 401
    assert response.json() == {"message": "Valid ChittyID required"}


def test_logout_redirects_to_end_session(client, session_store, auth_settings):
    sid = store_session(client, session_store, auth_settings, session_user())

    response = client.get("/api/logout", follow_redirects=False)

    assert response.status_code == 302
    location = response.headers["location"]
    assert location.startswith(f"{ISSUER}/logout?")
    assert parse_qs(urlparse(location).query)["post_logout_redirect_uri"] == [
        "http://testserver"
    ]
    assert asyncio.run(session_store.get(sid)) is None


def test_validate_chittyid_endpoint(client):
    valid = client.get("/api/chittyid/validate/CHITTY-PEO-ABCD1234-WXYZ")
    invalid = client.get("/api/chittyid/validate/CHITTY-XYZ-12-AB")

    assert valid.json() == {"id": "CHITTY-PEO-ABCD1234-WXYZ", "valid": True}
    assert invalid.json() == {"id": "CHITTY-XYZ-12-AB", "valid": False}
