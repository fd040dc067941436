"""Fixtures for API route tests."""

from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from crtlo.ai.gateway.dependencies import get_rtlo_assistant_service
from crtlo.ai.gateway.service import RTLOAssistantService
from crtlo.auth.config import AuthSettings, get_auth_settings, set_auth_settings
from crtlo.auth.dependencies import get_oidc_client, get_session_store
from crtlo.auth.oidc import OIDCClient
from crtlo.auth.session_store import InMemorySessionStore
from crtlo.auth.tests.fakes import CLIENT_ID, ISSUER, FakeProvider
from crtlo.config import AppSettings, get_app_settings, set_app_settings
from crtlo.db.ai_analyses.repository import AIAnalysisRepository
from crtlo.db.dependencies import (
    get_ai_analysis_repository,
    get_document_repository,
    get_property_repository,
    get_rtlo_question_repository,
    get_user_repository,
)
from crtlo.db.documents.repository import DocumentRepository
from crtlo.db.properties.repository import PropertyRepository
from crtlo.db.rtlo_questions.repository import RTLOQuestionRepository
from crtlo.db.users.repository import UserRepository
from crtlo.main import app


def repository_mock(spec):
    repository = AsyncMock(spec=spec)
    repository.session = AsyncMock(spec=AsyncSession)
    return repository


@pytest.fixture
def app_settings():
    return AppSettings(open_access=True, data_user_id="anonymous")


@pytest.fixture
def auth_settings():
    return AuthSettings(
        issuer_url=ISSUER,
        client_id=CLIENT_ID,
        allowed_domains="testserver",
        session_secret="test-session-secret",
        cookie_secure=False,
    )


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def repositories():
    return {
        "properties": repository_mock(PropertyRepository),
        "questions": repository_mock(RTLOQuestionRepository),
        "documents": repository_mock(DocumentRepository),
        "analyses": repository_mock(AIAnalysisRepository),
        "users": repository_mock(UserRepository),
    }


@pytest.fixture
def assistant():
    return AsyncMock(spec=RTLOAssistantService)


@pytest.fixture
def client(app_settings, auth_settings, provider, session_store, repositories, assistant):
    """Test client with storage, the gateway and the identity provider faked."""
    previous_app_settings = get_app_settings()
    previous_auth_settings = get_auth_settings()
    set_app_settings(app_settings)
    set_auth_settings(auth_settings)

    oidc = OIDCClient(auth_settings, transport=httpx.MockTransport(provider.handler))

    app.dependency_overrides[get_auth_settings] = lambda: auth_settings
    app.dependency_overrides[get_app_settings] = lambda: app_settings
    app.dependency_overrides[get_oidc_client] = lambda: oidc
    app.dependency_overrides[get_session_store] = lambda: session_store
    app.dependency_overrides[get_rtlo_assistant_service] = lambda: assistant
    app.dependency_overrides[get_property_repository] = lambda: repositories["properties"]
    app.dependency_overrides[get_rtlo_question_repository] = lambda: repositories["questions"]
    app.dependency_overrides[get_document_repository] = lambda: repositories["documents"]
    app.dependency_overrides[get_ai_analysis_repository] = lambda: repositories["analyses"]
    app.dependency_overrides[get_user_repository] = lambda: repositories["users"]

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    set_app_settings(previous_app_settings)
    set_auth_settings(previous_auth_settings)
