import asyncio
import tomllib
from contextlib import asynccontextmanager, suppress
from http import HTTPStatus
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SettingsValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from crtlo.ai.gateway.dependencies import close_gateway_client
from crtlo.auth.config import get_auth_settings
from crtlo.auth.dependencies import close_oidc_client, get_session_store
from crtlo.auth.router import router as auth_router
from crtlo.auth.session_store import prune_sessions_periodically
from crtlo.billing.router import router as billing_router
from crtlo.config import get_app_settings, get_client_base_url
from crtlo.db.ai_analyses.router import router as ai_analyses_router
from crtlo.db.config import get_db_settings
from crtlo.db.database import close_db
from crtlo.db.documents.router import router as documents_router
from crtlo.db.properties.router import router as properties_router
from crtlo.db.rtlo_questions.router import router as rtlo_questions_router
from crtlo.exceptions import ConfigError, CRTLOError
from crtlo.legal_aid.router import router as legal_aid_router
from crtlo.utils.logger import logger


def get_version():
    """Get version from pyproject.toml"""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)
    return data["project"]["version"]


def validate_startup_config() -> None:
    """
    Refuse to start a production deployment with required settings missing.

    Raises:
        ConfigError: Listing every missing variable
    """
    app_settings = get_app_settings()
    if not app_settings.is_production():
        return

    auth_settings = get_auth_settings()
    missing = []
    if not app_settings.stripe_secret_key:
        missing.append("STRIPE_SECRET_KEY")
    if not auth_settings.session_secret:
        missing.append("SESSION_SECRET")
    if not auth_settings.client_id:
        missing.append("CHITTY_CLIENT_ID")
    try:
        get_db_settings()
    except SettingsValidationError:
        missing.append("DATABASE_URL")

    if missing:
        raise ConfigError(
            f"Missing required environment variables: {', '.join(missing)}"
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    validate_startup_config()
    logger.info(
        "CRTLO API starting",
        environment=get_app_settings().environment.value,
        open_access=get_app_settings().open_access,
    )
    interval = get_auth_settings().session_prune_interval_seconds
    prune_task = None
    if interval > 0:
        store = app.dependency_overrides.get(get_session_store, get_session_store)()
        prune_task = asyncio.create_task(prune_sessions_periodically(store, interval))

    yield

    if prune_task is not None:
        prune_task.cancel()
        with suppress(asyncio.CancelledError):
            await prune_task
    await close_gateway_client()
    await close_oidc_client()
    await close_db()


app = FastAPI(
    title="CRTLO API",
    description="API for the Chicago RTLO compliance assistant",
    version=get_version(),
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_client_base_url()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Invalid request input is a 400 with a readable message."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    message = "Invalid request: " + "; ".join(problems)
    logger.info("Request validation failed", path=request.url.path, problems=problems)
    return JSONResponse(status_code=HTTPStatus.BAD_REQUEST, content={"message": message})


@app.exception_handler(CRTLOError)
async def crtlo_error_handler(request: Request, exc: CRTLOError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Unhandled service error", path=request.url.path, error=exc.message
        )
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


app.include_router(auth_router, prefix="/api")
app.include_router(properties_router, prefix="/api")
app.include_router(rtlo_questions_router, prefix="/api")
app.include_router(documents_router, prefix="/api")
app.include_router(ai_analyses_router, prefix="/api")
app.include_router(billing_router, prefix="/api")
app.include_router(legal_aid_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {"status": "ok", "message": "CRTLO API is running"}


@app.get("/healthcheck")
async def healthcheck():
    """Health check endpoint."""
    return {"status": "ok", "message": "CRTLO API is running"}
