"""
Job Board Admin - Main Application

FastAPI front-end server with:
- One page endpoint per screen (JSON view models)
- Role-gated navigation (redirects instead of forbidden pages)
- Session store persisted to a local JSON file
- All data read from / written to the external REST API

Run: uvicorn jobboard.main:app --reload
"""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard.api.routes import api_router
from jobboard.core.auth import get_api, get_session
from jobboard.core.config import get_settings
from jobboard.core.exceptions import (
    ApplyNotAllowedError,
    AuthenticationError,
    JobBoardError,
    NavigationRedirect,
)
from jobboard.core.logging_config import setup_logging
from jobboard.core.navigation import DEFAULT_LANDING_PATH, LOGIN_PATH
from jobboard.core.session import SessionStore, get_session_store
from jobboard.schemas.schemas import ErrorResponse, HealthResponse, Notice
from jobboard.services.api_client import ApiClient, close_api_client

settings = get_settings()
setup_logging(settings.debug)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Job Board Admin",
    description="""
    Role-based administration front-end for the job board API.

    ## Roles
    - **Admin**: user management, vacancies, applications, metrics
    - **Manager**: vacancies, applications, metrics
    - **Candidate**: explore vacancies, apply (max 3 active applications)

    ## Data
    Everything is owned by the external REST API; this server keeps only the
    session (token + profile) in a local file.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


# ============================================================
# ERROR HANDLERS
# ============================================================

def _error(status_code: int, body: ErrorResponse, headers: dict = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=headers,
    )


@app.exception_handler(NavigationRedirect)
async def navigation_redirect_handler(request: Request, exc: NavigationRedirect):
    headers = {"X-Notice": exc.notice} if exc.notice else None
    return RedirectResponse(exc.location, status_code=307, headers=headers)


@app.exception_handler(JobBoardError)
async def job_board_error_handler(request: Request, exc: JobBoardError):
    body = ErrorResponse(
        detail=exc.message,
        notice=Notice(icon="error", title=exc.title, text=exc.message),
    )
    if isinstance(exc, AuthenticationError):
        body.redirect = LOGIN_PATH
    if isinstance(exc, ApplyNotAllowedError):
        body.reason = exc.reason
        body.notice.icon = "warning"
    return _error(exc.status_code, body)


def _field_name(loc) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "form"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Inline form errors: one message per offending field."""
    errors = {}
    for err in exc.errors():
        field = _field_name(err.get("loc", ()))
        message = str(err.get("msg", "Invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(field, message)
    return _error(422, ErrorResponse(detail="Invalid form data", errors=errors))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={"view": "not_found", "path": request.url.path, "detail": "Page not found"},
        )
    body = ErrorResponse(
        detail=str(exc.detail),
        notice=Notice(icon="error", title="Error", text=str(exc.detail)),
    )
    return _error(exc.status_code, body, headers=getattr(exc, "headers", None))


# ============================================================
# LIFECYCLE
# ============================================================

@app.on_event("startup")
async def startup_event():
    """Hydrate the session from local storage."""
    get_session_store().init()
    logger.info("Front-end started against %s", settings.api_base_url)


@app.on_event("shutdown")
async def shutdown_event():
    await close_api_client()


@app.get("/", tags=["Frontend"])
async def root(session: SessionStore = Depends(get_session)):
    """Entry point: dashboard when logged in, login page otherwise."""
    target = DEFAULT_LANDING_PATH if session.is_authenticated else LOGIN_PATH
    return RedirectResponse(target, status_code=307)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(
    api: ApiClient = Depends(get_api),
    session: SessionStore = Depends(get_session),
):
    """Front-end status and whether the external API answers."""
    reachable = await api.ping()
    return HealthResponse(
        status="healthy",
        api="reachable" if reachable else "unreachable",
        authenticated=session.is_authenticated,
    )
