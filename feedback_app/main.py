"""ASGI application for the Session Feedback Service.

Wires together settings, logging, CORS, request IDs, the API routers and
the handlers that turn application errors into JSON bodies.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from feedback_app.config import get_settings
from feedback_app.exceptions import AuthError, FeedbackAppError
from feedback_app.logging_config import setup_logging, get_logger, request_id_var
from feedback_app.models.database import Base, engine
from feedback_app.routes import analytics, auth, contact, feedback, health, questions, sessions

# Initialize logger (will be configured during startup)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging and the schema before serving; release the pool after.

    Tables are only created here when ``database_auto_create`` is on;
    deployments that run Alembic turn it off.
    """
    settings = get_settings()
    setup_logging()

    if settings.database_auto_create:
        Base.metadata.create_all(bind=engine)

    logger.info(
        f"Session Feedback Service starting - "
        f"Environment: {settings.environment}, "
        f"Log Level: {settings.log_level}, "
        f"Database: {settings.database_url.split('@')[-1] if '@' in settings.database_url else 'configured'}, "
        f"Version: {settings.git_commit_sha}"
    )

    yield

    logger.info("Session Feedback Service shutting down")
    engine.dispose()


settings = get_settings()

# Initialize FastAPI application
app = FastAPI(
    title="Session Feedback Service",
    description="Collect anonymous feedback on admin-run sessions and report analytics",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list() or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag the request with an ID visible in every log record and the response."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers["X-Request-ID"] = request_id
    return response


# Root endpoint
@app.get("/")
async def root() -> dict:
    """Service banner."""
    return {
        "service": "Session Feedback Service",
        "version": "1.0.0",
        "environment": settings.environment,
        "status": "operational"
    }


# Register routers
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix=settings.api_prefix, tags=["Auth"])
app.include_router(sessions.router, prefix=settings.api_prefix, tags=["Sessions"])
app.include_router(questions.router, prefix=settings.api_prefix, tags=["Questions"])
app.include_router(feedback.router, prefix=settings.api_prefix, tags=["Feedback"])
app.include_router(contact.router, prefix=settings.api_prefix, tags=["Contact"])
app.include_router(analytics.router, prefix=settings.api_prefix, tags=["Analytics"])


@app.exception_handler(FeedbackAppError)
async def feedback_app_error_handler(request: Request, exc: FeedbackAppError) -> JSONResponse:
    """Translate application errors into ``{"message": ...}`` responses."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(
            f"{request.method} {request.url.path} rejected "
            f"({exc.status_code} {type(exc).__name__}): {exc.message}"
        )

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and parameters as 400."""
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    first = errors[0] if errors else {"loc": [], "msg": "Invalid request"}
    field = ".".join(part for part in first["loc"] if part != "body")
    message = f"{field}: {first['msg']}" if field else first["msg"]

    logger.info(f"{request.method} {request.url.path} invalid request: {message}")
    return JSONResponse(
        status_code=400,
        content={"message": message, "errors": errors},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log the traceback, answer with a generic 500.

    Store failures (e.g. a lost database connection) end up here. The body
    never includes exception details.
    """
    logger.error(
        f"Unhandled {type(exc).__name__} for {request.method} {request.url.path}: {exc}",
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred. Please try again later."
        }
    )
