"""FastAPI application with lifespan management."""

import re
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from ecobreak import __version__
from ecobreak.adapters.drive_client import DriveClient
from ecobreak.adapters.firebase_app import google_credentials, initialize_firebase
from ecobreak.adapters.firebase_auth import FirebaseAuthClient
from ecobreak.adapters.firestore_client import FirestoreClient
from ecobreak.adapters.messaging_client import MessagingClient
from ecobreak.api.activities import router as activities_router
from ecobreak.api.admin import router as admin_router
from ecobreak.api.auth_routes import router as auth_router
from ecobreak.api.categories import router as categories_router
from ecobreak.api.category_history import router as category_history_router
from ecobreak.api.dependencies import get_app_settings
from ecobreak.api.drive import router as drive_router
from ecobreak.api.errors import register_exception_handlers
from ecobreak.api.exercise_history import router as exercise_history_router
from ecobreak.api.exercises import router as exercises_router
from ecobreak.api.motivos import router as motivos_router
from ecobreak.api.notification_pauses import router as notification_pauses_router
from ecobreak.api.notification_plans import router as notification_plans_router
from ecobreak.api.pause_history import router as pause_history_router
from ecobreak.api.plans import router as plans_router
from ecobreak.api.process_groups import router as process_groups_router
from ecobreak.api.processes import router as processes_router
from ecobreak.api.scheduler import router as scheduler_router
from ecobreak.api.user_activities import router as user_activities_router
from ecobreak.api.users import admin_router as admin_users_router
from ecobreak.api.users import router as users_router
from ecobreak.config.logging import (
    SERVICE_NAME,
    bind_request_context,
    configure_logging,
    get_logger,
)
from ecobreak.config.settings import get_settings
from ecobreak.models.base import utc_now_iso


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Initializes resources on startup and cleans up on shutdown.
    """
    # Startup
    settings = get_settings()
    configure_logging(json_logs=settings.LOG_JSON)
    logger = get_logger()

    logger.info(
        "Starting application",
        project_id=settings.FIREBASE_PROJECT_ID,
        environment=settings.ENVIRONMENT,
        is_local=settings.is_local,
    )

    # Initialize clients
    firebase_app = initialize_firebase(settings)
    service_account = settings.service_account_info()

    app.state.settings = settings
    app.state.firestore = FirestoreClient(
        project_id=settings.FIREBASE_PROJECT_ID,
        credentials=google_credentials(firebase_app),
    )
    app.state.auth = FirebaseAuthClient(firebase_app)
    app.state.messaging = MessagingClient(firebase_app)
    app.state.drive = DriveClient(service_account) if service_account else None

    if app.state.drive is None:
        logger.warning("drive_not_configured")
    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Application shutting down")


def cors_options(origins: list[str]) -> dict[str, Any]:
    """CORS options; origins containing ``*`` become a regex."""
    exact = [origin for origin in origins if "*" not in origin]
    wildcard = [
        re.escape(origin).replace(r"\*", "[^/]*") for origin in origins if "*" in origin
    ]
    return {
        "allow_origins": exact,
        "allow_origin_regex": "|".join(f"^{pattern}$" for pattern in wildcard) or None,
    }


app = FastAPI(
    title="EcoBreak",
    description="Backend de pausas activas EcoBreak",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    **cors_options(get_settings().CORS_ORIGINS),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Bind request context and log every completed request."""
    client_type = request.headers.get("x-client-type", "mobile")
    bind_request_context(
        method=request.method,
        path=request.url.path,
        client_type=client_type,
    )
    response = await call_next(request)
    get_logger(__name__).info("request_completed", status_code=response.status_code)
    return response


# Register routers
app.include_router(scheduler_router)
app.include_router(admin_router)
app.include_router(admin_users_router)
app.include_router(auth_router)
app.include_router(activities_router)
app.include_router(exercises_router)
app.include_router(categories_router)
app.include_router(category_history_router)
app.include_router(plans_router)
app.include_router(process_groups_router)
app.include_router(processes_router)
app.include_router(user_activities_router)
app.include_router(users_router)
app.include_router(exercise_history_router)
app.include_router(pause_history_router)
app.include_router(motivos_router)
app.include_router(notification_plans_router)
app.include_router(notification_pauses_router)
app.include_router(drive_router)


@app.get("/health")
async def health(request: Request) -> dict[str, Any]:
    """Health check endpoint.

    Returns:
        Health status.
    """
    return {
        "status": "ok",
        "message": "EcoBreak backend is running",
        "timestamp": utc_now_iso(),
        "service": SERVICE_NAME,
        "environment": get_app_settings(request).ENVIRONMENT,
    }


@app.get("/app-health")
async def app_health(request: Request) -> dict[str, Any]:
    """Health check for the mobile app, echoing the client details."""
    return {
        **(await health(request)),
        "clientInfo": {
            "ip": request.client.host if request.client else None,
            "userAgent": request.headers.get("user-agent"),
            "clientType": request.headers.get("x-client-type", "mobile"),
        },
    }
