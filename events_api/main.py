"""Events API: FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from events_api.assistant.routes import router as assistant_router
from events_api.auth.routes import router as auth_router
from events_api.config.cors import configure_cors
from events_api.config.settings import get_settings
from events_api.images.routes import get_image_library, router as images_router
from events_api.inquiries.routes import router as inquiries_router
from events_api.middleware.error_handler import register_error_handlers
from events_api.middleware.request_id import RequestIDMiddleware
from events_api.tables.routes import router as tables_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if settings.JWT_SECRET == "change-me":
        logger.warning("JWT_SECRET is using the default value; set it in the environment")
    get_image_library().ensure_directories()
    logger.info("Events API ready (data=%s, public=%s)", settings.DATA_DIR, settings.PUBLIC_DIR)
    yield


app = FastAPI(
    title="Events API",
    description=(
        "Backend for public event pages and the admin console.\n\n"
        "## Features\n"
        "- Event inquiry intake stored as CSV\n"
        "- Admin CRUD over dashboard dimension and fact tables\n"
        "- Categorized image library\n"
        "- Keyword analytics assistant\n\n"
        "## Authentication\n"
        "`/api/admin/*` endpoints require `Authorization: Bearer <token>` from `/api/auth/login` "
        "and the `admin` role."
    ),
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Auth", "description": "Authentication: login"},
        {"name": "Inquiries", "description": "Public event inquiry submissions"},
        {"name": "Assistant", "description": "Canned analytics questions"},
        {"name": "Tables", "description": "Admin CRUD over CSV tables"},
        {"name": "Images", "description": "Admin image library"},
    ],
)

# --- Middleware (order matters: outermost first) ---
app.add_middleware(RequestIDMiddleware)
configure_cors(app)

# --- Error handlers ---
register_error_handlers(app)

# --- Routes ---
app.include_router(auth_router)
app.include_router(inquiries_router)
app.include_router(assistant_router)
app.include_router(tables_router)
app.include_router(images_router)


@app.get("/api/health", tags=["Health"], summary="Health check", description="Returns OK if the service is running.")
async def health_check():
    return {"status": "ok"}


def run() -> None:
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("events_api.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
