import asyncio
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from staffhub.config import get_settings
from staffhub.db.init_db import init_db

logger = logging.getLogger(__name__)

load_dotenv()

settings = get_settings()
logging.getLogger("staffhub").setLevel(settings.log_level.upper())


@asynccontextmanager
async def _lifespan(_app: FastAPI):
    init_db()
    logger.info("Database tables ensured")

    try:
        yield
    except asyncio.CancelledError:
        logger.info("Application shutdown requested (CancelledError). Exiting gracefully.")
    except Exception:
        logger.exception("Unhandled exception during application lifespan shutdown.")
        raise


tags_metadata = [
    {"name": "Root", "description": "Basic status endpoint."},
    {"name": "Health", "description": "Liveness and readiness probes."},
    {"name": "Menu", "description": "Navigation menu tree management."},
    {"name": "Role", "description": "Role management."},
    {"name": "Role_Permissions", "description": "Menu grants per role and role menu resolution."},
]

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    openapi_tags=tags_metadata,
    docs_url="/swagger",
    swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
    redoc_url="/redoc",
    lifespan=_lifespan,
)


@app.get("/", tags=["Root"])
async def root():
    return {"message": settings.app_name}


app.add_middleware(
    GZipMiddleware,
    minimum_size=1000,  # Only compress responses > 1KB
    compresslevel=6,
)

logger.info(f"CORS enabled for origins: {settings.cors_origin_list}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routers
from .routers import health, menu, role, role_permission  # noqa: E402

app.include_router(health.router)
app.include_router(menu.router)
app.include_router(role.router)
app.include_router(role_permission.router)


__all__ = ["app"]
