"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload --port 1337
"""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
from dotenv import load_dotenv
from starlette.middleware.base import BaseHTTPMiddleware

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.envelope import register_error_handlers
from api.routes import places
from db import init_db
from settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class RootRouteMiddleware(BaseHTTPMiddleware):
    """Strip a deployment prefix (e.g. "/api") from incoming paths."""

    def __init__(self, app, root_route: str = ""):
        super().__init__(app)
        self.root_route = root_route.rstrip("/")

    async def dispatch(self, request: Request, call_next):
        path = request.scope.get("path", "")
        if self.root_route and (path == self.root_route or path.startswith(self.root_route + "/")):
            request.scope["path"] = path[len(self.root_route):] or "/"
            logger.debug("rewrote %s -> %s", path, request.scope["path"])
        return await call_next(request)


# Create app
app = FastAPI(
    title="Place Map API",
    description="Geotagged places with proximity and validity-year queries",
    version="1.0.0",
)

register_error_handlers(app)

if settings.ROOT_ROUTE:
    app.add_middleware(RootRouteMiddleware, root_route=settings.ROOT_ROUTE)

# Open CORS for local frontends only
if not settings.is_production:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["X-Requested-With", "Content-Type"],
    )

# Include routers
app.include_router(places.router, prefix="/place", tags=["place"])


@app.on_event("startup")
def startup_event():
    """Initialize database tables on startup."""
    init_db()
    logger.info("%s ready (environment=%s)", app.title, settings.ENVIRONMENT)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
