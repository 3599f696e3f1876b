"""
Teacher Dashboard API - Main Application

FastAPI backend for the desktop roster manager:
- SQLite (or any SQLAlchemy URL) for the student roster
- JWT bearer authentication on every roster/analytics route
- Uniform {success, data, message, error} response envelope

Run: uvicorn app.main:app --reload --port 3001
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.core.auth import TokenService
from app.core.config import Settings, get_settings
from app.core.handlers import register_exception_handlers
from app.core.logging import setup_logging
from app.db.database import Database
from app.schemas.schemas import HealthResponse
from app.services.analytics_service import AnalyticsService
from app.services.student_repository import StudentRepository

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application with every component wired from `settings`."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    db = Database(settings.database_url, echo=settings.database_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.init_schema(settings.admin_username, settings.admin_password)
        logger.info(f"{settings.project_name} {settings.app_version} started")
        yield
        db.dispose()

    app = FastAPI(
        title=settings.project_name,
        description="""
        Roster management API for the teacher dashboard.

        ## Features
        - **Authentication**: JWT bearer tokens valid for 24 hours
        - **Students**: list (with subject filter), create, partial update, delete
        - **Analytics**: totals, average grade by subject, recent additions
        """,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.settings = settings
    app.state.db = db
    app.state.token_service = TokenService.from_settings(settings)
    app.state.student_repository = StudentRepository(db)
    app.state.analytics_service = AnalyticsService(db)

    # CORS middleware (the desktop shell serves the UI from a local origin)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API routes
    app.include_router(api_router)

    @app.get("/", tags=["Health"])
    def root():
        """Service banner."""
        return {
            "message": f"Welcome to {settings.project_name}",
            "docs": "/docs",
            "version": settings.app_version
        }

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check(request: Request):
        """Detailed health check."""
        connected = request.app.state.db.test_connection()
        return HealthResponse(
            status="healthy" if connected else "degraded",
            database="connected" if connected else "disconnected"
        )

    return app


app = create_app()
