"""
Task Tracker API - Main Application

Multi-user task tracker: registration, login with bearer tokens, and
owner-scoped task CRUD.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasktracker.config import Settings, settings
from tasktracker.database import Database
from tasktracker.errors import register_exception_handlers
from tasktracker.auth import auth_router
from tasktracker.auth.passwords import PasswordHasher
from tasktracker.auth.repository import InMemoryUserRepository, MongoUserRepository
from tasktracker.auth.tokens import TokenService
from tasktracker.tasks import tasks_router
from tasktracker.tasks.repository import InMemoryTaskRepository, TaskRepository
from tasktracker.security import validate_security_config

import logging

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


def create_app(config: Settings = settings) -> FastAPI:
    """Build the application; auth services and stores are constructed at startup from config and kept on app.state."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown events."""
        validate_security_config(config)

        app.state.password_hasher = PasswordHasher(rounds=config.BCRYPT_ROUNDS)
        app.state.token_service = TokenService(
            secret_key=config.JWT_SECRET_KEY,
            algorithm=config.JWT_ALGORITHM,
            expire_minutes=config.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
        )

        database = None
        if config.STORAGE_BACKEND == "memory":
            logger.info("Using in-memory storage backend")
            app.state.user_repository = InMemoryUserRepository()
            app.state.task_repository = InMemoryTaskRepository()
        else:
            database = Database(
                config.MONGODB_URI,
                config.MONGODB_DATABASE,
                timeout_ms=config.MONGODB_TIMEOUT_MS,
            )
            await database.connect()
            user_repository = MongoUserRepository(database.get_database())
            task_repository = TaskRepository(database.get_database())
            await user_repository.ensure_indexes()
            await task_repository.ensure_indexes()
            app.state.user_repository = user_repository
            app.state.task_repository = task_repository

        yield

        if database is not None:
            await database.disconnect()

    app = FastAPI(
        title=config.APP_NAME,
        version=config.APP_VERSION,
        description="Multi-user task tracker with per-user task lists",
        docs_url="/docs" if config.DEBUG else None,
        redoc_url="/redoc" if config.DEBUG else None,
        lifespan=lifespan,
    )

    # CORS configuration - the browser client is served from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    register_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """
        Health check endpoint.

        Returns the service status and version information.
        Used by Docker health checks and load balancers.
        """
        return {
            "status": "healthy",
            "service": config.APP_NAME,
            "version": config.APP_VERSION,
        }

    @app.get("/", tags=["Root"])
    async def root() -> dict:
        """Root endpoint with service information."""
        return {
            "service": config.APP_NAME,
            "version": config.APP_VERSION,
            "docs": "/docs" if config.DEBUG else "disabled",
        }

    app.include_router(auth_router)
    app.include_router(tasks_router)

    return app


app = create_app()
