"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
import logging

from .config import settings
from .database import Base, SessionLocal, engine as default_engine
from .exceptions import register_exception_handlers
from .core.cache import ResponseCache
from .core.middleware import setup_middlewares
from .core.security import TokenService, build_token_service
from .auth.bootstrap import bootstrap_admin_if_needed
from .auth.router import router as auth_router, login
from .auth.schemas import LoginResponse
from .clients.router import router as clients_router
from .procedures.router import router as procedures_router
from .appointments.router import router as appointments_router
from .schedules.router import router as schedules_router
from .stats.router import router as stats_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    engine: Engine = default_engine,
    session_factory: Callable[[], Session] = SessionLocal,
    cache: Optional[ResponseCache] = None,
    tokens: Optional[TokenService] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        engine: Engine the tables are created on at startup
        session_factory: Session factory used outside request dependencies
        cache: Response cache; a fresh one is created when omitted
        tokens: Token service; built from settings when omitted

    Returns:
        FastAPI: Configured application
    """
    cache = cache if cache is not None else ResponseCache(ttl=settings.cache_ttl_seconds)
    tokens = tokens if tokens is not None else build_token_service()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Salon API...")
        # Create database tables if they don't exist
        Base.metadata.create_all(bind=engine)

        db = session_factory()
        try:
            bootstrap_admin_if_needed(db)
        except Exception:
            logger.exception("Bootstrap process failed")
        finally:
            db.close()
        yield
        logger.info("Salon API stopped")

    app = FastAPI(
        title="Salon API",
        description="API for the salon appointment system",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.token_service = tokens
    app.state.cache = cache

    # Register exception handlers
    register_exception_handlers(app)

    # Setup custom middleware
    setup_middlewares(app, tokens=tokens, session_factory=session_factory, cache=cache)

    # CORS goes outermost so preflight and error responses carry its headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(auth_router)
    app.include_router(clients_router)
    app.include_router(procedures_router)
    app.include_router(appointments_router)
    app.include_router(schedules_router)
    app.include_router(stats_router)

    # Short login path kept for existing frontends
    app.add_api_route(
        "/login", login, methods=["POST"], response_model=LoginResponse, tags=["Authentication"],
    )

    # Root endpoint
    @app.get("/")
    def root():
        """
        Root endpoint.

        Returns:
            dict: Simple welcome message
        """
        return {"message": "Welcome to Salon API"}

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """
        Health check endpoint for monitoring.

        Returns:
            dict: Health status information
        """
        return {"status": "healthy"}

    return app


app = create_app()
