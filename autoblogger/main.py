# /autoblogger/main.py

# --- Core FastAPI Imports ---
from fastapi import FastAPI
from contextlib import asynccontextmanager
from typing import Optional
import logging

import uvicorn

# --- Application-specific Imports ---
from .core.config import Settings
from .core.logging_config import configure_logging
from .db.database import create_db_engine, create_session_factory, init_db
from .routers import articles_router
from .services.ai_helpers.base_provider import TextProvider
from .services.ai_service import create_generator
from .services.database_service import DatabaseService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, generator: Optional[TextProvider] = None) -> FastAPI:
    """
    Builds the application. Settings are read from the environment at startup
    unless given; a generator can be injected to avoid calling a real provider.
    """

    # --- Application Lifecycle Management ---
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # This code runs ONCE when the application starts up.
        active_settings = settings or Settings.from_env()
        configure_logging(active_settings.log_level)

        engine = create_db_engine(active_settings.database_url)
        init_db(engine)
        app.state.settings = active_settings
        app.state.db_service = DatabaseService(create_session_factory(engine))
        app.state.generator = generator or create_generator(active_settings)
        logger.info("Using %s (%s), database at %s",
                    active_settings.ai_model.value, active_settings.ai_model.api_model, active_settings.db_path)
        yield
        # This code runs ONCE when the application shuts down.
        engine.dispose()

    # --- FastAPI Application Instance Creation ---
    app = FastAPI(
        title="Autoblogger",
        description="Serves blog articles that are generated on first request and cached forever.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # --- Router Inclusion ---
    # The article router owns a catch-all route, so it must be included last.
    app.include_router(articles_router.router, tags=["Articles"])
    return app


app = create_app()


def run() -> None:
    """Console entry point: validates configuration, then serves on all interfaces."""
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.server_port)
