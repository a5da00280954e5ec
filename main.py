from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from thriftdesk.config import get_settings
from thriftdesk.infrastructure.database import engine, initialize_database
from thriftdesk.infrastructure.storage import LOCAL_URL_PREFIX, upload_root
from thriftdesk.interfaces.api.errors import register_exception_handlers
from thriftdesk.interfaces.api.routes import register_routes
from thriftdesk.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup and release connections on shutdown."""

    configure_logging()
    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="ThriftDesk API", lifespan=lifespan)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    register_routes(app)

    uploads = upload_root()
    uploads.mkdir(parents=True, exist_ok=True)
    app.mount(LOCAL_URL_PREFIX, StaticFiles(directory=uploads), name="uploads")
    return app


app = create_app()
