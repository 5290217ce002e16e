from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.config import get_settings
from taskboard.infrastructure.database import engine, initialize_database
from taskboard.infrastructure.notifications import NotificationPublisher, SessionRegistry
from taskboard.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables on startup; flush pending pushes and release resources on shutdown."""

    initialize_database()
    yield
    await app.state.notification_publisher.drain()
    app.state.session_registry.clear()
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="Taskboard API", lifespan=lifespan)

    registry = SessionRegistry()
    app.state.session_registry = registry
    app.state.notification_publisher = NotificationPublisher(registry)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
