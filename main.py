import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hns.config import Settings, get_settings
from hns.infrastructure.database import (
    create_database_engine,
    create_session_factory,
    initialize_database,
)
from hns.infrastructure.dns_probe import ExistenceProbe
from hns.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup and release the engine on shutdown."""

    initialize_database(app.state.engine)
    yield
    app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Hostname Naming Service", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = create_database_engine(settings)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.probe = ExistenceProbe.from_settings(settings)

    register_routes(app)
    return app


app = create_app()
