from fastapi import FastAPI

from .dns import router as dns_router
from .health import router as health_router
from .hostnames import router as hostnames_router
from .sequences import router as sequences_router
from .templates import router as templates_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(templates_router)
    app.include_router(hostnames_router)
    app.include_router(sequences_router)
    app.include_router(dns_router)
