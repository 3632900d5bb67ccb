"""FastAPI application exposing the client registry."""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from lombard.core.config import get_settings
from lombard.core.logging import configure_logging
from lombard.repositories.base import ClientRepository
from lombard.repositories.factory import create_repository
from lombard.routers import clients as clients_router
from lombard.services.client_service import ClientService


def create_app(repository: ClientRepository | None = None) -> FastAPI:
    """Build the app around ``repository`` (default: the backend named in settings)."""
    settings = get_settings()
    configure_logging(settings.log_level)
    service = ClientService(repository or create_repository(settings), page_size_max=settings.page_size_max)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        service.repository.close()

    app = FastAPI(title="Lombard Client Registry", lifespan=lifespan)
    app.state.client_service = service

    @app.get("/health")
    def health():
        return {"ok": service.healthy()}

    app.include_router(clients_router.router)
    return app
