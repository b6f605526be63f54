"""Entry point for the to-do FastAPI application."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers import api_router, health_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .core.middleware import CorrelationIdMiddleware
from .errors import register_exception_handlers
from .services import ToDoService


def create_app(
    settings: Settings | None = None,
    service: ToDoService | None = None,
) -> FastAPI:
    """Instantiate and configure the FastAPI application.

    The application owns one ``ToDoService`` (and through it both stores) for
    its whole lifetime; pass ``service`` to share pre-populated stores.
    """

    settings = settings or get_settings()
    configure_logging(settings)

    router_prefix = settings.router_prefix

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        summary="Multi-user to-do list service.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        redirect_slashes=False,
    )

    application.state.settings = settings
    application.state.todo_service = service if service is not None else ToDoService()

    application.add_middleware(CorrelationIdMiddleware, header_name=settings.request_id_header)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    if router_prefix:
        application.include_router(api_router, prefix=router_prefix)
    else:
        application.include_router(api_router)

    application.include_router(health_router)

    register_exception_handlers(application)

    return application


app = create_app()


def run() -> None:
    """Convenience entry point for the ``todoapp`` console script."""

    settings: Settings = get_settings()
    uvicorn.run(
        "todoapp.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.reload,
        log_config=None,
    )
