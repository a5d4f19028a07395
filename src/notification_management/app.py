"""FastAPI application for the notification preferences API.

Usage:
    uvicorn notification_management.app:create_app --factory --port 8000
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from notification_management.api.errors import register_exception_handlers
from notification_management.api.routes import router
from notification_management.domain import notification_management
from notification_management.services import NotificationServices, build_services
from notification_management.utils.logging import add_context, clear_context, configure_logging


def create_app(
    services: NotificationServices | None = None,
    init_domain: bool = True,
    setup_logging: bool = True,
) -> FastAPI:
    if setup_logging:
        configure_logging()

    if init_domain:
        notification_management.init()

    app = FastAPI(
        title="Notification Management API",
        description="Per-recipient notification channel preferences and delivery history",
    )
    app.state.notification_services = services or build_services()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context and a request id for each request."""
        add_context(request_id=request.headers.get("x-request-id") or uuid4().hex)
        try:
            with notification_management.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "domain": notification_management.name}

    return app
