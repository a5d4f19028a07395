"""Translate domain errors into HTTP responses.

Protean's FastAPI integration covers its own exception taxonomy
(``ValidationError`` -> 400, ``ObjectNotFoundError`` -> 404, ...); the
handlers here add the errors specific to notification dispatch.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from notification_management.channel.port import TransportFailure
from protean.exceptions import ConfigurationError
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers


def register_exception_handlers(app: FastAPI) -> None:
    register_protean_handlers(app)

    @app.exception_handler(ConfigurationError)
    async def configuration_error(request: Request, exc: ConfigurationError):
        return JSONResponse(status_code=422, content={"error": str(exc)})

    @app.exception_handler(TransportFailure)
    async def transport_failure(request: Request, exc: TransportFailure):
        return JSONResponse(status_code=502, content={"error": str(exc), "channel": exc.channel})
