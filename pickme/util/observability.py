"""Observability configuration using Logfire.

Logfire gives us structured logs, spans and OpenTelemetry export. The app
instruments FastAPI and SQLAlchemy; everything else is explicit:

    import logfire

    logfire.info("Pick request created", pick_request_id=pick_request.id)

    with logfire.span("match_service.respond", match_id=match_id):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from pickme.config import Settings


def _should_send(settings: Settings) -> bool:
    # Explicit setting wins, otherwise send only when a token is configured
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the running environment.

    Set ``OBSERVABILITY__LOGFIRE_TOKEN`` to ship telemetry to Logfire cloud;
    ``OBSERVABILITY__SEND_TO_LOGFIRE`` overrides the token-based default.
    Without either, output stays on the console.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    config_kwargs = {
        "service_name": "pickme-api",
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request with method, path and client host attached.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        result = {**attributes}
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            result["path"] = request.url.path
        if hasattr(request, "client") and request.client:
            result["client_host"] = request.client.host
        return result

    logfire.instrument_fastapi(
        app,
        # Session cookies carry the JWT, keep headers out of traces
        capture_headers=False,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued through the engine.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")
