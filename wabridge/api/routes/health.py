"""
Health check endpoints for the WhatsApp REST bridge.
"""

import time
from typing import Any

from fastapi import APIRouter, Request

from wabridge.core.config.settings import settings
from wabridge.core.logging.logger import get_api_logger

logger = get_api_logger()
router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """
    Basic health check endpoint.

    Returns application status, environment information, and response time.
    """
    start_time = time.time()
    response_time = time.time() - start_time

    health_data = {
        "status": "healthy",
        "timestamp": time.time(),
        "response_time_ms": round(response_time * 1000, 2),
        "environment": {
            "environment": settings.environment,
            "version": settings.version,
            "log_level": settings.log_level,
        },
        "services": {"logging": "operational", "configuration": "loaded"},
    }

    logger.info(
        f"Health check completed - Status: {health_data['status']}, "
        f"Response Time: {health_data['response_time_ms']}ms"
    )

    return health_data


@router.get("/health/detailed")
async def detailed_health_check(request: Request) -> dict[str, Any]:
    """
    Detailed health check with configuration and collaborator status.

    Useful for debugging and monitoring.
    """
    start_time = time.time()
    state = request.app.state

    database_info: dict[str, Any] = {"configured": settings.has_database}
    db_adapter = getattr(state, "db_adapter", None)
    db_engine = getattr(state, "db_engine", None)
    if db_adapter is not None and db_engine is not None:
        database_info["healthy"] = await db_adapter.health_check(db_engine)
        database_info.update(await db_adapter.get_connection_info(db_engine))

    emitter = getattr(state, "event_emitter", None)
    response_time = time.time() - start_time

    detailed_data = {
        "status": "healthy",
        "timestamp": time.time(),
        "response_time_ms": round(response_time * 1000, 2),
        "application": {
            "name": "WhatsApp REST Bridge",
            "version": settings.version,
            "environment": settings.environment,
            "is_development": settings.is_development,
        },
        "configuration": {
            "log_level": settings.log_level,
            "log_dir": settings.log_dir,
            "port": settings.port,
            "bulk_default_delay_ms": settings.bulk_default_delay_ms,
            "message_page_size": settings.message_page_size,
        },
        "collaborators": {
            "bridge": {"url": settings.bridge_url, "timeout": settings.bridge_timeout},
            "webhook": {
                "configured": settings.has_webhook,
                "allowed_events": settings.webhook_allowed_events,
            },
            "event_listeners": len(getattr(emitter, "listeners", [])),
            "database": database_info,
        },
    }

    logger.info("Detailed health check completed")

    return detailed_data
