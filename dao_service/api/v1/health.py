#!/usr/bin/env python3
import logging
from datetime import datetime, timezone
from fastapi import APIRouter
from dao_service.schemas.health import HealthCheckResponse, ConnectionStatus, HealthStatus
from dao_service.core.database import check_db_connection

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/healthcheck", response_model=HealthCheckResponse)
async def healthcheck() -> HealthCheckResponse:
    """
    Health check endpoint.

    Returns system health status including database connectivity.
    """
    db_connected = await check_db_connection()

    return HealthCheckResponse(
        status=HealthStatus.HEALTHY if db_connected else HealthStatus.UNHEALTHY,
        database=ConnectionStatus.CONNECTED if db_connected else ConnectionStatus.DISCONNECTED,
        timestamp=datetime.now(timezone.utc)
    )
