#!/usr/bin/env python3
"""Render governance errors as ``ErrorResponse`` bodies."""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dao_service.core.exceptions import GovernanceError
from dao_service.schemas.common import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


async def governance_error_handler(request: Request, exc: GovernanceError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.code}: {exc.message}")
    body = ErrorResponse(error=ErrorDetail(code=exc.code, message=exc.message))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GovernanceError, governance_error_handler)
