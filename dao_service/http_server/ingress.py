#!/usr/bin/env python3
"""
DAO Governance - FastAPI HTTP Server

Main entry point for the governance API.
All endpoints are documented at /docs (Swagger UI).

API Version: v1
Base Path: /api/v1
"""
import logging
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dao_service.api.errors import register_error_handlers
from dao_service.api.v1 import organizations, proposals, comments, health
from dao_service.core.config import settings as pydantic_settings
from dao_service.core.database import init_db, engine

# Logging Setup
logging.basicConfig(
    format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    datefmt="%d/%m/%Y %H:%M:%S",
)
logger = logging.getLogger("http_server")
logger.setLevel(logging.DEBUG if pydantic_settings.debug else logging.INFO)


# Filter out healthcheck logs from uvicorn
class EndpointFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return not (record.args and len(record.args) >= 3 and record.args[2] == "/healthcheck")


logging.getLogger("uvicorn.access").addFilter(EndpointFilter())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the store once at startup and release it on shutdown."""
    await init_db()
    logger.info(f"Store ready ({engine.url.get_backend_name()})")

    yield

    await engine.dispose()
    logger.info("Shutdown: database engine disposed")


# FastAPI App Setup
app = FastAPI(
    title=pydantic_settings.app_name,
    description=pydantic_settings.app_description,
    version="1.0.0",
    docs_url=pydantic_settings.docs_url,
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=pydantic_settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include v1 API routers
app.include_router(organizations.router, prefix=pydantic_settings.api_v1_prefix)
app.include_router(proposals.router, prefix=pydantic_settings.api_v1_prefix)
app.include_router(comments.router, prefix=pydantic_settings.api_v1_prefix)
app.include_router(health.router)


def start():
    """Start the FastAPI application."""
    logger.info("Starting FastAPI application...")
    uvicorn.run(
        "dao_service.http_server.ingress:app",
        host="0.0.0.0",
        port=pydantic_settings.service_port,
        # the command lock is per process
        workers=1
    )


if __name__ == "__main__":
    start()
