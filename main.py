#!/usr/bin/env python3

"""
Persona Morph API server.

Serves account registration and sessions, per-user preferences, the saved-image
gallery and the read-only style catalog. Tables are created on startup; a
database that cannot be reached aborts startup instead of failing every request.
"""

import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.api.auth import router as auth_router
from app.api.http import router as http_router
from app.api.images import router as images_router
from app.api.users import router as users_router
from app.config import settings
from app.db import check_db_connection, close_db, init_db
from app.utils.logger import setup_logger

logger = setup_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await init_db()
    except SQLAlchemyError as e:
        logger.critical(f"Could not create the database schema: {e}")
        raise SystemExit(f"Startup failed: {e}") from e

    if not await check_db_connection():
        logger.critical(f"Database at {settings.database_url} is not reachable.")
        raise SystemExit("Database connection failed.")

    logger.info("Persona Morph API ready.")
    yield

    await close_db()
    logger.info("Persona Morph API stopped.")


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Unexpected store errors become a generic 500 without leaking SQL."""
    logger.error(
        f"Storage failure on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app() -> FastAPI:
    app = FastAPI(title="Persona Morph API", lifespan=lifespan)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)

    for router in (http_router, auth_router, users_router, images_router):
        app.include_router(router)

    # Credentials are required for the session cookie, so origins stay explicit
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    return app


app = create_app()


def main():
    logger.info(
        f"Starting Persona Morph API server on {settings.server_host}:{settings.server_port}"
    )
    try:
        uvicorn.run(
            "main:app",
            host=settings.server_host,
            port=int(settings.server_port),
            workers=settings.server_workers,
        )
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
