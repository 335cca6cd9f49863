"""
HTTP API Routes - service-level endpoints: style catalog and health check.
"""


from fastapi import APIRouter

from app.db import check_db_connection
from app.schemas import HealthResponse, StyleDescriptor
from app.services.generation.catalog import STYLES

router = APIRouter()


@router.get("/api/styles", response_model=list[StyleDescriptor], tags=["Catalog"])
async def list_styles():
    """The fixed style catalog, in generation order."""
    return list(STYLES)


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health():
    """Liveness plus database connectivity."""
    database_ok = await check_db_connection()
    return HealthResponse(status="ok" if database_ok else "degraded", database=database_ok)
