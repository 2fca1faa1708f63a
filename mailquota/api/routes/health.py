"""Health check."""

from fastapi import APIRouter

from mailquota import __version__
from mailquota.schemas.system import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(version=__version__)


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
