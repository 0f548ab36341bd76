"""Health check router, polled by the ECS target group."""

from fastapi import APIRouter

from impact_scanner import __version__

router = APIRouter()


@router.get("/health")
async def health():
    return {"status": "ok", "version": __version__}
