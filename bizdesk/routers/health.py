"""
Health Check Endpoint
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from .. import __version__

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    store = getattr(request.app.state, "store", None)
    return {
        "status": "healthy" if store is not None else "starting",
        "service": "bizdesk-api",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
