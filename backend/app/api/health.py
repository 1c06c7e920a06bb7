import os
from datetime import datetime, timezone

from fastapi import APIRouter

from app.config import settings
from app.db import ping

router = APIRouter()


@router.get("/health", tags=["health"])
def health():
    return {
        "success": True,
        "message": "API is healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
        "database": ping(),
        "dataDir": os.path.isdir(settings.DATA_DIR),
    }
