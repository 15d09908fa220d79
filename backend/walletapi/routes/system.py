from __future__ import annotations
from fastapi import APIRouter, Request
from datetime import datetime, timezone
from walletapi.config import settings

router = APIRouter(tags=["system"])

@router.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "service": request.app.state.service,
        "env": settings.environment,
        "time": datetime.now(timezone.utc).isoformat(),
        "request_id": request.headers.get("x-request-id") or request.state.request_id,
    }

@router.get("/version")
async def version(request: Request):
    return {
        "name": settings.app_name,
        "service": request.app.state.service,
        "version": settings.app_version,
        "git_sha": settings.git_sha,
    }
