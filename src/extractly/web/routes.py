"""
API routes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST

from extractly.auth import TokenData, require_token
from extractly.container import AppContext
from extractly.observability import export_prometheus

from .schemas import ExtractRequest, LoginRequest

router = APIRouter()
auth_router = APIRouter(prefix="/api/auth", tags=["auth"])
login_router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_context(request: Request) -> AppContext:
    return request.app.state.context


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Liveness probe; never authenticated."""
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"status": "ok", "timestamp": timestamp}


@router.get("/metrics")
async def get_prometheus_metrics() -> Response:
    """Endpoint for Prometheus to scrape."""
    return Response(export_prometheus(), media_type=CONTENT_TYPE_LATEST)


@router.post("/api/extract", tags=["extract"])
async def extract_article(
    payload: ExtractRequest,
    request: Request,
    context: AppContext = Depends(get_context),
) -> Dict[str, Any]:
    """Fetch a page and extract its article content."""
    # The body is validated before the token so malformed input reports 400 first.
    context.authenticator.authenticate(request.headers.get("Authorization"))
    result = await context.service.extract_url(payload.url)
    return {"success": True, "data": result.to_dict()}


@auth_router.get("/verify")
async def verify_token(token: Optional[TokenData] = Depends(require_token)) -> Dict[str, Any]:
    """Echo the claims of a valid token."""
    if token is None:
        return {"success": True, "payload": {"message": "authentication bypassed"}}
    return {"success": True, "payload": token.to_payload()}


@login_router.post("/login")
async def login(
    payload: Optional[LoginRequest] = Body(default=None),
    context: AppContext = Depends(get_context),
) -> Dict[str, Any]:
    """Issue a token. Only mounted in the development environment."""
    payload = payload or LoginRequest()
    expires_in = payload.expiresIn if payload.expiresIn is not None else context.config.auth.default_expires_in
    token = context.jwt_manager.create_token(user_id=payload.userId or "default-user", expires_in=expires_in)
    return {"success": True, "token": token, "expiresIn": expires_in}
