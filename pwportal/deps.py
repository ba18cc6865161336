from __future__ import annotations

from fastapi import HTTPException, Request, status

from .bootstrap import PortalContext


def get_context(request: Request) -> PortalContext:
    ctx = getattr(request.app.state, "portal", None)
    if ctx is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Not initialized")
    return ctx


def is_hx(request: Request) -> bool:
    return bool(request.headers.get("HX-Request"))
