from __future__ import annotations

from html import escape
from pathlib import Path

from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates


PACKAGE_DIR = Path(__file__).resolve().parent
STATIC_ASSETS_DIR = PACKAGE_DIR / "static" / "assets"

templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))


def ui_result(ok: bool, message: str, hints: list[str] | None = None) -> dict:
    """Unified UI result shape for HTMX interactions.

    Format:
      {"ok": bool, "message": str, "hints": [str, ...]}
    """

    return {
        "ok": bool(ok),
        "message": str(message or ""),
        "hints": [str(h) for h in (hints or []) if h],
    }


def htmx_alert(result: dict, *, status_code: int = 200) -> HTMLResponse:
    """Return a Bootstrap alert HTML snippet for HTMX swaps."""

    ok = bool(result.get("ok"))
    message = escape(str(result.get("message") or ""))
    hints = [escape(str(x)) for x in (result.get("hints") or []) if x]

    if not message and not hints:
        level = "secondary"
    else:
        level = "success" if ok else "danger"

    parts: list[str] = [f"<div class='alert alert-{level} py-2 mb-0'>"]
    if message:
        parts.append(f"<div>{message}</div>")
    if hints:
        parts.append("<ul class='mb-0'>")
        for h in hints:
            parts.append(f"<li>{h}</li>")
        parts.append("</ul>")
    parts.append("</div>")
    return HTMLResponse("".join(parts), status_code=status_code)
