from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from ..bootstrap import PortalContext
from ..deps import get_context, is_hx
from ..policy import PasswordChangeRequest
from ..services import present
from ..webui import htmx_alert, templates, ui_result


router = APIRouter(prefix="/password")

SUCCESS_MESSAGE = "Your password has been changed."


@router.get("/", response_class=HTMLResponse)
def form_page(request: Request):
    return templates.TemplateResponse(request, "form.html", {})


@router.post("/", response_class=HTMLResponse)
def submit(
    request: Request,
    username: str = Form(""),
    currentPassword: str = Form(""),
    newPassword1: str = Form(""),
    newPassword2: str = Form(""),
    ctx: PortalContext = Depends(get_context),
):
    req = PasswordChangeRequest.from_form(
        {
            "username": username,
            "currentPassword": currentPassword,
            "newPassword1": newPassword1,
            "newPassword2": newPassword2,
        }
    )
    outcome = ctx.service.change(req)
    errors = present(outcome, min_length=ctx.settings.password_min_length)

    if is_hx(request):
        if outcome.ok:
            return htmx_alert(ui_result(True, SUCCESS_MESSAGE))
        return htmx_alert(ui_result(False, "", errors))

    if outcome.ok:
        return templates.TemplateResponse(request, "form.html", {"success": True})

    # Username and current password go back into the form so the user only
    # retypes the new password.
    return templates.TemplateResponse(
        request,
        "form.html",
        {
            "username": req.username,
            "currentPassword": req.current_password,
            "errors": errors,
        },
    )
