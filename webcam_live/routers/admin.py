import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from webcam_live.config import Settings
from webcam_live.dependencies import get_admin_credentials, get_media_store, get_registry, get_settings, require_admin
from webcam_live.schemas.admin import DeleteSessionResponse
from webcam_live.services.admin import delete_session, get_session_detail, list_sessions
from webcam_live.services.auth import AdminCredentials
from webcam_live.services.media_store import MediaStore
from webcam_live.services.registry import SessionRegistry
from webcam_live.templating import templates
from webcam_live.utils.exceptions import NotFound
from webcam_live.utils.response import error_response, success_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])


@router.get("/admin", response_class=HTMLResponse)
async def admin_login_page(request: Request):
    if request.session.get("logged_in"):
        return RedirectResponse(url="/admin/panel", status_code=303)
    return templates.TemplateResponse(request, "admin_login.html")


@router.post("/login")
async def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    credentials: AdminCredentials = Depends(get_admin_credentials),
):
    if not credentials.verify(username, password):
        logger.warning("Failed admin login for %r", username)
        return HTMLResponse("Invalid credentials", status_code=401)

    request.session["logged_in"] = True
    return RedirectResponse(url="/admin/panel", status_code=303)


@router.post("/logout")
async def logout(request: Request):
    request.session.clear()
    return RedirectResponse(url="/admin", status_code=303)


@router.get("/admin/panel", response_class=HTMLResponse, dependencies=[Depends(require_admin)])
async def admin_panel(request: Request, registry: SessionRegistry = Depends(get_registry)):
    return templates.TemplateResponse(
        request,
        "admin.html",
        {"sessions": list_sessions(registry)},
    )


@router.get("/show-captures/{session_id}", response_class=HTMLResponse, dependencies=[Depends(require_admin)])
async def show_captures(request: Request, session_id: str, registry: SessionRegistry = Depends(get_registry)):
    try:
        detail = get_session_detail(registry, session_id)
    except NotFound as e:
        return HTMLResponse(e.message, status_code=404)

    return templates.TemplateResponse(
        request,
        "show_captures.html",
        {"session_id": session_id, "user_name": detail.user_name, "images": detail.image_urls},
    )


@router.delete("/delete-session/{session_id}", dependencies=[Depends(require_admin)])
async def delete_capture_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
    media_store: MediaStore = Depends(get_media_store),
    settings: Settings = Depends(get_settings),
):
    result = await delete_session(registry, media_store, session_id, settings)
    if not result.local_deleted:
        return error_response("Session not found")

    data = DeleteSessionResponse(session_id=session_id, remote_cleaned=result.remote_cleaned)
    return success_response(data=data.model_dump())
