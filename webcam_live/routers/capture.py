from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from webcam_live.config import Settings
from webcam_live.dependencies import get_media_store, get_registry, get_settings
from webcam_live.schemas.capture import CaptureUpload, CaptureUploaded
from webcam_live.services.capture import submit_capture
from webcam_live.services.media_store import MediaStore
from webcam_live.services.registry import SessionRegistry
from webcam_live.templating import templates
from webcam_live.utils.response import success_response

router = APIRouter(tags=["capture"])


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    return templates.TemplateResponse(request, "index.html")


@router.get("/capture", response_class=HTMLResponse)
async def capture_page(request: Request):
    return templates.TemplateResponse(request, "capture.html")


@router.post("/upload")
async def upload_capture(
    payload: CaptureUpload,
    registry: SessionRegistry = Depends(get_registry),
    media_store: MediaStore = Depends(get_media_store),
    settings: Settings = Depends(get_settings),
):
    result = await submit_capture(
        registry,
        media_store,
        image=payload.image,
        user_name=payload.name,
        capture_type=payload.type,
        session_id=payload.session_id,
        settings=settings,
    )
    return success_response(data=CaptureUploaded(**result).model_dump())
