from fastapi import Request

from webcam_live.config import Settings
from webcam_live.services.auth import AdminCredentials
from webcam_live.services.media_store import MediaStore
from webcam_live.services.registry import SessionRegistry
from webcam_live.utils.exceptions import AuthRequired


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> SessionRegistry:
    return request.app.state.registry


def get_media_store(request: Request) -> MediaStore:
    return request.app.state.media_store


def get_admin_credentials(request: Request) -> AdminCredentials:
    return request.app.state.admin_credentials


async def require_admin(request: Request) -> None:
    if not request.session.get("logged_in"):
        raise AuthRequired()
