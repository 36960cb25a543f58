import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from webcam_live.app_logging import configure_logging
from webcam_live.config import Settings, settings as default_settings
from webcam_live.routers.admin import router as admin_router
from webcam_live.routers.capture import router as capture_router
from webcam_live.services.auth import AdminCredentials
from webcam_live.services.media_store import CloudinaryMediaStore, MediaStore, configure_cloudinary
from webcam_live.services.registry import SessionRegistry
from webcam_live.templating import STATIC_DIR
from webcam_live.utils.exceptions import register_exception_handlers
from webcam_live.utils.response import success_response

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def create_app(settings: Settings | None = None, media_store: MediaStore | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    if media_store is None:
        if not configure_cloudinary(settings):
            logger.warning("Cloudinary is not configured (CLOUDINARY_URL or CLOUDINARY_* settings). Uploads will fail.")
        media_store = CloudinaryMediaStore()

    if settings.session_secret == "change-me":
        logger.warning("SESSION_SECRET is not set; admin sessions use the default secret")

    app = FastAPI(
        title="Webcam Live",
        description="Webcam capture uploads with an admin session browser",
        version=VERSION,
    )

    app.state.settings = settings
    app.state.registry = SessionRegistry(timezone=settings.capture_timezone)
    app.state.media_store = media_store
    app.state.admin_credentials = AdminCredentials.from_settings(settings)

    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.include_router(capture_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health_check():
        return success_response(data={"service": "webcam-live", "version": VERSION})

    return app


app = create_app()
