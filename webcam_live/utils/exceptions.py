import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from webcam_live.utils.response import error_response

logger = logging.getLogger(__name__)


class AppException(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(AppException):
    def __init__(self, message: str = "Missing fields"):
        super().__init__(message, status_code=400)


class PayloadTooLarge(AppException):
    def __init__(self, message: str = "Image too large"):
        super().__init__(message, status_code=413)


class UploadError(AppException):
    def __init__(self, message: str = "Upload failed"):
        super().__init__(message, status_code=500)


class NotFound(AppException):
    def __init__(self, message: str = "No data found"):
        super().__init__(message, status_code=404)


class AuthRequired(Exception):
    """Raised by admin-only routes when the visitor is not logged in."""


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AuthRequired)
    async def auth_required_handler(request: Request, exc: AuthRequired) -> RedirectResponse:
        return RedirectResponse(url="/admin", status_code=303)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # malformed bodies (non-JSON, non-string fields) answer like missing ones
        logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=400,
            content=error_response("Missing fields"),
        )

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_response("Internal server error"),
        )
