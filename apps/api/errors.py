from typing import Optional, Dict, Any

from fastapi import Request
from fastapi.responses import JSONResponse

class ApiError(Exception):
    """Handler failure rendered as ``{"message": ..., "error": ...}``."""

    def __init__(self, status_code: int, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.cause = cause

def error_body(err: ApiError, expose_errors: bool) -> Dict[str, Any]:
    body: Dict[str, Any] = {"message": err.message}
    if err.cause is not None and expose_errors:
        body["error"] = str(err.cause) or err.cause.__class__.__name__
    return body

async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    settings = getattr(request.app.state, "settings", None)
    expose = settings.expose_errors if settings is not None else False
    return JSONResponse(status_code=exc.status_code, content=error_body(exc, expose))
