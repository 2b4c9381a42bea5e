from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from maintgate.schemas import ErrorResponse

HTTP_ERROR_CODES: dict[int, str] = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def _request_id_from_state(request: Request) -> str:
    value = getattr(request.state, "request_id", "")
    return value if isinstance(value, str) and value else "unknown-request-id"


def _error_response(request: Request, *, code: str, message: str, status_code: int) -> JSONResponse:
    request_id = _request_id_from_state(request)
    request.state.error_code = code
    body = ErrorResponse(code=code, message=message, request_id=request_id).model_dump()
    return JSONResponse(status_code=status_code, content=body)


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(
            request,
            code=HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
            message=str(exc.detail),
            status_code=exc.status_code,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_failed_handler(request: Request, exc: RequestValidationError):  # noqa: ARG001
        return _error_response(
            request,
            code="REQUEST_VALIDATION_FAILED",
            message="Request validation failed.",
            status_code=422,
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):  # noqa: ARG001
        return _error_response(
            request,
            code="INTERNAL_ERROR",
            message="Internal server error.",
            status_code=500,
        )
