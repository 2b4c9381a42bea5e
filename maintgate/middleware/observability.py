import logging
import time

from fastapi import FastAPI, Request

from maintgate.observability.logging import log_event

logger = logging.getLogger("maintgate.observability")


def _elapsed_ms(start: float) -> int:
    return int(round((time.perf_counter() - start) * 1000))


def _request_event(request: Request, event: str, status_code: int, start: float) -> dict:
    return {
        "event": event,
        "request_id": getattr(request.state, "request_id", "unknown-request-id"),
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "latency_ms": _elapsed_ms(start),
    }


def install_observability_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def observability_middleware(request: Request, call_next):  # type: ignore[override]
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            failed_event = _request_event(request, "request.failed", 500, start)
            failed_event["error_code"] = getattr(request.state, "error_code", "INTERNAL_ERROR")
            log_event(logger, failed_event, level=logging.ERROR)
            raise

        completed_event = _request_event(request, "request.completed", response.status_code, start)
        error_code = getattr(request.state, "error_code", None)
        if error_code is not None:
            completed_event["error_code"] = error_code
        log_event(logger, completed_event)
        return response
