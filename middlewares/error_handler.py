import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from services.errors import StatsError

logger = logging.getLogger(__name__)


def _latency_ms(request: Request) -> int:
    # TimingMiddleware 가 기록한 시작 시각 기준
    started = getattr(request.state, "started_at", None)
    return int((time.perf_counter() - started) * 1000) if started is not None else 0

def _error_response(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(
        error=ErrorDetail(code=code, message=message),
        latency_ms=_latency_ms(request),
    )
    content = body.model_dump(mode="json")
    content["generated_at"] = content["generated_at"].replace("+00:00", "Z")
    return JSONResponse(status_code=status_code, content=content)

def add_error_handlers(app: FastAPI):
    @app.exception_handler(StatsError)
    async def stats_exception_handler(request: Request, exc: StatsError):
        return _error_response(request, exc.status_code, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return _error_response(request, 500, "INTERNAL_ERROR", str(exc))
