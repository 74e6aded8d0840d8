# 공용 예외 + FastAPI 예외 핸들러
# 응답 포맷은 항상 {"error": "..."}

from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger(__name__)

class InvalidFilterError(ValueError):
    """숫자 비교 필터(>=4.5 등) 문법 오류. field 는 쿼리 파라미터 이름."""

    def __init__(self, field: str, raw: str | None = None):
        self.field = field
        self.raw = raw
        super().__init__(f"Invalid {field} filter")

async def _invalid_filter(request: Request, exc: InvalidFilterError) -> JSONResponse:
    log.info("rejected %s filter: %r", exc.field, exc.raw)
    return JSONResponse(status_code=400, content={"error": str(exc)})

async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    # 내부 정보는 로그에만 남기고 응답에는 노출하지 않는다
    log.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidFilterError, _invalid_filter)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected)
