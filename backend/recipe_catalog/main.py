# recipe_catalog/main.py
# FastAPI 앱 초기화 및 라우터 설정

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from recipe_catalog.api.routes_recipes import router as recipes_router
from recipe_catalog.core.config import Settings, settings
from recipe_catalog.core.errors import register_error_handlers
from recipe_catalog.core.logs import setup_logging
from recipe_catalog.db.indexes import ensure_indexes
from recipe_catalog.db.init import connect

log = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).resolve().parent / "static"

@asynccontextmanager
async def lifespan(app: FastAPI):
    # 시작: 커넥션 생성 → app.state 에 보관 / 종료: 정리
    cfg: Settings = app.state.settings
    # uvicorn --factory / 직접 실행 모두 여기서 로깅 설정 (이미 설정됐으면 무시)
    setup_logging(cfg.LOG_LEVEL)
    client = connect(cfg)
    app.state.mongo_client = client
    app.state.db = client[cfg.MONGODB_DB]
    log.info("[startup] mongo client ready (db=%s)", cfg.MONGODB_DB)

    try:
        await ensure_indexes(app.state.db)
        log.info("[startup] indexes ensured")
    except Exception as e:
        # 인덱스는 성능용: 실패해도 서비스는 뜬다
        log.warning("[startup] ensure_indexes failed: %s", e)

    try:
        yield
    finally:
        client.close()
        app.state.db = None
        log.info("[shutdown] mongo client closed")

def create_app(cfg: Settings = settings) -> FastAPI:
    app = FastAPI(title="Recipe Catalog - API", version="0.1.0", lifespan=lifespan)
    app.state.settings = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        log.info("%s %s %d %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/", include_in_schema=False)
    async def index():
        return FileResponse(str(_STATIC_DIR / "index.html"))

    app.include_router(recipes_router)
    app.mount("/static", StaticFiles(directory=str(_STATIC_DIR)), name="static")
    return app

app = create_app()

def run() -> None:
    # 콘솔 스크립트 recipe-catalog-api
    import uvicorn

    setup_logging(settings.LOG_LEVEL)
    uvicorn.run(app, host=settings.API_HOST, port=settings.PORT, log_config=None)
