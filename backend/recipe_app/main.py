# recipe_app/main.py
# FastAPI 앱 생성: 라우터는 create_app(routers=...) 로 명시적으로 넘긴다
# 기본 실행: uvicorn recipe_app.main:app

from __future__ import annotations

import logging
from asyncio import sleep
from contextlib import asynccontextmanager
from typing import Iterable, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_app.api.routes_recipes import router as recipes_router
from recipe_app.core.config import settings
from recipe_app.core.logging_utils import configure_logging
from recipe_app.db.indexes import ensure_indexes
from recipe_app.db.init import close_db, get_db, init_db

log = logging.getLogger(__name__)

DB_RETRIES = 20

@asynccontextmanager
async def lifespan(app: FastAPI):
    # 1) DB 먼저 붙는다 (최대 20회, 1초 간격)
    db = None
    for i in range(DB_RETRIES):
        try:
            db = await init_db()
            log.info("db ready")
            break
        except Exception as e:
            log.warning("db init retry", extra={"ctx": {"attempt": i + 1, "error": str(e)}})
            await sleep(1.0)
    if db is None:
        raise RuntimeError(f"MongoDB not reachable after {DB_RETRIES} attempts")

    # 2) 인덱스 보장 (실패해도 서비스는 뜬다)
    try:
        await ensure_indexes()
        log.info("indexes ensured")
    except Exception:
        log.exception("ensure_indexes failed")

    yield

    # 몽고db 커넥션 정리
    await close_db()

def create_app(routers: Iterable[APIRouter], use_lifespan: bool = True, cors_origins: Optional[list] = None) -> FastAPI:
    app = FastAPI(
        title="Diet Recipes - API",
        version="0.1.0",
        lifespan=lifespan if use_lifespan else None,
    )

    # CORS: 프론트 origin 허용
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins if cors_origins is not None else settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        return {"status": "ok"}

    @app.get("/health")
    async def health():
        ok = {"status": "ok", "db": "skip"}
        try:
            await get_db().command("ping")
            ok["db"] = "ok"
        except Exception as e:
            log.warning("health db ping failed", extra={"ctx": {"error": str(e)}})
            ok["db"] = "error"
        return ok

    # 라우터 prefix는 각 파일 내에서 정의함 , 중복 prefix 금지
    for r in routers:
        app.include_router(r)
    return app

configure_logging(settings.LOG_LEVEL)
app = create_app([recipes_router])
