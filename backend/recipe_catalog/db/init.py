# recipe_catalog/db/init.py
# Mongo 연결 유틸 — motor
# 전역 커넥션 대신 lifespan 에서 만든 핸들을 app.state 에 두고 Depends 로 주입한다.

from __future__ import annotations

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from recipe_catalog.core.config import Settings

RECIPES = "recipes"

def connect(settings: Settings) -> AsyncIOMotorClient:
    # motor 는 지연 연결: 실제 접속은 첫 명령 시점
    return AsyncIOMotorClient(settings.MONGODB_URI, serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS)

async def init_db(settings: Settings) -> tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    client = connect(settings)
    db = client[settings.MONGODB_DB]
    try:
        # 연결 확인 (준비 안 됐으면 예외)
        await db.command("ping")
    except Exception:
        client.close()
        raise
    return client, db

def get_db(request: Request) -> AsyncIOMotorDatabase:
    # 라우터에서 쓰는 핸들. 미초기화면 예외 발생
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("MongoDB is not initialized yet.")
    return db

def get_recipes_collection(db: AsyncIOMotorDatabase = Depends(get_db)) -> AsyncIOMotorCollection:
    return db[RECIPES]
