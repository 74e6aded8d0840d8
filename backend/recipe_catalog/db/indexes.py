# recipes 컬렉션 인덱스 — 검색/정렬 필드만
# API 스타트업과 임포터에서 ensure_indexes(db) 를 await 로 호출한다 (이미 있으면 no-op).

from motor.motor_asyncio import AsyncIOMotorDatabase

from recipe_catalog.db.init import RECIPES

RECIPE_INDEXES = ("cuisine", "title", "rating", "total_time")

async def ensure_indexes(db: AsyncIOMotorDatabase) -> list[str]:
    col = db[RECIPES]
    names = []
    for field in RECIPE_INDEXES:
        names.append(await col.create_index([(field, 1)]))
    return names
