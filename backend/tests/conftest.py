from __future__ import annotations

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from recipe_catalog.db.init import get_recipes_collection
from recipe_catalog.main import app


INT64_MAX = 2**63 - 1


class FakeCursor:
    """find() 결과 흉내: sort/skip/limit/to_list 만 지원 (필터는 무시)."""

    def __init__(self, docs):
        self._docs = [dict(d) for d in docs]
        self._skip = 0
        self._limit = 0

    def sort(self, keys):
        for key, direction in reversed(keys):
            self._docs.sort(key=lambda d: d[key], reverse=direction < 0)
        return self

    def skip(self, n):
        # 드라이버는 skip/limit 을 BSON int64 로 인코딩
        if n > INT64_MAX:
            raise OverflowError("MongoDB can only handle up to 8-byte ints")
        self._skip = n
        return self

    def limit(self, n):
        if n > INT64_MAX:
            raise OverflowError("MongoDB can only handle up to 8-byte ints")
        self._limit = n
        return self

    async def to_list(self, length=None):
        docs = self._docs[self._skip:]
        if self._limit:
            docs = docs[: self._limit]
        if length is not None:
            docs = docs[:length]
        return docs


class FakeCollection:
    def __init__(self, docs=(), error: Exception | None = None):
        self.docs = list(docs)
        self.queries: list = []
        self.error = error

    def find(self, query=None, projection=None):
        if self.error:
            raise self.error
        self.queries.append(query)
        return FakeCursor(self.docs)

    async def count_documents(self, query):
        if self.error:
            raise self.error
        return len(self.docs)


def make_recipes(n: int) -> list[dict]:
    # i 번째 레시피가 평점 순으로도 i 번째 (5.0, 4.9, ...)
    return [
        {
            "_id": ObjectId(),
            "title": f"Recipe {i + 1}",
            "cuisine": "Southern Recipes",
            "rating": round(5.0 - i * 0.1, 1),
            "prep_time": 10,
            "cook_time": 20,
            "total_time": 30,
            "description": "desc",
            "serves": "4 servings",
            "nutrients": {"calories": f"{300 + i} kcal"},
        }
        for i in range(n)
    ]


@pytest.fixture
def recipes() -> FakeCollection:
    # 입력 순서를 섞어서 정렬이 실제로 적용되는지 확인
    return FakeCollection(list(reversed(make_recipes(25))))


@pytest.fixture
def client(recipes):
    app.dependency_overrides[get_recipes_collection] = lambda: recipes
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_collection():
    """임의 FakeCollection 을 주입하고 (raise_server_exceptions=False) 클라이언트를 돌려준다."""

    def _use(coll: FakeCollection) -> TestClient:
        app.dependency_overrides[get_recipes_collection] = lambda: coll
        return TestClient(app, raise_server_exceptions=False)

    yield _use
    app.dependency_overrides.clear()
