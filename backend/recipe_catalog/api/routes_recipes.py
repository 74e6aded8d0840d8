# recipe_catalog/api/routes_recipes.py
# 레시피 목록(페이지네이션) / 필터 검색

from __future__ import annotations
import asyncio
import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorCollection

from recipe_catalog.db.init import get_recipes_collection
from recipe_catalog.db.models.schemas import ErrorOut, RecipeListOut, RecipeSearchOut
from recipe_catalog.services.query import SEARCH_LIMIT, SORT_BY_RATING, build_search_query

log = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/recipes",
    tags=["recipes"],
    responses={500: {"model": ErrorOut}},
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
# page, limit 각각 int32 이내 → skip = (page-1)*limit 이 BSON int64 를 넘지 않음
MAX_PAGING_VALUE = 2**31 - 1

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)", re.ASCII)

def parse_positive_int(raw: Optional[str], default: int) -> int:
    # "2" / " 2" / "2abc" → 2. 숫자가 아니거나 범위(1..MAX_PAGING_VALUE) 밖이면 기본값
    if raw is None:
        return default
    m = _LEADING_INT_RE.match(raw)
    if not m:
        return default
    n = int(m.group(1))
    return n if 0 < n <= MAX_PAGING_VALUE else default

@router.get("", response_model=RecipeListOut, response_model_exclude_unset=True)
async def list_recipes(
    page: Optional[str] = Query(None, description="페이지 번호 (1부터)"),
    limit: Optional[str] = Query(None, description="페이지 크기"),
    recipes: AsyncIOMotorCollection = Depends(get_recipes_collection),
):
    page_n = parse_positive_int(page, DEFAULT_PAGE)
    limit_n = parse_positive_int(limit, DEFAULT_LIMIT)
    skip = (page_n - 1) * limit_n

    cursor = recipes.find({}).sort(SORT_BY_RATING).skip(skip).limit(limit_n)
    data, total = await asyncio.gather(
        cursor.to_list(length=limit_n),
        recipes.count_documents({}),
    )
    return {"page": page_n, "limit": limit_n, "total": total, "data": data}

@router.get(
    "/search",
    response_model=RecipeSearchOut,
    response_model_exclude_unset=True,
    responses={400: {"model": ErrorOut}},
)
async def search_recipes(
    title: Optional[str] = Query(None, description="제목 부분 일치 (대소문자 무시)"),
    cuisine: Optional[str] = Query(None, description="요리 분류 정확히 일치"),
    rating: Optional[str] = Query(None, description="예: >=4.5"),
    total_time: Optional[str] = Query(None, description="예: <=60"),
    calories: Optional[str] = Query(None, description="예: <=400 (nutrients.calories 기준)"),
    recipes: AsyncIOMotorCollection = Depends(get_recipes_collection),
):
    # 문법 오류는 InvalidFilterError → 400
    query = build_search_query(
        title=title,
        cuisine=cuisine,
        rating=rating,
        total_time=total_time,
        calories=calories,
    )
    log.debug("search query=%s", query)

    cursor = recipes.find(query).sort(SORT_BY_RATING).limit(SEARCH_LIMIT)
    data = await cursor.to_list(length=SEARCH_LIMIT)
    return {"data": data}
