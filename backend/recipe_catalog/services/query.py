# 검색 쿼리 → Mongo 필터 변환
# 모든 필터는 AND 로 결합. 빈 문자열은 '필터 없음'으로 취급한다.

from __future__ import annotations
import re
from typing import Any, Dict, Optional

from recipe_catalog.services.filters import NumericFilter, require_numeric_filter

# 정렬: 평점 내림차순, 동점은 _id 로 고정 (페이지 경계 안정)
SORT_BY_RATING = [("rating", -1), ("_id", 1)]
SEARCH_LIMIT = 200

# "389 kcal" / "389.5" / " 120 cal " → 앞쪽 숫자만 캡처. 단위는 영문자 접미사만 허용
CALORIES_TEXT_RE = r"^\s*(\d+(?:\.\d+)?)\s*[A-Za-z]*\s*$"

def calories_value_expr(path: str = "$nutrients.calories") -> Dict[str, Any]:
    # 문자열 칼로리 → double. 매칭 실패/누락/null 은 모두 null
    return {
        "$let": {
            "vars": {"m": {"$regexFind": {"input": path, "regex": CALORIES_TEXT_RE}}},
            "in": {
                "$convert": {
                    "input": {"$arrayElemAt": ["$$m.captures", 0]},
                    "to": "double",
                    "onError": None,
                    "onNull": None,
                }
            },
        }
    }

def calories_match_expr(f: NumericFilter) -> Dict[str, Any]:
    # 집계 비교에서 null 은 모든 숫자보다 작으므로 null 가드를 먼저 둔다
    return {
        "$let": {
            "vars": {"kcal": calories_value_expr()},
            "in": {
                "$and": [
                    {"$ne": ["$$kcal", None]},
                    {f.op: ["$$kcal", f.value]},
                ]
            },
        }
    }

def build_search_query(
    title: Optional[str] = None,
    cuisine: Optional[str] = None,
    rating: Optional[str] = None,
    total_time: Optional[str] = None,
    calories: Optional[str] = None,
) -> Dict[str, Any]:
    """쿼리스트링 필터 → Mongo find 필터. 숫자 필터 문법 오류는 InvalidFilterError."""
    query: Dict[str, Any] = {}

    if title:
        # 부분 문자열 매칭: 입력은 정규식이 아니라 리터럴
        query["title"] = {"$regex": re.escape(str(title)), "$options": "i"}
    if cuisine:
        query["cuisine"] = str(cuisine)
    if rating:
        query["rating"] = require_numeric_filter("rating", rating).as_query()
    if total_time:
        query["total_time"] = require_numeric_filter("total_time", total_time).as_query()
    if calories:
        f = require_numeric_filter("calories", calories)
        query["$expr"] = calories_match_expr(f)

    return query
