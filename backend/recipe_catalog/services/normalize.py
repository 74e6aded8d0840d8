# 원본 JSON 레코드 → recipes 문서 정규화
# - rating/시간 필드: 유한한 숫자 또는 None
# - 텍스트 필드: 그대로 (없으면 None)
# - nutrients: 알려진 10개 키만, 값은 문자열 ("389 kcal" 그대로)

from __future__ import annotations
import math
from typing import Any, Dict, Optional

from recipe_catalog.db.models.recipe import NUMERIC_FIELDS, NUTRIENT_FIELDS, TEXT_FIELDS

def to_nullable_number(value: Any) -> Optional[float]:
    # JS Number() 처럼 항상 float. 범위를 넘는 정수(> 1e308)는 None
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            n = float(value)
        except OverflowError:
            return None
        return n if math.isfinite(n) else None
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            n = float(s)
        except ValueError:
            return None
        return n if math.isfinite(n) else None
    return None

def _stringify(value: Any) -> str:
    # 389.0 → "389" (정수값 float 는 소수점 없이)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

def normalize_nutrients(raw: Any) -> Dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {k: _stringify(raw[k]) for k in NUTRIENT_FIELDS if raw.get(k) is not None}

def normalize_recipe(raw: Dict[str, Any]) -> Dict[str, Any]:
    doc: Dict[str, Any] = {}
    for k in TEXT_FIELDS:
        doc[k] = raw.get(k)
    for k in NUMERIC_FIELDS:
        doc[k] = to_nullable_number(raw.get(k))
    doc["nutrients"] = normalize_nutrients(raw.get("nutrients"))
    return doc
