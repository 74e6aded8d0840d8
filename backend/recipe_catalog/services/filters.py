# 숫자 비교 필터 파서
# 문법: 연산자(=, <, >, <=, >=) 바로 뒤에 0 이상의 10진수. 예) ">=4.5", "<30", "=4"
# 공백/부호/지수 표기/연산자 중복은 모두 거부한다.

from __future__ import annotations
import re
from typing import NamedTuple, Optional

from recipe_catalog.core.errors import InvalidFilterError

NUMERIC_FILTER_RE = re.compile(r"(<=|>=|=|<|>)(\d+(?:\.\d+)?)", re.ASCII)

# 연산자 → Mongo 비교 연산자
MONGO_OPS = {
    "=": "$eq",
    "<": "$lt",
    ">": "$gt",
    "<=": "$lte",
    ">=": "$gte",
}

class NumericFilter(NamedTuple):
    op: str       # Mongo 연산자 ($gte 등)
    value: float

    def as_query(self) -> dict:
        return {self.op: self.value}

def parse_numeric_filter(raw: Optional[str]) -> Optional[NumericFilter]:
    """'>=4.5' → NumericFilter('$gte', 4.5). 문법에 맞지 않으면 None."""
    if raw is None:
        return None
    m = NUMERIC_FILTER_RE.fullmatch(str(raw))
    if not m:
        return None
    return NumericFilter(MONGO_OPS[m.group(1)], float(m.group(2)))

def require_numeric_filter(field: str, raw: str) -> NumericFilter:
    f = parse_numeric_filter(raw)
    if f is None:
        raise InvalidFilterError(field, raw)
    return f
