import re

import pytest

from recipe_catalog.core.errors import InvalidFilterError
from recipe_catalog.services.query import (
    CALORIES_TEXT_RE,
    SEARCH_LIMIT,
    SORT_BY_RATING,
    build_search_query,
)


def test_no_filters_is_empty_query():
    assert build_search_query() == {}
    assert build_search_query(title="", cuisine="", rating="", total_time="", calories="") == {}


def test_title_is_case_insensitive_literal_substring():
    assert build_search_query(title="pie") == {"title": {"$regex": "pie", "$options": "i"}}
    q = build_search_query(title="a.b (c)")
    assert q["title"]["$regex"] == re.escape("a.b (c)")


def test_cuisine_is_exact():
    assert build_search_query(cuisine="Italian") == {"cuisine": "Italian"}


def test_numeric_fields():
    q = build_search_query(rating=">=4.5", total_time="<=60")
    assert q == {"rating": {"$gte": 4.5}, "total_time": {"$lte": 60.0}}


def test_calories_expression_guards_null_and_compares():
    q = build_search_query(calories="<=400")
    body = q["$expr"]["$let"]
    extract = body["vars"]["kcal"]["$let"]
    assert extract["vars"]["m"]["$regexFind"] == {"input": "$nutrients.calories", "regex": CALORIES_TEXT_RE}
    convert = extract["in"]["$convert"]
    assert convert["to"] == "double"
    assert convert["onError"] is None and convert["onNull"] is None
    assert body["in"]["$and"] == [
        {"$ne": ["$$kcal", None]},
        {"$lte": ["$$kcal", 400.0]},
    ]


def test_all_filters_combine():
    q = build_search_query(title="pie", cuisine="Southern", rating=">4", total_time="<90", calories=">=100")
    assert set(q) == {"title", "cuisine", "rating", "total_time", "$expr"}


@pytest.mark.parametrize("field", ["rating", "total_time", "calories"])
def test_invalid_numeric_filter_raises(field):
    with pytest.raises(InvalidFilterError) as exc:
        build_search_query(**{field: "bogus"})
    assert exc.value.field == field


@pytest.mark.parametrize(
    "text,expected",
    [
        ("389 kcal", "389"),
        ("389kcal", "389"),
        ("  120 cal ", "120"),
        ("45.5 kcal", "45.5"),
        ("250", "250"),
    ],
)
def test_calories_text_pattern_extracts_number(text, expected):
    assert re.match(CALORIES_TEXT_RE, text).group(1) == expected


@pytest.mark.parametrize("text", ["not a number", "", "kcal", "1,200 kcal", "-5 kcal", "about 300 kcal"])
def test_calories_text_pattern_rejects_non_numeric(text):
    assert re.match(CALORIES_TEXT_RE, text) is None


def test_sort_and_cap():
    assert SORT_BY_RATING[0] == ("rating", -1)
    assert SEARCH_LIMIT == 200


# 집계식 최소 해석기: calories $expr 가 기대대로 평가되는지 MongoDB 없이 확인
_CMP = {
    "$eq": lambda a, b: a == b,
    "$ne": lambda a, b: a != b,
    "$lt": lambda a, b: a < b,
    "$lte": lambda a, b: a <= b,
    "$gt": lambda a, b: a > b,
    "$gte": lambda a, b: a >= b,
}


def _field(doc, path):
    cur = doc
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _eval(expr, doc, scope=None):
    scope = scope or {}
    if isinstance(expr, str) and expr.startswith("$$"):
        return _field(scope, expr[2:])
    if isinstance(expr, str) and expr.startswith("$"):
        return _field(doc, expr[1:])
    if not isinstance(expr, dict):
        return expr

    (op, arg), = expr.items()
    if op == "$let":
        inner = dict(scope)
        inner.update({k: _eval(v, doc, scope) for k, v in arg["vars"].items()})
        return _eval(arg["in"], doc, inner)
    if op == "$regexFind":
        text = _eval(arg["input"], doc, scope)
        if text is None:
            return None
        m = re.search(arg["regex"], text)
        return {"match": m.group(0), "captures": list(m.groups())} if m else None
    if op == "$arrayElemAt":
        arr, idx = (_eval(a, doc, scope) for a in arg)
        return arr[idx] if arr is not None else None
    if op == "$convert":
        value = _eval(arg["input"], doc, scope)
        if value is None:
            return arg["onNull"]
        try:
            return float(value)
        except ValueError:
            return arg["onError"]
    if op == "$and":
        return all(_eval(a, doc, scope) for a in arg)
    if op in _CMP:
        a, b = (_eval(x, doc, scope) for x in arg)
        if a is None or b is None:
            # BSON 정렬 순서: null 은 모든 숫자보다 작다
            if op in ("$eq", "$ne"):
                return _CMP[op](a, b)
            return _CMP[op](0 if a is not None else -1, 0 if b is not None else -1)
        return _CMP[op](a, b)
    raise AssertionError(f"unsupported operator {op}")


CALORIE_DOCS = [
    {"title": "Pie", "nutrients": {"calories": "389 kcal"}},
    {"title": "Cake", "nutrients": {"calories": "401 kcal"}},
    {"title": "Salad", "nutrients": {"calories": "  120 cal "}},
    {"title": "Soup", "nutrients": {"calories": "400"}},
    {"title": "Mystery", "nutrients": {"calories": "not a number"}},
    {"title": "Blank", "nutrients": {}},
    {"title": "Nulled", "nutrients": {"calories": None}},
    {"title": "Bare"},
]


def _calorie_matches(raw):
    expr = build_search_query(calories=raw)["$expr"]
    return [d["title"] for d in CALORIE_DOCS if _eval(expr, d)]


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("<=400", ["Pie", "Salad", "Soup"]),
        ("<400", ["Pie", "Salad"]),
        (">400", ["Cake"]),
        (">=0", ["Pie", "Cake", "Salad", "Soup"]),
        ("=389", ["Pie"]),
    ],
)
def test_calories_expression_evaluates_against_text(raw, expected):
    assert _calorie_matches(raw) == expected


def test_calories_expression_never_matches_missing_or_non_numeric():
    for raw in ("<=100000", ">=0", "<1", "=0"):
        matched = _calorie_matches(raw)
        assert not {"Mystery", "Blank", "Nulled", "Bare"} & set(matched)
