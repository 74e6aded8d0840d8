# scripts/import_recipes.py
# JSON 파일 → recipes 컬렉션 전체 교체 (기존 문서 삭제 후 일괄 삽입)
# 사용: recipe-catalog-import <path-to-US_recipes.json>

from __future__ import annotations
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import bson
from bson.errors import InvalidDocument
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import BulkWriteError, PyMongoError

from recipe_catalog.core.config import Settings, settings
from recipe_catalog.core.logs import setup_logging
from recipe_catalog.db.indexes import ensure_indexes
from recipe_catalog.db.init import RECIPES, init_db
from recipe_catalog.services.normalize import normalize_recipe

log = logging.getLogger("recipe_catalog.import")

class ImportFailed(Exception):
    """임포트 중단 사유 (메시지는 그대로 stderr 에 출력)"""

def load_records(path: Path) -> List[Dict[str, Any]]:
    # 배열 또는 {key: recipe} 객체 둘 다 허용
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ImportFailed(f"File not found: {path}") from e
    except OSError as e:
        raise ImportFailed(f"Cannot read {path}: {e.strerror or e}") from e
    try:
        parsed = json.loads(text)
    except ValueError as e:
        # JSONDecodeError + 자릿수 한도를 넘는 정수 리터럴
        raise ImportFailed(f"Invalid JSON in {path}: {e}") from e

    if isinstance(parsed, list):
        items = parsed
    elif isinstance(parsed, dict):
        items = list(parsed.values())
    else:
        raise ImportFailed(f"Expected a JSON array or object in {path}, got {type(parsed).__name__}")

    records = [r for r in items if isinstance(r, dict)]
    skipped = len(items) - len(records)
    if skipped:
        log.warning("skipped %d non-object records", skipped)
    return records

def prepare_docs(records: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """정규화 + BSON 인코딩 확인. 저장할 수 없는 레코드는 삭제 전에 걸러낸다"""
    docs: List[Dict[str, Any]] = []
    for i, record in enumerate(records):
        doc = normalize_recipe(record)
        try:
            bson.encode(doc)
        except (InvalidDocument, OverflowError) as e:
            log.warning("skipped record #%d (%r): %s", i, doc.get("title"), e)
            continue
        docs.append(doc)
    return docs

async def replace_all(recipes: AsyncIOMotorCollection, docs: List[Dict[str, Any]]) -> int:
    """전체 삭제 후 삽입. 실패한 레코드는 건너뛰고 삽입된 개수를 반환"""
    deleted = await recipes.delete_many({})
    log.info("deleted %d existing recipes", deleted.deleted_count)
    if not docs:
        return 0
    try:
        res = await recipes.insert_many(docs, ordered=False)
    except BulkWriteError as e:
        details = e.details or {}
        failed = len(details.get("writeErrors") or [])
        log.warning("%d records failed to insert", failed)
        return int(details.get("nInserted", 0))
    return len(res.inserted_ids)

async def run_import(path: Path, cfg: Settings = settings) -> int:
    records = load_records(path)
    docs = prepare_docs(records)

    try:
        client, db = await init_db(cfg)
    except PyMongoError as e:
        raise ImportFailed(f"Could not connect to MongoDB at {cfg.MONGODB_URI}: {e}") from e

    try:
        inserted = await replace_all(db[RECIPES], docs)
        await ensure_indexes(db)
    except PyMongoError as e:
        raise ImportFailed(f"MongoDB write failed: {e}") from e
    finally:
        client.close()
    return inserted

def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="recipe-catalog-import",
        description="Replace the recipes collection with the contents of a JSON file.",
    )
    p.add_argument("path", nargs="?", help="path to the recipes JSON file")
    return p

def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging(settings.LOG_LEVEL)
    args = _parser().parse_args(argv)
    if not args.path:
        print("Usage: recipe-catalog-import <path-to-US_recipes.json>", file=sys.stderr)
        return 1

    # 상대 경로는 현재 작업 디렉터리 기준
    path = Path(args.path).expanduser().resolve()
    if not path.exists():
        print(f"File not found: {path}", file=sys.stderr)
        return 1

    try:
        inserted = asyncio.run(run_import(path))
    except ImportFailed as e:
        log.error("%s", e)
        return 1
    log.info("Imported %d recipes", inserted)
    return 0

if __name__ == "__main__":
    sys.exit(main())
