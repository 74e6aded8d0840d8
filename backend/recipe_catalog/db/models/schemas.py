# recipe_catalog/db/models/schemas.py
# API 응답 스키마 (프론트 필드명과 일치)
from __future__ import annotations
from typing import List

from pydantic import BaseModel, Field

from recipe_catalog.db.models.recipe import RecipeOut

class RecipeListOut(BaseModel):
    page: int
    limit: int
    total: int
    data: List[RecipeOut] = Field(default_factory=list)

class RecipeSearchOut(BaseModel):
    data: List[RecipeOut] = Field(default_factory=list)

class ErrorOut(BaseModel):
    error: str
