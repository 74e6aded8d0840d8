# 레시피 표준 스키마
# nutrients 하위 필드는 원본 데이터에 단위가 섞여 있어("389 kcal") 문자열 그대로 저장한다.
from __future__ import annotations
from typing import Any, Optional, Union

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

NUTRIENT_FIELDS = (
    "calories",
    "carbohydrateContent",
    "cholesterolContent",
    "fiberContent",
    "proteinContent",
    "saturatedFatContent",
    "sodiumContent",
    "sugarContent",
    "fatContent",
    "unsaturatedFatContent",
)

NUMERIC_FIELDS = ("rating", "prep_time", "cook_time", "total_time")
TEXT_FIELDS = ("cuisine", "title", "description", "serves")

Number = Union[int, float]

class Nutrients(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    calories: Optional[str] = None
    carbohydrateContent: Optional[str] = None
    cholesterolContent: Optional[str] = None
    fiberContent: Optional[str] = None
    proteinContent: Optional[str] = None
    saturatedFatContent: Optional[str] = None
    sodiumContent: Optional[str] = None
    sugarContent: Optional[str] = None
    fatContent: Optional[str] = None
    unsaturatedFatContent: Optional[str] = None

class RecipeOut(BaseModel):
    # 응답은 저장된 문서의 키만 그대로 (exclude_unset 으로 직렬화)
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(alias="_id")
    cuisine: Optional[str] = None
    title: Optional[str] = None
    rating: Optional[Number] = None
    prep_time: Optional[Number] = None
    cook_time: Optional[Number] = None
    total_time: Optional[Number] = None
    description: Optional[str] = None
    serves: Optional[str] = None
    nutrients: Optional[Nutrients] = None

    @field_validator("id", mode="before")
    @classmethod
    def _v_object_id(cls, v: Any) -> str:
        return str(v) if isinstance(v, ObjectId) else v
