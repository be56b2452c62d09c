# 레시피 표준 스키마
# 클라이언트/DB/PDF 모두 같은 camelCase 필드명을 쓴다
from __future__ import annotations
import math
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recipe_app.services.labels import unique_labels

DEFAULT_SOURCE = "Unknown"
DEFAULT_INSTRUCTIONS_URL = "No URL available"

class Nutrient(BaseModel):
    label: str = ""
    quantity: Optional[float] = None
    unit: str = ""

class Recipe(BaseModel):
    # DB 문서에 남은 예전 필드(calories 등)는 무시
    model_config = ConfigDict(extra="ignore")

    title: str
    image: str = ""
    source: str = DEFAULT_SOURCE
    instructionsUrl: str = DEFAULT_INSTRUCTIONS_URL
    dietLabels: List[str] = Field(default_factory=list)
    healthLabels: List[str] = Field(default_factory=list)
    ingredients: List[str] = Field(default_factory=list)
    servingSize: Optional[float] = None
    caloriesPerServing: Optional[float] = None
    totalTime: Optional[int] = None
    cuisineType: List[str] = Field(default_factory=list)
    mealType: List[str] = Field(default_factory=list)
    dishType: List[str] = Field(default_factory=list)
    totalNutrients: Dict[str, Nutrient] = Field(default_factory=dict)

    @field_validator("dietLabels", "healthLabels", mode="before")
    @classmethod
    def _v_labels(cls, v):
        # 출처(DB/provider/클라이언트)와 상관없이 Title-Case 로 저장
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        return unique_labels(v)

    @field_validator("cuisineType", "mealType", "dishType", mode="before")
    @classmethod
    def _v_tags(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        return list(dict.fromkeys(str(x) for x in v if x is not None))

    @field_validator("ingredients", mode="before")
    @classmethod
    def _v_ingredients(cls, v):
        return [] if v is None else v

    @field_validator("image", mode="before")
    @classmethod
    def _v_image(cls, v):
        return v or ""

    @field_validator("source", mode="before")
    @classmethod
    def _v_source(cls, v):
        return v if isinstance(v, str) and v.strip() else DEFAULT_SOURCE

    @field_validator("instructionsUrl", mode="before")
    @classmethod
    def _v_url(cls, v):
        return v if isinstance(v, str) and v.strip() else DEFAULT_INSTRUCTIONS_URL

    @field_validator("servingSize", mode="after")
    @classmethod
    def _v_serving(cls, v):
        # 0/음수/NaN 인분은 없는 값으로 본다
        if v is None or not math.isfinite(v) or v <= 0:
            return None
        return v

    @field_validator("caloriesPerServing", mode="after")
    @classmethod
    def _v_kcal(cls, v):
        if v is None or not math.isfinite(v) or v < 0:
            return None
        return v

    @field_validator("totalTime", mode="before")
    @classmethod
    def _v_time(cls, v):
        if v is None:
            return None
        try:
            v = float(v)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(v) or v < 0:
            return None
        return int(round(v))

    def to_document(self) -> dict:
        # insert_many 가 _id 를 주입하므로 매번 새 dict 로 넘긴다
        return self.model_dump()
