# recipe_app/services/reconciler.py
# 캐시 우선 레시피 조회
# 1) 라벨 정규화 → 2) DB 조회 → 3) 부족하면 provider 조회(결과로 교체) + 저장 → 4) 랜덤 샘플

from __future__ import annotations
import logging
import math
import random
from typing import Any, Dict, List, Optional, Sequence

from recipe_app.db.models.recipe import Recipe
from recipe_app.services.edamam import build_query
from recipe_app.services.labels import as_token_list, to_provider_form, to_store_form

log = logging.getLogger(__name__)

SAMPLE_SIZE = 12
FETCH_LIMIT = 100
DEFAULT_TITLE = "Untitled recipe"

class NoRecipesFound(Exception):
    # provider 응답에 hits 컨테이너가 없음
    pass

def _number(v: Any) -> Optional[float]:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    v = float(v)
    return v if math.isfinite(v) else None

def calories_per_serving(calories: Any, servings: Any) -> Optional[float]:
    # 인분 정보가 없으면 나누지 않고 비워 둔다
    kcal, n = _number(calories), _number(servings)
    if kcal is None or n is None or n <= 0:
        return None
    return kcal / n

def recipe_from_hit(hit: Dict[str, Any]) -> Recipe:
    # label 이 없거나 비면 DEFAULT_TITLE
    r = (hit or {}).get("recipe") or {}
    label = r.get("label")
    return Recipe(
        title=label if isinstance(label, str) and label.strip() else DEFAULT_TITLE,
        image=r.get("image"),
        source=r.get("source"),
        instructionsUrl=r.get("url"),
        dietLabels=r.get("dietLabels"),
        healthLabels=r.get("healthLabels"),
        ingredients=r.get("ingredientLines"),
        servingSize=_number(r.get("yield")),
        caloriesPerServing=calories_per_serving(r.get("calories"), r.get("yield")),
        totalTime=r.get("totalTime"),
        cuisineType=r.get("cuisineType"),
        mealType=r.get("mealType"),
        dishType=r.get("dishType"),
        totalNutrients=r.get("totalNutrients") or {},
    )

def sample(records: Sequence[Recipe], k: int, rng: random.Random) -> List[Recipe]:
    # partial Fisher–Yates: 앞에서부터 k 칸만 섞고 자른다
    items = list(records)
    k = min(k, len(items))
    for i in range(k):
        j = rng.randrange(i, len(items))
        items[i], items[j] = items[j], items[i]
    return items[:k]

class RecipeReconciler:
    def __init__(
        self,
        store,
        provider,
        sample_size: int = SAMPLE_SIZE,
        fetch_limit: int = FETCH_LIMIT,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.provider = provider
        self.sample_size = sample_size
        self.fetch_limit = fetch_limit
        self.rng = rng or random.Random()

    async def fetch_and_store(self, diet: Sequence[str], health: Sequence[str]) -> List[Recipe]:
        """provider 에서 가져와 저장한 레시피 목록을 돌려준다.

        diet/health 는 provider 형태(소문자)여야 한다.
        hits 가 없으면 NoRecipesFound, 저장 실패는 그대로 전파.
        """
        query = build_query(diet, health)
        data = await self.provider.search(query)
        if not data or data.get("hits") is None:
            log.warning("provider returned no hits", extra={"ctx": {"query": query}})
            raise NoRecipesFound("No recipes found")

        recipes = [recipe_from_hit(h) for h in data["hits"][: self.fetch_limit]]
        if recipes:
            await self.store.insert_many(recipes)
        return recipes

    async def get_recipes(self, diet=None, health=None) -> List[Recipe]:
        diet_tokens = as_token_list(diet)
        health_tokens = as_token_list(health)

        working = await self.store.find(to_store_form(diet_tokens), to_store_form(health_tokens))
        if len(working) < self.sample_size:
            log.info(
                "cache insufficient, falling back to provider",
                extra={"ctx": {"matched": len(working), "need": self.sample_size}},
            )
            # 부족분만 채우는 게 아니라 provider 결과로 통째로 교체
            working = await self.fetch_and_store(
                to_provider_form(diet_tokens), to_provider_form(health_tokens)
            )

        return sample(working, self.sample_size, self.rng)
