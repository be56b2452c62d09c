# scripts/warm_cache.py
# 운영 중 캐시(DB)를 미리 채우는 관리용 스크립트
# 사용: python -m recipe_app.scripts.warm_cache --diet balanced --diet low-carb --health vegan
#   라벨 하나마다 reconciler 를 한 번씩 돌린다 (캐시가 충분하면 provider 호출 없음)

import argparse
import asyncio
import logging
from typing import List, Optional, Tuple

from recipe_app.core.config import settings
from recipe_app.core.deps import get_provider
from recipe_app.core.logging_utils import configure_logging
from recipe_app.db.indexes import ensure_indexes
from recipe_app.db.init import close_db, get_recipes_collection, init_db
from recipe_app.services.reconciler import NoRecipesFound, RecipeReconciler
from recipe_app.services.store import RecipeStore

log = logging.getLogger(__name__)

def build_plan(diets: List[str], healths: List[str]) -> List[Tuple[List[str], List[str]]]:
    # 라벨 단독 조합만 (교차 조합은 provider 호출이 너무 많아짐)
    plan = [([d], []) for d in diets] + [([], [h]) for h in healths]
    return plan or [([], [])]

async def warm(diets: List[str], healths: List[str]) -> int:
    await init_db()
    try:
        await ensure_indexes()
        reconciler = RecipeReconciler(
            RecipeStore(get_recipes_collection()),
            get_provider(),
            sample_size=settings.SAMPLE_SIZE,
            fetch_limit=settings.FETCH_LIMIT,
        )
        failures = 0
        for diet, health in build_plan(diets, healths):
            try:
                got = await reconciler.get_recipes(diet, health)
                print(f"[warm] diet={diet} health={health} -> {len(got)} recipes")
            except NoRecipesFound:
                failures += 1
                print(f"[warm] diet={diet} health={health} -> no recipes found")
        return failures
    finally:
        await close_db()

def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Pre-fill the recipe cache from Edamam")
    p.add_argument("--diet", action="append", default=[], help="diet label (repeatable)")
    p.add_argument("--health", action="append", default=[], help="health label (repeatable)")
    args = p.parse_args(argv)

    configure_logging(settings.LOG_LEVEL)
    failures = asyncio.run(warm(args.diet, args.health))
    return 1 if failures else 0

if __name__ == "__main__":
    raise SystemExit(main())
