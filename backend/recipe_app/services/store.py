# recipe_app/services/store.py
# 레시피 캐시 컬렉션 조회/저장 (motor)
# - 조회: dietLabels/healthLabels 모두 포함($all)하는 문서만
# - 저장: insert_many 한 번 (실패는 그대로 올린다)

from __future__ import annotations
import logging
from typing import Any, Dict, List, Sequence

from motor.motor_asyncio import AsyncIOMotorCollection

from recipe_app.db.models.recipe import Recipe

log = logging.getLogger(__name__)

# 내부 식별자/버전 필드는 응답에서 뺀다
PROJECTION = {"_id": 0, "__v": 0}

def build_filter(diet: Sequence[str], health: Sequence[str]) -> Dict[str, Any]:
    # 라벨은 이미 저장 형태(Title-Case)로 들어온다고 가정
    q: Dict[str, Any] = {}
    if diet:
        q["dietLabels"] = {"$all": list(diet)}
    if health:
        q["healthLabels"] = {"$all": list(health)}
    return q

class RecipeStore:
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def find(self, diet: Sequence[str], health: Sequence[str]) -> List[Recipe]:
        query = build_filter(diet, health)
        docs = await self.collection.find(query, PROJECTION).to_list(length=None)
        log.info("store query", extra={"ctx": {"filter": query, "matched": len(docs)}})
        return [Recipe.model_validate(d) for d in docs]

    async def insert_many(self, records: Sequence[Recipe]) -> int:
        if not records:
            return 0
        docs = [r.to_document() for r in records]
        res = await self.collection.insert_many(docs, ordered=True)
        n = len(res.inserted_ids)
        log.info("store insert", extra={"ctx": {"inserted": n}})
        return n
