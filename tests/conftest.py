import random
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from recipe_app.db.models.recipe import Recipe
from recipe_app.services.store import build_filter


def make_hit(i: int, diet=None, health=None, calories: Optional[float] = 800.0, servings: Optional[float] = 4) -> Dict[str, Any]:
    recipe = {
        "label": f"Recipe {i}",
        "image": f"https://img.example.com/{i}.jpg",
        "source": "Example Kitchen",
        "url": f"https://example.com/recipes/{i}",
        "dietLabels": diet if diet is not None else ["Balanced"],
        "healthLabels": health if health is not None else ["Vegan", "Sugar-Conscious"],
        "ingredientLines": ["1 cup rice", "2 tomatoes"],
        "totalTime": 30.0,
        "cuisineType": ["italian"],
        "mealType": ["lunch/dinner"],
        "dishType": ["main course"],
        "totalNutrients": {"ENERC_KCAL": {"label": "Energy", "quantity": 800.0, "unit": "kcal"}},
    }
    if calories is not None:
        recipe["calories"] = calories
    if servings is not None:
        recipe["yield"] = servings
    return {"recipe": recipe}


def make_recipe(i: int, diet=("Balanced",), health=("Vegan",)) -> Recipe:
    return Recipe(
        title=f"Stored {i}",
        image="",
        dietLabels=list(diet),
        healthLabels=list(health),
        ingredients=["salt"],
        servingSize=2,
        caloriesPerServing=250.5,
    )


class FakeStore:
    """메모리 store: $all 조건만 흉내낸다."""

    def __init__(self, records: Optional[List[Recipe]] = None, fail_insert: bool = False):
        self.records = list(records or [])
        self.queries: List[dict] = []
        self.inserted: List[List[Recipe]] = []
        self.fail_insert = fail_insert

    async def find(self, diet, health):
        q = build_filter(diet, health)
        self.queries.append(q)
        need_d = set(q.get("dietLabels", {}).get("$all", []))
        need_h = set(q.get("healthLabels", {}).get("$all", []))
        return [
            r for r in self.records
            if need_d <= set(r.dietLabels) and need_h <= set(r.healthLabels)
        ]

    async def insert_many(self, records):
        if self.fail_insert:
            raise RuntimeError("write concern failed: secret-host:27017")
        self.inserted.append(list(records))
        self.records.extend(records)
        return len(records)


class FakeProvider:
    def __init__(self, payload: Optional[dict]):
        self.payload = payload
        self.queries: List[str] = []

    async def search(self, query: str):
        self.queries.append(query)
        return self.payload


class ExplodingProvider:
    async def search(self, query: str):
        raise AssertionError("provider must not be called")


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    async def to_list(self, length=None):
        return list(self.docs)


class FakeCollection:
    def __init__(self, docs=None):
        self.docs = list(docs or [])
        self.find_calls = []
        self.insert_calls = []

    def find(self, query, projection=None):
        self.find_calls.append((query, projection))
        return FakeCursor(self.docs)

    async def insert_many(self, docs, ordered=True):
        self.insert_calls.append((docs, ordered))
        ids = []
        for n, d in enumerate(docs):
            d["_id"] = f"oid-{n}"
            ids.append(d["_id"])
        return SimpleNamespace(inserted_ids=ids)


@pytest.fixture
def rng():
    return random.Random(1234)
