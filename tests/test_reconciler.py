import math
import random

import pytest

from recipe_app.services.reconciler import (
    DEFAULT_TITLE,
    NoRecipesFound,
    RecipeReconciler,
    calories_per_serving,
    recipe_from_hit,
    sample,
)
from tests.conftest import ExplodingProvider, FakeProvider, FakeStore, make_hit, make_recipe


async def test_scenario_a_empty_cache_falls_back_to_provider(rng):
    store = FakeStore()
    hits = [make_hit(i) for i in range(50)]
    provider = FakeProvider({"hits": hits})
    reconciler = RecipeReconciler(store, provider, rng=rng)

    got = await reconciler.get_recipes(["balanced"], [])

    assert len(provider.queries) == 1
    assert "diet=balanced" in provider.queries[0]
    assert "health=" not in provider.queries[0]
    assert len(store.inserted) == 1
    assert len(store.inserted[0]) == 50
    assert len(got) == 12
    titles = {h["recipe"]["label"] for h in hits}
    assert all(r.title in titles for r in got)
    assert len({r.title for r in got}) == 12


async def test_scenario_b_sufficient_cache_skips_provider(rng):
    stored = [make_recipe(i) for i in range(20)]
    store = FakeStore(stored)
    reconciler = RecipeReconciler(store, ExplodingProvider(), rng=rng)

    got = await reconciler.get_recipes(None, None)

    assert store.queries == [{}]
    assert store.inserted == []
    assert len(got) == 12
    assert {r.title for r in got} <= {r.title for r in stored}


async def test_scenario_c_missing_hits_raises_and_does_not_insert(rng):
    store = FakeStore()
    provider = FakeProvider({"from": 1, "to": 0, "count": 0})
    reconciler = RecipeReconciler(store, provider, rng=rng)

    with pytest.raises(NoRecipesFound):
        await reconciler.get_recipes(["balanced"], ["vegan"])
    assert store.inserted == []


async def test_absent_payload_raises_not_found(rng):
    store = FakeStore()
    reconciler = RecipeReconciler(store, FakeProvider(None), rng=rng)
    with pytest.raises(NoRecipesFound):
        await reconciler.get_recipes([], [])
    assert store.inserted == []


async def test_exactly_twelve_matches_is_sufficient(rng):
    store = FakeStore([make_recipe(i, diet=("Low-Carb",)) for i in range(12)])
    reconciler = RecipeReconciler(store, ExplodingProvider(), rng=rng)

    got = await reconciler.get_recipes(["LOW-carb"], [])

    assert store.queries == [{"dietLabels": {"$all": ["Low-Carb"]}}]
    assert len(got) == 12


async def test_provider_results_replace_store_matches(rng):
    stored = [make_recipe(i, diet=("Balanced",), health=("Vegan",)) for i in range(5)]
    store = FakeStore(stored)
    provider = FakeProvider({"hits": [make_hit(i) for i in range(30)]})
    reconciler = RecipeReconciler(store, provider, rng=rng)

    got = await reconciler.get_recipes(["balanced"], ["vegan"])

    assert len(provider.queries) == 1
    assert len(got) == 12
    assert not any(r.title.startswith("Stored") for r in got)


async def test_conjunctive_store_query_and_repeated_provider_params(rng):
    store = FakeStore([make_recipe(i, diet=("Balanced",), health=("Vegan",)) for i in range(20)])
    provider = FakeProvider({"hits": [make_hit(i) for i in range(3)]})
    reconciler = RecipeReconciler(store, provider, rng=rng)

    got = await reconciler.get_recipes(["balanced", "high-fiber"], ["Vegan", " gluten-free "])

    assert store.queries == [{
        "dietLabels": {"$all": ["Balanced", "High-Fiber"]},
        "healthLabels": {"$all": ["Vegan", "Gluten-Free"]},
    }]
    assert provider.queries == ["diet=balanced&diet=high-fiber&health=vegan&health=gluten-free"]
    # 가져온 수가 12 미만이면 있는 만큼만
    assert len(got) == 3


async def test_fetch_limit_caps_persisted_records(rng):
    store = FakeStore()
    provider = FakeProvider({"hits": [make_hit(i) for i in range(150)]})
    reconciler = RecipeReconciler(store, provider, rng=rng)

    got = await reconciler.get_recipes([], [])

    assert len(store.inserted[0]) == 100
    assert [r.title for r in store.inserted[0]][-1] == "Recipe 99"
    assert len(got) == 12


async def test_empty_hits_returns_empty_without_insert(rng):
    store = FakeStore()
    reconciler = RecipeReconciler(store, FakeProvider({"hits": []}), rng=rng)
    got = await reconciler.get_recipes(["balanced"], [])
    assert got == []
    assert store.inserted == []


async def test_insert_failure_propagates(rng):
    store = FakeStore(fail_insert=True)
    reconciler = RecipeReconciler(store, FakeProvider({"hits": [make_hit(1)]}), rng=rng)
    with pytest.raises(RuntimeError):
        await reconciler.get_recipes([], [])


def test_recipe_from_hit_maps_fields():
    r = recipe_from_hit(make_hit(7, diet=["low-carb"], health=["SUGAR-CONSCIOUS"], calories=900.0, servings=3))
    assert r.title == "Recipe 7"
    assert r.instructionsUrl == "https://example.com/recipes/7"
    assert r.dietLabels == ["Low-Carb"]
    assert r.healthLabels == ["Sugar-Conscious"]
    assert r.ingredients == ["1 cup rice", "2 tomatoes"]
    assert r.servingSize == 3
    assert r.caloriesPerServing == pytest.approx(300.0)
    assert r.totalTime == 30
    assert r.totalNutrients["ENERC_KCAL"].unit == "kcal"


def test_recipe_from_hit_defaults():
    hit = {"recipe": {"label": "Bare", "source": "", "url": None}}
    r = recipe_from_hit(hit)
    assert r.source == "Unknown"
    assert r.instructionsUrl == "No URL available"
    assert r.dietLabels == [] and r.healthLabels == []
    assert r.ingredients == []
    assert r.servingSize is None
    assert r.caloriesPerServing is None
    assert r.totalTime is None
    assert r.totalNutrients == {}


def test_calories_per_serving_absent_without_yield():
    r = recipe_from_hit(make_hit(1, calories=500.0, servings=None))
    assert r.servingSize is None
    assert r.caloriesPerServing is None


@pytest.mark.parametrize(
    "calories,servings",
    ((500.0, None), (500.0, 0), (None, 4), (500.0, -2), (float("nan"), 4), ("500", 4)),
)
def test_calories_per_serving_guard(calories, servings):
    assert calories_per_serving(calories, servings) is None


def test_calories_per_serving_is_finite():
    v = calories_per_serving(1234.5, 5)
    assert math.isfinite(v)
    assert v == pytest.approx(246.9)


@pytest.mark.parametrize("n", (0, 1, 5, 12, 13, 40))
def test_sample_size_is_min_of_twelve_and_available(n):
    records = [make_recipe(i) for i in range(n)]
    got = sample(records, 12, random.Random(n))
    assert len(got) == min(12, n)
    assert len({r.title for r in got}) == len(got)
    assert {r.title for r in got} <= {r.title for r in records}


def test_sample_does_not_mutate_input():
    records = [make_recipe(i) for i in range(20)]
    before = [r.title for r in records]
    sample(records, 12, random.Random(0))
    assert [r.title for r in records] == before


def test_sample_reaches_every_record():
    records = [make_recipe(i) for i in range(20)]
    rng = random.Random(42)
    seen = set()
    for _ in range(200):
        seen.update(r.title for r in sample(records, 12, rng))
    assert seen == {r.title for r in records}


async def test_hit_without_label_keeps_the_rest_of_the_batch(rng):
    store = FakeStore()
    hits = [make_hit(i) for i in range(5)]
    del hits[2]["recipe"]["label"]
    hits[3]["recipe"]["label"] = "   "
    reconciler = RecipeReconciler(store, FakeProvider({"hits": hits}), rng=rng)

    got = await reconciler.get_recipes([], [])

    titles = [r.title for r in store.inserted[0]]
    assert titles == ["Recipe 0", "Recipe 1", DEFAULT_TITLE, DEFAULT_TITLE, "Recipe 4"]
    assert len(got) == 5
