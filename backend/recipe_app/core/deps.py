# 공용 의존성: 요청마다 store/provider/reconciler 를 설정값으로 조립
# 테스트에서는 app.dependency_overrides 로 교체한다
from fastapi import Depends

from recipe_app.core.config import settings
from recipe_app.db.init import get_recipes_collection
from recipe_app.services.edamam import EdamamClient
from recipe_app.services.reconciler import RecipeReconciler
from recipe_app.services.store import RecipeStore

def get_store() -> RecipeStore:
    return RecipeStore(get_recipes_collection())

def get_provider() -> EdamamClient:
    return EdamamClient(
        base_url=settings.EDAMAM_BASE_URL,
        app_id=settings.EDAMAM_APP_ID,
        app_key=settings.EDAMAM_APP_KEY,
        user_id=settings.EDAMAM_USER_ID,
        timeout=settings.PROVIDER_TIMEOUT,
    )

def get_reconciler(
    store: RecipeStore = Depends(get_store),
    provider: EdamamClient = Depends(get_provider),
) -> RecipeReconciler:
    return RecipeReconciler(
        store,
        provider,
        sample_size=settings.SAMPLE_SIZE,
        fetch_limit=settings.FETCH_LIMIT,
    )
