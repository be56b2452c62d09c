# recipe_app/api/routes_recipes.py
# diet/health 필터 → 캐시(DB) 우선 조회, 부족하면 Edamam → 12개 랜덤 반환
# 레시피 목록 → PDF 다운로드

from __future__ import annotations
import asyncio
import io
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from recipe_app.core.deps import get_reconciler
from recipe_app.db.models.recipe import Recipe
from recipe_app.services.pdf import FILENAME, RenderInputError, render_recipes_pdf
from recipe_app.services.reconciler import NoRecipesFound, RecipeReconciler

log = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])

INTERNAL_ERROR = "Internal Server Error"

@router.get("", response_model=List[Recipe])
async def get_recipes(
    diet: Optional[List[str]] = Query(None, description="diet 라벨 (반복 가능, 예: balanced)"),
    health: Optional[List[str]] = Query(None, description="health 라벨 (반복 가능, 예: vegan)"),
    reconciler: RecipeReconciler = Depends(get_reconciler),
):
    try:
        recipes = await reconciler.get_recipes(diet, health)
    except NoRecipesFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        # 내부 정보는 로그에만 남긴다
        log.exception("Error fetching recipes", extra={"ctx": {"diet": diet, "health": health}})
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    return [r.model_dump() for r in recipes]

@router.post("/print")
async def print_recipes(recipes: Optional[List[Recipe]] = Body(None)):
    # 본문은 레시피 배열 그대로 (없거나 비면 400)
    try:
        # reportlab 렌더링은 CPU 작업이라 이벤트 루프 밖(스레드)에서 돌린다
        pdf = await asyncio.to_thread(render_recipes_pdf, recipes)
    except RenderInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        log.exception("Error rendering recipes pdf", extra={"ctx": {"n": len(recipes or [])}})
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    return StreamingResponse(
        io.BytesIO(pdf),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{FILENAME}"'},
    )
