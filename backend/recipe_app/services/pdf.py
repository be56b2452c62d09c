# recipe_app/services/pdf.py
# 레시피 목록 → 인쇄용 PDF (reportlab platypus)
# 레시피마다: 제목 / 영양(1인분 칼로리, 인분) / 라벨 / 재료 목록, 레시피 사이 페이지 나눔
# 입력 검증을 먼저 끝내고 그리기 시작한다 (중간에 깨진 문서를 만들지 않음)

from __future__ import annotations
import io
from typing import List, Sequence
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    ListFlowable, ListItem, PageBreak, Paragraph, SimpleDocTemplate, Spacer,
)

from recipe_app.db.models.recipe import Recipe

FILENAME = "recipes.pdf"

class RenderInputError(Exception):
    # 빈 목록/필수 숫자 필드 누락
    pass

def validate_for_print(recipes: Sequence[Recipe] | None) -> List[Recipe]:
    if not recipes:
        raise RenderInputError("No recipes provided for printing")
    for i, r in enumerate(recipes):
        missing = [f for f in ("caloriesPerServing", "servingSize") if getattr(r, f) is None]
        if missing:
            raise RenderInputError(
                f"Recipe #{i + 1} ({r.title!r}) is missing required field(s): {', '.join(missing)}"
            )
    return list(recipes)

def _fmt_servings(n: float) -> str:
    return str(int(n)) if float(n).is_integer() else f"{n:g}"

def _joined(labels: Sequence[str]) -> str:
    return escape(", ".join(labels)) if labels else "None"

def _story(recipes: Sequence[Recipe]) -> list:
    styles = getSampleStyleSheet()
    styles["Title"].fontSize = 20
    styles["Title"].leading = 24
    styles["Heading2"].spaceBefore = 10
    styles["Heading2"].spaceAfter = 6
    body = ParagraphStyle("Body", parent=styles["Normal"], fontSize=10.8, leading=14.2, spaceAfter=3)

    story: list = []
    for i, r in enumerate(recipes):
        if i:
            story.append(PageBreak())

        story.append(Paragraph(f"<b>{escape(r.title)}</b>", styles["Title"]))
        story.append(Spacer(1, 8))

        story.append(Paragraph("<b>Nutrition</b>", styles["Heading2"]))
        story.append(Paragraph(f"Calories per serving: {r.caloriesPerServing:.2f}", body))
        story.append(Paragraph(f"Serving size: {_fmt_servings(r.servingSize)}", body))

        story.append(Paragraph("<b>Labels</b>", styles["Heading2"]))
        story.append(Paragraph(f"Diet labels: {_joined(r.dietLabels)}", body))
        story.append(Paragraph(f"Health labels: {_joined(r.healthLabels)}", body))

        story.append(Paragraph("<b>Ingredients</b>", styles["Heading2"]))
        if r.ingredients:
            items = [ListItem(Paragraph(escape(s), body), bulletText="•") for s in r.ingredients]
            story.append(ListFlowable(items, bulletType="bullet", start="•", leftIndent=12))
        else:
            story.append(Paragraph("-", body))
    return story

def _footer(canvas, doc) -> None:
    canvas.saveState()
    canvas.setFont("Helvetica", 9)
    canvas.setFillGray(0.4)
    canvas.drawRightString(doc.pagesize[0] - doc.rightMargin, 0.45 * inch, f"page {doc.page}")
    canvas.restoreState()

def render_recipes_pdf(recipes: Sequence[Recipe] | None) -> bytes:
    recipes = validate_for_print(recipes)

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=letter,
        leftMargin=0.75 * inch,
        rightMargin=0.75 * inch,
        topMargin=0.65 * inch,
        bottomMargin=0.65 * inch,
        title="Recipes",
    )
    doc.build(_story(recipes), onFirstPage=_footer, onLaterPages=_footer)
    return buf.getvalue()
