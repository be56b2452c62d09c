# recipe_app/core/logging_utils.py
# 로깅 설정: 모듈별 logger(getLogger(__name__)) + 한 줄 포맷
# 호출부에서 extra={"ctx": {...}} 로 넘긴 컨텍스트를 key=value 로 뒤에 붙인다

from __future__ import annotations
import logging
from typing import Any, Dict

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

class ContextFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        ctx: Dict[str, Any] = getattr(record, "ctx", None) or {}
        if not ctx:
            return line
        pairs = " ".join(f"{k}={v!r}" for k, v in ctx.items())
        # traceback이 붙은 경우 첫 줄 뒤에 컨텍스트를 끼운다
        head, sep, tail = line.partition("\n")
        return f"{head} | {pairs}{sep}{tail}"

def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    # 재호출(테스트/리로드) 시 핸들러 중복 방지
    for h in list(root.handlers):
        if getattr(h, "_recipe_app", False):
            root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter(FORMAT))
    handler._recipe_app = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level.upper())
