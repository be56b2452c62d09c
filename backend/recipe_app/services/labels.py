# recipe_app/services/labels.py
# diet/health 라벨 정규화 유틸
# - 저장(store) 형태: "low-carb" → "Low-Carb" (하이픈 구간마다 첫 글자 대문자)
# - provider 질의 형태: "Low-Carb" → "low-carb"
# - 입력이 문자열이면 문자열, 시퀀스면 리스트로 돌려준다

from __future__ import annotations
import re
from typing import Iterable, List, Optional, Sequence, Union, overload

_WS = re.compile(r"\s+")

def _clean(token: str) -> str:
    # 앞뒤 공백 제거 + 내부 연속 공백을 하나로
    return _WS.sub(" ", str(token)).strip()

def _title_segment(seg: str) -> str:
    seg = seg.strip()
    # 첫 글자는 titlecase ("ß" → "Ss"), 다시 적용해도 그대로
    return seg[:1].title() + seg[1:].lower()

def _store_one(token: str) -> str:
    return "-".join(_title_segment(s) for s in _clean(token).split("-"))

def _provider_one(token: str) -> str:
    return _clean(token).lower()

@overload
def to_store_form(token: str) -> str: ...
@overload
def to_store_form(token: Sequence[str]) -> List[str]: ...

def to_store_form(token):
    if isinstance(token, str):
        return _store_one(token)
    return [_store_one(t) for t in token]

@overload
def to_provider_form(token: str) -> str: ...
@overload
def to_provider_form(token: Sequence[str]) -> List[str]: ...

def to_provider_form(token):
    if isinstance(token, str):
        return _provider_one(token)
    return [_provider_one(t) for t in token]

def as_token_list(value: Optional[Union[str, Iterable[str]]]) -> List[str]:
    """쿼리 파라미터(없음/단일/복수)를 빈 값 없는 토큰 리스트로 맞춘다."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    return [_clean(v) for v in value if v is not None and _clean(v)]

def unique_labels(labels: Iterable[str]) -> List[str]:
    # 저장 형태로 맞춘 뒤 중복 제거 (순서 보존)
    return list(dict.fromkeys(to_store_form(as_token_list(list(labels)))))
