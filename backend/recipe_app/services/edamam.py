# recipe_app/services/edamam.py
# 목적: Edamam Recipe Search API(v2) 검색 호출 (비동기)
# 의존: httpx
# - diet/health 는 같은 키를 반복하는 쿼리스트링으로 보낸다 (diet=a&diet=b)
# - 재시도/페이지네이션 없음. 전송/인증 실패는 예외 그대로 올린다

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import urlencode

import httpx

log = logging.getLogger(__name__)

HEADERS = {"Accept": "application/json"}

class ProviderNotConfigured(Exception):
    # app_id/app_key 미설정
    pass

def build_query(diet: Sequence[str], health: Sequence[str]) -> str:
    params: List[Tuple[str, str]] = [("diet", d) for d in diet]
    params += [("health", h) for h in health]
    return urlencode(params)

class EdamamClient:
    def __init__(
        self,
        base_url: str,
        app_id: Optional[str],
        app_key: Optional[str],
        user_id: Optional[str] = None,
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.app_id = app_id
        self.app_key = app_key
        self.user_id = user_id
        self.timeout = timeout
        self._transport = transport  # 테스트에서 MockTransport 주입

    def _url(self, query: str) -> str:
        if not self.app_id or not self.app_key:
            raise ProviderNotConfigured("EDAMAM_APP_ID / EDAMAM_APP_KEY not set")
        base = urlencode([("type", "public"), ("app_id", self.app_id), ("app_key", self.app_key)])
        url = f"{self.base_url}?{base}"
        return f"{url}&{query}" if query else url

    async def search(self, query: str) -> Optional[Dict[str, Any]]:
        url = self._url(query)
        headers = dict(HEADERS)
        if self.user_id:
            headers["Edamam-Account-User"] = self.user_id

        log.info("provider fetch", extra={"ctx": {"query": query}})
        async with httpx.AsyncClient(headers=headers, timeout=self.timeout, transport=self._transport) as cli:
            r = await cli.get(url)
            r.raise_for_status()
            if not r.content:
                return None
            data = r.json()

        if not isinstance(data, dict):
            return None
        hits = data.get("hits")
        log.info("provider fetched", extra={"ctx": {"hits": len(hits) if isinstance(hits, list) else None}})
        return data
