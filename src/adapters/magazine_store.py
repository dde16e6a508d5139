"""Cliente HTTP de la tienda de revistas.

Implementa `core.interfaces.store.MagazineStore` sobre `httpx.AsyncClient`.
Cada método corresponde a un endpoint; los fallos se traducen a
`TransportError` / `DecodeError` para que el orquestador decida qué hacer.
"""

from __future__ import annotations

import json
import logging
from typing import Sequence
from urllib.parse import quote

import httpx

from adapters.http_client import build_async_client
from adapters.response_decoder import decode_list, decode_strings, extract_field, parse_body
from core.config import AppSettings, load_settings
from core.domain.errors import TransportError
from core.domain.models import Magazine, Subscriber

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    return quote(value, safe="")


class MagazineStoreClient:
    """Acceso a `/api/*` de la tienda.

    Uso:
        async with MagazineStoreClient(settings) as store:
            token = await store.get_token()
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or load_settings()
        self._owns_client = client is None
        self._client = client or build_async_client(self._settings)

    async def __aenter__(self) -> "MagazineStoreClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        content: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, content=content, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise TransportError(
                f"{operation}: HTTP {status}",
                operation=operation,
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{operation}: {exc!r}", operation=operation) from exc
        return response.text

    async def _get_data(self, path: str, *, operation: str) -> object | None:
        payload = parse_body(await self._request("GET", path, operation=operation), operation=operation)
        data = extract_field(payload, "data")
        if data is None:
            logger.warning("%s: response has no 'data' field", operation)
        return data

    async def get_token(self) -> str:
        operation = "token"
        payload = parse_body(await self._request("GET", "/api/token", operation=operation), operation=operation)
        token = extract_field(payload, "token")
        if token is None:
            logger.warning("token: response has no 'token' field")
            return ""
        return str(token)

    async def get_categories(self, token: str) -> list[str]:
        operation = "categories"
        data = await self._get_data(f"/api/categories/{_segment(token)}", operation=operation)
        return decode_strings(data, operation=operation)

    async def get_magazines(self, token: str, category: str) -> list[Magazine]:
        operation = f"magazines[{category}]"
        data = await self._get_data(
            f"/api/magazines/{_segment(token)}/{_segment(category)}",
            operation=operation,
        )
        return decode_list(data, Magazine, operation=operation)

    async def get_subscribers(self, token: str) -> list[Subscriber]:
        operation = "subscribers"
        data = await self._get_data(f"/api/subscribers/{_segment(token)}", operation=operation)
        return decode_list(data, Subscriber, operation=operation)

    async def submit_answer(self, token: str, subscriber_ids: Sequence[str]) -> str:
        body = await self._request(
            "POST",
            f"/api/answer/{_segment(token)}",
            operation="answer",
            content=json.dumps(list(subscriber_ids)),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )
        logger.info("answer: %s", body)
        return body
