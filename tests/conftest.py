"""Pytest fixtures: settings aislados, una tienda falsa y una API simulada."""

from __future__ import annotations

import json
from typing import Any, Sequence
from urllib.parse import unquote

import httpx
import pytest

from core.config import AppSettings
from core.domain.errors import TransportError
from core.domain.models import Magazine, Subscriber

BASE_URL = "http://store.test"
TOKEN = "tok-123"

CATEGORIES = ["Tech", "Sports", "News"]

MAGAZINES = {
    "Tech": [{"id": 1, "name": "Wired", "category": "Tech"}, {"id": 2, "name": "Byte", "category": "Tech"}],
    "Sports": [{"id": 3, "name": "Run", "category": "Sports"}],
    "News": [{"id": 4, "name": "Daily", "category": "News"}, {"id": 5, "name": "Weekly", "category": "News"}],
}

SUBSCRIBERS = [
    {"id": "s-1", "firstName": "Ada", "lastName": "Byron", "magazineIds": [1, 3, 4]},
    {"id": "s-2", "firstName": "Alan", "lastName": "Turing", "magazineIds": [2, 3]},
    {"id": "s-3", "firstName": "Grace", "lastName": "Hopper", "magazineIds": [2, 2, 3, 5]},
    {"id": "s-4", "firstName": "Linus", "lastName": "T", "magazineIds": None},
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for key in (
        "MAGSTORE_BASE_URL",
        "MAGSTORE_HTTP_TIMEOUT_SECONDS",
        "MAGSTORE_USER_AGENT",
        "MAGSTORE_FETCH_MAX_CONCURRENCY",
        "MAGSTORE_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    # Ningún .env local ni de usuario debe filtrarse en los tests.
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(base_url=BASE_URL, _env_file=None)


class StoreApi:
    """Simulación en memoria de `/api/*` para `httpx.MockTransport`."""

    def __init__(self) -> None:
        self.categories: Any = {"data": list(CATEGORIES)}
        self.magazines: dict[str, Any] = {k: {"data": v} for k, v in MAGAZINES.items()}
        self.subscribers: Any = {"data": list(SUBSCRIBERS)}
        self.token: Any = {"token": TOKEN}
        self.answer_body = json.dumps(
            {"success": True, "data": {"totalTime": "0:00:01.2", "answerCorrect": True, "shouldBe": None}}
        )
        self.fail: dict[str, int] = {}
        self.requests: list[httpx.Request] = []
        self.submitted: list[Any] = []

    def _json(self, status: int, payload: Any) -> httpx.Response:
        return httpx.Response(status, json=payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")
        kind = parts[1] if len(parts) > 1 else ""
        if kind in self.fail:
            return httpx.Response(self.fail[kind], text="boom")

        if kind == "token":
            return self._json(200, self.token)
        if parts[2:3] != [TOKEN]:
            return httpx.Response(401, json={"success": False})
        if kind == "categories":
            return self._json(200, self.categories)
        if kind == "magazines":
            category = unquote(request.url.raw_path.decode("ascii").split("/")[-1])
            return self._json(200, self.magazines.get(category, {"data": []}))
        if kind == "subscribers":
            return self._json(200, self.subscribers)
        if kind == "answer" and request.method == "POST":
            self.submitted.append(json.loads(request.content))
            return httpx.Response(200, text=self.answer_body)
        return httpx.Response(404)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def store_api() -> StoreApi:
    return StoreApi()


class FakeStore:
    """`MagazineStore` en memoria; `errors` mapea operación → excepción."""

    def __init__(
        self,
        *,
        categories: Sequence[str] = ("Tech", "Sports"),
        magazines: dict[str, list[Magazine]] | None = None,
        subscribers: Sequence[Subscriber] = (),
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.categories = list(categories)
        self.magazines = magazines or {}
        self.subscribers = list(subscribers)
        self.errors = errors or {}
        self.calls: list[tuple[str, ...]] = []
        self.submitted: list[list[str]] = []

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.errors:
            raise self.errors[operation]

    async def get_token(self) -> str:
        self.calls.append(("token",))
        self._maybe_fail("token")
        return TOKEN

    async def get_categories(self, token: str) -> list[str]:
        self.calls.append(("categories", token))
        self._maybe_fail("categories")
        return list(self.categories)

    async def get_magazines(self, token: str, category: str) -> list[Magazine]:
        self.calls.append(("magazines", token, category))
        self._maybe_fail(f"magazines[{category}]")
        return list(self.magazines.get(category, []))

    async def get_subscribers(self, token: str) -> list[Subscriber]:
        self.calls.append(("subscribers", token))
        self._maybe_fail("subscribers")
        return list(self.subscribers)

    async def submit_answer(self, token: str, subscriber_ids: Sequence[str]) -> str:
        self.calls.append(("answer", token))
        self._maybe_fail("answer")
        self.submitted.append(list(subscriber_ids))
        return json.dumps({"success": True, "data": {"answerCorrect": True, "totalTime": "1s"}})


def transport_error(operation: str, status: int | None = 500) -> TransportError:
    return TransportError(f"{operation}: HTTP {status}", operation=operation, status_code=status)
