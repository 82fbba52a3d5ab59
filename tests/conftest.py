from __future__ import annotations

from typing import Any

import pytest

from product_copy.common.config import ENV_FIELDS, Settings


class FakeClient:
    """Stands in for ResponsesClient; replays queued results or errors."""

    def __init__(self, *results: Any) -> None:
        self.results = list(results) or ["Generated copy"]
        self.payloads: list[dict[str, Any]] = []

    def create(self, payload: dict[str, Any]) -> str:
        self.payloads.append(payload)
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def calls(self) -> int:
        return len(self.payloads)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_FIELDS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("PRODUCT_COPY_CONFIG", raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="sk-test-secret")
