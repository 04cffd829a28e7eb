from __future__ import annotations

from typing import Callable

import httpx
import pytest

from vecbatch.embeddings.openai import OpenAIEmbeddingsClient

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def make_client(sleeps: list[float]) -> Callable[..., OpenAIEmbeddingsClient]:
    async def fake_sleep(delay_s: float) -> None:
        sleeps.append(delay_s)

    def _make(handler: Handler, model: str = "text-embedding-3-small") -> OpenAIEmbeddingsClient:
        return OpenAIEmbeddingsClient(
            model,
            api_key="test-key",
            base_url="https://api.example.test/v1",
            transport=httpx.MockTransport(handler),
            sleep=fake_sleep,
        )

    return _make
