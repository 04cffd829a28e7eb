"""Mock embeddings client."""

from __future__ import annotations

import hashlib
import math
import random
from typing import Sequence

from vecbatch.embeddings.types import Embedding


class MockEmbeddingsClient:
    MAX_DOCUMENTS = 1024

    def __init__(self, model: str, dims: int = 1536) -> None:
        self.model = model
        self._dims = dims

    @property
    def ndims(self) -> int:
        return self._dims

    async def embed(self, texts: Sequence[str]) -> list[Embedding]:
        if len(texts) > self.MAX_DOCUMENTS:
            raise ValueError(f"{len(texts)} documents exceed the batch limit of {self.MAX_DOCUMENTS}")
        results: list[Embedding] = []
        for text in texts:
            seed = int(hashlib.sha256((self.model + "|" + text).encode("utf-8")).hexdigest(), 16) % (2**32)
            rng = random.Random(seed)
            vec = [rng.gauss(0, 1) for _ in range(self._dims)]
            norm = math.sqrt(sum(value * value for value in vec)) or 1.0
            results.append(Embedding(document=text, vec=[value / norm for value in vec]))
        return results

    async def aclose(self) -> None:
        return None

    async def __aenter__(self) -> "MockEmbeddingsClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
