"""Embedding request/response types."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmbeddingRequest:
    model: str
    documents: tuple[str, ...]

    @classmethod
    def build(cls, model: str, documents: Sequence[str]) -> "EmbeddingRequest":
        return cls(model=model, documents=tuple(documents))

    def to_body(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "input": list(self.documents),
        }


@dataclass(frozen=True)
class Embedding:
    document: str
    vec: list[float]

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": self.document,
            "embedding": self.vec,
        }


@dataclass(frozen=True)
class Usage:
    prompt_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "Usage":
        """Read the usage block; a block with non-count fields reads as zero usage."""
        if not isinstance(payload, dict):
            return cls()
        prompt_tokens = payload.get("prompt_tokens", 0)
        total_tokens = payload.get("total_tokens", 0)
        if not (_is_count(prompt_tokens) and _is_count(total_tokens)):
            logger.debug("Ignoring unreadable usage block %r", payload)
            return cls()
        return cls(prompt_tokens=prompt_tokens, total_tokens=total_tokens)

    def __str__(self) -> str:
        return f"prompt_tokens={self.prompt_tokens} total_tokens={self.total_tokens}"


@dataclass(frozen=True)
class EmbeddingData:
    embedding: list[float]
    index: int | None
    object: str = "embedding"


@dataclass(frozen=True)
class EmbeddingResponse:
    data: list[EmbeddingData]
    model: str | None
    usage: Usage
    object: str = "list"


@dataclass(frozen=True)
class ApiError:
    message: str
    type: str | None = None
    code: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
