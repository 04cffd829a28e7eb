"""Known embedding models and their vector sizes."""

from __future__ import annotations

TEXT_EMBEDDING_3_LARGE = "text-embedding-3-large"
TEXT_EMBEDDING_3_SMALL = "text-embedding-3-small"
TEXT_EMBEDDING_ADA_002 = "text-embedding-ada-002"

MODEL_DIMS: dict[str, int] = {
    TEXT_EMBEDDING_3_LARGE: 3072,
    TEXT_EMBEDDING_3_SMALL: 1536,
    TEXT_EMBEDDING_ADA_002: 1536,
}

DEFAULT_MODEL = TEXT_EMBEDDING_3_SMALL


def model_dims(model: str) -> int | None:
    return MODEL_DIMS.get(model)
