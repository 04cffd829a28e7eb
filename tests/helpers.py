from __future__ import annotations

import json

import httpx


def embeddings_payload(vectors: list[list[float]], indices: list[int] | None = None) -> dict:
    if indices is None:
        indices = list(range(len(vectors)))
    return {
        "object": "list",
        "data": [
            {"object": "embedding", "embedding": vector, "index": index}
            for vector, index in zip(vectors, indices)
        ],
        "model": "text-embedding-3-small",
        "usage": {"prompt_tokens": 8, "total_tokens": 8},
    }


def request_body(request: httpx.Request) -> dict:
    return json.loads(request.content.decode("utf-8"))
