"""OpenAI-compatible embeddings client with reset-header backoff."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import timedelta
import logging
import os
import time
from typing import Any, Awaitable, Callable, Sequence

import httpx

from vecbatch.embeddings.errors import (
    EmbeddingTransportError,
    EmbeddingError,
    ProviderError,
    RateLimitExhaustedError,
    ResponseShapeError,
)
from vecbatch.embeddings.models import model_dims
from vecbatch.embeddings.types import (
    ApiError,
    Embedding,
    EmbeddingData,
    EmbeddingRequest,
    EmbeddingResponse,
    Usage,
)
from vecbatch.ratelimit import retry_after_from_headers

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"

SleepFn = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class _Done:
    embeddings: list[Embedding]


@dataclass(frozen=True)
class _Retry:
    delay: timedelta


@dataclass(frozen=True)
class _Failed:
    error: EmbeddingError


_Outcome = _Done | _Retry | _Failed


class OpenAIEmbeddingsClient:
    MAX_DOCUMENTS = 1024

    def __init__(
        self,
        model: str,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout_s: float = 60.0,
        ndims: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFn | None = None,
    ) -> None:
        resolved_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not resolved_key:
            raise ValueError("OPENAI_API_KEY is required for OpenAIEmbeddingsClient.")
        self.model = model
        self._ndims = ndims if ndims is not None else (model_dims(model) or 0)
        self._base_url = base_url or os.environ.get("OPENAI_BASE_URL", DEFAULT_BASE_URL)
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout_s,
            transport=transport,
            headers={
                "Authorization": f"Bearer {resolved_key}",
                "Content-Type": "application/json",
            },
        )
        self._sleep = sleep or asyncio.sleep

    @property
    def ndims(self) -> int:
        return self._ndims

    async def embed(self, texts: Sequence[str]) -> list[Embedding]:
        """Embed one batch of documents, waiting out 429s the provider tells us how long to wait for.

        Raises an :class:`EmbeddingError` subclass on every other failure.
        """
        request = EmbeddingRequest.build(self.model, texts)
        if not request.documents:
            return []
        if len(request.documents) > self.MAX_DOCUMENTS:
            raise ValueError(
                f"{len(request.documents)} documents exceed the batch limit of {self.MAX_DOCUMENTS}; "
                "split them with vecbatch.embeddings.batch.embed_documents."
            )

        body = request.to_body()
        attempt = 0
        while True:
            attempt += 1
            response = await self._send(body, attempt)
            outcome = self._classify(response, request)
            if isinstance(outcome, _Retry):
                delay_s = outcome.delay.total_seconds()
                logger.warning(
                    "Rate limit hit for %s embeddings. Retrying after %.3fs",
                    self.model,
                    delay_s,
                    extra={"model": self.model, "attempt": attempt, "retry_after_s": delay_s},
                )
                await self._sleep(delay_s)
                continue
            if isinstance(outcome, _Failed):
                raise outcome.error
            return outcome.embeddings

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "OpenAIEmbeddingsClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _send(self, body: dict[str, Any], attempt: int) -> httpx.Response:
        start = time.monotonic()
        try:
            response = await self._client.post("/embeddings", json=body)
        except httpx.TransportError as exc:
            logger.error(
                "Embedding request to %s failed before a response: %s",
                self._base_url,
                exc,
                extra={"model": self.model, "attempt": attempt},
            )
            raise EmbeddingTransportError(f"Embedding request failed: {exc}") from exc
        latency_ms = int((time.monotonic() - start) * 1000)
        logger.debug(
            "Embedding attempt %d returned %d in %dms",
            attempt,
            response.status_code,
            latency_ms,
            extra={"model": self.model, "attempt": attempt, "status_code": response.status_code},
        )
        return response

    def _classify(self, response: httpx.Response, request: EmbeddingRequest) -> _Outcome:
        status = response.status_code
        if status == httpx.codes.OK:
            try:
                envelope = _decode_envelope(response.json())
            except (TypeError, ValueError) as exc:
                return _Failed(ResponseShapeError(f"Undecodable embeddings response: {exc}"))
            if isinstance(envelope, ApiError):
                logger.error("Embedding provider returned an error envelope: %s", envelope.message)
                return _Failed(ProviderError(message=envelope.message, status_code=status))
            try:
                embeddings = align_embeddings(request.documents, envelope.data)
            except ResponseShapeError as exc:
                return _Failed(exc)
            logger.info(
                "Embedding token usage for %s: %s",
                self.model,
                envelope.usage,
                extra={
                    "model": envelope.model or self.model,
                    "prompt_tokens": envelope.usage.prompt_tokens,
                    "total_tokens": envelope.usage.total_tokens,
                },
            )
            return _Done(embeddings)

        if status == httpx.codes.TOO_MANY_REQUESTS:
            delay = retry_after_from_headers(response.headers)
            if delay is not None:
                return _Retry(delay)
            error_text = response.text
            logger.error(
                "Rate limit hit for %s embeddings, but no retry duration could be parsed. Response: %s",
                self.model,
                error_text,
                extra={"model": self.model, "status_code": status},
            )
            return _Failed(
                RateLimitExhaustedError(
                    message=f"Rate limit hit, but no valid retry duration found in headers. Response: {error_text}",
                    response_text=error_text,
                )
            )

        error_text = response.text
        logger.error(
            "Embedding request failed with status %d: %s",
            status,
            error_text,
            extra={"model": self.model, "status_code": status},
        )
        return _Failed(
            ProviderError(
                message=f"Request failed with status {status}: {error_text}",
                status_code=status,
                response_text=error_text,
            )
        )


def align_embeddings(documents: Sequence[str], data: Sequence[EmbeddingData]) -> list[Embedding]:
    """Pair returned vectors with the documents they were computed for.

    Records are placed by their ``index`` when the indices form a permutation of
    the input positions; otherwise they are taken in the order received.
    """
    if len(data) != len(documents):
        raise ResponseShapeError(
            f"Response data length ({len(data)}) does not match input length ({len(documents)})"
        )
    indices = [item.index for item in data]
    if all(index is not None for index in indices) and sorted(indices) == list(range(len(documents))):
        ordered = sorted(data, key=lambda item: item.index)
    else:
        if any(index is not None for index in indices):
            logger.warning("Ignoring inconsistent embedding indices %s; aligning by position.", indices)
        ordered = list(data)
    return [Embedding(document=document, vec=item.embedding) for document, item in zip(documents, ordered)]


def _decode_envelope(payload: Any) -> EmbeddingResponse | ApiError:
    if not isinstance(payload, dict):
        raise ValueError("expected a JSON object")
    if "data" in payload:
        items = payload["data"]
        if not isinstance(items, list):
            raise ValueError("'data' is not a list")
        return EmbeddingResponse(
            object=str(payload.get("object", "list")),
            data=[_decode_item(item) for item in items],
            model=payload.get("model"),
            usage=Usage.from_payload(payload.get("usage")),
        )
    error = payload.get("error")
    if not isinstance(error, dict):
        error = payload
    message = error.get("message")
    if isinstance(message, str):
        return ApiError(message=message, type=error.get("type"), code=error.get("code"), raw=payload)
    raise ValueError("neither an embeddings list nor an error message")


def _decode_item(item: Any) -> EmbeddingData:
    if not isinstance(item, dict):
        raise ValueError("embedding record is not an object")
    raw = item.get("embedding")
    if not isinstance(raw, list):
        raise ValueError("unsupported embedding format")
    index = item.get("index")
    return EmbeddingData(
        object=str(item.get("object", "embedding")),
        embedding=[float(value) for value in raw],
        index=index if isinstance(index, int) and not isinstance(index, bool) else None,
    )
