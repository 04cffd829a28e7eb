"""Environment-driven settings for vecbatch."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping

from vecbatch.embeddings.models import DEFAULT_MODEL
from vecbatch.embeddings.openai import DEFAULT_BASE_URL, OpenAIEmbeddingsClient

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EmbeddingsSettings:
    mode: str
    model: str
    api_key: str | None
    base_url: str
    timeout_s: float
    batch_size: int
    log_level: str
    log_json: bool

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EmbeddingsSettings":
        env = os.environ if environ is None else environ
        api_key = env.get("OPENAI_API_KEY") or None
        mode = env.get("VECBATCH_MODE") or ("openai" if api_key else "mock")
        if mode not in {"openai", "mock"}:
            raise ValueError(f"VECBATCH_MODE must be 'openai' or 'mock', got {mode!r}")
        timeout_s = _read_number(env, "VECBATCH_TIMEOUT_S", 60.0, float)
        batch_size = _read_number(env, "VECBATCH_BATCH_SIZE", OpenAIEmbeddingsClient.MAX_DOCUMENTS, int)
        if timeout_s <= 0:
            raise ValueError("VECBATCH_TIMEOUT_S must be positive")
        if batch_size <= 0:
            raise ValueError("VECBATCH_BATCH_SIZE must be positive")
        return cls(
            mode=mode,
            model=env.get("VECBATCH_MODEL") or DEFAULT_MODEL,
            api_key=api_key,
            base_url=env.get("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
            timeout_s=timeout_s,
            batch_size=batch_size,
            log_level=(env.get("VECBATCH_LOG_LEVEL") or "INFO").upper(),
            log_json=(env.get("VECBATCH_LOG_JSON") or "").strip().lower() in _TRUTHY,
        )

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "model": self.model,
            "api_key_present": self.api_key is not None,
            "base_url": self.base_url,
            "timeout_s": self.timeout_s,
            "batch_size": self.batch_size,
            "log_level": self.log_level,
            "log_json": self.log_json,
        }


def _read_number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def load_dotenv(path: str = ".env") -> bool:
    """Load ``KEY=value`` lines into ``os.environ`` without overriding set variables."""
    env_path = Path(path)
    if not env_path.exists():
        return False
    try:
        text = env_path.read_text(encoding="utf-8")
    except OSError:
        return False

    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("export "):
            stripped = stripped[len("export ") :].lstrip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = (part.strip() for part in stripped.split("=", 1))
        if not key:
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        if value and key not in os.environ:
            os.environ[key] = value
    return True
