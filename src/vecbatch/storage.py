"""JSONL output helpers for embedding runs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable


def append_jsonl(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = json.dumps(payload, sort_keys=True, ensure_ascii=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(f"{data}\n")


def write_jsonl(path: Path, records: Iterable[dict]) -> int:
    """Overwrite ``path`` with one JSON object per line; returns the record count."""
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding="utf-8") as handle:
        for record in records:
            handle.write(json.dumps(record, sort_keys=True, ensure_ascii=True))
            handle.write("\n")
            count += 1
    return count


def read_documents(path: Path) -> list[str]:
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip()]
