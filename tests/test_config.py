from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pytest

from vecbatch.config import EmbeddingsSettings, load_dotenv
from vecbatch.observability import JsonLogFormatter


def test_settings_defaults_without_key() -> None:
    settings = EmbeddingsSettings.from_env({})
    assert settings.mode == "mock"
    assert settings.model == "text-embedding-3-small"
    assert settings.base_url == "https://api.openai.com/v1"
    assert settings.batch_size == 1024
    assert settings.timeout_s == 60.0
    assert settings.log_json is False
    assert settings.to_dict()["api_key_present"] is False


def test_settings_pick_openai_when_key_present() -> None:
    settings = EmbeddingsSettings.from_env(
        {
            "OPENAI_API_KEY": "sk-test",
            "VECBATCH_MODEL": "text-embedding-3-large",
            "VECBATCH_BATCH_SIZE": "64",
            "VECBATCH_LOG_LEVEL": "debug",
            "VECBATCH_LOG_JSON": "true",
        }
    )
    assert settings.mode == "openai"
    assert settings.model == "text-embedding-3-large"
    assert settings.batch_size == 64
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True


@pytest.mark.parametrize(
    ("environ", "message"),
    [
        ({"VECBATCH_TIMEOUT_S": "soon"}, "VECBATCH_TIMEOUT_S"),
        ({"VECBATCH_BATCH_SIZE": "0"}, "VECBATCH_BATCH_SIZE"),
        ({"VECBATCH_MODE": "remote"}, "VECBATCH_MODE"),
    ],
)
def test_settings_reject_invalid_values(environ: dict[str, str], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        EmbeddingsSettings.from_env(environ)


def test_load_dotenv_does_not_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VECBATCH_DOTENV_NEW", "placeholder")
    monkeypatch.delenv("VECBATCH_DOTENV_NEW")
    monkeypatch.setenv("VECBATCH_DOTENV_SET", "kept")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\nexport VECBATCH_DOTENV_NEW='loaded'\nVECBATCH_DOTENV_SET=ignored\nnot a pair\n",
        encoding="utf-8",
    )

    assert load_dotenv(str(env_file)) is True
    assert os.environ["VECBATCH_DOTENV_NEW"] == "loaded"
    assert os.environ["VECBATCH_DOTENV_SET"] == "kept"
    assert load_dotenv(str(tmp_path / "missing.env")) is False


def test_json_log_formatter_includes_structured_fields() -> None:
    record = logging.LogRecord(
        name="vecbatch.embeddings.openai",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Retrying after %.3fs",
        args=(1.5,),
        exc_info=None,
    )
    record.retry_after_s = 1.5
    record.attempt = 2
    payload = json.loads(JsonLogFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["message"] == "Retrying after 1.500s"
    assert payload["retry_after_s"] == 1.5
    assert payload["attempt"] == 2
    assert "status_code" not in payload
