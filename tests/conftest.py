"""Shared fixtures for feedback classifier tests."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import structlog

from feedback_classifier.client import ModelClient
from feedback_classifier.config import Settings, get_settings

# Make helpers in this module importable from test files.
sys.path.append(str(Path(__file__).resolve().parent))

# Keep a developer's real credentials out of the test run.
for _key in [k for k in os.environ if k.startswith("FC_")] + ["HUGGINGFACE_API_KEY"]:
    os.environ.pop(_key, None)

TEST_BASE_URL = "https://router.test"


@pytest.fixture(autouse=True)
def _isolate_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test outside the repo (no stray .env) with a fresh settings cache."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    # cli.main() binds structlog to the captured stderr of its test.
    structlog.reset_defaults()


@pytest.fixture()
def settings() -> Settings:
    """Settings pointing at a fake router with a test key."""
    return Settings(api_key="test-key", base_url=TEST_BASE_URL)


@pytest.fixture()
def mock_client() -> AsyncMock:
    """A ModelClient stand-in whose ``call`` is an AsyncMock."""
    client = AsyncMock(spec=ModelClient)
    client.call = AsyncMock()
    return client


def sentiment_payload(label: str, score: float) -> list[list[dict[str, object]]]:
    """Nested sentiment response as returned by the router."""
    rest = round(1.0 - score, 4)
    other = "positive" if label != "positive" else "negative"
    return [[{"label": label, "score": score}, {"label": other, "score": rest}]]


def intent_payload(pairs: list[tuple[str, float]]) -> dict[str, list[object]]:
    """Zero-shot response with parallel ``labels``/``scores`` lists."""
    return {
        "sequence": "ignored",
        "labels": [label for label, _ in pairs],
        "scores": [score for _, score in pairs],
    }
