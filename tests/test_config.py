"""
Tests for the configuration module.

Validates defaults, environment overrides (including the
``HUGGINGFACE_API_KEY`` alias), validation constraints and the
fail-fast API key check.
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from feedback_classifier.config import (
    DEFAULT_INTENT_LABELS,
    Settings,
    get_settings,
    require_api_key,
)
from feedback_classifier.errors import ConfigError


def _clean_env() -> dict[str, str]:
    """Environment without any classifier variables."""
    return {
        k: v
        for k, v in os.environ.items()
        if not k.startswith("FC_") and k != "HUGGINGFACE_API_KEY"
    }


# ---------------------------------------------------------------------------
# Tests: default values
# ---------------------------------------------------------------------------


class TestSettingsDefaults:
    """Verify that ``Settings`` populates defaults when no env vars are set."""

    def test_default_base_url(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings().base_url == "https://router.huggingface.co"

    def test_default_inference_path(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings().inference_path == "hf-inference/models"

    def test_default_models(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            s = Settings()
        assert s.sentiment_model == "cardiffnlp/twitter-roberta-base-sentiment-latest"
        assert s.intent_model == "facebook/bart-large-mnli"

    def test_default_intent_labels(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            labels = Settings().intent_labels
        assert labels == DEFAULT_INTENT_LABELS
        assert len(labels) == 12

    def test_default_bucketing_parameters(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            s = Settings()
        assert s.intent_threshold == 0.35
        assert s.max_active_intents == 3
        assert s.top_intents == 5

    def test_default_api_key_empty(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings().api_key == ""

    def test_sequential_by_default(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings().concurrent_calls is False


# ---------------------------------------------------------------------------
# Tests: environment variable overrides
# ---------------------------------------------------------------------------


class TestSettingsFromEnv:
    """Verify that env vars override defaults."""

    def test_fc_api_key(self) -> None:
        with patch.dict(os.environ, {"FC_API_KEY": "hf_prefixed"}):
            assert Settings().api_key == "hf_prefixed"

    def test_huggingface_api_key_alias(self) -> None:
        with patch.dict(os.environ, {"HUGGINGFACE_API_KEY": "hf_plain"}):
            assert Settings().api_key == "hf_plain"

    def test_override_base_url(self) -> None:
        with patch.dict(os.environ, {"FC_BASE_URL": "http://localhost:9000"}):
            assert Settings().base_url == "http://localhost:9000"

    def test_override_threshold(self) -> None:
        with patch.dict(os.environ, {"FC_INTENT_THRESHOLD": "0.5"}):
            assert Settings().intent_threshold == pytest.approx(0.5)

    def test_override_intent_labels_json(self) -> None:
        with patch.dict(os.environ, {"FC_INTENT_LABELS": '["refund", "praise"]'}):
            assert Settings().intent_labels == ("refund", "praise")

    def test_override_concurrent_calls(self) -> None:
        with patch.dict(os.environ, {"FC_CONCURRENT_CALLS": "true"}):
            assert Settings().concurrent_calls is True

    def test_dotenv_file_is_read(self, tmp_path) -> None:
        (tmp_path / ".env").write_text("HUGGINGFACE_API_KEY=hf_from_dotenv\n", encoding="utf-8")
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert Settings().api_key == "hf_from_dotenv"


# ---------------------------------------------------------------------------
# Tests: validation constraints
# ---------------------------------------------------------------------------


class TestSettingsValidation:
    """Verify pydantic validators on ``Settings`` fields."""

    def test_threshold_above_one(self) -> None:
        with pytest.raises(ValidationError):
            Settings(intent_threshold=1.5)  # type: ignore[call-arg]

    def test_max_active_zero(self) -> None:
        with pytest.raises(ValidationError):
            Settings(max_active_intents=0)  # type: ignore[call-arg]

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(request_timeout=0)  # type: ignore[call-arg]

    def test_settings_are_frozen(self) -> None:
        s = Settings(api_key="k")
        with pytest.raises(ValidationError):
            s.api_key = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Tests: API key requirement and singleton
# ---------------------------------------------------------------------------


class TestRequireApiKey:
    def test_missing_key_raises_config_error(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            with pytest.raises(ConfigError, match="API key"):
                require_api_key(Settings())

    def test_whitespace_key_raises_config_error(self) -> None:
        with pytest.raises(ConfigError):
            require_api_key(Settings(api_key="   "))

    def test_present_key_returns_settings(self) -> None:
        s = Settings(api_key="hf_abc")
        assert require_api_key(s) is s


class TestGetSettings:
    def test_returns_settings_instance(self) -> None:
        assert isinstance(get_settings(), Settings)

    def test_cached(self) -> None:
        assert get_settings() is get_settings()
