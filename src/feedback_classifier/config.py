"""
Environment-based configuration for the feedback classifier.

Uses pydantic-settings to load values from environment variables and an
optional ``.env`` file.  Variables are prefixed with ``FC_``; the API key
is also accepted as ``HUGGINGFACE_API_KEY``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from feedback_classifier.errors import ConfigError

DEFAULT_INTENT_LABELS: tuple[str, ...] = (
    "greeting",
    "product_query",
    "order_status",
    "refund",
    "cancel_order",
    "password_reset",
    "account_login",
    "bug_report",
    "feature_request",
    "complaint",
    "praise",
    "question",
)


class Settings(BaseSettings):
    """Immutable configuration built once at start-up.

    Attributes:
        api_key: Bearer token for the inference router.
        base_url: Base URL of the inference router.
        inference_path: Path segment between the base URL and the model id.
        sentiment_model: Model id used for sentiment scoring.
        intent_model: Model id used for zero-shot intent classification.
        intent_labels: Candidate labels sent to the intent model.
        intent_threshold: Minimum intent score to count towards bucketing.
        max_active_intents: Number of qualifying intents considered for bucketing.
        top_intents: Number of ranked intents kept in the printed result.
        request_timeout: Per-request HTTP timeout in seconds.
        concurrent_calls: Run the sentiment and intent calls concurrently.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Render log lines as JSON instead of console text.
    """

    model_config = SettingsConfigDict(
        env_prefix="FC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # ── Remote inference ──
    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("FC_API_KEY", "HUGGINGFACE_API_KEY"),
        description="Bearer token for the inference router.",
    )
    base_url: str = Field(
        default="https://router.huggingface.co",
        description="Base URL of the inference router.",
    )
    inference_path: str = Field(
        default="hf-inference/models",
        description="Path segment between the base URL and the model id.",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Per-request HTTP timeout in seconds.",
    )

    # ── Models ──
    sentiment_model: str = Field(
        default="cardiffnlp/twitter-roberta-base-sentiment-latest",
        min_length=1,
        description="Sentiment model id.",
    )
    intent_model: str = Field(
        default="facebook/bart-large-mnli",
        min_length=1,
        description="Zero-shot intent model id.",
    )
    intent_labels: tuple[str, ...] = Field(
        default=DEFAULT_INTENT_LABELS,
        min_length=1,
        description="Candidate intent labels.",
    )

    # ── Bucketing ──
    intent_threshold: float = Field(
        default=0.35,
        ge=0.0,
        le=1.0,
        description="Minimum intent score considered for bucketing.",
    )
    max_active_intents: int = Field(
        default=3,
        ge=1,
        description="Qualifying intents considered for bucketing.",
    )
    top_intents: int = Field(
        default=5,
        ge=1,
        description="Ranked intents kept in the result.",
    )

    # ── Pipeline ──
    concurrent_calls: bool = Field(
        default=False,
        description="Run sentiment and intent calls concurrently.",
    )

    # ── Logging ──
    log_level: str = Field(default="WARNING", description="Logging level.")
    log_json: bool = Field(default=False, description="Emit JSON log lines.")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Returns:
        The global ``Settings`` instance.
    """
    return Settings()


def require_api_key(settings: Settings) -> Settings:
    """Fail fast when no API key has been configured.

    Raises:
        ConfigError: If ``api_key`` is empty or whitespace.
    """
    if not settings.api_key.strip():
        raise ConfigError(
            "Missing Hugging Face API key: set FC_API_KEY or HUGGINGFACE_API_KEY "
            "in the environment or a .env file."
        )
    return settings
