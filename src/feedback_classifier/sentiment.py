"""
Sentiment extraction for the feedback classifier.

Calls the remote sentiment model and reduces its label/score list to the
single highest-scoring label.
"""

from __future__ import annotations

from numbers import Real
from typing import Any

import structlog
from pydantic import ValidationError

from feedback_classifier.client import ModelClient
from feedback_classifier.errors import MalformedResponseError
from feedback_classifier.models import SentimentResult

logger = structlog.get_logger()


def normalise_sentiment_response(raw: Any) -> list[dict[str, Any]]:
    """Flatten the sentiment response to one list of label/score entries.

    The router answers either ``[{label, score}, ...]`` or, for a single
    input, ``[[{label, score}, ...]]``.  The nested form is unwrapped.

    Raises:
        MalformedResponseError: If the result is not a non-empty list of
            objects each carrying a string ``label`` and a numeric ``score``.
    """
    entries = raw[0] if isinstance(raw, list) and raw and isinstance(raw[0], list) else raw

    if not isinstance(entries, list):
        raise MalformedResponseError(
            f"sentiment response must be a list, got {type(entries).__name__}"
        )
    if not entries:
        raise MalformedResponseError("sentiment response is empty")

    for entry in entries:
        if not isinstance(entry, dict):
            raise MalformedResponseError(f"sentiment entry is not an object: {entry!r}")
        if not isinstance(entry.get("label"), str):
            raise MalformedResponseError(f"sentiment entry has no label: {entry!r}")
        score = entry.get("score")
        if isinstance(score, bool) or not isinstance(score, Real):
            raise MalformedResponseError(f"sentiment entry has no numeric score: {entry!r}")
    return entries


def top_sentiment(entries: list[dict[str, Any]]) -> SentimentResult:
    """Return the highest-scoring entry; the first one wins on ties."""
    best = entries[0]
    for entry in entries[1:]:
        if entry["score"] > best["score"]:
            best = entry
    try:
        return SentimentResult(label=best["label"], score=float(best["score"]))
    except ValidationError as exc:
        raise MalformedResponseError(f"invalid sentiment entry {best!r}: {exc}") from exc


class SentimentExtractor:
    """Top-label sentiment scoring backed by a remote model.

    Args:
        client: Shared :class:`ModelClient`.
        model: Sentiment model id.
    """

    def __init__(self, client: ModelClient, model: str) -> None:
        self._client = client
        self.model = model

    async def get_sentiment(self, text: str) -> SentimentResult:
        """Classify *text* and return its top sentiment label.

        Raises:
            MalformedResponseError: If the response has no usable entries.
        """
        raw = await self._client.call(self.model, {"inputs": text})
        result = top_sentiment(normalise_sentiment_response(raw))
        logger.debug("sentiment_scored", model=self.model, label=result.label, score=result.score)
        return result
