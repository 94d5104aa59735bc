"""
Zero-shot intent ranking for the feedback classifier.

Scores text against a fixed set of candidate intent labels with
independent (multi-label) confidences, and ranks every candidate by
descending score.
"""

from __future__ import annotations

from collections.abc import Sequence
from numbers import Real
from typing import Any

import structlog
from pydantic import ValidationError

from feedback_classifier.client import ModelClient
from feedback_classifier.config import DEFAULT_INTENT_LABELS
from feedback_classifier.errors import MalformedResponseError
from feedback_classifier.models import IntentCandidate

logger = structlog.get_logger()


def _field_as_list(data: dict[str, Any], key: str) -> list[Any]:
    """Read *key* from the response; absent or null reads as empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedResponseError(
            f"intent response field {key!r} must be a list, got {type(value).__name__}"
        )
    return value


def rank_intents(raw: Any) -> list[IntentCandidate]:
    """Pair ``labels`` with ``scores`` and sort by descending score.

    Pairing is by index, so lists of different lengths are truncated to
    the shorter one.  The sort is stable: equal scores keep response order.

    Raises:
        MalformedResponseError: If *raw* is not an object, a paired label
            is not a string, or a paired score is not a number in [0, 1].
    """
    if not isinstance(raw, dict):
        raise MalformedResponseError(
            f"intent response must be an object, got {type(raw).__name__}"
        )

    labels = _field_as_list(raw, "labels")
    scores = _field_as_list(raw, "scores")

    candidates: list[IntentCandidate] = []
    for label, score in zip(labels, scores):
        if not isinstance(label, str):
            raise MalformedResponseError(f"intent label is not a string: {label!r}")
        if isinstance(score, bool) or not isinstance(score, Real):
            raise MalformedResponseError(f"intent score for {label!r} is not numeric: {score!r}")
        try:
            candidates.append(IntentCandidate(label=label, score=float(score)))
        except ValidationError as exc:
            raise MalformedResponseError(f"invalid intent score for {label!r}: {exc}") from exc

    return sorted(candidates, key=lambda c: c.score, reverse=True)


class IntentRanker:
    """Rank the candidate intent labels for a piece of text.

    Args:
        client: Shared :class:`ModelClient`.
        model: Zero-shot classification model id.
        labels: Candidate intent labels sent with every request.
    """

    def __init__(
        self,
        client: ModelClient,
        model: str,
        labels: Sequence[str] = DEFAULT_INTENT_LABELS,
    ) -> None:
        self._client = client
        self.model = model
        self.labels = tuple(labels)

    def build_payload(self, text: str) -> dict[str, Any]:
        return {
            "inputs": text,
            "parameters": {
                "candidate_labels": list(self.labels),
                "multi_label": True,
            },
        }

    async def get_intent(self, text: str) -> list[IntentCandidate]:
        """Return every candidate intent for *text*, highest score first."""
        raw = await self._client.call(self.model, self.build_payload(text))
        ranked = rank_intents(raw)
        logger.debug(
            "intents_ranked",
            model=self.model,
            top=ranked[0].label if ranked else None,
            count=len(ranked),
        )
        return ranked
