"""
Feedback bucketing rule table.

Maps a sentiment label and a ranked intent list onto one
:class:`FeedbackBucket`.  Rules are checked in priority order and the
first match wins, so negative sentiment or an explicit complaint always
outranks a simultaneous positive signal.
"""

from __future__ import annotations

from collections.abc import Sequence

from feedback_classifier.models import FeedbackBucket, IntentCandidate

DEFAULT_INTENT_THRESHOLD = 0.35
DEFAULT_MAX_ACTIVE_INTENTS = 3


def active_intents(
    ranked_intents: Sequence[IntentCandidate],
    threshold: float = DEFAULT_INTENT_THRESHOLD,
    max_active: int = DEFAULT_MAX_ACTIVE_INTENTS,
) -> list[str]:
    """Labels scoring at least *threshold*, capped at the first *max_active*."""
    return [c.label for c in ranked_intents if c.score >= threshold][:max_active]


def bucket_feedback(
    sentiment_label: str,
    ranked_intents: Sequence[IntentCandidate],
    *,
    threshold: float = DEFAULT_INTENT_THRESHOLD,
    max_active: int = DEFAULT_MAX_ACTIVE_INTENTS,
) -> FeedbackBucket:
    """Pick the feedback bucket for one analysed input.

    Args:
        sentiment_label: Top label from the sentiment model.
        ranked_intents: Intents sorted by descending score.
        threshold: Minimum score for an intent to be active.
        max_active: Maximum number of active intents.

    Returns:
        The first matching bucket, or ``FeedbackBucket.OTHER``.
    """
    names = set(active_intents(ranked_intents, threshold, max_active))

    if "complaint" in names or sentiment_label == "negative":
        return FeedbackBucket.COMPLAINT
    if "bug_report" in names:
        return FeedbackBucket.BUG_REPORT
    if "refund" in names or "cancel_order" in names:
        return FeedbackBucket.REFUND_CANCELLATION
    if "feature_request" in names:
        return FeedbackBucket.SUGGESTION
    if "praise" in names or sentiment_label == "positive":
        return FeedbackBucket.PRAISE
    if "question" in names:
        return FeedbackBucket.QUESTION
    return FeedbackBucket.OTHER
