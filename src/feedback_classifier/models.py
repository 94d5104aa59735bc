"""
Pydantic data models for the feedback classifier.

All models are request-scoped and frozen: an ``AnalysisResult`` is built
once per input line and never mutated afterwards.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class FeedbackBucket(str, enum.Enum):
    """The closed set of feedback categories."""

    COMPLAINT = "complaint"
    BUG_REPORT = "bug_report"
    REFUND_CANCELLATION = "refund/cancellation"
    SUGGESTION = "suggestion"
    PRAISE = "praise"
    QUESTION = "question"
    OTHER = "other"


class SentimentResult(BaseModel):
    """Top sentiment label returned by the sentiment model.

    Attributes:
        label: Model-defined label (e.g. ``positive``/``negative``/``neutral``).
        score: Confidence score (0.0–1.0).
    """

    model_config = {"frozen": True}

    label: str = Field(..., description="Model-defined sentiment label.")
    score: float = Field(..., ge=0.0, le=1.0, description="Confidence score.")


class IntentCandidate(BaseModel):
    """One zero-shot intent label with its independent score.

    Attributes:
        label: Candidate intent label.
        score: Multi-label confidence (0.0–1.0).
    """

    model_config = {"frozen": True}

    label: str = Field(..., description="Candidate intent label.")
    score: float = Field(..., ge=0.0, le=1.0, description="Multi-label confidence.")


class AnalysisResult(BaseModel):
    """Final record printed for one input line.

    Attributes:
        input: The analysed text.
        sentiment: Top sentiment label and score.
        intents_ranked: Highest-scoring intents, descending.
        feedback_bucket: The bucket chosen by the rule table.
    """

    model_config = {"frozen": True}

    input: str = Field(..., min_length=1, description="The analysed text.")
    sentiment: SentimentResult
    intents_ranked: list[IntentCandidate] = Field(default_factory=list)
    feedback_bucket: FeedbackBucket
