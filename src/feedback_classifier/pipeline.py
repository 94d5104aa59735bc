"""
Analysis pipeline for the feedback classifier.

Runs sentiment extraction and intent ranking for one input, applies the
bucketing rules and assembles the immutable :class:`AnalysisResult`.
"""

from __future__ import annotations

import asyncio

import structlog

from feedback_classifier.bucketing import (
    DEFAULT_INTENT_THRESHOLD,
    DEFAULT_MAX_ACTIVE_INTENTS,
    bucket_feedback,
)
from feedback_classifier.client import ModelClient
from feedback_classifier.config import Settings
from feedback_classifier.intent import IntentRanker
from feedback_classifier.models import AnalysisResult
from feedback_classifier.sentiment import SentimentExtractor

logger = structlog.get_logger()

DEFAULT_TOP_INTENTS = 5


class AnalysisPipeline:
    """Sentiment + intent + bucketing for a single text.

    The two remote calls are independent.  By default they run one after
    the other (sentiment first); with ``concurrent=True`` they are
    awaited together via :func:`asyncio.gather`.  Either way the result
    is the same, and any error aborts the whole analysis.

    Args:
        sentiment: Sentiment extractor.
        intents: Intent ranker.
        top_k: Number of ranked intents kept in the result.
        threshold: Minimum intent score for bucketing.
        max_active: Number of qualifying intents considered for bucketing.
        concurrent: Run both remote calls concurrently.
        client: HTTP client owned by this pipeline, closed by :meth:`close`.
    """

    def __init__(
        self,
        sentiment: SentimentExtractor,
        intents: IntentRanker,
        *,
        top_k: int = DEFAULT_TOP_INTENTS,
        threshold: float = DEFAULT_INTENT_THRESHOLD,
        max_active: int = DEFAULT_MAX_ACTIVE_INTENTS,
        concurrent: bool = False,
        client: ModelClient | None = None,
    ) -> None:
        self._sentiment = sentiment
        self._intents = intents
        self._top_k = top_k
        self._threshold = threshold
        self._max_active = max_active
        self._concurrent = concurrent
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> AnalysisPipeline:
        """Wire a client, extractor and ranker from *settings*."""
        client = ModelClient(settings)
        return cls(
            SentimentExtractor(client, settings.sentiment_model),
            IntentRanker(client, settings.intent_model, settings.intent_labels),
            top_k=settings.top_intents,
            threshold=settings.intent_threshold,
            max_active=settings.max_active_intents,
            concurrent=settings.concurrent_calls,
            client=client,
        )

    async def analyze(self, text: str) -> AnalysisResult:
        """Analyse *text* and return the assembled result.

        Raises:
            ValueError: If *text* is empty or whitespace-only.
            FeedbackClassifierError: Propagated unchanged from either call.
        """
        if not text or not text.strip():
            raise ValueError("text to analyse must not be blank")

        if self._concurrent:
            sentiment, ranked = await asyncio.gather(
                self._sentiment.get_sentiment(text),
                self._intents.get_intent(text),
            )
        else:
            sentiment = await self._sentiment.get_sentiment(text)
            ranked = await self._intents.get_intent(text)

        bucket = bucket_feedback(
            sentiment.label,
            ranked,
            threshold=self._threshold,
            max_active=self._max_active,
        )
        logger.info(
            "analysis_complete",
            sentiment=sentiment.label,
            bucket=bucket.value,
            intents=len(ranked),
        )
        return AnalysisResult(
            input=text,
            sentiment=sentiment,
            intents_ranked=ranked[: self._top_k],
            feedback_bucket=bucket,
        )

    async def close(self) -> None:
        """Release the owned HTTP client, if any."""
        if self._client is not None:
            await self._client.close()
