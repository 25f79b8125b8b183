"""
Article Generation Orchestrator

Owns the article status state machine:

    SCHEDULED → GENERATING → COMPLETED
                           ↘ FAILED

Responsibilities:
- Finds articles due on a given day
- Claims an article (atomic status change to GENERATING) before calling producers
- Persists the generated body or the failure
- Runs the daily batch sequentially with a pause between articles
- Manual (re)generation scoped to the article owner
- Aggregate generation statistics

Failures never escape: callers get a GenerationOutcome, a BatchResult or None.
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Optional, List, Iterable, Union

from pymongo.errors import PyMongoError

from content_calendar.generation.clock import Clock
from content_calendar.generation.generator import ContentGenerator
from content_calendar.generation.models import (
    Article,
    ArticleStatus,
    BatchResult,
    GenerationOutcome,
    GenerationRequest,
    GenerationStats,
    Tone,
)
from content_calendar.generation.state import ArticleStore

logger = logging.getLogger(__name__)

DEFAULT_WORD_COUNT = 800
DEFAULT_DELAY_SECONDS = 1.0

AUTOMATIC_CLAIM_STATUSES = (ArticleStatus.SCHEDULED,)
MANUAL_CLAIM_STATUSES = (ArticleStatus.SCHEDULED, ArticleStatus.FAILED, ArticleStatus.COMPLETED)


class GenerationOrchestrator:
    """Single entry point for article generation."""

    def __init__(
        self,
        store: ArticleStore,
        generator: ContentGenerator,
        clock: Clock,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
    ):
        self.store = store
        self.generator = generator
        self.clock = clock
        self.delay_seconds = delay_seconds
        self.last_batch: Optional[BatchResult] = None

    # --- Discovery ---

    def find_due_articles(self, reference_date: Union[date, datetime]) -> List[str]:
        """Ids of SCHEDULED articles whose scheduled date falls on `reference_date` (local day)."""
        start, end = self.clock.day_bounds(reference_date)
        try:
            return self.store.find_due_article_ids(start, end)
        except PyMongoError as e:
            logger.error("Error fetching due articles for %s: %s", start.date(), e)
            return []

    # --- Single article ---

    async def generate_one(self, article_id: str) -> GenerationOutcome:
        """Generate a SCHEDULED article. Any other state is left untouched."""
        return await self._claim_and_generate(article_id, AUTOMATIC_CLAIM_STATUSES)

    async def trigger_manual_generation(self, article_id: str, requesting_user_id: str) -> GenerationOutcome:
        """
        Operator-initiated generation for an article owned by `requesting_user_id`.

        Unlike the automatic path this also re-runs FAILED and COMPLETED
        articles; only an article that is GENERATING right now is refused.
        """
        outcome = await self._claim_and_generate(article_id, MANUAL_CLAIM_STATUSES, user_id=requesting_user_id)
        if not outcome.succeeded:
            logger.info("Manual generation for article %s by user %s: %s",
                        article_id, requesting_user_id, outcome.value)
        return outcome

    async def _claim_and_generate(
        self,
        article_id: str,
        from_statuses: Iterable[ArticleStatus],
        user_id: Optional[str] = None,
    ) -> GenerationOutcome:
        try:
            article = self.store.claim_article(article_id, from_statuses, user_id=user_id)
        except PyMongoError as e:
            logger.error("Error claiming article %s: %s", article_id, e)
            return GenerationOutcome.FAILED

        if article is None:
            return self._classify_unclaimed(article_id, user_id)

        return await self._generate_claimed(article)

    def _classify_unclaimed(self, article_id: str, user_id: Optional[str]) -> GenerationOutcome:
        """Explain why a claim matched nothing. Read-only."""
        try:
            current = self.store.get_article(article_id)
        except PyMongoError as e:
            logger.error("Error reading article %s: %s", article_id, e)
            return GenerationOutcome.NOT_FOUND

        if current is None:
            logger.warning("Article %s not found", article_id)
            return GenerationOutcome.NOT_FOUND
        if user_id is not None and current.user_id != user_id:
            logger.warning("Article %s doesn't belong to user %s", article_id, user_id)
            return GenerationOutcome.NOT_OWNED
        if current.status == ArticleStatus.GENERATING:
            logger.info("Article %s is already being generated", article_id)
            return GenerationOutcome.IN_PROGRESS
        logger.info("Article %s is %s, skipping", article_id, current.status.value)
        return GenerationOutcome.INVALID_STATE

    async def _generate_claimed(self, article: Article) -> GenerationOutcome:
        try:
            topic = self.store.get_topic(article.topic_id)
            if topic is None:
                raise LookupError(f"Topic {article.topic_id} not found for article {article.id}")

            request = GenerationRequest(
                title=article.title,
                topic=topic.title,
                target_word_count=DEFAULT_WORD_COUNT,
                tone=Tone.PROFESSIONAL,
                include_headings=True,
                include_bullet_points=True,
            )
            generated = await self.generator.generate(request)
            if not self.store.mark_completed(article.id, generated.content, self.clock.now()):
                raise LookupError(f"Article {article.id} left GENERATING before its content was saved")
        except Exception as e:
            logger.error("Error generating content for article %s: %s", article.id, e)
            self._record_failure(article.id, e)
            return GenerationOutcome.FAILED

        logger.info("Generated content for article %s: %r (%s, %d words)",
                    article.id, article.title, generated.producer, generated.word_count)
        return GenerationOutcome.COMPLETED

    def _record_failure(self, article_id: str, error: Exception):
        try:
            self.store.mark_failed(article_id, str(error))
        except Exception as e:
            logger.error("Error updating article %s status to FAILED: %s", article_id, e)

    # --- Batch ---

    async def process_due_articles(self, reference_date: Union[date, datetime]) -> BatchResult:
        """Generate every article due on `reference_date`, one at a time."""
        day = self.clock.start_of_day(reference_date).date()
        result = BatchResult(reference_date=day, started_at=self.clock.now())
        logger.info("Starting article generation for %s", day)

        article_ids = self.find_due_articles(reference_date)
        result.found = len(article_ids)
        if not article_ids:
            logger.info("No articles scheduled for %s", day)

        for index, article_id in enumerate(article_ids):
            if index and self.delay_seconds > 0:
                await asyncio.sleep(self.delay_seconds)
            try:
                outcome = await self.generate_one(article_id)
            except Exception as e:
                logger.error("Unexpected error generating article %s: %s", article_id, e)
                outcome = GenerationOutcome.FAILED

            if outcome.succeeded:
                result.succeeded += 1
            else:
                result.failed += 1

        result.finished_at = self.clock.now()
        self.last_batch = result
        logger.info("Article generation complete for %s. Success: %d, Failed: %d",
                    day, result.succeeded, result.failed)
        return result

    # --- Stats ---

    def get_generation_stats(self, user_id: Optional[str] = None) -> Optional[GenerationStats]:
        """Counts per status, total and completed-today; None if the store is unreachable."""
        start_of_today = self.clock.start_of_day(self.clock.now())
        try:
            return GenerationStats(
                total=self.store.count_articles(user_id),
                by_status=self.store.count_by_status(user_id),
                completed_today=self.store.count_completed_since(start_of_today, user_id),
            )
        except PyMongoError as e:
            logger.error("Error fetching generation stats: %s", e)
            return None
