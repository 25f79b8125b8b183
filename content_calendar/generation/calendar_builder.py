"""Builds a month of SCHEDULED articles for a topic."""

import calendar as month_calendar
import logging
from typing import Optional, List

from pydantic import BaseModel
from pymongo.errors import DuplicateKeyError

from content_calendar.generation.clock import Clock
from content_calendar.generation.models import Article, ArticleStatus, Calendar, Topic
from content_calendar.generation.producers.gemini import GeminiProducer
from content_calendar.generation.state import ArticleStore

logger = logging.getLogger(__name__)

MIN_YEAR = 2020
MAX_YEAR = 2030
DEFAULT_PUBLISH_HOUR = 17

TITLE_TEMPLATES = [
    "{topic}: Essential Tips for Day {day}",
    "Mastering {topic}: Guide {day}",
    "{topic} Basics: Lesson {day}",
    "Advanced {topic}: Day {day}",
    "{topic} Strategies: Part {day}",
    "Complete {topic} Guide: Chapter {day}",
    "{topic} Fundamentals: Day {day}",
    "Professional {topic}: Session {day}",
    "{topic} Best Practices: Day {day}",
    "Ultimate {topic}: Step {day}",
]


def template_title(topic: str, day: int) -> str:
    return TITLE_TEMPLATES[(day - 1) % len(TITLE_TEMPLATES)].format(topic=topic, day=day)


class CalendarResult(BaseModel):
    calendar: Calendar
    topic: Topic
    articles: List[Article]
    created: bool


class CalendarBuilder:
    def __init__(
        self,
        store: ArticleStore,
        clock: Clock,
        title_source: Optional[GeminiProducer] = None,
        publish_hour: int = DEFAULT_PUBLISH_HOUR,
    ):
        self.store = store
        self.clock = clock
        self.title_source = title_source
        self.publish_hour = publish_hour

    async def generate_calendar(
        self,
        user_id: str,
        topic_id: str,
        month: int,
        year: int,
        use_ai_titles: bool = False,
    ) -> Optional[CalendarResult]:
        """
        Create the calendar for (topic, month, year) with one article per day.

        Returns None when the topic is missing or belongs to someone else, and
        the existing calendar (created=False) when it was generated before.

        Raises:
            ValueError: month outside 1-12 or year outside 2020-2030.
        """
        if not 1 <= month <= 12:
            raise ValueError("Month must be between 1 and 12")
        if not MIN_YEAR <= year <= MAX_YEAR:
            raise ValueError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")

        topic = self.store.get_topic(topic_id, user_id=user_id)
        if topic is None:
            return None

        existing = self.store.find_calendar(topic.id, month, year)
        if existing:
            return self._existing_result(existing, topic)

        days_in_month = month_calendar.monthrange(year, month)[1]
        titles = await self._titles(topic.title, days_in_month, use_ai_titles)

        try:
            calendar = self.store.create_calendar(topic.id, user_id, month, year)
        except DuplicateKeyError:
            # A concurrent request created it first
            logger.info("Calendar for topic %s (%d-%02d) created concurrently", topic.id, year, month)
            return self._existing_result(self.store.find_calendar(topic.id, month, year), topic)

        try:
            self.store.create_articles([
                {
                    "title": titles[day - 1],
                    "scheduled_date": self.clock.local_datetime(year, month, day, self.publish_hour),
                    "status": ArticleStatus.SCHEDULED.value,
                    "content": None,
                    "generated_at": None,
                    "user_id": user_id,
                    "topic_id": topic.id,
                    "calendar_id": calendar.id,
                }
                for day in range(1, days_in_month + 1)
            ])
        except Exception as e:
            logger.error("Error creating articles for calendar %s, removing it: %s", calendar.id, e)
            self.store.delete_calendar(calendar.id)
            raise
        logger.info("Generated calendar %s for topic %r (%d-%02d, %d articles)",
                    calendar.id, topic.title, year, month, days_in_month)

        return CalendarResult(
            calendar=calendar,
            topic=topic,
            articles=self.store.list_calendar_articles(calendar.id),
            created=True,
        )

    def _existing_result(self, calendar: Calendar, topic: Topic) -> CalendarResult:
        return CalendarResult(
            calendar=calendar,
            topic=topic,
            articles=self.store.list_calendar_articles(calendar.id),
            created=False,
        )

    async def _titles(self, topic: str, days: int, use_ai_titles: bool) -> List[str]:
        if use_ai_titles and self.title_source is not None:
            try:
                return await self.title_source.generate_article_titles(topic, days)
            except Exception as e:
                logger.warning("AI title generation failed for %r, using templates: %s", topic, e)
        return [template_title(topic, day) for day in range(1, days + 1)]
