"""In-memory doubles for the store, producers and generator."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pymongo.errors import DuplicateKeyError

from content_calendar.generation.models import (
    Article,
    ArticleStatus,
    Calendar,
    GeneratedContent,
    GenerationRequest,
    Topic,
)
from content_calendar.generation.producers.base import ContentProducer


class FakeArticleStore:
    """Dict-backed stand-in for ArticleStore with the same claim semantics."""

    def __init__(self) -> None:
        self.articles: Dict[str, Article] = {}
        self.topics: Dict[str, Topic] = {}
        self.calendars: Dict[str, Calendar] = {}
        self.writes: List[tuple] = []
        self._ids = itertools.count(1)

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids)}"

    # --- seeding helpers ---

    def add_topic(self, title: str = "Digital Marketing", user_id: str = "user-1") -> Topic:
        topic = Topic(id=self._next_id("t"), title=title, user_id=user_id)
        self.topics[topic.id] = topic
        return topic

    def add_article(self, topic: Topic, scheduled_date: datetime, **overrides: Any) -> Article:
        fields: Dict[str, Any] = {
            "id": self._next_id("a"),
            "title": "The Complete Guide",
            "status": ArticleStatus.SCHEDULED,
            "scheduled_date": scheduled_date,
            "user_id": topic.user_id,
            "topic_id": topic.id,
            "calendar_id": "c0",
        }
        fields.update(overrides)
        article = Article(**fields)
        self.articles[article.id] = article
        return article

    # --- ArticleStore interface ---

    def get_article(self, article_id: str) -> Optional[Article]:
        article = self.articles.get(article_id)
        return article.model_copy() if article else None

    def find_due_article_ids(self, start: datetime, end: datetime) -> List[str]:
        due = [
            a for a in self.articles.values()
            if a.status == ArticleStatus.SCHEDULED and start <= a.scheduled_date < end
        ]
        return [a.id for a in sorted(due, key=lambda a: a.scheduled_date)]

    def claim_article(
        self,
        article_id: str,
        from_statuses: Iterable[ArticleStatus],
        user_id: Optional[str] = None,
    ) -> Optional[Article]:
        article = self.articles.get(article_id)
        if article is None or article.status not in set(from_statuses):
            return None
        if user_id is not None and article.user_id != user_id:
            return None
        article.status = ArticleStatus.GENERATING
        self.writes.append(("claim", article_id))
        return article.model_copy()

    def mark_completed(self, article_id: str, content: str, generated_at: datetime) -> bool:
        article = self.articles[article_id]
        article.content = content
        article.status = ArticleStatus.COMPLETED
        article.generated_at = generated_at
        self.writes.append(("completed", article_id))
        return True

    def mark_failed(self, article_id: str, error: Optional[str] = None) -> bool:
        article = self.articles[article_id]
        article.status = ArticleStatus.FAILED
        article.last_error = error
        self.writes.append(("failed", article_id))
        return True

    def create_articles(self, articles: List[Dict[str, Any]]) -> int:
        for fields in articles:
            article = Article(id=self._next_id("a"), **fields)
            self.articles[article.id] = article
        self.writes.append(("create_articles", len(articles)))
        return len(articles)

    def list_calendar_articles(self, calendar_id: str) -> List[Article]:
        found = [a for a in self.articles.values() if a.calendar_id == calendar_id]
        return sorted(found, key=lambda a: a.scheduled_date)

    def count_by_status(self, user_id: Optional[str] = None) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for article in self._scoped(user_id):
            counts[article.status.value] = counts.get(article.status.value, 0) + 1
        return counts

    def count_articles(self, user_id: Optional[str] = None) -> int:
        return len(self._scoped(user_id))

    def count_completed_since(self, since: datetime, user_id: Optional[str] = None) -> int:
        return len([
            a for a in self._scoped(user_id)
            if a.status == ArticleStatus.COMPLETED and a.generated_at and a.generated_at >= since
        ])

    def get_topic(self, topic_id: str, user_id: Optional[str] = None) -> Optional[Topic]:
        topic = self.topics.get(topic_id)
        if topic is None or (user_id is not None and topic.user_id != user_id):
            return None
        return topic

    def find_calendar(self, topic_id: str, month: int, year: int) -> Optional[Calendar]:
        for calendar in self.calendars.values():
            if (calendar.topic_id, calendar.month, calendar.year) == (topic_id, month, year):
                return calendar
        return None

    def create_calendar(self, topic_id: str, user_id: str, month: int, year: int) -> Calendar:
        if any((c.topic_id, c.month, c.year) == (topic_id, month, year) for c in self.calendars.values()):
            raise DuplicateKeyError("calendars unique (topic_id, month, year)")
        calendar = Calendar(
            id=self._next_id("c"),
            topic_id=topic_id,
            user_id=user_id,
            month=month,
            year=year,
            created_at=datetime.now(timezone.utc),
        )
        self.calendars[calendar.id] = calendar
        return calendar

    def delete_calendar(self, calendar_id: str) -> None:
        self.calendars.pop(calendar_id, None)
        for article_id in [a.id for a in self.articles.values() if a.calendar_id == calendar_id]:
            del self.articles[article_id]
        self.writes.append(("delete_calendar", calendar_id))

    def _scoped(self, user_id: Optional[str]) -> List[Article]:
        return [a for a in self.articles.values() if user_id is None or a.user_id == user_id]


class StaticProducer(ContentProducer):
    """Offline producer returning a fixed body and recording requests."""

    producer_name = "static"
    requires_network = False

    def __init__(self, body: str = "Generated body text for the article.") -> None:
        self.body = body
        self.requests: List[GenerationRequest] = []

    async def produce(self, request: GenerationRequest) -> GeneratedContent:
        self.requests.append(request)
        return self.build_content(request, self.body)


class FailingProducer(ContentProducer):
    producer_name = "failing"
    requires_network = True

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error or RuntimeError("upstream unavailable")
        self.calls = 0

    async def produce(self, request: GenerationRequest) -> GeneratedContent:
        self.calls += 1
        raise self.error


class RecordingGenerator:
    """Generator double: fails for listed titles, succeeds otherwise."""

    def __init__(self, fail_titles: Iterable[str] = ()) -> None:
        self.fail_titles = set(fail_titles)
        self.requests: List[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> GeneratedContent:
        self.requests.append(request)
        if request.title in self.fail_titles:
            raise RuntimeError(f"producer failed for {request.title}")
        return GeneratedContent(
            title=request.title,
            content=f"Body for {request.title}",
            word_count=3,
            estimated_read_time=1,
            seo_keywords=[],
            producer="recording",
        )

    def get(self, name: str) -> Optional[ContentProducer]:
        return None
