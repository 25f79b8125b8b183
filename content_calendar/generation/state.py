"""
Persistent state for topics, calendars and articles.

Wraps the MongoDB collections the generation pipeline reads and writes.
Status changes that must not race (claiming an article for generation) are
single find_one_and_update calls filtered on the expected status.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any, List, Iterable

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument, ASCENDING
from pymongo.database import Database

from content_calendar.generation.models import Article, ArticleStatus, Calendar, Topic


def _object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _article_helper(doc) -> Optional[Article]:
    """Convert MongoDB article doc to an Article."""
    if not doc:
        return None
    return Article(
        id=str(doc["_id"]),
        title=doc.get("title", ""),
        content=doc.get("content"),
        status=doc.get("status", ArticleStatus.SCHEDULED.value),
        scheduled_date=doc["scheduled_date"],
        generated_at=doc.get("generated_at"),
        user_id=doc.get("user_id"),
        topic_id=doc.get("topic_id"),
        calendar_id=doc.get("calendar_id"),
        last_error=doc.get("last_error"),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def _topic_helper(doc) -> Optional[Topic]:
    if not doc:
        return None
    return Topic(
        id=str(doc["_id"]),
        title=doc.get("title", ""),
        description=doc.get("description"),
        user_id=doc.get("user_id"),
    )


def _calendar_helper(doc) -> Optional[Calendar]:
    if not doc:
        return None
    return Calendar(
        id=str(doc["_id"]),
        topic_id=doc.get("topic_id"),
        user_id=doc.get("user_id"),
        month=doc.get("month"),
        year=doc.get("year"),
        created_at=doc.get("created_at"),
    )


def _scope(user_id: Optional[str]) -> Dict[str, Any]:
    """Stats filter; a falsy user id counts every user."""
    return {"user_id": user_id} if user_id else {}


class ArticleStore:
    """MongoDB-backed store for the generation pipeline."""

    def __init__(self, db: Database):
        self.db = db

    # --- Articles ---

    def get_article(self, article_id: str) -> Optional[Article]:
        oid = _object_id(article_id)
        if oid is None:
            return None
        return _article_helper(self.db.articles.find_one({"_id": oid}))

    def find_due_article_ids(self, start: datetime, end: datetime) -> List[str]:
        """Ids of SCHEDULED articles with start <= scheduled_date < end."""
        cursor = self.db.articles.find(
            {
                "status": ArticleStatus.SCHEDULED.value,
                "scheduled_date": {"$gte": start, "$lt": end},
            },
            {"_id": 1},
        ).sort("scheduled_date", ASCENDING)
        return [str(doc["_id"]) for doc in cursor]

    def claim_article(
        self,
        article_id: str,
        from_statuses: Iterable[ArticleStatus],
        user_id: Optional[str] = None,
    ) -> Optional[Article]:
        """
        Atomically move an article into GENERATING.

        Matches only when the article is currently in one of `from_statuses`
        (and owned by `user_id` when given). Returns the updated article, or
        None when nothing matched; in that case nothing was written.
        """
        oid = _object_id(article_id)
        if oid is None:
            return None
        query: Dict[str, Any] = {
            "_id": oid,
            "status": {"$in": [ArticleStatus(s).value for s in from_statuses]},
        }
        if user_id is not None:
            query["user_id"] = user_id
        doc = self.db.articles.find_one_and_update(
            query,
            {"$set": {"status": ArticleStatus.GENERATING.value, "updated_at": _utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return _article_helper(doc)

    def mark_completed(self, article_id: str, content: str, generated_at: datetime) -> bool:
        result = self.db.articles.update_one(
            {"_id": ObjectId(article_id), "status": ArticleStatus.GENERATING.value},
            {"$set": {
                "content": content,
                "status": ArticleStatus.COMPLETED.value,
                "generated_at": generated_at,
                "last_error": None,
                "updated_at": _utcnow(),
            }},
        )
        return result.modified_count == 1

    def mark_failed(self, article_id: str, error: str = None) -> bool:
        """Record FAILED; existing content is left untouched."""
        result = self.db.articles.update_one(
            {"_id": ObjectId(article_id), "status": ArticleStatus.GENERATING.value},
            {"$set": {
                "status": ArticleStatus.FAILED.value,
                "last_error": error,
                "updated_at": _utcnow(),
            }},
        )
        return result.modified_count == 1

    def create_articles(self, articles: List[Dict[str, Any]]) -> int:
        if not articles:
            return 0
        now = _utcnow()
        docs = [{**a, "created_at": now, "updated_at": now} for a in articles]
        result = self.db.articles.insert_many(docs)
        return len(result.inserted_ids)

    def list_calendar_articles(self, calendar_id: str) -> List[Article]:
        cursor = self.db.articles.find({"calendar_id": calendar_id}).sort("scheduled_date", ASCENDING)
        return [_article_helper(doc) for doc in cursor]

    # --- Stats ---

    def count_by_status(self, user_id: Optional[str] = None) -> Dict[str, int]:
        pipeline = [
            {"$match": _scope(user_id)},
            {"$group": {"_id": "$status", "count": {"$sum": 1}}},
        ]
        return {row["_id"]: row["count"] for row in self.db.articles.aggregate(pipeline)}

    def count_articles(self, user_id: Optional[str] = None) -> int:
        return self.db.articles.count_documents(_scope(user_id))

    def count_completed_since(self, since: datetime, user_id: Optional[str] = None) -> int:
        query = {
            "status": ArticleStatus.COMPLETED.value,
            "generated_at": {"$gte": since},
        }
        query.update(_scope(user_id))
        return self.db.articles.count_documents(query)

    # --- Topics / Calendars ---

    def get_topic(self, topic_id: str, user_id: Optional[str] = None) -> Optional[Topic]:
        oid = _object_id(topic_id)
        if oid is None:
            return None
        query: Dict[str, Any] = {"_id": oid}
        if user_id is not None:
            query["user_id"] = user_id
        return _topic_helper(self.db.topics.find_one(query))

    def find_calendar(self, topic_id: str, month: int, year: int) -> Optional[Calendar]:
        return _calendar_helper(self.db.calendars.find_one({
            "topic_id": topic_id,
            "month": month,
            "year": year,
        }))

    def create_calendar(self, topic_id: str, user_id: str, month: int, year: int) -> Calendar:
        doc = {
            "topic_id": topic_id,
            "user_id": user_id,
            "month": month,
            "year": year,
            "created_at": _utcnow(),
        }
        result = self.db.calendars.insert_one(doc)
        doc["_id"] = result.inserted_id
        return _calendar_helper(doc)

    def delete_calendar(self, calendar_id: str):
        """Remove a calendar and any articles already inserted for it."""
        self.db.articles.delete_many({"calendar_id": calendar_id})
        oid = _object_id(calendar_id)
        if oid is not None:
            self.db.calendars.delete_one({"_id": oid})
