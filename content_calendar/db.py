#!/usr/bin/env python3
"""
MongoDB connection and index setup.
"""

from pymongo import MongoClient, ASCENDING
from pymongo.database import Database

from content_calendar.config import MONGODB_URI, MONGODB_DB_NAME


def get_database(uri: str = MONGODB_URI, name: str = MONGODB_DB_NAME) -> Database:
    """Open a client and return the application database (datetimes come back tz-aware)."""
    client = MongoClient(uri, tz_aware=True)
    return client[name]


def ensure_indexes(db: Database):
    db.articles.create_index([("status", ASCENDING), ("scheduled_date", ASCENDING)])
    db.articles.create_index([("user_id", ASCENDING), ("status", ASCENDING)])
    db.articles.create_index("calendar_id")
    db.topics.create_index("user_id")
    db.calendars.create_index(
        [("topic_id", ASCENDING), ("month", ASCENDING), ("year", ASCENDING)],
        unique=True,
    )
