"""
Domain models for the generation pipeline.

Article/Topic/Calendar mirror the MongoDB documents; GenerationRequest and
GeneratedContent are ephemeral and only live for one producer call.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional, List, Dict

from pydantic import BaseModel, Field


class ArticleStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    GENERATING = "GENERATING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class GenerationOutcome(str, Enum):
    """Result of one attempt to generate an article."""
    COMPLETED = "completed"
    FAILED = "failed"
    NOT_FOUND = "not_found"
    NOT_OWNED = "not_owned"
    INVALID_STATE = "invalid_state"
    IN_PROGRESS = "in_progress"

    @property
    def succeeded(self) -> bool:
        return self is GenerationOutcome.COMPLETED


class Topic(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    user_id: str


class Calendar(BaseModel):
    id: str
    topic_id: str
    user_id: str
    month: int
    year: int
    created_at: Optional[datetime] = None


class Article(BaseModel):
    id: str
    title: str
    content: Optional[str] = None
    status: ArticleStatus = ArticleStatus.SCHEDULED
    scheduled_date: datetime
    generated_at: Optional[datetime] = None
    user_id: str
    topic_id: str
    calendar_id: str
    last_error: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    EDUCATIONAL = "educational"
    PERSUASIVE = "persuasive"


class GenerationRequest(BaseModel):
    title: str
    topic: str
    target_word_count: int = Field(default=800, gt=0)
    tone: Tone = Tone.PROFESSIONAL
    include_headings: bool = True
    include_bullet_points: bool = True


class GeneratedContent(BaseModel):
    title: str
    content: str
    word_count: int
    estimated_read_time: int
    seo_keywords: List[str] = Field(default_factory=list)
    producer: str


class BatchResult(BaseModel):
    reference_date: date
    found: int = 0
    succeeded: int = 0
    failed: int = 0
    started_at: datetime
    finished_at: Optional[datetime] = None


class GenerationStats(BaseModel):
    total: int
    by_status: Dict[str, int] = Field(default_factory=dict)
    completed_today: int = 0
