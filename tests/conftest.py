"""Shared fixtures."""

from datetime import datetime

import pytest

from content_calendar.generation.clock import Clock
from content_calendar.generation.orchestrator import GenerationOrchestrator

from fakes import FakeArticleStore, RecordingGenerator


@pytest.fixture
def clock() -> Clock:
    return Clock("Asia/Kolkata")


@pytest.fixture
def store() -> FakeArticleStore:
    return FakeArticleStore()


@pytest.fixture
def generator() -> RecordingGenerator:
    return RecordingGenerator()


@pytest.fixture
def orchestrator(store, generator, clock) -> GenerationOrchestrator:
    return GenerationOrchestrator(store, generator, clock, delay_seconds=0)


@pytest.fixture
def today_at_five(clock) -> datetime:
    now = clock.now()
    return clock.local_datetime(now.year, now.month, now.day, 17)
