#!/usr/bin/env python3
"""
FastAPI application for the content calendar service
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from content_calendar import config
from content_calendar.articles import router as articles_router, scheduler_router
from content_calendar.calendars import router as calendars_router
from content_calendar.generation.calendar_builder import CalendarBuilder
from content_calendar.generation.clock import Clock
from content_calendar.generation.generator import ContentGenerator, build_default_generator
from content_calendar.generation.orchestrator import GenerationOrchestrator
from content_calendar.generation.scheduler import ArticleScheduler
from content_calendar.generation.state import ArticleStore

logger = logging.getLogger(__name__)


def create_app(
    store: Optional[ArticleStore] = None,
    generator: Optional[ContentGenerator] = None,
    clock: Optional[Clock] = None,
    scheduler_mode: Optional[str] = None,
    delay_seconds: Optional[float] = None,
) -> FastAPI:
    """Build the app; collaborators not passed in are created from config at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        config.configure_logging()
        app_store = store
        if app_store is None:
            from content_calendar.db import get_database, ensure_indexes
            db = get_database()
            ensure_indexes(db)
            app_store = ArticleStore(db)

        app_clock = clock or Clock(config.SCHEDULER_TIMEZONE)
        app_generator = generator or build_default_generator()
        orchestrator = GenerationOrchestrator(
            app_store,
            app_generator,
            app_clock,
            delay_seconds=config.GENERATION_DELAY_SECONDS if delay_seconds is None else delay_seconds,
        )
        scheduler = ArticleScheduler(
            orchestrator,
            app_clock,
            mode=scheduler_mode or config.SCHEDULER_MODE,
            daily_hour=config.DAILY_GENERATION_HOUR,
            daily_minute=config.DAILY_GENERATION_MINUTE,
        )

        app.state.orchestrator = orchestrator
        app.state.scheduler = scheduler
        app.state.calendar_builder = CalendarBuilder(
            app_store,
            app_clock,
            title_source=app_generator.get("gemini"),
            publish_hour=config.ARTICLE_PUBLISH_HOUR,
        )

        scheduler.start()
        try:
            yield
        finally:
            scheduler.stop()

    app = FastAPI(title="Content Calendar API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(articles_router)
    app.include_router(scheduler_router)
    app.include_router(calendars_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
