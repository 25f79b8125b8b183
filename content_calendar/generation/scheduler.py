"""
Article Scheduler - fires the daily generation batch and weekly maintenance.

One instance is owned by the application (see content_calendar.app) and
passed its orchestrator; start() is idempotent and stop() only prevents
future firings, a batch already running is allowed to finish.
"""

import logging
from typing import Optional, Dict, Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from content_calendar.generation.clock import Clock
from content_calendar.generation.models import BatchResult
from content_calendar.generation.orchestrator import GenerationOrchestrator

logger = logging.getLogger(__name__)

MODE_PRODUCTION = "production"
MODE_DEVELOPMENT = "development"
MODE_DISABLED = "disabled"

DAILY_JOB_ID = "daily_article_generation"
WEEKLY_JOB_ID = "weekly_cleanup"

# Sundays 02:00 UTC
WEEKLY_CLEANUP_CRON = {"day_of_week": "sun", "hour": 2, "minute": 0}
DEVELOPMENT_INTERVAL_MINUTES = 5


class ArticleScheduler:
    def __init__(
        self,
        orchestrator: GenerationOrchestrator,
        clock: Clock,
        mode: str = MODE_PRODUCTION,
        daily_hour: int = 17,
        daily_minute: int = 0,
    ):
        if mode not in (MODE_PRODUCTION, MODE_DEVELOPMENT, MODE_DISABLED):
            raise ValueError(f"Unknown scheduler mode: {mode}")
        self.orchestrator = orchestrator
        self.clock = clock
        self.mode = mode
        self.daily_hour = daily_hour
        self.daily_minute = daily_minute
        self._scheduler: Optional[AsyncIOScheduler] = None

    @property
    def is_running(self) -> bool:
        return self._scheduler is not None

    @property
    def next_run_description(self) -> str:
        if self.mode == MODE_DEVELOPMENT:
            return f"Every {DEVELOPMENT_INTERVAL_MINUTES} minutes"
        if self.mode == MODE_DISABLED:
            return "Disabled"
        return f"Daily at {self.daily_hour:02d}:{self.daily_minute:02d} ({self.clock.timezone_name})"

    def start(self) -> bool:
        """Schedule the recurring jobs. Returns False when nothing was started."""
        if self.is_running:
            logger.info("Article scheduler is already running")
            return False
        if self.mode == MODE_DISABLED:
            logger.info("Article scheduler disabled, no jobs scheduled")
            return False

        logger.info("Starting article generation scheduler (%s mode)...", self.mode)
        scheduler = AsyncIOScheduler(timezone=self.clock.tz)

        if self.mode == MODE_DEVELOPMENT:
            generation_trigger = CronTrigger(minute=f"*/{DEVELOPMENT_INTERVAL_MINUTES}", timezone="UTC")
        else:
            generation_trigger = CronTrigger(hour=self.daily_hour, minute=self.daily_minute, timezone=self.clock.tz)

        scheduler.add_job(
            self._run_daily_job,
            generation_trigger,
            id=DAILY_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        scheduler.add_job(
            self._run_weekly_cleanup,
            CronTrigger(timezone="UTC", **WEEKLY_CLEANUP_CRON),
            id=WEEKLY_JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info("Article scheduler started: %s", self.next_run_description)
        return True

    def stop(self):
        if self._scheduler is None:
            return
        self._scheduler.remove_all_jobs()
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Article scheduler stopped")

    def job_ids(self):
        if self._scheduler is None:
            return []
        return [job.id for job in self._scheduler.get_jobs()]

    # --- Jobs ---

    async def _run_daily_job(self) -> Optional[BatchResult]:
        logger.info("Daily article generation job triggered")
        try:
            return await self.orchestrator.process_due_articles(self.clock.today())
        except Exception as e:
            logger.error("Error in daily article generation job: %s", e)
            return None

    async def _run_weekly_cleanup(self):
        logger.info("Performing weekly cleanup operations...")
        logger.info("Weekly cleanup completed")

    async def trigger_daily_job(self) -> Optional[BatchResult]:
        """Run the daily batch now, outside the schedule."""
        logger.info("Manually triggering daily article generation job")
        return await self._run_daily_job()

    # --- Status ---

    def get_job_status(self) -> Dict[str, Any]:
        status: Dict[str, Any] = {
            "scheduler_running": self.is_running,
            "mode": self.mode,
            "next_run": self.next_run_description,
            "timezone": self.clock.timezone_name,
            "last_batch": self.orchestrator.last_batch.model_dump(mode="json") if self.orchestrator.last_batch else None,
        }
        stats = self.orchestrator.get_generation_stats()
        if stats is None:
            status["statistics"] = None
            status["error"] = "Failed to fetch statistics"
        else:
            status["statistics"] = stats.model_dump()
        return status
