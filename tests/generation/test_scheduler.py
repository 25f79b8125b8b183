"""Tests for ArticleScheduler lifecycle and status reporting."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import PyMongoError

from content_calendar.generation.scheduler import (
    DAILY_JOB_ID,
    WEEKLY_JOB_ID,
    ArticleScheduler,
)


class TestLifecycle:
    def test_start_is_idempotent(self, orchestrator, clock):
        async def run():
            scheduler = ArticleScheduler(orchestrator, clock)
            try:
                assert scheduler.start() is True
                first_jobs = sorted(scheduler.job_ids())
                assert scheduler.start() is False
                return first_jobs, sorted(scheduler.job_ids())
            finally:
                scheduler.stop()

        first_jobs, second_jobs = asyncio.run(run())

        assert first_jobs == sorted([DAILY_JOB_ID, WEEKLY_JOB_ID])
        assert second_jobs == first_jobs

    def test_stop_clears_jobs(self, orchestrator, clock):
        async def run():
            scheduler = ArticleScheduler(orchestrator, clock, mode="development")
            scheduler.start()
            scheduler.stop()
            return scheduler

        scheduler = asyncio.run(run())

        assert scheduler.is_running is False
        assert scheduler.job_ids() == []

    def test_stop_when_not_started(self, orchestrator, clock):
        scheduler = ArticleScheduler(orchestrator, clock)
        scheduler.stop()
        assert scheduler.is_running is False

    def test_disabled_mode_schedules_nothing(self, orchestrator, clock):
        scheduler = ArticleScheduler(orchestrator, clock, mode="disabled")

        assert scheduler.start() is False
        assert scheduler.job_ids() == []
        assert scheduler.next_run_description == "Disabled"

    def test_unknown_mode(self, orchestrator, clock):
        with pytest.raises(ValueError):
            ArticleScheduler(orchestrator, clock, mode="hourly")


def _cron_fields(trigger):
    return {field.name: str(field) for field in trigger.fields}


def _job_triggers(orchestrator, clock, mode):
    async def run():
        scheduler = ArticleScheduler(orchestrator, clock, mode=mode)
        scheduler.start()
        try:
            return {job_id: scheduler._scheduler.get_job(job_id).trigger for job_id in (DAILY_JOB_ID, WEEKLY_JOB_ID)}
        finally:
            scheduler.stop()

    return asyncio.run(run())


class TestCronSchedules:
    def test_daily_job_at_local_publish_time(self, orchestrator, clock):
        trigger = _job_triggers(orchestrator, clock, "production")[DAILY_JOB_ID]

        fields = _cron_fields(trigger)
        assert (fields["hour"], fields["minute"]) == ("17", "0")
        assert fields["day_of_week"] == "*"
        assert str(trigger.timezone) == "Asia/Kolkata"

    def test_weekly_cleanup_sunday_two_utc(self, orchestrator, clock):
        trigger = _job_triggers(orchestrator, clock, "production")[WEEKLY_JOB_ID]

        fields = _cron_fields(trigger)
        assert (fields["day_of_week"], fields["hour"], fields["minute"]) == ("sun", "2", "0")
        assert str(trigger.timezone) == "UTC"

    def test_development_mode_every_five_minutes(self, orchestrator, clock):
        trigger = _job_triggers(orchestrator, clock, "development")[DAILY_JOB_ID]

        fields = _cron_fields(trigger)
        assert fields["minute"] == "*/5"
        assert fields["hour"] == "*"
        assert str(trigger.timezone) == "UTC"

    def test_custom_daily_time(self, orchestrator, clock):
        async def run():
            scheduler = ArticleScheduler(orchestrator, clock, daily_hour=6, daily_minute=30)
            scheduler.start()
            try:
                return scheduler._scheduler.get_job(DAILY_JOB_ID).trigger
            finally:
                scheduler.stop()

        fields = _cron_fields(asyncio.run(run()))
        assert (fields["hour"], fields["minute"]) == ("6", "30")


class TestTrigger:
    def test_runs_batch_for_today(self, orchestrator, clock, store, today_at_five):
        topic = store.add_topic()
        store.add_article(topic, today_at_five)
        scheduler = ArticleScheduler(orchestrator, clock, mode="disabled")

        result = asyncio.run(scheduler.trigger_daily_job())

        assert result.found == 1
        assert result.succeeded == 1
        assert result.reference_date == clock.today()

    def test_batch_errors_are_swallowed(self, clock):
        orchestrator = MagicMock()
        orchestrator.process_due_articles = AsyncMock(side_effect=RuntimeError("boom"))
        scheduler = ArticleScheduler(orchestrator, clock, mode="disabled")

        assert asyncio.run(scheduler.trigger_daily_job()) is None


class TestJobStatus:
    def test_reports_schedule_and_statistics(self, orchestrator, clock, store, today_at_five):
        topic = store.add_topic()
        store.add_article(topic, today_at_five)
        scheduler = ArticleScheduler(orchestrator, clock)

        status = scheduler.get_job_status()

        assert status["scheduler_running"] is False
        assert status["mode"] == "production"
        assert status["next_run"] == "Daily at 17:00 (Asia/Kolkata)"
        assert status["timezone"] == "Asia/Kolkata"
        assert status["last_batch"] is None
        assert status["statistics"] == {"total": 1, "by_status": {"SCHEDULED": 1}, "completed_today": 0}
        assert "error" not in status

    def test_includes_last_batch(self, orchestrator, clock):
        scheduler = ArticleScheduler(orchestrator, clock)
        asyncio.run(scheduler.trigger_daily_job())

        status = scheduler.get_job_status()

        assert status["last_batch"]["found"] == 0
        assert status["last_batch"]["reference_date"] == clock.today().isoformat()

    def test_statistics_unavailable(self, orchestrator, clock, store, monkeypatch):
        def broken(*args, **kwargs):
            raise PyMongoError("connection refused")

        monkeypatch.setattr(store, "count_articles", broken)
        scheduler = ArticleScheduler(orchestrator, clock)

        status = scheduler.get_job_status()

        assert status["statistics"] is None
        assert status["error"] == "Failed to fetch statistics"
        assert status["scheduler_running"] is False
