#!/usr/bin/env python3
"""
Article generation API routes.
Manual generation, generation statistics and scheduler control.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from content_calendar.auth import require_user_id

router = APIRouter(prefix="/api/v1/articles", tags=["articles"])
scheduler_router = APIRouter(prefix="/api/v1/scheduler", tags=["scheduler"])

MANUAL_GENERATION_FAILED = (
    "Failed to generate content. Article may not exist, already be generated, or be in progress."
)


@router.post("/{article_id}/generate")
async def generate_article_content(article_id: str, request: Request,
                                   user_id: str = Depends(require_user_id)):
    """Generate (or regenerate) one of the caller's articles now."""
    orchestrator = request.app.state.orchestrator
    outcome = await orchestrator.trigger_manual_generation(article_id, user_id)
    if not outcome.succeeded:
        raise HTTPException(status_code=400, detail=MANUAL_GENERATION_FAILED)
    return {"message": "Content generated successfully", "article_id": article_id}


@router.get("/stats")
async def get_generation_stats(request: Request, user_id: str = Depends(require_user_id)):
    stats = request.app.state.orchestrator.get_generation_stats(user_id)
    if stats is None:
        raise HTTPException(status_code=500, detail="Error fetching generation statistics")
    return {"message": "Generation statistics retrieved successfully", "statistics": stats.model_dump()}


@scheduler_router.get("/status")
async def get_scheduler_status(request: Request, user_id: str = Depends(require_user_id)):
    return request.app.state.scheduler.get_job_status()


@scheduler_router.post("/trigger")
async def trigger_daily_job(request: Request, user_id: str = Depends(require_user_id)):
    """Run today's generation batch immediately."""
    result = await request.app.state.scheduler.trigger_daily_job()
    if result is None:
        raise HTTPException(status_code=500, detail="Daily generation job failed")
    return result.model_dump(mode="json")
