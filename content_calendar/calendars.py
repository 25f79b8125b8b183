#!/usr/bin/env python3
"""
Calendar API routes.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from content_calendar.auth import require_user_id
from content_calendar.generation.calendar_builder import MIN_YEAR, MAX_YEAR

router = APIRouter(prefix="/api/v1/calendar", tags=["calendar"])


# --- Models ---

class GenerateCalendarRequest(BaseModel):
    topic_id: str
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)
    use_ai_titles: bool = False


# --- Endpoints ---

@router.post("/generate", status_code=201)
async def generate_calendar(body: GenerateCalendarRequest, request: Request,
                            user_id: str = Depends(require_user_id)):
    """Create a month of scheduled articles for one of the caller's topics."""
    builder = request.app.state.calendar_builder
    result = await builder.generate_calendar(
        user_id=user_id,
        topic_id=body.topic_id,
        month=body.month,
        year=body.year,
        use_ai_titles=body.use_ai_titles,
    )
    if result is None:
        raise HTTPException(status_code=404, detail="Topic not found")

    payload = {
        "message": "Calendar generated successfully" if result.created else "Calendar already exists",
        "calendar": result.model_dump(mode="json", exclude={"created"}),
    }
    if not result.created:
        return JSONResponse(status_code=200, content=payload)
    return payload
