"""
AI insights endpoint.

Turns the dashboard's weather payload into a short natural-language
summary, or answers a free-form question about it.
"""
from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from app.schemas.weather import InsightRequest, InsightResponse
from app.services.insight_service import InsightService, get_insight_service

router = APIRouter()


@router.post("/weather-insights", response_model=InsightResponse)
async def weather_insights(
    request: InsightRequest,
    service: InsightService = Depends(get_insight_service),
):
    result = await run_in_threadpool(
        service.generate, request.weather_data, request.location, request.question
    )
    return InsightResponse(**result)
