from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.auth.config import get_current_user_id, require_auth
from api.errors import http_error
from models.enums import SummaryRange
from schemas.statistics import (
    DashboardOut,
    GoalProgressResult,
    MonthlyStatsOut,
    WeeklyStatsOut,
    WorkoutSummaryOut,
)
from services.statistics import BeanieRecordStore, StatisticsError, StatisticsService

router = APIRouter(prefix="/statistics", tags=["statistics"])


def get_statistics_service() -> StatisticsService:
    return StatisticsService(BeanieRecordStore())


@router.get("/weekly", response_model=WeeklyStatsOut)
async def weekly_stats(
    start_date: Optional[str] = Query(default=None, alias="startDate", description="YYYY-MM-DD"),
    end_date: Optional[str] = Query(default=None, alias="endDate", description="YYYY-MM-DD"),
    current_user_id=Depends(get_current_user_id),
    service: StatisticsService = Depends(get_statistics_service),
):
    user_id = require_auth(current_user_id)
    try:
        return await service.get_weekly_stats(user_id, start_date, end_date)
    except StatisticsError as exc:
        raise http_error(exc)


@router.get("/monthly", response_model=MonthlyStatsOut)
async def monthly_stats(
    month: Optional[int] = Query(default=None, description="1-12, defaults to the current month"),
    year: Optional[int] = Query(default=None),
    current_user_id=Depends(get_current_user_id),
    service: StatisticsService = Depends(get_statistics_service),
):
    user_id = require_auth(current_user_id)
    try:
        return await service.get_monthly_stats(user_id, month, year)
    except StatisticsError as exc:
        raise http_error(exc)


@router.get("/progress", response_model=GoalProgressResult)
async def goal_progress(
    current_user_id=Depends(get_current_user_id),
    service: StatisticsService = Depends(get_statistics_service),
):
    user_id = require_auth(current_user_id)
    try:
        return await service.get_goal_progress(user_id)
    except StatisticsError as exc:
        raise http_error(exc)


@router.get("/dashboard", response_model=DashboardOut)
async def dashboard(
    current_user_id=Depends(get_current_user_id),
    service: StatisticsService = Depends(get_statistics_service),
):
    user_id = require_auth(current_user_id)
    try:
        return await service.get_dashboard(user_id)
    except StatisticsError as exc:
        raise http_error(exc)


@router.get("/workouts/summary", response_model=WorkoutSummaryOut)
async def workout_summary(
    time_range: SummaryRange = Query(default=SummaryRange.month, alias="timeRange"),
    current_user_id=Depends(get_current_user_id),
    service: StatisticsService = Depends(get_statistics_service),
):
    user_id = require_auth(current_user_id)
    try:
        return await service.get_workout_summary(user_id, time_range)
    except StatisticsError as exc:
        raise http_error(exc)
