# -*- coding: utf-8 -*-
"""Exercise domain — API endpoints."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..access import require_mutate, resolve_viewed_owner
from ..aggregates import bucket_week, sum_by_day, week_bounds, week_range_label
from ..auth.security import get_current_user
from ..inference.client import InferenceError
from ..inference.estimation import estimate_volume, predict_muscle_group
from ..inference.parsing import UnusableOutputError
from .models import (
    MUSCLE_GROUPS,
    Exercise,
    ExerciseCreateRequest,
    ExerciseCreateResponse,
    ExercisesResponse,
    VolumeDay,
    VolumeWeekResponse,
    WorkoutVolumeResponse,
)
from .storage import delete_exercise, get_exercise, insert_exercise, list_exercises

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Exercise"])


def _parse_day_or_400(value: str, name: str) -> date:
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid {name}, expected YYYY-MM-DD") from exc


def _volume_records(owner: str, start: date, end: date):
    return [(e["created_at"], e["total_volume"]) for e in list_exercises(owner, start=start, end=end) if e["total_volume"]]


@router.get("/exercises", response_model=ExercisesResponse, summary="List exercises")
def get_exercises(
    start: Optional[date] = Query(default=None, description="YYYY-MM-DD"),
    end: Optional[date] = Query(default=None, description="YYYY-MM-DD"),
    user_id: Optional[str] = Query(default=None, description="Viewed member; defaults to self"),
    user: dict = Depends(get_current_user),
):
    owner = resolve_viewed_owner(user, user_id)
    exercises = [Exercise.model_validate(e) for e in list_exercises(owner, start=start, end=end)]
    return ExercisesResponse(owner_id=owner, count=len(exercises), exercises=exercises)


@router.get("/exercises/muscle-groups", response_model=List[str], summary="Muscle-group vocabulary")
def get_muscle_groups():
    return list(MUSCLE_GROUPS)


@router.post("/exercises", response_model=ExerciseCreateResponse, summary="Log an exercise")
def post_exercise(request: ExerciseCreateRequest, user: dict = Depends(get_current_user)):
    total_volume = request.total_volume
    muscle_group = request.target_muscle_group
    equation: Optional[str] = None
    warnings: List[str] = []

    if total_volume is None and request.estimate_volume:
        try:
            estimate = estimate_volume(request.content)
        except UnusableOutputError as exc:
            raise HTTPException(status_code=500, detail="Failed to calculate total volume") from exc
        except InferenceError as exc:
            raise HTTPException(status_code=502, detail=f"Failed to calculate total volume: {exc}") from exc
        total_volume = float(estimate.volume)
        equation = estimate.equation

    if muscle_group is None and request.predict_muscle_group:
        try:
            muscle_group = predict_muscle_group(request.exercise_name, MUSCLE_GROUPS)
        except InferenceError as exc:
            # The label is optional; the exercise is still saved without one.
            logger.warning("muscle group prediction failed for %r: %s", request.exercise_name, exc)
        if muscle_group is None:
            warnings.append("Muscle group could not be predicted")

    row = insert_exercise(
        user["id"],
        exercise_name=request.exercise_name.strip(),
        brand_name=(request.brand_name or "").strip() or None,
        is_freeweight=request.is_freeweight,
        content=request.content,
        total_volume=total_volume,
        target_muscle_group=muscle_group,
    )
    return ExerciseCreateResponse(exercise=Exercise.model_validate(row), equation=equation, warnings=warnings)


@router.delete("/exercises/{exercise_id}", summary="Delete an exercise (owner only)")
def remove_exercise(exercise_id: int, user: dict = Depends(get_current_user)):
    row = get_exercise(exercise_id)
    if not row:
        raise HTTPException(status_code=404, detail="Exercise not found")
    require_mutate(user, row["owner_id"])
    delete_exercise(exercise_id)
    return {"status": "ok"}


@router.get("/workout-volume", response_model=WorkoutVolumeResponse, summary="Daily workout volume totals")
def workout_volume(
    user_id: str = Query("", alias="userId"),
    start_date: str = Query("", alias="startDate"),
    end_date: str = Query("", alias="endDate"),
    user: dict = Depends(get_current_user),
):
    if not user_id.strip() or not start_date.strip() or not end_date.strip():
        raise HTTPException(status_code=400, detail="Missing required parameters: userId, startDate, endDate")
    start = _parse_day_or_400(start_date, "startDate")
    end = _parse_day_or_400(end_date, "endDate")
    if end < start:
        raise HTTPException(status_code=400, detail="endDate must not be before startDate")

    owner = resolve_viewed_owner(user, user_id)
    days = sum_by_day(start, end, _volume_records(owner, start, end))
    return WorkoutVolumeResponse(volume_data=[VolumeDay(date=d.date.isoformat(), total=d.total) for d in days])


@router.get("/exercises/volume-week", response_model=VolumeWeekResponse, summary="Weekly workout volume chart data")
def volume_week(
    day: Optional[date] = Query(default=None, alias="date", description="Any day of the wanted week"),
    user_id: Optional[str] = Query(default=None, description="Viewed member; defaults to self"),
    user: dict = Depends(get_current_user),
):
    owner = resolve_viewed_owner(user, user_id)
    target = day or datetime.now(timezone.utc).date()
    start, end = week_bounds(target)
    buckets = bucket_week(target, _volume_records(owner, start, end))
    return VolumeWeekResponse(
        owner_id=owner,
        start=start.isoformat(),
        end=end.isoformat(),
        date_range_text=week_range_label(target),
        volume_data=[VolumeDay(date=b.date.isoformat(), total=b.total) for b in buckets],
    )
