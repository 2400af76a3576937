# -*- coding: utf-8 -*-
"""Meal — API endpoints."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..access import resolve_viewed_owner
from ..aggregates import bucket_week, protein_goal, week_bounds, week_range_label
from ..auth.security import get_current_user
from ..body.storage import latest_weight
from ..config import settings
from .models import (
    CREATINE_FOOD_NAME,
    CREATINE_SERVING_GRAMS,
    Meal,
    MealCreateRequest,
    MealDaySummary,
    MealsResponse,
    ProteinDay,
    ProteinWeekResponse,
)
from .storage import (
    CreatineAlreadyLoggedError,
    ensure_creatine_not_logged,
    insert_meal,
    list_meals,
    list_meals_between,
)

router = APIRouter(prefix="/api/meals", tags=["Meal"])


def _today() -> date:
    return datetime.now(timezone.utc).date()


@router.get("", response_model=MealsResponse, summary="Meals logged for a day")
def get_meals(
    day: Optional[date] = Query(default=None, alias="date", description="YYYY-MM-DD; defaults to today"),
    user_id: Optional[str] = Query(default=None, description="Viewed member; defaults to self"),
    user: dict = Depends(get_current_user),
):
    owner = resolve_viewed_owner(user, user_id)
    target = day or _today()
    meals = [Meal.model_validate(m) for m in list_meals(owner, target)]
    return MealsResponse(owner_id=owner, date=target.isoformat(), count=len(meals), meals=meals)


@router.post("", response_model=Meal, summary="Log a meal (or the daily creatine dose)")
def post_meal(request: MealCreateRequest, user: dict = Depends(get_current_user)):
    target = request.recognition_date or _today()

    if request.is_creatine:
        try:
            ensure_creatine_not_logged(user["id"], target)
        except CreatineAlreadyLoggedError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        row = insert_meal(
            user["id"],
            recognition_date=target,
            food_name=CREATINE_FOOD_NAME,
            weight=CREATINE_SERVING_GRAMS,
            protein_content=0.0,
            is_creatine=True,
        )
        return Meal.model_validate(row)

    if not request.food_name or request.weight is None or request.protein_content is None:
        raise HTTPException(status_code=400, detail="Please fill in all fields")

    row = insert_meal(
        user["id"],
        recognition_date=target,
        food_name=request.food_name,
        weight=request.weight,
        protein_content=request.protein_content,
        is_creatine=False,
    )
    return Meal.model_validate(row)


@router.get("/summary", response_model=MealDaySummary, summary="Daily protein total, goal and creatine status")
def meal_summary(
    day: Optional[date] = Query(default=None, alias="date", description="YYYY-MM-DD; defaults to today"),
    user_id: Optional[str] = Query(default=None, description="Viewed member; defaults to self"),
    user: dict = Depends(get_current_user),
):
    owner = resolve_viewed_owner(user, user_id)
    target = day or _today()
    meals = list_meals(owner, target)
    weight = latest_weight(owner)
    return MealDaySummary(
        owner_id=owner,
        date=target.isoformat(),
        total_protein=round(sum(float(m["protein_content"]) for m in meals), 1),
        protein_goal=protein_goal(weight, fallback=settings.protein_goal_default),
        latest_weight=weight,
        creatine_taken=any(m["is_creatine"] for m in meals),
    )


@router.get("/protein-week", response_model=ProteinWeekResponse, summary="Weekly protein intake chart data")
def protein_week(
    day: Optional[date] = Query(default=None, alias="date", description="Any day of the wanted week"),
    user_id: Optional[str] = Query(default=None, description="Viewed member; defaults to self"),
    user: dict = Depends(get_current_user),
):
    owner = resolve_viewed_owner(user, user_id)
    target = day or _today()
    start, end = week_bounds(target)
    meals = list_meals_between(owner, start, end)
    buckets = bucket_week(target, ((m["recognition_date"], m["protein_content"]) for m in meals))
    return ProteinWeekResponse(
        owner_id=owner,
        start=start.isoformat(),
        end=end.isoformat(),
        date_range_text=week_range_label(target),
        protein_goal=protein_goal(latest_weight(owner), fallback=settings.protein_goal_default),
        protein_data=[ProteinDay(date=b.date.isoformat(), total=round(b.total, 1)) for b in buckets],
    )
