# -*- coding: utf-8 -*-
"""Body composition — API endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..access import resolve_viewed_owner
from ..aggregates import composition_series, goal_deltas
from ..auth.security import get_current_user
from .models import (
    CompositionChartResponse,
    Goal,
    GoalCreateRequest,
    Metric,
    MetricCreateRequest,
    MetricsResponse,
)
from .storage import add_goal, add_metric, latest_goal, latest_metric, list_metrics

router = APIRouter(prefix="/api", tags=["Body"])


@router.get("/metrics", response_model=MetricsResponse, summary="List body-composition metrics")
def get_metrics(
    user_id: Optional[str] = Query(default=None, description="Viewed member; defaults to self"),
    user: dict = Depends(get_current_user),
):
    owner = resolve_viewed_owner(user, user_id)
    metrics = [Metric.model_validate(m) for m in list_metrics(owner)]
    return MetricsResponse(owner_id=owner, count=len(metrics), metrics=metrics)


@router.post("/metrics", response_model=Metric, summary="Record a body-composition metric")
def post_metric(request: MetricCreateRequest, user: dict = Depends(get_current_user)):
    row = add_metric(
        user["id"],
        skeletal_muscle_mass=request.skeletal_muscle_mass,
        percent_body_fat=request.percent_body_fat,
        weight=request.weight,
    )
    return Metric.model_validate(row)


@router.get("/metrics/chart", response_model=CompositionChartResponse, summary="Composition series with trends")
def metrics_chart(
    user_id: Optional[str] = Query(default=None, description="Viewed member; defaults to self"),
    window: int = Query(default=3, ge=1, le=31, description="Moving-average window"),
    user: dict = Depends(get_current_user),
):
    owner = resolve_viewed_owner(user, user_id)
    series = composition_series(list_metrics(owner), window=window)
    latest = latest_metric(owner)
    goal = latest_goal(owner)
    return CompositionChartResponse(
        owner_id=owner,
        goal=Goal.model_validate(goal) if goal else None,
        latest=Metric.model_validate(latest) if latest else None,
        deltas=goal_deltas(latest, goal),
        **series,
    )


@router.post("/goals", response_model=Goal, summary="Record a new goal snapshot")
def post_goal(request: GoalCreateRequest, user: dict = Depends(get_current_user)):
    row = add_goal(
        user["id"],
        skeletal_muscle_mass=request.skeletal_muscle_mass,
        percent_body_fat=request.percent_body_fat,
    )
    return Goal.model_validate(row)


@router.get("/goals/latest", response_model=Goal, summary="Latest goal snapshot")
def get_latest_goal(
    user_id: Optional[str] = Query(default=None, description="Viewed member; defaults to self"),
    user: dict = Depends(get_current_user),
):
    owner = resolve_viewed_owner(user, user_id)
    goal = latest_goal(owner)
    if not goal:
        raise HTTPException(status_code=404, detail="No goal recorded")
    return Goal.model_validate(goal)
