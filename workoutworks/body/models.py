# -*- coding: utf-8 -*-
"""Body composition — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class MetricCreateRequest(BaseModel):
    skeletal_muscle_mass: float = Field(..., gt=0, description="kg")
    percent_body_fat: float = Field(..., ge=0, le=100)
    weight: Optional[float] = Field(None, gt=0, description="kg")


class Metric(BaseModel):
    id: int
    owner_id: str
    created_at: str
    weight: Optional[float] = None
    skeletal_muscle_mass: float
    percent_body_fat: float


class MetricsResponse(BaseModel):
    owner_id: str
    count: int
    metrics: List[Metric]


class GoalCreateRequest(BaseModel):
    skeletal_muscle_mass: float = Field(..., gt=0, description="kg")
    percent_body_fat: float = Field(..., ge=0, le=100)


class Goal(BaseModel):
    id: int
    owner_id: str
    created_at: str
    skeletal_muscle_mass: float
    percent_body_fat: float


class GoalDeltas(BaseModel):
    skeletal_muscle_mass: float
    percent_body_fat: float


class CompositionChartResponse(BaseModel):
    owner_id: str
    labels: List[str]
    skeletal_muscle_mass: List[float]
    percent_body_fat: List[float]
    skeletal_muscle_mass_trend: List[float]
    percent_body_fat_trend: List[float]
    goal: Optional[Goal] = None
    latest: Optional[Metric] = None
    deltas: Optional[GoalDeltas] = None
