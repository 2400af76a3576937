# -*- coding: utf-8 -*-
"""Meal — Pydantic models."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

CREATINE_FOOD_NAME = "creatine"
CREATINE_SERVING_GRAMS = 5.0


class MealCreateRequest(BaseModel):
    food_name: str = Field(..., max_length=200)
    weight: Optional[float] = Field(None, gt=0, description="Grams")
    protein_content: Optional[float] = Field(None, ge=0, description="Grams of protein")
    recognition_date: Optional[date] = Field(None, description="YYYY-MM-DD; defaults to today (UTC)")

    @field_validator("food_name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @property
    def is_creatine(self) -> bool:
        return self.food_name.lower() == CREATINE_FOOD_NAME


class Meal(BaseModel):
    id: int
    owner_id: str
    created_at: str
    recognition_date: str
    food_name: str
    weight: float
    protein_content: float
    is_creatine: bool = False


class MealsResponse(BaseModel):
    owner_id: str
    date: str
    count: int
    meals: List[Meal]


class MealDaySummary(BaseModel):
    owner_id: str
    date: str
    total_protein: float
    protein_goal: int
    latest_weight: Optional[float] = None
    creatine_taken: bool = False


class ProteinDay(BaseModel):
    date: str
    total: float


class ProteinWeekResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    owner_id: str
    start: str
    end: str
    date_range_text: str = Field(..., alias="dateRangeText")
    protein_goal: int = Field(..., alias="proteinGoal")
    protein_data: List[ProteinDay] = Field(..., alias="proteinData")
