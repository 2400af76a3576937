# -*- coding: utf-8 -*-
"""Exercise domain — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MUSCLE_GROUPS = (
    "chest",
    "back",
    "shoulders",
    "biceps",
    "triceps",
    "legs",
    "glutes",
    "core",
    "forearms",
    "calves",
    "cardio",
)


class ExerciseCreateRequest(BaseModel):
    exercise_name: str = Field(..., min_length=1, max_length=200)
    brand_name: Optional[str] = Field(None, max_length=200)
    is_freeweight: bool = False
    content: str = Field(..., min_length=1, max_length=5000, description="Sets/reps/weight notes, one line per set group")
    total_volume: Optional[float] = Field(None, ge=0, description="kg")
    target_muscle_group: Optional[str] = None
    estimate_volume: bool = Field(False, description="Ask the model for total_volume when it is missing")
    predict_muscle_group: bool = Field(False, description="Ask the model for target_muscle_group when it is missing")

    @field_validator("target_muscle_group", mode="before")
    @classmethod
    def _normalize_group(cls, value: object) -> object:
        if value is None:
            return None
        group = str(value).strip().lower()
        if not group:
            return None
        if group not in MUSCLE_GROUPS:
            raise ValueError(f"target_muscle_group must be one of: {', '.join(MUSCLE_GROUPS)}")
        return group


class Exercise(BaseModel):
    id: int
    owner_id: str
    created_at: str
    exercise_name: str
    brand_name: Optional[str] = None
    is_freeweight: bool = False
    content: str
    total_volume: Optional[float] = None
    target_muscle_group: Optional[str] = None


class ExerciseCreateResponse(BaseModel):
    exercise: Exercise
    equation: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)


class ExercisesResponse(BaseModel):
    owner_id: str
    count: int
    exercises: List[Exercise]


class VolumeDay(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    total: float = Field(0.0, ge=0)


class WorkoutVolumeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    volume_data: List[VolumeDay] = Field(..., alias="volumeData")


class VolumeWeekResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    owner_id: str
    start: str
    end: str
    date_range_text: str = Field(..., alias="dateRangeText")
    volume_data: List[VolumeDay] = Field(..., alias="volumeData")
