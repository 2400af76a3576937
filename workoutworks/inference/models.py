# -*- coding: utf-8 -*-
"""Inference — Pydantic models (wire names follow the web client)."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProteinRequest(BaseModel):
    food: str = Field(..., min_length=1, max_length=200)
    weight: float = Field(..., gt=0, description="Grams")
    instruction: Optional[str] = Field(None, max_length=2000)


class ProteinResponse(BaseModel):
    protein: float


class VolumeRequest(BaseModel):
    content: str = Field("", max_length=5000, description="Free-form sets/reps/weight notes")
    instruction: Optional[str] = Field(None, max_length=2000)


class VolumeResponse(BaseModel):
    volume: int
    equation: str


class MuscleGroupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    exercise_name: str = Field("", alias="exerciseName", max_length=200)
    muscle_groups: List[str] = Field(default_factory=list, alias="muscleGroups")


class MuscleGroupResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    muscle_group: Optional[str] = Field(None, alias="muscleGroup")
