# -*- coding: utf-8 -*-
"""Inference — estimation endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_user
from .client import InferenceError
from .estimation import NotAFoodError, estimate_protein, estimate_volume, predict_muscle_group
from .models import (
    MuscleGroupRequest,
    MuscleGroupResponse,
    ProteinRequest,
    ProteinResponse,
    VolumeRequest,
    VolumeResponse,
)
from .parsing import UnusableOutputError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Inference"])


@router.post("/calculate-protein", response_model=ProteinResponse, summary="Estimate protein content of a food")
def calculate_protein(request: ProteinRequest, user: dict = Depends(get_current_user)):  # noqa: ARG001
    try:
        protein = estimate_protein(request.food.strip(), request.weight, request.instruction)
    except NotAFoodError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UnusableOutputError as exc:
        logger.error("Error calculating protein content: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to calculate protein content") from exc
    except InferenceError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to calculate protein content: {exc}") from exc
    return ProteinResponse(protein=protein)


@router.post("/calculate-volume", response_model=VolumeResponse, summary="Estimate total workout volume")
def calculate_volume(request: VolumeRequest, user: dict = Depends(get_current_user)):  # noqa: ARG001
    if not request.content.strip():
        raise HTTPException(status_code=400, detail="Exercise details are required")
    try:
        estimate = estimate_volume(request.content, request.instruction)
    except UnusableOutputError as exc:
        logger.error("Error calculating total volume: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to calculate total volume") from exc
    except InferenceError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to calculate total volume: {exc}") from exc
    return VolumeResponse(volume=estimate.volume, equation=estimate.equation)


@router.post(
    "/predict-muscle-group",
    response_model=MuscleGroupResponse,
    summary="Predict the primary muscle group of an exercise",
)
def predict_muscle_group_endpoint(request: MuscleGroupRequest, user: dict = Depends(get_current_user)):  # noqa: ARG001
    if not request.exercise_name.strip():
        raise HTTPException(status_code=400, detail="Exercise name is required")
    if not [g for g in request.muscle_groups if g.strip()]:
        raise HTTPException(status_code=400, detail="Valid muscle groups array is required")
    try:
        label = predict_muscle_group(request.exercise_name.strip(), request.muscle_groups)
    except InferenceError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to predict muscle group: {exc}") from exc
    return MuscleGroupResponse(muscle_group=label)
