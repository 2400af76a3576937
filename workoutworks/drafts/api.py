# -*- coding: utf-8 -*-
"""Drafts — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from ..auth.security import get_current_user
from .models import FORM_NAME_PATTERN, DraftResponse, DraftSaveRequest
from .storage import Draft

router = APIRouter(prefix="/api/drafts", tags=["Drafts"])


@router.get("/{form}", response_model=DraftResponse, summary="Restore a saved form draft")
def get_draft(form: str = Path(..., pattern=FORM_NAME_PATTERN), user: dict = Depends(get_current_user)):
    return DraftResponse(form=form, payload=Draft(owner_id=user["id"], form=form).restore())


@router.put("/{form}", response_model=DraftResponse, summary="Save a form draft")
def put_draft(
    request: DraftSaveRequest,
    form: str = Path(..., pattern=FORM_NAME_PATTERN),
    user: dict = Depends(get_current_user),
):
    saved_at = Draft(owner_id=user["id"], form=form).save(request.payload)
    return DraftResponse(form=form, payload=request.payload, saved_at=saved_at)


@router.delete("/{form}", summary="Discard a form draft")
def delete_draft(form: str = Path(..., pattern=FORM_NAME_PATTERN), user: dict = Depends(get_current_user)):
    cleared = Draft(owner_id=user["id"], form=form).clear()
    return {"status": "ok", "cleared": cleared}
