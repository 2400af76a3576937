# -*- coding: utf-8 -*-
"""Drafts — Pydantic models."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

FORM_NAME_PATTERN = r"^[a-z][a-z0-9_-]{0,39}$"


class DraftSaveRequest(BaseModel):
    payload: Dict[str, Any] = Field(default_factory=dict)


class DraftResponse(BaseModel):
    form: str
    payload: Optional[Dict[str, Any]] = None
    saved_at: Optional[str] = None
