# -*- coding: utf-8 -*-
"""Capability checks for reading and mutating another member's records."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import HTTPException

from .members.storage import get_profile


def can_mutate(acting_user_id: str, target_owner_id: str) -> bool:
    """Only the owner may write to (or delete from) their own records."""
    return bool(acting_user_id) and acting_user_id == target_owner_id


def can_view(
    acting_user_id: str,
    target_owner_id: str,
    *,
    acting_approved: bool,
    target_approved: bool,
) -> bool:
    """Self is always visible; other members only between approved profiles."""
    if can_mutate(acting_user_id, target_owner_id):
        return True
    return bool(acting_approved and target_approved)


def resolve_viewed_owner(user: Dict[str, Any], requested_user_id: Optional[str]) -> str:
    """Pick the owner whose records a read request targets, or raise 403."""
    target = (requested_user_id or "").strip() or user["id"]
    if target == user["id"]:
        return target
    acting = get_profile(user["id"])
    viewed = get_profile(target)
    if viewed is None:
        raise HTTPException(status_code=404, detail="User not found")
    allowed = can_view(
        user["id"],
        target,
        acting_approved=bool(acting and acting["is_approved"]),
        target_approved=bool(viewed["is_approved"]),
    )
    if not allowed:
        raise HTTPException(status_code=403, detail="Forbidden")
    return target


def require_mutate(user: Dict[str, Any], target_owner_id: str) -> None:
    if not can_mutate(user["id"], target_owner_id):
        raise HTTPException(status_code=403, detail="Forbidden")
