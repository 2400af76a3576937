# -*- coding: utf-8 -*-
"""Members — directory of approved users and display cards."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from .models import ApprovedMember, ApprovedMembersResponse, MemberDisplay
from .storage import get_member_display, get_profile, list_approved_profiles

router = APIRouter(prefix="/api", tags=["Members"])


@router.get("/members", response_model=ApprovedMembersResponse, summary="List approved members")
def approved_members(user: dict = Depends(get_current_user)):
    me = get_profile(user["id"])
    # Unapproved members don't get to browse the directory.
    if not me or not me["is_approved"]:
        return ApprovedMembersResponse(count=0, members=[])
    members = [
        ApprovedMember(
            id=p["uid"],
            display_name=p.get("display_name") or "User",
            avatar_url=p.get("avatar_url"),
            is_approved=True,
        )
        for p in list_approved_profiles()
    ]
    return ApprovedMembersResponse(count=len(members), members=members)


@router.get("/get-user", response_model=MemberDisplay, summary="Display info for a user")
def get_user(
    user_id: str = Query("", alias="userId"),
    user: dict = Depends(get_current_user),  # noqa: ARG001
):
    if not user_id.strip():
        raise HTTPException(status_code=400, detail="User ID is required")
    return MemberDisplay.model_validate(get_member_display(user_id.strip()))
