# -*- coding: utf-8 -*-
"""Members — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class MemberDisplay(BaseModel):
    id: str
    display_name: str = "User"
    avatar_url: Optional[str] = None
    last_sign_in_at: Optional[str] = None


class ApprovedMember(BaseModel):
    id: str
    display_name: str = "User"
    avatar_url: Optional[str] = None
    is_approved: bool = True


class ApprovedMembersResponse(BaseModel):
    count: int
    members: List[ApprovedMember]
