# -*- coding: utf-8 -*-
"""Auth — Pydantic models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

MIN_PASSWORD_LENGTH = 6


class SignUpRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)
    display_name: Optional[str] = Field(None, max_length=80)


class SignInRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class ProfileUpdateRequest(BaseModel):
    display_name: Optional[str] = Field(None, max_length=80)
    avatar_url: Optional[str] = Field(None, max_length=2048)


class PasswordUpdateRequest(BaseModel):
    # Length and confirmation are checked in the endpoint so the client gets a 400 with a message.
    password: str = Field(..., max_length=128)
    confirm_password: str = Field(..., max_length=128)


class UserPublic(BaseModel):
    id: str
    email: str
    created_at: str
    last_sign_in_at: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    is_approved: bool = False


class AuthResponse(BaseModel):
    user: UserPublic
    token: str
