# -*- coding: utf-8 -*-
"""Auth — API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from ..config import settings
from ..members.storage import create_profile, get_profile, update_profile
from .models import (
    MIN_PASSWORD_LENGTH,
    AuthResponse,
    PasswordUpdateRequest,
    ProfileUpdateRequest,
    SignInRequest,
    SignUpRequest,
    UserPublic,
)
from .security import (
    SESSION_COOKIE,
    create_access_token,
    get_current_user,
    hash_password,
    track_auth_request,
    verify_password,
)
from .storage import create_user, get_user_by_email, record_sign_in, update_password_hash

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _user_public(row: Dict[str, Any]) -> UserPublic:
    profile = get_profile(row["id"]) or {}
    return UserPublic(
        id=row["id"],
        email=row["email"],
        created_at=row["created_at"],
        last_sign_in_at=row.get("last_sign_in_at"),
        display_name=profile.get("display_name"),
        avatar_url=profile.get("avatar_url"),
        is_approved=bool(profile.get("is_approved")),
    )


def _set_auth_cookie(resp: Response, token: str) -> None:
    max_age = int(settings.token_ttl_days) * 24 * 60 * 60
    resp.set_cookie(
        SESSION_COOKIE,
        token,
        httponly=True,
        secure=bool(settings.cookie_secure),
        samesite="lax",
        max_age=max_age,
        path="/",
    )


@router.post("/signup", response_model=AuthResponse, summary="Create an account")
def signup(payload: SignUpRequest, request: Request, response: Response):
    track_auth_request(request, "signup")
    if get_user_by_email(payload.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    user = create_user(email=payload.email, password_hash=hash_password(payload.password))
    create_profile(user["id"], display_name=(payload.display_name or "").strip() or None)
    user["last_sign_in_at"] = record_sign_in(user["id"])

    token = create_access_token(user_id=user["id"], email=user["email"])
    _set_auth_cookie(response, token)
    return AuthResponse(user=_user_public(user), token=token)


@router.post("/signin", response_model=AuthResponse, summary="Sign in with email and password")
def signin(payload: SignInRequest, request: Request, response: Response):
    track_auth_request(request, "signin")
    user = get_user_by_email(payload.email)
    if not user or not verify_password(payload.password, user["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    user["last_sign_in_at"] = record_sign_in(user["id"])
    token = create_access_token(user_id=user["id"], email=user["email"])
    _set_auth_cookie(response, token)
    return AuthResponse(user=_user_public(user), token=token)


@router.post("/signout", summary="Sign out")
def signout(response: Response):
    response.delete_cookie(SESSION_COOKIE, path="/")
    return {"status": "ok"}


@router.get("/me", response_model=UserPublic, summary="Get current user")
def me(user: dict = Depends(get_current_user)):
    return _user_public(user)


@router.put("/profile", response_model=UserPublic, summary="Update display name and avatar")
def put_profile(payload: ProfileUpdateRequest, user: dict = Depends(get_current_user)):
    if get_profile(user["id"]) is None:
        create_profile(user["id"])
    update_profile(
        user["id"],
        display_name=(payload.display_name or "").strip() or None,
        avatar_url=(payload.avatar_url or "").strip() or None,
    )
    return _user_public(user)


@router.put("/password", summary="Change password")
def put_password(payload: PasswordUpdateRequest, user: dict = Depends(get_current_user)):
    if len(payload.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )
    if payload.password != payload.confirm_password:
        raise HTTPException(status_code=400, detail="Passwords do not match")
    update_password_hash(user["id"], hash_password(payload.password))
    return {"status": "ok"}
