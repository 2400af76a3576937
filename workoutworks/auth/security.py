# -*- coding: utf-8 -*-
"""Auth — sessions (HS256 JWT), password hashing and request helpers.

A session token travels either as ``Authorization: Bearer <token>`` or in the
HTTP-only ``ww_token`` cookie; the header wins when both are present.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import secrets
import time
from typing import Any, Dict, Optional, Tuple

from fastapi import Depends, HTTPException, Request

from ..config import settings
from .storage import get_user_by_id

SESSION_COOKIE = "ww_token"

_HASH_SCHEME = "pbkdf2_sha256"
_HASH_ROUNDS = 200_000
_SALT_BYTES = 16


def _b64e(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64d(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


def _derive(password: str, salt: bytes, rounds: int, alg: str = "sha256") -> bytes:
    return hashlib.pbkdf2_hmac(alg, password.encode("utf-8"), salt, rounds)


def hash_password(password: str) -> str:
    """``pbkdf2_<alg>$<rounds>$<salt>$<digest>``, salt and digest base64url."""
    salt = secrets.token_bytes(_SALT_BYTES)
    digest = _derive(password, salt, _HASH_ROUNDS)
    return "$".join((_HASH_SCHEME, str(_HASH_ROUNDS), _b64e(salt), _b64e(digest)))


def verify_password(password: str, stored: str) -> bool:
    parts = (stored or "").split("$")
    if len(parts) != 4 or not parts[0].startswith("pbkdf2_"):
        return False
    scheme, rounds, salt, digest = parts
    try:
        actual = _derive(password, _b64d(salt), int(rounds), scheme[len("pbkdf2_"):])
        expected = _b64d(digest)
    except (ValueError, TypeError):
        return False
    return hmac.compare_digest(actual, expected)


_JWT_HEADER = _b64e(json.dumps({"alg": "HS256", "typ": "JWT"}, separators=(",", ":")).encode("utf-8"))


def _sign(signing_input: str) -> bytes:
    return hmac.new(settings.jwt_secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256).digest()


def create_access_token(*, user_id: str, email: str) -> str:
    issued = int(time.time())
    claims = {
        "sub": user_id,
        "email": email,
        "iat": issued,
        "exp": issued + int(settings.token_ttl_days) * 24 * 60 * 60,
    }
    body = _b64e(json.dumps(claims, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))
    signing_input = f"{_JWT_HEADER}.{body}"
    return f"{signing_input}.{_b64e(_sign(signing_input))}"


def decode_token(token: str) -> Dict[str, Any]:
    """Verify signature and expiry; any defect is a 401."""
    signing_input, _, signature = token.rpartition(".")
    if signing_input.count(".") != 1:
        raise HTTPException(status_code=401, detail="Invalid token")
    try:
        if not hmac.compare_digest(_sign(signing_input), _b64d(signature)):
            raise ValueError("bad signature")
        claims = json.loads(_b64d(signing_input.split(".", 1)[1]))
        expires = int(claims["exp"])
    except (ValueError, KeyError, TypeError) as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc
    if expires < int(time.time()):
        raise HTTPException(status_code=401, detail="Token expired")
    return claims


def read_session_token(request: Request) -> Tuple[Optional[str], str]:
    """Return ``(token, transport)`` where transport is ``bearer`` or ``cookie``."""
    scheme, _, value = (request.headers.get("authorization") or "").partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip(), "bearer"
    return request.cookies.get(SESSION_COOKIE) or None, "cookie"


def track_auth_request(request: Request, source: str) -> None:
    tracker = getattr(request.app.state, "auth_tracker", None)
    if tracker is not None:
        tracker.track(source)


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    # The auth gate middleware may already have resolved the user.
    cached = getattr(request.state, "user", None)
    if cached:
        return cached

    token, transport = read_session_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    track_auth_request(request, f"{transport}:{request.url.path}")
    claims = decode_token(token)
    user_row = get_user_by_id(str(claims.get("sub") or ""))
    if not user_row:
        raise HTTPException(status_code=401, detail="User not found")

    request.state.user = user_row
    return user_row


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user
