# -*- coding: utf-8 -*-
"""Members — profile storage helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..app_db import db_conn
from ..config import settings


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _row_to_profile(row: Any) -> Dict[str, Any]:
    out = dict(row)
    out["is_approved"] = bool(out.get("is_approved"))
    return out


def create_profile(uid: str, *, display_name: Optional[str] = None, avatar_url: Optional[str] = None) -> None:
    now = _utc_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT OR IGNORE INTO profiles (uid, display_name, avatar_url, is_approved, created_at) VALUES (?, ?, ?, 0, ?)",
            (uid, display_name, avatar_url, now),
        )


def get_profile(uid: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM profiles WHERE uid = ?", (uid,)).fetchone()
        return _row_to_profile(row) if row else None


def update_profile(uid: str, *, display_name: Optional[str], avatar_url: Optional[str]) -> Optional[Dict[str, Any]]:
    # Whole-value overwrite of the profile metadata.
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "UPDATE profiles SET display_name = ?, avatar_url = ? WHERE uid = ?",
            (display_name, avatar_url, uid),
        )
    return get_profile(uid)


def set_approval(uid: str, approved: bool) -> None:
    with db_conn(settings.app_db_path) as conn:
        conn.execute("UPDATE profiles SET is_approved = ? WHERE uid = ?", (1 if approved else 0, uid))


def list_approved_profiles() -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM profiles WHERE is_approved = 1 ORDER BY created_at ASC"
        ).fetchall()
        return [_row_to_profile(r) for r in rows]


def get_member_display(uid: str) -> Dict[str, Any]:
    """Display info for a member, falling back to a generic 'User' card."""
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            """
            SELECT p.uid AS id, p.display_name, p.avatar_url, u.last_sign_in_at
            FROM profiles p LEFT JOIN users u ON u.id = p.uid
            WHERE p.uid = ?
            """,
            (uid,),
        ).fetchone()
    if not row:
        return {"id": uid, "display_name": "User", "avatar_url": None, "last_sign_in_at": None}
    data = dict(row)
    return {
        "id": data["id"],
        "display_name": data.get("display_name") or "User",
        "avatar_url": data.get("avatar_url") or None,
        "last_sign_in_at": data.get("last_sign_in_at"),
    }
