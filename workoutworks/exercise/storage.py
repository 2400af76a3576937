# -*- coding: utf-8 -*-
"""Exercise domain — DB storage helpers."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from ..app_db import db_conn
from ..config import settings


def _now() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat(timespec="microseconds")


def _row_to_exercise(row: Any) -> Dict[str, Any]:
    out = dict(row)
    out["is_freeweight"] = bool(out.get("is_freeweight"))
    return out


def insert_exercise(
    owner_id: str,
    *,
    exercise_name: str,
    brand_name: Optional[str],
    is_freeweight: bool,
    content: str,
    total_volume: Optional[float],
    target_muscle_group: Optional[str],
    created_at: Optional[str] = None,
) -> Dict[str, Any]:
    ts = created_at or _now()
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            """
            INSERT INTO exercise (
                owner_id, created_at, exercise_name, brand_name, is_freeweight,
                content, total_volume, target_muscle_group
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                owner_id,
                ts,
                exercise_name,
                brand_name,
                1 if is_freeweight else 0,
                content,
                total_volume,
                target_muscle_group,
            ),
        )
        row_id = cur.lastrowid
    return {
        "id": row_id,
        "owner_id": owner_id,
        "created_at": ts,
        "exercise_name": exercise_name,
        "brand_name": brand_name,
        "is_freeweight": bool(is_freeweight),
        "content": content,
        "total_volume": total_volume,
        "target_muscle_group": target_muscle_group,
    }


def get_exercise(exercise_id: int) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM exercise WHERE id = ?", (exercise_id,)).fetchone()
        return _row_to_exercise(row) if row else None


def list_exercises(
    owner_id: str,
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """Exercises ordered by creation time, optionally limited to calendar days ``[start, end]``."""
    query = "SELECT * FROM exercise WHERE owner_id = ?"
    params: List[Any] = [owner_id]
    if start is not None:
        query += " AND substr(created_at, 1, 10) >= ?"
        params.append(start.isoformat())
    if end is not None:
        query += " AND substr(created_at, 1, 10) <= ?"
        params.append(end.isoformat())
    query += " ORDER BY created_at ASC, id ASC"
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(query, params).fetchall()
        return [_row_to_exercise(r) for r in rows]


def delete_exercise(exercise_id: int) -> bool:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM exercise WHERE id = ?", (exercise_id,))
        return cur.rowcount > 0
