# -*- coding: utf-8 -*-
"""Meal — DB storage helpers."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, List

from ..app_db import db_conn
from ..config import settings


class CreatineAlreadyLoggedError(ValueError):
    """A creatine entry already exists for this owner and day."""


def _now() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat(timespec="microseconds")


def _row_to_meal(row: Any) -> Dict[str, Any]:
    out = dict(row)
    out["is_creatine"] = bool(out.get("is_creatine"))
    return out


def list_meals(owner_id: str, day: date) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM meal WHERE owner_id = ? AND recognition_date = ? ORDER BY created_at DESC, id DESC",
            (owner_id, day.isoformat()),
        ).fetchall()
        return [_row_to_meal(r) for r in rows]


def list_meals_between(owner_id: str, start: date, end: date) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            """
            SELECT * FROM meal
            WHERE owner_id = ? AND recognition_date BETWEEN ? AND ?
            ORDER BY recognition_date ASC, created_at ASC
            """,
            (owner_id, start.isoformat(), end.isoformat()),
        ).fetchall()
        return [_row_to_meal(r) for r in rows]


def creatine_logged(owner_id: str, day: date) -> bool:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT 1 FROM meal WHERE owner_id = ? AND recognition_date = ? AND is_creatine = 1 LIMIT 1",
            (owner_id, day.isoformat()),
        ).fetchone()
        return row is not None


def ensure_creatine_not_logged(owner_id: str, day: date) -> None:
    # Read-then-write without a transaction: two concurrent submissions can both pass.
    if creatine_logged(owner_id, day):
        raise CreatineAlreadyLoggedError("Creatine has already been logged for today")


def insert_meal(
    owner_id: str,
    *,
    recognition_date: date,
    food_name: str,
    weight: float,
    protein_content: float,
    is_creatine: bool,
) -> Dict[str, Any]:
    now = _now()
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            """
            INSERT INTO meal (owner_id, created_at, recognition_date, food_name, weight, protein_content, is_creatine)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                owner_id,
                now,
                recognition_date.isoformat(),
                food_name,
                float(weight),
                float(protein_content),
                1 if is_creatine else 0,
            ),
        )
        row_id = cur.lastrowid
    return {
        "id": row_id,
        "owner_id": owner_id,
        "created_at": now,
        "recognition_date": recognition_date.isoformat(),
        "food_name": food_name,
        "weight": float(weight),
        "protein_content": float(protein_content),
        "is_creatine": bool(is_creatine),
    }
