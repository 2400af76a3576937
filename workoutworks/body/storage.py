# -*- coding: utf-8 -*-
"""Body composition — metric and goal storage (append-only)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..app_db import db_conn
from ..config import settings


def _now() -> str:
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat(timespec="microseconds")


def add_metric(
    owner_id: str,
    *,
    skeletal_muscle_mass: float,
    percent_body_fat: float,
    weight: Optional[float] = None,
    created_at: Optional[str] = None,
) -> Dict[str, Any]:
    ts = created_at or _now()
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            """
            INSERT INTO metric (owner_id, created_at, weight, skeletal_muscle_mass, percent_body_fat)
            VALUES (?, ?, ?, ?, ?)
            """,
            (owner_id, ts, weight, float(skeletal_muscle_mass), float(percent_body_fat)),
        )
        row_id = cur.lastrowid
    return {
        "id": row_id,
        "owner_id": owner_id,
        "created_at": ts,
        "weight": weight,
        "skeletal_muscle_mass": float(skeletal_muscle_mass),
        "percent_body_fat": float(percent_body_fat),
    }


def list_metrics(owner_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM metric WHERE owner_id = ? ORDER BY created_at ASC, id ASC",
            (owner_id,),
        ).fetchall()
        return [dict(r) for r in rows]


def latest_metric(owner_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT * FROM metric WHERE owner_id = ? ORDER BY created_at DESC, id DESC LIMIT 1",
            (owner_id,),
        ).fetchone()
        return dict(row) if row else None


def latest_weight(owner_id: str) -> Optional[float]:
    """Weight of the most recent metric row; ``None`` when that row has no weight."""
    metric = latest_metric(owner_id)
    if not metric or metric.get("weight") is None:
        return None
    return float(metric["weight"])


def add_goal(
    owner_id: str,
    *,
    skeletal_muscle_mass: float,
    percent_body_fat: float,
    created_at: Optional[str] = None,
) -> Dict[str, Any]:
    ts = created_at or _now()
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            "INSERT INTO goal (owner_id, created_at, skeletal_muscle_mass, percent_body_fat) VALUES (?, ?, ?, ?)",
            (owner_id, ts, float(skeletal_muscle_mass), float(percent_body_fat)),
        )
        row_id = cur.lastrowid
    return {
        "id": row_id,
        "owner_id": owner_id,
        "created_at": ts,
        "skeletal_muscle_mass": float(skeletal_muscle_mass),
        "percent_body_fat": float(percent_body_fat),
    }


def latest_goal(owner_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT * FROM goal WHERE owner_id = ? ORDER BY created_at DESC, id DESC LIMIT 1",
            (owner_id,),
        ).fetchone()
        return dict(row) if row else None
