# -*- coding: utf-8 -*-
"""Derived metrics for charts: calendar buckets, trend lines and goal deltas.

Everything here works on already-fetched, in-memory records. Records are
``(when, value)`` pairs where ``when`` is a ``date``, a naive or aware
``datetime`` or an ISO8601 string; only its calendar-date part is used.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

Record = Tuple[Any, Optional[float]]

DEFAULT_PROTEIN_GOAL = 160


@dataclass(frozen=True)
class DayTotal:
    date: date
    total: float

    def as_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "total": self.total}


def as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # Most ISO8601 strings start with YYYY-MM-DD; the rest is the record's own clock.
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def week_start(day: date) -> date:
    # date.weekday() is Monday=0, so a Sunday maps back six days.
    return day - timedelta(days=day.weekday())


def week_bounds(day: date) -> Tuple[date, date]:
    start = week_start(day)
    return start, start + timedelta(days=6)


def week_days(day: date) -> List[date]:
    start = week_start(day)
    return [start + timedelta(days=i) for i in range(7)]


def shift_week(day: date, weeks: int) -> date:
    return day + timedelta(days=7 * int(weeks))


def week_range_label(day: date) -> str:
    start, end = week_bounds(day)
    return f"{start.strftime('%b')} {start.day} - {end.strftime('%b')} {end.day}, {end.year}"


def sum_by_day(start: Any, end: Any, records: Iterable[Record]) -> List[DayTotal]:
    """Sum record values per calendar day over ``[start, end]`` inclusive.

    Every day of the range is present (0 when nothing matched). Records whose
    date falls outside the range, or cannot be read as a date, are dropped.
    """
    s = as_date(start)
    e = as_date(end)
    if s is None or e is None or e < s:
        return []

    days = pd.date_range(s, e, freq="D")
    rows = []
    for when, value in records:
        d = as_date(when)
        if d is None or value is None:
            continue
        rows.append((pd.Timestamp(d), float(value)))

    if rows:
        frame = pd.DataFrame(rows, columns=["date", "value"])
        totals = frame.groupby("date")["value"].sum().reindex(days, fill_value=0.0)
    else:
        totals = pd.Series(0.0, index=days)

    return [DayTotal(date=ts.date(), total=float(total)) for ts, total in totals.items()]


def bucket_week(day: date, records: Iterable[Record]) -> List[DayTotal]:
    """Seven Monday..Sunday buckets for the week containing ``day``."""
    start, end = week_bounds(day)
    return sum_by_day(start, end, records)


def moving_average(values: Sequence[float], window: int = 3) -> List[float]:
    """Centered moving average, truncated (not padded) at both ends.

    ``out[i]`` is the mean of ``values[max(0, i - window//2) : i + window//2 + 1]``,
    so edge points average fewer samples than interior ones.
    """
    data = np.asarray(list(values), dtype=float)
    if data.size == 0:
        return []
    half = max(int(window), 0) // 2
    smoothed = pd.Series(data).rolling(window=2 * half + 1, center=True, min_periods=1).mean()
    return smoothed.to_numpy(dtype=float).tolist()


def protein_goal(weight: Optional[float], fallback: int = DEFAULT_PROTEIN_GOAL) -> int:
    """Daily protein target in grams: twice the latest body weight, rounded half up."""
    if not weight:
        return int(fallback)
    return int(math.floor(float(weight) * 2 + 0.5))


def goal_deltas(
    latest_metric: Optional[Mapping[str, Any]],
    latest_goal: Optional[Mapping[str, Any]],
) -> Optional[Dict[str, float]]:
    """Distance still to go towards the goal (positive = not reached yet)."""
    if not latest_metric or not latest_goal:
        return None
    return {
        "skeletal_muscle_mass": round(
            float(latest_goal["skeletal_muscle_mass"]) - float(latest_metric["skeletal_muscle_mass"]), 1
        ),
        "percent_body_fat": round(
            float(latest_metric["percent_body_fat"]) - float(latest_goal["percent_body_fat"]), 1
        ),
    }


def composition_series(metrics: Iterable[Mapping[str, Any]], window: int = 3) -> Dict[str, Any]:
    """Chronological body-composition series with their smoothed trend lines."""
    ordered = sorted(metrics, key=lambda m: str(m.get("created_at") or ""))
    muscle = [float(m["skeletal_muscle_mass"]) for m in ordered]
    fat = [float(m["percent_body_fat"]) for m in ordered]
    return {
        "labels": [(as_date(m.get("created_at")) or date.min).isoformat() for m in ordered],
        "skeletal_muscle_mass": muscle,
        "percent_body_fat": fat,
        "skeletal_muscle_mass_trend": moving_average(muscle, window),
        "percent_body_fat_trend": moving_average(fat, window),
    }
