# -*- coding: utf-8 -*-
"""Drafts — in-progress form state, saved per owner and form."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..app_db import db_conn
from ..config import settings

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class Draft:
    """Handle on one saved form draft.

    ``restore`` never raises for a missing or corrupt draft: both come back
    as ``None`` so the form simply starts empty.
    """

    owner_id: str
    form: str

    def save(self, payload: Dict[str, Any]) -> str:
        saved_at = _utc_now()
        raw = json.dumps(payload, ensure_ascii=False)
        with db_conn(settings.app_db_path) as conn:
            conn.execute(
                """
                INSERT INTO drafts (owner_id, form, payload_json, saved_at) VALUES (?, ?, ?, ?)
                ON CONFLICT(owner_id, form) DO UPDATE SET payload_json = excluded.payload_json, saved_at = excluded.saved_at
                """,
                (self.owner_id, self.form, raw, saved_at),
            )
        return saved_at

    def restore(self) -> Optional[Dict[str, Any]]:
        with db_conn(settings.app_db_path) as conn:
            row = conn.execute(
                "SELECT payload_json FROM drafts WHERE owner_id = ? AND form = ?",
                (self.owner_id, self.form),
            ).fetchone()
        if not row:
            return None
        try:
            payload = json.loads(row["payload_json"])
        except json.JSONDecodeError as exc:
            logger.warning("discarding corrupt draft %s/%s: %s", self.owner_id, self.form, exc)
            return None
        if not isinstance(payload, dict):
            logger.warning("discarding non-object draft %s/%s", self.owner_id, self.form)
            return None
        return payload

    def clear(self) -> bool:
        with db_conn(settings.app_db_path) as conn:
            cur = conn.execute(
                "DELETE FROM drafts WHERE owner_id = ? AND form = ?",
                (self.owner_id, self.form),
            )
            return cur.rowcount > 0
