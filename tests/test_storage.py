# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from datetime import date
from pathlib import Path


class TestStorage(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="workoutworks-storage-"))
        data_root = cls._tmp / "data"
        os.environ["WW_DATA_ROOT"] = str(data_root)
        os.environ["WW_DB_PATH"] = str(data_root / "workoutworks.db")

        # Ensure settings reflect the env vars above.
        for name in list(sys.modules.keys()):
            if name.startswith("workoutworks."):
                sys.modules.pop(name, None)

        from workoutworks.app_db import init_app_db  # noqa: WPS433
        from workoutworks.config import settings  # noqa: WPS433

        cls.db_path = settings.app_db_path
        init_app_db(cls.db_path)

    @classmethod
    def tearDownClass(cls) -> None:
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def _new_user(self, email: str) -> str:
        from workoutworks.auth.storage import create_user  # noqa: WPS433
        from workoutworks.members.storage import create_profile  # noqa: WPS433

        user = create_user(email=email, password_hash="x")
        create_profile(user["id"])
        return user["id"]

    def test_draft_save_restore_clear(self) -> None:
        from workoutworks.drafts.storage import Draft  # noqa: WPS433

        owner = self._new_user("drafts@example.com")
        draft = Draft(owner_id=owner, form="meal")
        self.assertIsNone(draft.restore())

        draft.save({"food_name": "Oats", "weight": 80})
        draft.save({"food_name": "Oats", "weight": 90})
        self.assertEqual(draft.restore(), {"food_name": "Oats", "weight": 90})
        self.assertIsNone(Draft(owner_id=owner, form="exercise").restore())

        self.assertTrue(draft.clear())
        self.assertFalse(draft.clear())
        self.assertIsNone(draft.restore())

    def test_corrupt_draft_restores_as_none(self) -> None:
        from workoutworks.app_db import db_conn  # noqa: WPS433
        from workoutworks.drafts.storage import Draft  # noqa: WPS433

        owner = self._new_user("corrupt@example.com")
        with db_conn(self.db_path) as conn:
            conn.execute(
                "INSERT INTO drafts (owner_id, form, payload_json, saved_at) VALUES (?, ?, ?, ?)",
                (owner, "exercise", "{not json", "2025-01-06T00:00:00Z"),
            )
        with self.assertLogs("workoutworks.drafts.storage", level="WARNING"):
            self.assertIsNone(Draft(owner_id=owner, form="exercise").restore())

    def test_creatine_precheck_is_not_atomic(self) -> None:
        from workoutworks.meal.storage import (  # noqa: WPS433
            CreatineAlreadyLoggedError,
            ensure_creatine_not_logged,
            insert_meal,
            list_meals,
        )

        owner = self._new_user("creatine@example.com")
        day = date(2025, 1, 6)

        # Two submissions that both check before either writes.
        ensure_creatine_not_logged(owner, day)
        ensure_creatine_not_logged(owner, day)
        for _ in range(2):
            insert_meal(
                owner,
                recognition_date=day,
                food_name="creatine",
                weight=5.0,
                protein_content=0.0,
                is_creatine=True,
            )
        self.assertEqual(len([m for m in list_meals(owner, day) if m["is_creatine"]]), 2)

        with self.assertRaises(CreatineAlreadyLoggedError):
            ensure_creatine_not_logged(owner, day)

    def test_member_display_falls_back_to_generic_user(self) -> None:
        from workoutworks.members.storage import get_member_display, update_profile  # noqa: WPS433

        owner = self._new_user("display@example.com")
        self.assertEqual(get_member_display(owner)["display_name"], "User")
        update_profile(owner, display_name="Sam", avatar_url=None)
        self.assertEqual(get_member_display(owner)["display_name"], "Sam")

        unknown = get_member_display("missing-id")
        self.assertEqual(
            unknown,
            {"id": "missing-id", "display_name": "User", "avatar_url": None, "last_sign_in_at": None},
        )

    def test_records_are_listed_per_owner_and_range(self) -> None:
        from workoutworks.body.storage import add_metric, latest_weight  # noqa: WPS433
        from workoutworks.exercise.storage import insert_exercise, list_exercises  # noqa: WPS433

        owner = self._new_user("records@example.com")
        other = self._new_user("records-other@example.com")
        for ts in ("2025-01-05T23:00:00", "2025-01-06T09:00:00", "2025-01-12T21:00:00", "2025-01-13T06:00:00"):
            insert_exercise(
                owner,
                exercise_name="Squat",
                brand_name=None,
                is_freeweight=True,
                content="100k: 5, 5",
                total_volume=1000,
                target_muscle_group="legs",
                created_at=ts,
            )
        insert_exercise(
            other,
            exercise_name="Row",
            brand_name=None,
            is_freeweight=False,
            content="50k: 10",
            total_volume=500,
            target_muscle_group="back",
            created_at="2025-01-07T09:00:00",
        )
        week = list_exercises(owner, start=date(2025, 1, 6), end=date(2025, 1, 12))
        self.assertEqual([e["created_at"] for e in week], ["2025-01-06T09:00:00", "2025-01-12T21:00:00"])
        self.assertTrue(all(e["is_freeweight"] for e in week))

        add_metric(owner, skeletal_muscle_mass=30, percent_body_fat=20, weight=80, created_at="2025-01-01T00:00:00")
        add_metric(owner, skeletal_muscle_mass=31, percent_body_fat=19, created_at="2025-01-02T00:00:00")
        # Latest row carries no weight, so there is none to base a goal on.
        self.assertIsNone(latest_weight(owner))


if __name__ == "__main__":
    unittest.main()
