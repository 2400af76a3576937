# -*- coding: utf-8 -*-
"""App database (users/profiles/records/drafts) — SQLite helpers."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def init_app_db(db_path: Path) -> None:
    conn = connect(db_path)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                created_at TEXT NOT NULL,
                last_sign_in_at TEXT
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS profiles (
                uid TEXT PRIMARY KEY,
                display_name TEXT,
                avatar_url TEXT,
                is_approved INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL,
                FOREIGN KEY(uid) REFERENCES users(id) ON DELETE CASCADE
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS metric (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                owner_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                weight REAL,
                skeletal_muscle_mass REAL NOT NULL,
                percent_body_fat REAL NOT NULL,
                FOREIGN KEY(owner_id) REFERENCES users(id) ON DELETE CASCADE
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_metric_owner_created ON metric(owner_id, created_at DESC);"
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS goal (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                owner_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                skeletal_muscle_mass REAL NOT NULL,
                percent_body_fat REAL NOT NULL,
                FOREIGN KEY(owner_id) REFERENCES users(id) ON DELETE CASCADE
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_goal_owner_created ON goal(owner_id, created_at DESC);"
        )
        # No UNIQUE constraint on creatine per day: the check lives in meal.storage.
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS meal (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                owner_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                recognition_date TEXT NOT NULL,
                food_name TEXT NOT NULL,
                weight REAL NOT NULL,
                protein_content REAL NOT NULL,
                is_creatine INTEGER NOT NULL DEFAULT 0,
                FOREIGN KEY(owner_id) REFERENCES users(id) ON DELETE CASCADE
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_meal_owner_date ON meal(owner_id, recognition_date, created_at DESC);"
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS exercise (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                owner_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                exercise_name TEXT NOT NULL,
                brand_name TEXT,
                is_freeweight INTEGER NOT NULL DEFAULT 0,
                content TEXT NOT NULL,
                total_volume REAL,
                target_muscle_group TEXT,
                FOREIGN KEY(owner_id) REFERENCES users(id) ON DELETE CASCADE
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_exercise_owner_created ON exercise(owner_id, created_at ASC);"
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS drafts (
                owner_id TEXT NOT NULL,
                form TEXT NOT NULL,
                payload_json TEXT NOT NULL,
                saved_at TEXT NOT NULL,
                PRIMARY KEY (owner_id, form),
                FOREIGN KEY(owner_id) REFERENCES users(id) ON DELETE CASCADE
            );
            """
        )
        conn.commit()
    finally:
        conn.close()


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()
