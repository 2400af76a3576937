# -*- coding: utf-8 -*-
"""
Workout Works API

Body composition, meal and exercise logging with LLM-assisted estimation.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from .app_db import init_app_db
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .body.api import router as body_router
from .config import settings
from .drafts.api import router as drafts_router
from .exercise.api import router as exercise_router
from .inference.api import router as inference_router
from .meal.api import router as meal_router
from .members.api import router as members_router
from .telemetry import AuthRequestTracker

logger = logging.getLogger(__name__)

SIGNIN_PATH = "/auth/signin"

_AUTH_EXEMPT_PREFIXES = (
    "/api/auth/signin",
    "/api/auth/signup",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)

PUBLIC_PAGES = frozenset({"/", SIGNIN_PATH, "/auth/signup", "/auth/callback", "/lab"})


def _is_exempt_api(path: str) -> bool:
    return path == "/api/health" or any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES)


def _new_auth_tracker() -> AuthRequestTracker:
    return AuthRequestTracker(
        window_sec=settings.auth_burst_window_sec,
        burst_threshold=settings.auth_burst_threshold,
        history_size=settings.auth_history_size,
    )


def create_app() -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Workout Works",
        description="Body metrics, meals and workouts with protein and volume estimation",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Ensure the DB and tracker exist even when lifespan events are not triggered (e.g. some test clients).
    init_app_db(settings.app_db_path)
    app.state.auth_tracker = _new_auth_tracker()

    @app.on_event("startup")
    def _startup() -> None:
        init_app_db(settings.app_db_path)
        if getattr(app.state, "auth_tracker", None) is None:
            app.state.auth_tracker = _new_auth_tracker()
        logger.info("workoutworks started (db=%s)", settings.app_db_path)

    @app.on_event("shutdown")
    def _shutdown() -> None:
        tracker = getattr(app.state, "auth_tracker", None)
        if tracker is not None:
            stats = tracker.stats()
            logger.info("auth requests this session: %d", stats.total)
        app.state.auth_tracker = None

    @app.middleware("http")
    async def _auth_gate(request: Request, call_next):
        path = request.url.path
        if request.method == "OPTIONS":
            return await call_next(request)
        if path.startswith("/api"):
            if not _is_exempt_api(path):
                try:
                    request.state.user = get_current_user_from_request(request)
                except HTTPException as exc:
                    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
        elif path not in PUBLIC_PAGES:
            try:
                request.state.user = get_current_user_from_request(request)
            except HTTPException:
                return RedirectResponse(url=SIGNIN_PATH, status_code=307)
        return await call_next(request)

    app.include_router(auth_router)
    app.include_router(body_router)
    app.include_router(meal_router)
    app.include_router(exercise_router)
    app.include_router(inference_router)
    app.include_router(members_router)
    app.include_router(drafts_router)

    @app.get("/api/health")
    def health_check():
        return {
            "ok": True,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/", include_in_schema=False)
    def root():
        return {"message": "Workout Works API", "docs": "/api/docs"}

    return app


app = create_app()


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    host = os.environ.get("WW_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("WW_PORT") or os.environ.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("workoutworks.api:app", host=host, port=port, reload=False)
