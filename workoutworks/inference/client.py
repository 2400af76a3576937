# -*- coding: utf-8 -*-
"""Inference — OpenAI-compatible chat completion calls."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

import httpx

from ..config import settings

logger = logging.getLogger(__name__)


class InferenceError(RuntimeError):
    """The text-generation endpoint could not produce a response."""


@dataclass(frozen=True)
class LLMSettings:
    base_url: str
    api_key: str
    model: str
    timeout: float
    max_tokens: int


def resolve_llm_settings() -> LLMSettings:
    if not settings.llm_api_key:
        raise InferenceError("LLM_API_KEY not set")
    return LLMSettings(
        base_url=settings.llm_base_url,
        api_key=settings.llm_api_key,
        model=settings.llm_model,
        timeout=settings.llm_timeout,
        max_tokens=settings.llm_max_tokens,
    )


def _completions_url(base_url: str) -> str:
    base = base_url.rstrip("/")
    if base.endswith("/chat/completions"):
        return base
    return f"{base}/chat/completions"


def _first_choice_content(data: object) -> str:
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if isinstance(message, dict):
        content = message.get("content")
        if isinstance(content, str):
            return content
    text = first.get("text")
    return text if isinstance(text, str) else ""


def complete(system: str, user: str, *, temperature: float | None = None) -> str:
    """Send one system + user exchange and return the trimmed reply text."""
    cfg = resolve_llm_settings()
    messages: List[Dict[str, str]] = [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]
    payload: Dict[str, Any] = {
        "model": cfg.model,
        "messages": messages,
        "max_tokens": cfg.max_tokens,
    }
    if temperature is not None:
        payload["temperature"] = temperature

    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {cfg.api_key}",
    }
    try:
        with httpx.Client(timeout=cfg.timeout, follow_redirects=True) as client:
            resp = client.post(_completions_url(cfg.base_url), headers=headers, json=payload)
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPStatusError as exc:
        logger.error("LLM API error: %s", exc)
        raise InferenceError(f"LLM API error: {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        logger.error("LLM API unreachable: %s", exc)
        raise InferenceError(f"LLM API unreachable: {exc}") from exc
    except ValueError as exc:
        logger.error("LLM API returned non-JSON body: %s", exc)
        raise InferenceError("LLM API returned non-JSON body") from exc

    return _first_choice_content(data).strip()
