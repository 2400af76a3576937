# -*- coding: utf-8 -*-
"""Inference — tolerant parsers for free-text model replies.

The generator's phrasing is not guaranteed, so these only raise when the
reply is genuinely unusable; anything merely unexpected degrades to a
fallback value.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional, Tuple

_LEADING_DECIMAL_RE = re.compile(r"([+-]?(?:\d+(?:\.\d*)?|\.\d+))")
_INT_RE = re.compile(r"\d+")

EQUATION_MARKER = "Equation:"
RESULT_MARKER = "Result:"


class UnusableOutputError(ValueError):
    """The model reply cannot be turned into the requested value."""


def parse_protein(text: str) -> float:
    """Leading decimal of the reply; trailing units such as ``g`` or ``grams`` are ignored."""
    cleaned = (text or "").strip()
    match = _LEADING_DECIMAL_RE.match(cleaned)
    if not match:
        raise UnusableOutputError(f"Protein estimate is not a number: {cleaned[:80]!r}")
    value = float(match.group(1))
    if not math.isfinite(value) or value < 0:
        raise UnusableOutputError(f"Invalid protein content received: {cleaned[:80]!r}")
    return value


def parse_is_food(text: str) -> bool:
    return (text or "").strip().lower() == "true"


def parse_volume(text: str) -> Tuple[str, int]:
    """Extract ``(equation, total)`` from an ``Equation: ...`` / ``Result: ...`` reply.

    The equation may span several lines; they are joined with single spaces
    until the ``Result:`` line. Without a usable ``Result:`` the first integer
    anywhere in the reply is taken.
    """
    response = (text or "").strip()
    lines = [line.strip() for line in response.split("\n")]

    equation = ""
    volume: Optional[int] = None
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith(EQUATION_MARKER) and not equation:
            parts = [line[len(EQUATION_MARKER):].strip()]
            j = i + 1
            while j < len(lines) and not lines[j].startswith(RESULT_MARKER):
                if lines[j]:
                    parts.append(lines[j])
                j += 1
            equation = " ".join(p for p in parts if p)
            i = j
            continue
        if line.startswith(RESULT_MARKER) and volume is None:
            match = _INT_RE.search(line[len(RESULT_MARKER):])
            if match:
                volume = int(match.group(0))
        i += 1

    if volume is None:
        match = _INT_RE.search(response)
        if match:
            volume = int(match.group(0))

    if volume is None:
        raise UnusableOutputError("Failed to extract volume calculation")
    return equation, volume


def parse_muscle_group(text: str, vocabulary: Iterable[str]) -> Optional[str]:
    candidate = (text or "").strip().lower()
    allowed = {str(v).strip().lower() for v in vocabulary if str(v).strip()}
    return candidate if candidate in allowed else None
