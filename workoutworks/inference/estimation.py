# -*- coding: utf-8 -*-
"""Inference — prompt templates and estimation calls."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from . import client
from .parsing import parse_is_food, parse_muscle_group, parse_protein, parse_volume

logger = logging.getLogger(__name__)

FOOD_VALIDATION_PROMPT = (
    "You are a nutritionist. Your task is to determine if the given input is a valid food item. "
    "Respond with 'true' if it's a food, and 'false' if it's not a food. "
    "Only respond with 'true' or 'false', nothing else."
)

PROTEIN_PROMPT = (
    "You are a nutritionist specialized in calculating protein content in foods. "
    "Always return just the number representing grams of protein, without any units or text. "
    "If given a range, calculate the average. "
    "For example, if the protein content is between 22-24g, return 23."
)

DEFAULT_PROTEIN_INSTRUCTION = (
    "Please calculate the average protein content in grams. If a range is given, take the average. "
    "Return ONLY the number without any text or units."
)

VOLUME_INSTRUCTION = (
    "Calculate the total volume in kilograms based on the exercise details. "
    "Convert any weights in pounds (lbs or l) to kilograms (kg or k) using the conversion 1 lb = 0.453592 kg. "
    "For each line, multiply weight × sets × reps. If 'each' is specified, multiply the weight by 2. "
    "Return your answer in this format: 'Equation: [detailed calculation equation] = [total]kg\nResult: [total]'"
)

VOLUME_PROMPT = """You are a fitness expert specialized in calculating total volume for exercises. You must show your work by providing the detailed equation and the final result.

Make sure to convert any weights in pounds (lbs or l) to kilograms using the conversion 1 lb = 0.45 kg.

Here are examples of how to calculate volume correctly:

Example 1:
"22k each: 12, 12, 15"
Equation: 22 * 2(each) * 12 + 22 * 2 * 12 + 22 * 2 * 15 = 1716kg
Result: 1716

Example 2:
"- 23k: 15
- 27k: 15, 15
- 14k: 20"
Equation: 23 * 1 * 15 + 27 * 1 * 15 + 27 * 1 * 15 + 14 * 1 * 20 = 1145kg
Result: 1145

For each exercise set, multiply weight × number of sets × reps. If 'each' is specified, multiply the weight by 2 first. Sum all calculations for the total volume.

Always format your answer exactly like the examples above with "Equation:" followed by the calculation and "Result:" followed by just the number."""

MUSCLE_GROUP_PROMPT = """You are a fitness expert. Your task is to determine the primary target muscle group for a given exercise.

Choose from ONLY these muscle groups: {groups}.

Respond with ONLY the name of the muscle group, in lowercase, nothing else. For example, if the exercise is "bench press", respond with "chest".

If you're unsure or the exercise targets multiple muscle groups equally, choose the most commonly associated primary muscle group."""


class NotAFoodError(ValueError):
    """The model judged the input not to be a food item."""


@dataclass(frozen=True)
class VolumeEstimate:
    volume: int
    equation: str


def estimate_protein(food: str, weight: float, instruction: Optional[str] = None) -> float:
    verdict = client.complete(FOOD_VALIDATION_PROMPT, f"Is '{food}' a food item?")
    if not parse_is_food(verdict):
        raise NotAFoodError("This does not appear to be a valid food item")

    prompt = f"Calculate the protein content in {weight:.10g}g of {food}. {instruction or DEFAULT_PROTEIN_INSTRUCTION}"
    reply = client.complete(PROTEIN_PROMPT, prompt)
    return parse_protein(reply)


def estimate_volume(content: str, instruction: Optional[str] = None) -> VolumeEstimate:
    # The fixed instruction always wins; a caller's extra instruction is appended.
    extra = f"\n{instruction.strip()}" if instruction and instruction.strip() else ""
    prompt = f"{content}\n\n{VOLUME_INSTRUCTION}{extra}"
    reply = client.complete(VOLUME_PROMPT, prompt, temperature=0.1)
    equation, volume = parse_volume(reply)
    return VolumeEstimate(volume=volume, equation=equation)


def predict_muscle_group(exercise_name: str, vocabulary: Sequence[str]) -> Optional[str]:
    groups = [str(g).strip().lower() for g in vocabulary if str(g).strip()]
    system = MUSCLE_GROUP_PROMPT.format(groups=", ".join(groups))
    reply = client.complete(
        system,
        f'What is the primary target muscle group for "{exercise_name}"?',
        temperature=0.3,
    )
    label = parse_muscle_group(reply, groups)
    if label is None:
        logger.warning("Model returned invalid muscle group %r for exercise %r", reply, exercise_name)
    return label
