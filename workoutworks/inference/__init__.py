# -*- coding: utf-8 -*-
"""
Text-generation backed estimates: protein content, workout volume and
target muscle group.
"""

from .client import InferenceError
from .parsing import UnusableOutputError, parse_muscle_group, parse_protein, parse_volume

__all__ = [
    'InferenceError',
    'UnusableOutputError',
    'parse_muscle_group',
    'parse_protein',
    'parse_volume',
]
