"""
Helper utilities for The Impostor.

This module contains utility functions used throughout the application
for validation, generation, and data normalization.
"""

import random
from typing import Any, Callable, Optional
from .constants import ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH


def generate_room_code(exists: Callable[[str], bool],
                       length: int = ROOM_CODE_LENGTH,
                       rng=random) -> str:
    """
    Generate a room code that is not already in use.

    Keeps sampling until a free code turns up; there is no retry cap.

    Args:
        exists: Predicate telling whether a code is already taken
        length: Number of characters in the code
        rng: Random source (module ``random`` or a ``random.Random``)

    Returns:
        A code for which ``exists`` returned False
    """
    while True:
        code = ''.join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(length))
        if not exists(code):
            return code


def normalize_name(name: Any) -> str:
    """Strip surrounding whitespace from a display name; non-strings become ''."""
    if not isinstance(name, str):
        return ''
    return name.strip()


def normalize_room_code(code: Any) -> str:
    """Room codes are matched case-insensitively."""
    if not isinstance(code, str):
        return ''
    return code.strip().upper()


def names_match(first: str, second: str) -> bool:
    """Case-insensitive comparison used for name uniqueness and rejoin."""
    return first.lower() == second.lower()


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp ``value`` into ``[lower, upper]``; ``lower`` wins if the range is empty."""
    return max(lower, min(value, upper))


def parse_int(value: Any) -> Optional[int]:
    """
    Parse an integer from client input.

    Returns:
        The integer, or None for anything that isn't a whole number
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip('-').isdigit():
        return int(value.strip())
    return None
