from __future__ import annotations

from collections.abc import Iterable

from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.domain.value_objects.gender import Gender

# A hutch holds a single rabbit or one breeding pair
MAX_OCCUPANTS = 2


def format_occupancy(occupants: Iterable[Rabbit]) -> str:
    """Human summary such as ``"1 doe, 1 buck"``; empty string for an empty hutch."""
    does = bucks = 0
    for rabbit in occupants:
        if rabbit.gender == Gender.FEMALE.value:
            does += 1
        elif rabbit.gender == Gender.MALE.value:
            bucks += 1
    doe_text = "1 doe" if does == 1 else f"{does} does" if does > 1 else ""
    buck_text = "1 buck" if bucks == 1 else f"{bucks} bucks" if bucks > 1 else ""
    if doe_text and buck_text:
        return f"{doe_text}, {buck_text}"
    return doe_text or buck_text


def next_free_position(taken: Iterable[int]) -> int:
    used = set(taken)
    position = 1
    while position in used:
        position += 1
    return position
