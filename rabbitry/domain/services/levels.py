from __future__ import annotations

from string import ascii_uppercase

MAX_LEVELS = len(ascii_uppercase)


def generate_levels(count: int) -> list[str]:
    """Return ``count`` level identifiers, ``A`` being the top level."""
    if isinstance(count, bool) or not isinstance(count, int):
        raise ValueError("Level count must be an integer")
    if count < 1 or count > MAX_LEVELS:
        raise ValueError(f"Level count must be between 1 and {MAX_LEVELS}")
    return list(ascii_uppercase[:count])


def distribute_hutches(capacity: int, level_count: int) -> dict[str, int]:
    """Split ``capacity`` across levels, giving the remainder to the earliest levels.

    ``distribute_hutches(10, 3) == {"A": 4, "B": 3, "C": 3}``. The counts always
    add up to ``capacity``.
    """
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 0:
        raise ValueError("Capacity must be a non-negative integer")
    levels = generate_levels(level_count)
    base, remainder = divmod(capacity, level_count)
    return {level: base + 1 if index < remainder else base for index, level in enumerate(levels)}
