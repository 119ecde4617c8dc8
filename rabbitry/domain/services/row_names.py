from __future__ import annotations

from collections.abc import Iterable

PLANET_NAMES = (
    "Mercury",
    "Venus",
    "Earth",
    "Mars",
    "Jupiter",
    "Saturn",
    "Uranus",
    "Neptune",
    "Pluto",
    "Ceres",
    "Eris",
    "Makemake",
    "Haumea",
    "Sedna",
    "Quaoar",
    "Orcus",
    "Varuna",
    "Ixion",
    "Chaos",
    "Huya",
    "Altjira",
    "Salacia",
    "Varda",
    "Gongong",
)


def next_row_name(existing_names: Iterable[str], pool: Iterable[str] = PLANET_NAMES) -> str:
    """First pool name not in use; ``Row-{n+1}`` once the pool is exhausted.

    The fallback may itself collide with an existing row; the caller rejects
    that as a duplicate instead of probing further.
    """
    existing = list(existing_names)
    used = set(existing)
    for candidate in pool:
        if candidate not in used:
            return candidate
    return f"Row-{len(existing) + 1}"
