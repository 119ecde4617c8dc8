"""Breeding lifecycle of a doe as an explicit tagged variant.

The store keeps the lifecycle as ``is_pregnant`` plus two nullable dates on the
rabbit and an open breeding record. Inside the domain the lifecycle is one of
``Available``, ``Mated``, ``Pregnant`` or ``Delivered``; the flag/date form is
produced only by :func:`pregnancy_fields` when the rabbit is persisted.

``Due`` is not a state. It is derived from a ``Pregnant`` state with
:func:`is_due` and only feeds alerts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Union

from rabbitry.domain.models.breeding_record import expected_birth_from

DUE_WINDOW_DAYS = 7


class InvalidTransition(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class Available:
    name = "available"


@dataclass(frozen=True, slots=True)
class Mated:
    since: date
    name = "mated"


@dataclass(frozen=True, slots=True)
class Pregnant:
    since: date
    due: date
    name = "pregnant"


@dataclass(frozen=True, slots=True)
class Delivered:
    at: date
    name = "delivered"


BreedingState = Union[Available, Mated, Pregnant, Delivered]


def resolve_state(
    *,
    is_pregnant: bool,
    pregnancy_start_date: date | None,
    expected_birth_date: date | None,
    open_mating_date: date | None = None,
) -> BreedingState:
    """Rebuild the state from the persisted flags and the doe's open record, if any."""
    if is_pregnant and pregnancy_start_date is not None:
        due = expected_birth_date or expected_birth_from(pregnancy_start_date)
        return Pregnant(since=pregnancy_start_date, due=due)
    if open_mating_date is not None:
        return Mated(since=open_mating_date)
    return Available()


def mate(state: BreedingState, on: date) -> Mated:
    if not isinstance(state, (Available, Delivered)):
        raise InvalidTransition(f"Cannot mate a doe that is {state.name}")
    return Mated(since=on)


def conceive(state: BreedingState, since: date | None = None) -> Pregnant:
    if not isinstance(state, Mated):
        raise InvalidTransition(f"Cannot confirm pregnancy of a doe that is {state.name}")
    start = since or state.since
    return Pregnant(since=start, due=expected_birth_from(start))


def deliver(state: BreedingState, at: date) -> Delivered:
    # Available is accepted: a birth may be recorded without a prior mating
    if isinstance(state, Delivered):
        raise InvalidTransition("Litter already delivered")
    return Delivered(at=at)


def is_due(state: BreedingState, today: date, window_days: int = DUE_WINDOW_DAYS) -> bool:
    if not isinstance(state, Pregnant):
        return False
    return today >= state.due - timedelta(days=window_days)


def pregnancy_fields(state: BreedingState) -> dict:
    """Serialize a state to the rabbit's persisted pregnancy columns."""
    if isinstance(state, Pregnant):
        return {
            "is_pregnant": True,
            "pregnancy_start_date": state.since,
            "expected_birth_date": state.due,
        }
    return {
        "is_pregnant": False,
        "pregnancy_start_date": None,
        "expected_birth_date": None,
    }
