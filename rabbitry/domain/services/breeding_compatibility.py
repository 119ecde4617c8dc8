from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.domain.value_objects.breeding_state import Mated


@dataclass(frozen=True, slots=True)
class CompatibilityResult:
    compatible: bool
    reason: str


def shares_lineage(doe: Rabbit, buck: Rabbit) -> bool:
    """Parent/offspring pairs and siblings through either parent."""
    if buck.rabbit_id in (doe.parent_male_id, doe.parent_female_id):
        return True
    if doe.rabbit_id in (buck.parent_male_id, buck.parent_female_id):
        return True
    if doe.parent_male_id and doe.parent_male_id == buck.parent_male_id:
        return True
    if doe.parent_female_id and doe.parent_female_id == buck.parent_female_id:
        return True
    return False


def evaluate_pair(
    doe: Rabbit, buck: Rabbit, open_mating_date: date | None = None
) -> CompatibilityResult:
    if shares_lineage(doe, buck):
        return CompatibilityResult(False, "Potential inbreeding detected")
    if doe.is_pregnant:
        return CompatibilityResult(False, "Doe is currently pregnant")
    if isinstance(doe.breeding_state(open_mating_date), Mated):
        return CompatibilityResult(False, "Doe already has an open breeding record")
    return CompatibilityResult(True, "Compatible for breeding")
