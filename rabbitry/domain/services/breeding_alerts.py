"""Dashboard alerts derived from the does' breeding fields.

Windows, in days:

* ``Pregnancy Noticed``: day 0 to 25 after the pregnancy started.
* ``Nesting Box Needed``: day 26 to 30.
* ``Birth Expected``: from 7 days before to 2 days after the expected birth.
* ``Ready for Servicing``: neither pregnant nor mated on an open record, and
  at least a week past weaning (42 days) of the last litter.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from rabbitry.domain.models.rabbit import Rabbit
from rabbitry.domain.value_objects.breeding_state import DUE_WINDOW_DAYS, Mated

NESTING_BOX_DAY = 26
WEANING_DAYS = 42
REST_AFTER_WEANING_DAYS = 7
OVERDUE_GRACE_DAYS = 2


class AlertType(str, Enum):
    PREGNANCY_NOTICED = "Pregnancy Noticed"
    NESTING_BOX_NEEDED = "Nesting Box Needed"
    BIRTH_EXPECTED = "Birth Expected"
    READY_FOR_SERVICING = "Ready for Servicing"


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True, slots=True)
class BreedingAlert:
    type: AlertType
    rabbit_id: str
    hutch_name: str | None
    message: str
    severity: AlertSeverity


_SEVERITY_ORDER = {
    AlertSeverity.CRITICAL: 0,
    AlertSeverity.WARNING: 1,
    AlertSeverity.INFO: 2,
}


def _label(rabbit: Rabbit) -> str:
    return f"{rabbit.name or rabbit.rabbit_id} ({rabbit.hutch_name or 'no hutch'})"


def alerts_for(
    rabbit: Rabbit, today: date, open_mating_date: date | None = None
) -> list[BreedingAlert]:
    if not rabbit.is_female or not rabbit.is_active:
        return []

    alerts: list[BreedingAlert] = []
    if rabbit.is_pregnant and rabbit.pregnancy_start_date:
        start = rabbit.pregnancy_start_date
        days_pregnant = (today - start).days
        if 0 <= days_pregnant < NESTING_BOX_DAY:
            alerts.append(
                BreedingAlert(
                    type=AlertType.PREGNANCY_NOTICED,
                    rabbit_id=rabbit.rabbit_id,
                    hutch_name=rabbit.hutch_name,
                    message=f"{_label(rabbit)} - Confirmed pregnant since {start.isoformat()}",
                    severity=AlertSeverity.INFO,
                )
            )
        elif NESTING_BOX_DAY <= days_pregnant < NESTING_BOX_DAY + 5:
            alerts.append(
                BreedingAlert(
                    type=AlertType.NESTING_BOX_NEEDED,
                    rabbit_id=rabbit.rabbit_id,
                    hutch_name=rabbit.hutch_name,
                    message=(
                        f"{_label(rabbit)} - Add nesting box, {days_pregnant} days since "
                        f"mating on {start.isoformat()}"
                    ),
                    severity=AlertSeverity.WARNING,
                )
            )

        if rabbit.expected_birth_date:
            days_left = (rabbit.expected_birth_date - today).days
            if -OVERDUE_GRACE_DAYS <= days_left <= DUE_WINDOW_DAYS:
                when = (
                    f"in {days_left} days" if days_left > 0 else f"overdue by {abs(days_left)} days"
                )
                alerts.append(
                    BreedingAlert(
                        type=AlertType.BIRTH_EXPECTED,
                        rabbit_id=rabbit.rabbit_id,
                        hutch_name=rabbit.hutch_name,
                        message=f"{_label(rabbit)} - Expected to give birth {when}",
                        severity=AlertSeverity.CRITICAL if days_left <= 0 else AlertSeverity.WARNING,
                    )
                )
        return alerts

    if isinstance(rabbit.breeding_state(open_mating_date), Mated):
        return alerts
    if rabbit.last_birth_date is not None:
        rested = rabbit.last_birth_date + timedelta(days=WEANING_DAYS + REST_AFTER_WEANING_DAYS)
        if today <= rested:
            return alerts
    alerts.append(
        BreedingAlert(
            type=AlertType.READY_FOR_SERVICING,
            rabbit_id=rabbit.rabbit_id,
            hutch_name=rabbit.hutch_name,
            message=f"{_label(rabbit)} - Ready for servicing",
            severity=AlertSeverity.INFO,
        )
    )
    return alerts


def collect_alerts(
    rabbits: Iterable[Rabbit],
    today: date,
    open_matings: Mapping[str, date] | None = None,
) -> list[BreedingAlert]:
    """All alerts for the given rabbits, most urgent first.

    ``open_matings`` maps a doe tag to the mating date of her open record.
    """
    open_matings = open_matings or {}
    alerts = [
        alert
        for rabbit in rabbits
        for alert in alerts_for(rabbit, today, open_matings.get(rabbit.rabbit_id))
    ]
    return sorted(alerts, key=lambda a: (_SEVERITY_ORDER[a.severity], a.rabbit_id))
