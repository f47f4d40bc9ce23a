from datetime import datetime
from enum import Enum

from utils.date_helpers import add_days, add_months, add_years


class Cadence(str, Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    UNKNOWN = "unknown"     # stored value we don't recognize; never recurs

    @classmethod
    def parse(cls, raw) -> "Cadence":
        if isinstance(raw, Cadence):
            return raw
        key = "" if raw is None else str(raw)
        key = _LEGACY_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_recurring(self) -> bool:
        return self in RECURRING_CADENCES


# Values written by earlier versions of the store
_LEGACY_ALIASES = {
    "fortnite": "biweekly",
    "montly": "monthly",
}

RECURRING_CADENCES = (
    Cadence.DAILY, Cadence.WEEKLY, Cadence.BIWEEKLY, Cadence.MONTHLY, Cadence.YEARLY,
)
STORED_CADENCES = (Cadence.NONE,) + RECURRING_CADENCES

CADENCE_LABELS = {
    Cadence.NONE: "One-off",
    Cadence.DAILY: "Daily",
    Cadence.WEEKLY: "Weekly",
    Cadence.BIWEEKLY: "Fortnightly",
    Cadence.MONTHLY: "Monthly",
    Cadence.YEARLY: "Yearly",
}


def cadence_label(cadence: Cadence, raw: str = "") -> str:
    """Human label for a cadence; unrecognized values show as stored."""
    return CADENCE_LABELS.get(cadence) or raw or cadence.value


def next_occurrence(moment: datetime, cadence: Cadence) -> datetime | None:
    """Return the occurrence after `moment` for `cadence`, or None if it never recurs."""
    if cadence is Cadence.DAILY:
        return add_days(moment, 1)
    elif cadence is Cadence.WEEKLY:
        return add_days(moment, 7)
    elif cadence is Cadence.BIWEEKLY:
        return add_days(moment, 14)
    elif cadence is Cadence.MONTHLY:
        return add_months(moment, 1)
    elif cadence is Cadence.YEARLY:
        return add_years(moment, 1)
    else:
        # Cadence.NONE and Cadence.UNKNOWN are terminal
        return None
