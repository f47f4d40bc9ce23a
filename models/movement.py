from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime

from models.cadence import Cadence, cadence_label
from utils.currency import parse_amount
from utils.date_helpers import parse_timestamp


@dataclass
class Movement:
    id: int
    account_id: int
    amount: float           # positive = inflow, negative = outflow
    cadence: Cadence
    occurs_at: datetime     # naive UTC; first occurrence for recurring cadences
    cadence_raw: str = ""
    sequence: int = 0       # load order, breaks ties on occurs_at

    @property
    def is_recurring(self) -> bool:
        return self.cadence.is_recurring

    @property
    def cadence_label(self) -> str:
        return cadence_label(self.cadence, self.cadence_raw)

    @property
    def sort_key(self) -> tuple[datetime, int]:
        return (self.occurs_at, self.sequence)

    @classmethod
    def from_record(cls, record: Mapping, sequence: int = 0) -> "Movement":
        """Build a Movement from a store row or a remote-store dict.

        The cadence may be keyed 'cadence' or 'repeats_every' and the anchor
        'occurs_at' or 'created_at'.
        """
        keys = record.keys()
        raw_cadence = None
        if "cadence" in keys:
            raw_cadence = record["cadence"]
        elif "repeats_every" in keys:
            raw_cadence = record["repeats_every"]
        raw_cadence = "" if raw_cadence is None else str(raw_cadence)
        occurs_at = None
        if "occurs_at" in keys:
            occurs_at = parse_timestamp(record["occurs_at"])
        if occurs_at is None and "created_at" in keys:
            occurs_at = parse_timestamp(record["created_at"])
        amount = parse_amount(record["amount"]) if "amount" in keys else None
        return cls(
            id=record["id"],
            account_id=record["account_id"] if "account_id" in keys else None,
            amount=amount if amount is not None else 0.0,
            cadence=Cadence.parse(raw_cadence),
            occurs_at=occurs_at or datetime.min,
            cadence_raw=raw_cadence,
            sequence=sequence,
        )


def normalize_movements(records: Iterable[Mapping]) -> list[Movement]:
    """Convert records (in creation order) to Movements sorted by occurs_at, stable on ties."""
    movements = [Movement.from_record(r, sequence=i) for i, r in enumerate(records)]
    movements.sort(key=lambda m: m.sort_key)
    return movements
