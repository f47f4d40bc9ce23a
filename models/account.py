from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from models.movement import Movement
from utils.constants import DEFAULT_ACCOUNT_TYPE
from utils.currency import parse_amount
from utils.date_helpers import parse_timestamp

ACCOUNT_TYPES = ("cash", "bank", "savings", "assets")

ACCOUNT_TYPE_LABELS = {
    "cash": "Cash",
    "bank": "Bank",
    "savings": "Savings",
    "assets": "Assets",
}


@dataclass
class Account:
    id: int
    name: str
    account_type: str = DEFAULT_ACCOUNT_TYPE
    starting_balance: float = 0.0     # informational; see balance
    created_at: datetime | None = None
    user_id: str = ""
    movements: list[Movement] = field(default_factory=list)

    @property
    def balance(self) -> float:
        return sum(m.amount for m in self.movements)

    @property
    def type_label(self) -> str:
        return ACCOUNT_TYPE_LABELS.get(self.account_type, self.account_type)

    @property
    def picker_label(self) -> str:
        """Unique combobox text; names alone may repeat."""
        return f"{self.name} (#{self.id})"

    @classmethod
    def from_record(cls, record: Mapping, movements: list[Movement] | None = None) -> "Account":
        keys = record.keys()
        starting = parse_amount(record["starting_balance"]) if "starting_balance" in keys else None
        return cls(
            id=record["id"],
            name=record["name"],
            account_type=record["type"] if "type" in keys else DEFAULT_ACCOUNT_TYPE,
            starting_balance=starting if starting is not None else 0.0,
            created_at=parse_timestamp(record["created_at"]) if "created_at" in keys else None,
            user_id=record["user_id"] if "user_id" in keys else "",
            movements=movements or [],
        )
