from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class LedgerEntry:
    movement_id: int
    occurs_at: datetime
    amount: float
    cadence_label: str


@dataclass(frozen=True)
class UpcomingEntry:
    movement_id: int
    next_date: datetime
    amount: float
    cadence_label: str


@dataclass(frozen=True)
class ProjectionPoint:
    date: datetime
    value: float
    is_projected: bool = False


@dataclass
class CashflowSummary:
    past: list[LedgerEntry] = field(default_factory=list)
    upcoming: list[UpcomingEntry] = field(default_factory=list)
    projection: list[ProjectionPoint] = field(default_factory=list)


@dataclass(frozen=True)
class TypeSummary:
    account_type: str
    balance: float
    movements: int
    share: float    # percent of the portfolio total, 0 when the total is 0


@dataclass
class PortfolioSummary:
    total_balance: float = 0.0
    by_type: list[TypeSummary] = field(default_factory=list)
    recurring_count: int = 0
    non_recurring_count: int = 0
