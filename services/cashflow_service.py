from datetime import datetime

from models.account import Account
from models.cashflow import CashflowSummary, LedgerEntry, ProjectionPoint, UpcomingEntry
from services.recurrence_service import next_upcoming
from utils.app_config import EngineSettings
from utils.date_helpers import to_naive_utc


class CashflowService:
    def __init__(self, settings: EngineSettings | None = None):
        self._settings = settings or EngineSettings()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    def summarize(self, account: Account | None, now: datetime) -> CashflowSummary:
        """
        Split one account's movements into past and upcoming views and build
        the running-balance projection.

        past:       movements dated at or before `now`, most recent first.
        upcoming:   the nearest future occurrence of each movement, soonest first.
        projection: running total over every movement, continued with the
                    first `projection_upcoming_limit` upcoming entries, sorted by date.
        """
        if account is None:
            return CashflowSummary()

        now = to_naive_utc(now)
        ordered = sorted(account.movements, key=lambda m: m.sort_key)
        occurred = [m for m in ordered if m.occurs_at <= now]

        past = [
            LedgerEntry(
                movement_id=m.id,
                occurs_at=m.occurs_at,
                amount=m.amount,
                cadence_label=m.cadence_label,
            )
            for m in sorted(occurred, key=lambda m: m.occurs_at, reverse=True)
        ]

        upcoming = []
        for m in ordered:
            next_date = next_upcoming(m, now, self._settings.recurrence_max_steps)
            if next_date is None:
                continue
            upcoming.append(UpcomingEntry(
                movement_id=m.id,
                next_date=next_date,
                amount=m.amount,
                cadence_label=m.cadence_label,
            ))
        upcoming.sort(key=lambda u: u.next_date)

        return CashflowSummary(
            past=past,
            upcoming=upcoming,
            projection=self._project(ordered, upcoming, now),
        )

    def _project(self, ordered, upcoming: list[UpcomingEntry], now: datetime) -> list[ProjectionPoint]:
        running = 0.0
        points = []
        for m in ordered:
            running += m.amount
            points.append(ProjectionPoint(date=m.occurs_at, value=running))

        for entry in upcoming[:self._settings.projection_upcoming_limit]:
            running += entry.amount
            points.append(ProjectionPoint(date=entry.next_date, value=running, is_projected=True))

        if not points:
            points.append(ProjectionPoint(date=now, value=0.0))
        points.sort(key=lambda p: p.date)
        return points
