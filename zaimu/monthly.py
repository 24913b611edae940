"""Recurring monthly outcomes generated from templates."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from zaimu.dates import get_opening_and_closing_date
from zaimu.jobs import PaymentTiming, TimingKind
from zaimu.planned import PlannedOutcome, PlannedOutcomeRepo

_MONTHLY_KINDS = (TimingKind.END, TimingKind.MID)


def _require_id(entity) -> int:
    if entity.id is None:
        raise ValueError(f"{type(entity).__name__} has no id")
    return entity.id


@dataclass(frozen=True)
class MonthlyOutcome:
    """One month's instance of a recurring outcome."""

    monthly_outcome_template_id: int
    name: str
    amount: Decimal
    payment_date: datetime
    id: int | None = None

    def to_outcome(self) -> PlannedOutcome:
        """Return this instance as a planned outcome."""
        return PlannedOutcome(name=self.name, amount=self.amount, date=self.payment_date)

    def update(self, name, amount, payment_date) -> MonthlyOutcome:
        """Return a copy with new details and the same ids."""
        return replace(self, name=name, amount=amount, payment_date=payment_date)


@dataclass(frozen=True)
class MonthlyOutcomeTemplate:
    """A recurring outcome paid at the end or on a fixed day of each month."""

    name: str
    amount: Decimal
    payment_timing: PaymentTiming
    start_date: datetime
    end_date: datetime | None = None
    id: int | None = None

    def __post_init__(self):
        if self.payment_timing.kind not in _MONTHLY_KINDS:
            raise ValueError("a monthly outcome is paid at month end or mid-month")

    def get_payment_date(self, year, month) -> datetime:
        """Return the day the outcome is paid in the month."""
        return self.payment_timing.payment_date(year, month)

    def to_monthly_outcome(self, year, month, repo) -> MonthlyOutcome:
        """Create, store and return the month's instance."""
        template_id = _require_id(self)
        outcome = MonthlyOutcome(
            monthly_outcome_template_id=template_id,
            name=self.name,
            amount=self.amount,
            payment_date=self.get_payment_date(year, month),
        )
        new_id = repo.store_monthly_outcome(outcome)
        return replace(outcome, id=new_id)


class MonthlyOutcomeRepo(PlannedOutcomeRepo, Protocol):
    """Storage for templates and their monthly instances."""

    def list_outcomes(self, start_date: datetime, end_date: datetime) -> list[PlannedOutcome]:
        """Return instances dated between the two instants as planned outcomes."""

    def list_monthly_outcome_template(
        self, start_date: datetime, end_date: datetime
    ) -> list[MonthlyOutcomeTemplate]:
        """Return the templates active at some point between the two instants."""

    def store_monthly_outcome(self, monthly_outcome: MonthlyOutcome) -> int:
        """Store a new instance and return the id it was given."""

    def update_monthly_outcome(self, monthly_outcome: MonthlyOutcome) -> None:
        """Replace the stored instance that has the same id."""

    def get_monthly_outcome_by_template_id(
        self, monthly_outcome_template_id: int, year: int, month: int
    ) -> MonthlyOutcome | None:
        """Return the template's instance paid in the month, if any."""


def get_or_create_monthly_outcomes(year, month, repo) -> list[PlannedOutcome]:
    """Return the month's recurring outcomes, creating missing instances."""
    start_date, end_date = get_opening_and_closing_date(year, month)
    outcomes = []
    for template in repo.list_monthly_outcome_template(start_date, end_date):
        outcome = repo.get_monthly_outcome_by_template_id(
            _require_id(template), year, month
        )
        if outcome is None:
            outcome = template.to_monthly_outcome(year, month, repo)
        outcomes.append(outcome.to_outcome())
    return outcomes