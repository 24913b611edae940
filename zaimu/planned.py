"""Planned incomes and outcomes, and one-off entries that feed them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Protocol

from zaimu.dates import get_opening_and_closing_date


@dataclass(frozen=True)
class PlannedIncome:
    """Money expected to arrive on a given day."""

    name: str
    amount: Decimal
    date: datetime


@dataclass(frozen=True)
class PlannedOutcome:
    """Money expected to leave on a given day."""

    name: str
    amount: Decimal
    date: datetime


class PlannedIncomeRepo(Protocol):
    """A source of planned incomes."""

    def list_incomes(self, start_date: datetime, end_date: datetime) -> list[PlannedIncome]:
        """Return planned incomes dated between the two instants, inclusive."""


class PlannedOutcomeRepo(Protocol):
    """A source of planned outcomes."""

    def list_outcomes(self, start_date: datetime, end_date: datetime) -> list[PlannedOutcome]:
        """Return planned outcomes dated between the two instants, inclusive."""


def get_incomes(
    repos: Iterable[PlannedIncomeRepo], start_date: datetime, end_date: datetime
) -> list[PlannedIncome]:
    """Collect the planned incomes of every repository, in repository order."""
    return [
        income for repo in repos for income in repo.list_incomes(start_date, end_date)
    ]


@dataclass(frozen=True)
class TemporaryIncome:
    """A one-off income."""

    name: str
    amount: Decimal
    date: datetime
    id: int | None = None

    def to_income(self) -> PlannedIncome:
        """Return this entry as a planned income."""
        return PlannedIncome(name=self.name, amount=self.amount, date=self.date)


class TemporaryIncomeRepo(Protocol):
    """Storage for one-off incomes."""

    def list_temporary_incomes(
        self, start_date: datetime, end_date: datetime
    ) -> list[TemporaryIncome]:
        """Return one-off incomes dated between the two instants, inclusive."""


@dataclass(frozen=True)
class TemporaryOutcome:
    """A one-off outcome."""

    name: str
    amount: Decimal
    date: datetime
    id: int | None = None

    def to_outcome(self) -> PlannedOutcome:
        """Return this entry as a planned outcome."""
        return PlannedOutcome(name=self.name, amount=self.amount, date=self.date)


class TemporaryOutcomeRepo(PlannedOutcomeRepo, Protocol):
    """Storage for one-off outcomes."""

    def list_temporary_outcomes(
        self, start_date: datetime, end_date: datetime
    ) -> list[TemporaryOutcome]:
        """Return one-off outcomes dated between the two instants, inclusive."""

    def store_temporary_outcome(self, temporary_outcome: TemporaryOutcome) -> int:
        """Store a new one-off outcome and return the id it was given."""

    def update_temporary_outcome(self, temporary_outcome: TemporaryOutcome) -> None:
        """Replace the stored one-off outcome that has the same id."""

    def get_temporary_outcome_by_id(self, id: int) -> TemporaryOutcome | None:
        """Return the one-off outcome with this id, if any."""


def get_temporary_outcomes(
    year: int, month: int, repo: TemporaryOutcomeRepo
) -> list[PlannedOutcome]:
    """Return the month's one-off outcomes as planned outcomes."""
    start_date, end_date = get_opening_and_closing_date(year, month)
    return [
        outcome.to_outcome()
        for outcome in repo.list_temporary_outcomes(start_date, end_date)
    ]