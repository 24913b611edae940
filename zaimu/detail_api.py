"""Operations behind the monthly detail view: entries, savings, adjustments."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation

from zaimu.adjustment import Adjustment, create_adjustment as _create_adjustment
from zaimu.dates import get_opening_and_closing_date
from zaimu.detail_store import DetailRepos
from zaimu.ledger import Income, Outcome
from zaimu.saving import update_saving

_DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class IncomeSchema:
    """An income as shown in the detail view."""

    id: int
    name: str
    amount: Decimal
    date: str


@dataclass(frozen=True)
class OutcomeSchema:
    """An outcome as shown in the detail view."""

    id: int
    name: str
    amount: Decimal
    date: str


@dataclass(frozen=True)
class SavingSchema:
    """The saving balance of one month."""

    year: int
    month: int
    amount: Decimal


def _parse_date(text: str) -> datetime:
    try:
        return datetime.strptime(text, _DATE_FORMAT)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid date {text!r}") from exc


def _parse_decimal(text: str) -> Decimal:
    try:
        value = Decimal(text)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid number {text!r}") from exc
    if not value.is_finite():
        raise ValueError(f"Invalid number {text!r}")
    return value


def _format_date(date: datetime) -> str:
    return date.date().isoformat()


@dataclass
class DetailApi:
    """Record, change and remove entries while keeping savings in step.

    ``today`` fixes the last month that saving changes reach; when None the
    current time is used.
    """

    repos: DetailRepos = field(default_factory=DetailRepos.seeded)
    today: datetime | None = None

    def _shift_saving(self, date: datetime, amount: Decimal) -> None:
        update_saving((date.year, date.month), amount, self.repos.savings, self.today)

    def get_incomes(self, year, month) -> list[IncomeSchema]:
        """Return the incomes dated within the month."""
        opening, closing = get_opening_and_closing_date(year, month)
        return [
            IncomeSchema(income.id, income.name, income.amount, _format_date(income.date))
            for income in self.repos.incomes.list(opening, closing)
        ]

    def store_income(self, name, amount, date) -> int:
        """Record a new income and add it to the savings; return its id."""
        day = _parse_date(date)
        income = Income.parse(name, amount, day.year, day.month, day.day)
        new_id = self.repos.incomes.store(income)
        self._shift_saving(income.date, income.amount)
        return new_id

    def delete_income(self, id) -> None:
        """Remove an income and take it back out of the savings."""
        previous = self.repos.incomes.get_by_id(id)
        if previous is None:
            return
        self.repos.incomes.delete_by_id(id)
        self._shift_saving(previous.date, -previous.amount)

    def update_income(self, id, name, amount, date) -> None:
        """Change an income and move its effect on the savings accordingly."""
        previous = self.repos.incomes.get_by_id(id)
        if previous is None:
            return
        day = _parse_date(date)
        income = Income.parse(name, amount, day.year, day.month, day.day, id=id)
        self.repos.incomes.update(income)
        same_month = (previous.date.year, previous.date.month) == (
            income.date.year,
            income.date.month,
        )
        if same_month:
            self._shift_saving(income.date, income.amount - previous.amount)
        else:
            self._shift_saving(previous.date, -previous.amount)
            self._shift_saving(income.date, income.amount)

    def get_outcomes(self, year, month) -> list[OutcomeSchema]:
        """Return the outcomes dated within the month."""
        opening, closing = get_opening_and_closing_date(year, month)
        return [
            OutcomeSchema(outcome.id, outcome.name, outcome.amount, _format_date(outcome.date))
            for outcome in self.repos.outcomes.list(opening, closing)
        ]

    def store_outcome(self, name, amount, date) -> int:
        """Record a new outcome and subtract it from the savings; return its id."""
        day = _parse_date(date)
        outcome = Outcome.parse(name, amount, day.year, day.month, day.day)
        new_id = self.repos.outcomes.store(outcome)
        self._shift_saving(outcome.date, -outcome.amount)
        return new_id

    def delete_outcome(self, id) -> None:
        """Remove an outcome and give it back to the savings."""
        previous = self.repos.outcomes.get_by_id(id)
        if previous is None:
            return
        self.repos.outcomes.delete_by_id(id)
        self._shift_saving(previous.date, previous.amount)

    def update_outcome(self, id, name, amount, date) -> None:
        """Change an outcome and move its effect on the savings accordingly."""
        previous = self.repos.outcomes.get_by_id(id)
        if previous is None:
            return
        day = _parse_date(date)
        outcome = Outcome.parse(name, amount, day.year, day.month, day.day, id=id)
        self.repos.outcomes.update(outcome)
        same_month = (previous.date.year, previous.date.month) == (
            outcome.date.year,
            outcome.date.month,
        )
        if same_month:
            self._shift_saving(outcome.date, -(outcome.amount - previous.amount))
        else:
            self._shift_saving(previous.date, previous.amount)
            self._shift_saving(outcome.date, -outcome.amount)

    def create_adjustment(self, saving_input, year, month) -> Adjustment | None:
        """Bring the month's saving to the entered balance with a correction entry."""
        target = _parse_decimal(saving_input)
        repos = self.repos
        return _create_adjustment(
            target,
            year,
            month,
            repos.incomes,
            repos.outcomes,
            repos.savings,
            repos.adjustments,
            self.today,
        )

    def get_saving(self, year, month) -> SavingSchema:
        """Return the month's saving, zero when none is recorded."""
        saving = self.repos.savings.get((year, month))
        if saving is None:
            return SavingSchema(year, month, Decimal(0))
        return SavingSchema(saving.key[0], saving.key[1], saving.amount)