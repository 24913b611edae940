"""Recorded incomes and outcomes and the repositories that hold them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Protocol

from zaimu.dates import InvalidDateError


def _parse_amount(text: str) -> Decimal:
    try:
        amount = Decimal(text)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid amount {text!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid amount {text!r}")
    return amount


def _parse_day(year: int, month: int, day: int) -> datetime:
    try:
        return datetime(year, month, day)
    except (ValueError, OverflowError, TypeError) as exc:
        raise InvalidDateError(f"Invalid date: {year}-{month:02}-{day:02}") from exc


@dataclass(frozen=True)
class _Entry:
    name: str
    amount: Decimal
    date: datetime
    id: int | None = None


class Income(_Entry):
    """Money received."""

    @classmethod
    def parse(cls, name, amount, year, month, day, id=None):
        """Build an income from a textual amount and a calendar day at midnight."""
        return cls(
            name=name,
            amount=_parse_amount(amount),
            date=_parse_day(year, month, day),
            id=id,
        )


class Outcome(_Entry):
    """Money spent."""

    @classmethod
    def parse(cls, name, amount, year, month, day, id=None):
        """Build an outcome from a textual amount and a calendar day at midnight."""
        return cls(
            name=name,
            amount=_parse_amount(amount),
            date=_parse_day(year, month, day),
            id=id,
        )


class IncomeRepo(Protocol):
    """Storage for incomes."""

    def list(self, start_date: datetime, end_date: datetime) -> list[Income]:
        """Return incomes dated between the two instants, inclusive."""

    def get_by_id(self, id: int) -> Income | None:
        """Return the income with this id, if any."""

    def store(self, income: Income) -> int:
        """Store a new income and return the id it was given."""

    def update(self, income: Income) -> None:
        """Replace the stored income that has the same id."""

    def delete_by_id(self, id: int) -> None:
        """Remove the income with this id."""


class OutcomeRepo(Protocol):
    """Storage for outcomes."""

    def list(self, start_date: datetime, end_date: datetime) -> list[Outcome]:
        """Return outcomes dated between the two instants, inclusive."""

    def get_by_id(self, id: int) -> Outcome | None:
        """Return the outcome with this id, if any."""

    def store(self, outcome: Outcome) -> int:
        """Store a new outcome and return the id it was given."""

    def update(self, outcome: Outcome) -> None:
        """Replace the stored outcome that has the same id."""

    def delete_by_id(self, id: int) -> None:
        """Remove the outcome with this id."""