"""In-memory repositories for recorded entries, savings and adjustments."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from zaimu.adjustment import Adjustment, AdjustmentKey
from zaimu.ledger import Income, Outcome
from zaimu.saving import Saving, SavingKey


def _index_by_id(entries):
    indexed = {}
    for entry in entries:
        if entry.id is None:
            raise ValueError("seeded entries need an id")
        indexed[entry.id] = entry
    return indexed


class MemoryIncomeRepo:
    """Incomes kept in memory."""

    def __init__(self, entries: Iterable[Income] = ()):
        self._entries: dict[int, Income] = _index_by_id(entries)

    def list(self, start_date: datetime, end_date: datetime) -> list[Income]:
        """Return incomes dated between the two instants, inclusive."""
        return [e for e in self._entries.values() if start_date <= e.date <= end_date]

    def get_by_id(self, id: int) -> Income | None:
        """Return the income with this id, if any."""
        return self._entries.get(id)

    def store(self, income: Income) -> int:
        """Store the income under the next id and return that id."""
        new_id = len(self._entries) + 1
        self._entries[new_id] = replace(income, id=new_id)
        return new_id

    def update(self, income: Income) -> None:
        """Replace the income stored under the income's id."""
        if income.id is None:
            raise ValueError("cannot update an entry without an id")
        self._entries[income.id] = income

    def delete_by_id(self, id: int) -> None:
        """Remove the income with this id; missing ids are ignored."""
        self._entries.pop(id, None)


class MemoryOutcomeRepo:
    """Outcomes kept in memory."""

    def __init__(self, entries: Iterable[Outcome] = ()):
        self._entries: dict[int, Outcome] = _index_by_id(entries)

    def list(self, start_date: datetime, end_date: datetime) -> list[Outcome]:
        """Return outcomes dated between the two instants, inclusive."""
        return [e for e in self._entries.values() if start_date <= e.date <= end_date]

    def get_by_id(self, id: int) -> Outcome | None:
        """Return the outcome whose own id matches, if any."""
        return next((o for o in self._entries.values() if o.id == id), None)

    def store(self, outcome: Outcome) -> int:
        """Store the outcome under the next id and return that id."""
        new_id = len(self._entries) + 1
        self._entries[new_id] = replace(outcome, id=new_id)
        return new_id

    def update(self, outcome: Outcome) -> None:
        """Replace the outcome stored under the outcome's id."""
        if outcome.id is None:
            raise ValueError("cannot update an entry without an id")
        self._entries[outcome.id] = outcome

    def delete_by_id(self, id: int) -> None:
        """Remove the outcome with this id; missing ids are ignored."""
        self._entries.pop(id, None)


class MemoryAdjustmentRepo:
    """Adjustments kept in memory, keyed by month."""

    def __init__(self, adjustments: dict[AdjustmentKey, Adjustment] | None = None):
        self._adjustments = dict(adjustments or {})

    def get(self, key: AdjustmentKey) -> Adjustment | None:
        return self._adjustments.get(tuple(key))

    def store(self, key: AdjustmentKey, adjustment: Adjustment) -> None:
        self._adjustments[tuple(key)] = adjustment

    def delete(self, key: AdjustmentKey) -> None:
        self._adjustments.pop(tuple(key), None)


class MemorySavingRepo:
    """Savings kept in memory, keyed by month."""

    def __init__(self, savings: Iterable[Saving] = ()):
        self._savings = {saving.key: saving for saving in savings}

    def get(self, key: SavingKey) -> Saving | None:
        return self._savings.get(tuple(key))

    def store(self, key: SavingKey, saving: Saving) -> None:
        self._savings[tuple(key)] = saving

    def update(self, key: SavingKey, saving: Saving) -> None:
        self._savings[tuple(key)] = saving


@dataclass
class DetailRepos:
    """The set of repositories the recorded-entry views work against."""

    incomes: MemoryIncomeRepo = field(default_factory=MemoryIncomeRepo)
    outcomes: MemoryOutcomeRepo = field(default_factory=MemoryOutcomeRepo)
    adjustments: MemoryAdjustmentRepo = field(default_factory=MemoryAdjustmentRepo)
    savings: MemorySavingRepo = field(default_factory=MemorySavingRepo)

    @classmethod
    def seeded(cls, now=None) -> DetailRepos:
        """Return repositories holding the sample data, entries dated ``now``."""
        now = now or datetime.now()
        return cls(
            incomes=MemoryIncomeRepo(
                [
                    Income("Income 1", Decimal("100000"), now, id=1),
                    Income("Income 2", Decimal("50000"), now, id=2),
                ]
            ),
            outcomes=MemoryOutcomeRepo(
                [
                    Outcome("Outcome 1", Decimal("10000"), now, id=1),
                    Outcome("Outcome 2", Decimal("5000"), now, id=2),
                ]
            ),
            adjustments=MemoryAdjustmentRepo(),
            savings=MemorySavingRepo(
                [
                    Saving((2025, 1), Decimal("100000")),
                    Saving((2025, 2), Decimal("235000")),
                ]
            ),
        )