"""Monthly saving balances and their propagation to later months."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterator, Protocol

from zaimu.dates import YearMonth, get_next_ym

SavingKey = YearMonth


@dataclass(frozen=True)
class Saving:
    """The saving balance recorded for one month."""

    key: SavingKey
    amount: Decimal


class SavingRepo(Protocol):
    """Storage for monthly savings."""

    def get(self, key: SavingKey) -> Saving | None:
        """Return the saving for the month, if any."""

    def store(self, key: SavingKey, saving: Saving) -> None:
        """Store a new saving for the month."""

    def update(self, key: SavingKey, saving: Saving) -> None:
        """Replace the saving for the month."""


def _months_through(start: YearMonth, last: YearMonth) -> Iterator[YearMonth]:
    current = start
    while current <= last:
        yield current
        current = get_next_ym(current)


def _preceding_key(key: SavingKey) -> SavingKey:
    # January looks back to December of the same year.
    year, month = key
    return (year, 12 if month == 1 else month - 1)


def update_saving(key, amount, saving_repo, today=None) -> None:
    """Add ``amount`` to the saving of ``key`` and every month up to today.

    A month without a saving starts from the preceding month's saving, or
    from zero when that is missing too.
    """
    today = today or datetime.now()
    for ym in _months_through(tuple(key), (today.year, today.month)):
        existing = saving_repo.get(ym)
        if existing is not None:
            saving_repo.update(ym, Saving(ym, existing.amount + amount))
            continue
        previous = saving_repo.get(_preceding_key(ym))
        base = previous.amount if previous is not None else Decimal(0)
        saving_repo.store(ym, Saving(ym, base + amount))