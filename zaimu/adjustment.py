"""Manual corrections that bring a month's saving to an entered balance."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from zaimu.dates import YearMonth, get_opening_and_closing_date
from zaimu.ledger import Income, Outcome
from zaimu.saving import update_saving

AdjustmentKey = YearMonth

ADJUSTMENT_NAME = "調整金"


class AdjustmentKind(enum.Enum):
    """Whether an adjustment was booked as an income or an outcome."""

    INCOME = "income"
    OUTCOME = "outcome"


@dataclass(frozen=True)
class Adjustment:
    """A correction entry and the ledger entry it created."""

    kind: AdjustmentKind
    entry_id: int
    amount: Decimal
    date: datetime


class AdjustmentRepo(Protocol):
    """Storage for adjustments, one per month."""

    def get(self, key: AdjustmentKey) -> Adjustment | None:
        """Return the month's adjustment, if any."""

    def store(self, key: AdjustmentKey, adjustment: Adjustment) -> None:
        """Store the month's adjustment."""

    def delete(self, key: AdjustmentKey) -> None:
        """Remove the month's adjustment."""


def create_adjustment(
    saving_input,
    year,
    month,
    income_repo,
    outcome_repo,
    saving_repo,
    adjustment_repo,
    today=None,
) -> Adjustment | None:
    """Book the difference between ``saving_input`` and the month's saving.

    Any earlier adjustment for the month is removed together with its
    ledger entry. Returns the new adjustment, or None when nothing differs.
    """
    key = (year, month)
    previous = adjustment_repo.get(key)
    if previous is not None:
        adjustment_repo.delete(key)
        if previous.kind is AdjustmentKind.INCOME:
            income_repo.delete_by_id(previous.entry_id)
        else:
            outcome_repo.delete_by_id(previous.entry_id)

    _, closing_date = get_opening_and_closing_date(year, month)
    saving = saving_repo.get(key)
    current = saving.amount if saving is not None else Decimal(0)
    difference = saving_input - current
    update_saving(key, difference, saving_repo, today)

    if difference > 0:
        entry_id = income_repo.store(Income(ADJUSTMENT_NAME, difference, closing_date))
        adjustment = Adjustment(AdjustmentKind.INCOME, entry_id, difference, closing_date)
    elif difference < 0:
        entry_id = outcome_repo.store(Outcome(ADJUSTMENT_NAME, -difference, closing_date))
        adjustment = Adjustment(AdjustmentKind.OUTCOME, entry_id, -difference, closing_date)
    else:
        return None
    adjustment_repo.store(key, adjustment)
    return adjustment