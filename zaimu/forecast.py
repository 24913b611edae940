"""Day-by-day projection of the saving balance from planned entries."""

from __future__ import annotations

import enum
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable, Sequence

from zaimu.dates import YearMonth, get_next_ym
from zaimu.planned import PlannedIncome, PlannedOutcome
from zaimu.saving import SavingRepo

IncomeFactory = Callable[[int, int], Iterable[PlannedIncome]]
OutcomeFactory = Callable[[int, int], Iterable[PlannedOutcome]]


class BalanceStatus(enum.Enum):
    """Whether the projected balance is above or below zero."""

    SURPLUS = "surplus"
    DEFICIT = "deficit"


@dataclass(frozen=True)
class InspectResult:
    """The projected balance after one day's planned entries.

    ``amount`` is the size of the surplus or deficit, never negative.
    """

    date: datetime
    status: BalanceStatus
    amount: Decimal
    incomes: list[PlannedIncome] = field(default_factory=list)
    outcomes: list[PlannedOutcome] = field(default_factory=list)


@dataclass
class _Day:
    income_total: Decimal = Decimal(0)
    outcome_total: Decimal = Decimal(0)
    incomes: list[PlannedIncome] = field(default_factory=list)
    outcomes: list[PlannedOutcome] = field(default_factory=list)


def inspect(
    start_ym: YearMonth,
    end_ym: YearMonth,
    saving_repo: SavingRepo,
    income_factories: Sequence[IncomeFactory],
    outcome_factories: Sequence[OutcomeFactory],
) -> list[InspectResult]:
    """Project the balance through every dated entry from start to end month.

    The balance starts from the saving recorded for ``start_ym`` (zero if
    none) and one result is produced per day that has entries, in date order.
    """
    incomes: list[PlannedIncome] = []
    outcomes: list[PlannedOutcome] = []
    current, last = tuple(start_ym), tuple(end_ym)
    while current <= last:
        for make_incomes in income_factories:
            incomes.extend(make_incomes(*current))
        for make_outcomes in outcome_factories:
            outcomes.extend(make_outcomes(*current))
        current = get_next_ym(current)

    days: defaultdict[datetime, _Day] = defaultdict(_Day)
    for income in incomes:
        day = days[income.date]
        day.income_total += income.amount
        day.incomes.append(income)
    for outcome in outcomes:
        day = days[outcome.date]
        day.outcome_total += outcome.amount
        day.outcomes.append(outcome)

    saving = saving_repo.get(tuple(start_ym))
    balance = saving.amount if saving is not None else Decimal(0)
    results = []
    for date in sorted(days):
        day = days[date]
        balance += day.income_total - day.outcome_total
        if balance >= 0:
            status, amount = BalanceStatus.SURPLUS, balance
        else:
            status, amount = BalanceStatus.DEFICIT, -balance
        results.append(InspectResult(date, status, amount, day.incomes, day.outcomes))
    return results