from datetime import datetime
from decimal import Decimal

import pytest

from zaimu.detail_store import MemorySavingRepo
from zaimu.forecast import BalanceStatus, inspect
from zaimu.planned import PlannedIncome, PlannedOutcome
from zaimu.saving import Saving


def _signed(result):
    return result.amount if result.status is BalanceStatus.SURPLUS else -result.amount


def _by_month(entries):
    return lambda year, month: [e for e in entries if (e.date.year, e.date.month) == (year, month)]


def test_running_balance_crosses_zero():
    savings = MemorySavingRepo([Saving((2025, 4), Decimal("1000"))])
    income = PlannedIncome("pay", Decimal("500"), datetime(2025, 4, 10))
    outcome = PlannedOutcome("rent", Decimal("2000"), datetime(2025, 4, 20))
    results = inspect((2025, 4), (2025, 4), savings, [_by_month([income])], [_by_month([outcome])])
    assert [(r.date, r.status) for r in results] == [
        (income.date, BalanceStatus.SURPLUS),
        (outcome.date, BalanceStatus.DEFICIT),
    ]
    assert [r.amount for r in results] == [Decimal("1500"), Decimal("500")]


def test_results_sorted_and_steps_match_entries():
    entries = [
        PlannedIncome("b", Decimal("70"), datetime(2025, 6, 1)),
        PlannedIncome("a", Decimal("30"), datetime(2025, 5, 3)),
    ]
    costs = [PlannedOutcome("c", Decimal("40"), datetime(2025, 5, 20))]
    results = inspect((2025, 5), (2025, 6), MemorySavingRepo(), [_by_month(entries)], [_by_month(costs)])
    dates = [r.date for r in results]
    assert dates == sorted(dates)
    previous = Decimal(0)
    for result in results:
        step = sum(i.amount for i in result.incomes) - sum(o.amount for o in result.outcomes)
        assert _signed(result) - previous == step
        previous = _signed(result)


def test_factories_called_for_each_month_inclusive():
    calls = []

    def factory(year, month):
        calls.append((year, month))
        return []

    results = inspect((2025, 11), (2026, 1), MemorySavingRepo(), [factory], [])
    assert results == []
    assert calls == [(2025, 11), (2025, 12), (2026, 1)]


def test_same_day_entries_share_one_result():
    day = datetime(2025, 4, 21)
    income = PlannedIncome("pay", Decimal("100"), day)
    outcome = PlannedOutcome("fee", Decimal("100"), day)
    results = inspect((2025, 4), (2025, 4), MemorySavingRepo(), [lambda y, m: [income]], [lambda y, m: [outcome]])
    assert len(results) == 1
    assert results[0].incomes == [income]
    assert results[0].outcomes == [outcome]
    assert (results[0].status, results[0].amount) == (BalanceStatus.SURPLUS, Decimal(0))


def test_missing_saving_starts_from_zero():
    income = PlannedIncome("pay", Decimal("100"), datetime(2025, 4, 1))
    results = inspect((2025, 4), (2025, 4), MemorySavingRepo(), [lambda y, m: [income]], [])
    assert [(r.status, r.amount) for r in results] == [(BalanceStatus.SURPLUS, Decimal("100"))]


def test_start_after_end_gives_nothing():
    calls = []
    results = inspect((2025, 5), (2025, 4), MemorySavingRepo(), [lambda y, m: calls.append(1) or []], [])
    assert results == []
    assert calls == []


def test_factory_error_propagates():
    def broken(year, month):
        raise RuntimeError("no data")

    with pytest.raises(RuntimeError):
        inspect((2025, 4), (2025, 4), MemorySavingRepo(), [], [broken])