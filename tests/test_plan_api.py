from datetime import datetime
from decimal import Decimal

import pytest

from zaimu.dates import InvalidDateError
from zaimu.detail_store import MemorySavingRepo
from zaimu.plan_api import (
    FutureInspectResultSchema,
    IncomeSchema,
    MonthlyOutcomeSchema,
    PlanApi,
)
from zaimu.plan_store import (
    MemoryMonthlyOutcomeRepo,
    MemoryPartTimeJobRepo,
    MemoryTemporaryOutcomeRepo,
)
from zaimu.planned import TemporaryOutcome
from zaimu.saving import Saving


@pytest.fixture
def api():
    return PlanApi()


def test_get_incomes_lists_seeded_pay(api):
    incomes = api.get_incomes(2025, 4)
    assert len(incomes) == 1
    assert incomes[0].name == "アルバイト1"
    assert incomes[0].date == "2025-04-21"
    assert incomes[0].amount == Decimal("1500") * Decimal("8")


def test_get_incomes_empty_month(api):
    assert api.get_incomes(2025, 6) == []


def test_get_incomes_invalid_month(api):
    with pytest.raises(InvalidDateError):
        api.get_incomes(2025, 13)


def test_part_time_job_incomes_uses_existing_and_creates_missing(api):
    pay = api.get_part_time_job_incomes(2025, 3)
    assert [p.name for p in pay] == ["アルバイト1", "アルバイト2"]
    first, second = pay
    assert first.id == 1
    assert first.payment_date == "2025-04-21"
    assert first.hour == Decimal("8")
    assert second.id == 2
    assert second.payment_date == "2025-03-31"
    assert second.hourly_wage == Decimal("1200")
    assert second.hour == Decimal(0)
    assert second.total == Decimal(0)


def test_part_time_job_incomes_total_is_wage_times_hours(api):
    for pay in api.get_part_time_job_incomes(2025, 3):
        assert pay.total == pay.hourly_wage * pay.hour


def test_part_time_job_incomes_are_not_created_twice(api):
    first = api.get_part_time_job_incomes(2025, 3)
    second = api.get_part_time_job_incomes(2025, 3)
    assert first == second


def test_update_part_time_job_income(api):
    api.update_part_time_job_income(1, "アルバイト1", "1600", "10", "2025-04-21")
    pay = api.get_part_time_job_incomes(2025, 3)[0]
    assert pay.id == 1
    assert pay.hourly_wage == Decimal("1600")
    assert pay.hour == Decimal("10")
    assert pay.total == pay.hourly_wage * pay.hour


def test_update_part_time_job_income_moves_payment_date(api):
    api.update_part_time_job_income(1, "renamed", "1500", "8", "2025-06-21")
    assert api.get_incomes(2025, 4) == []
    assert [i.name for i in api.get_incomes(2025, 6)] == ["renamed"]


@pytest.mark.parametrize(
    "wage, hour, date",
    [("abc", "8", "2025-04-21"), ("1500", "x", "2025-04-21"), ("1500", "8", "2025/04/21")],
)
def test_update_part_time_job_income_rejects_bad_input(api, wage, hour, date):
    with pytest.raises(ValueError):
        api.update_part_time_job_income(1, "アルバイト1", wage, hour, date)


def test_update_part_time_job_income_missing(api):
    with pytest.raises(LookupError):
        api.update_part_time_job_income(99, "x", "1", "1", "2025-04-21")


def test_monthly_outcomes(api):
    outcomes = api.get_monthly_outcomes(2025, 3)
    assert outcomes == [
        MonthlyOutcomeSchema(1, "支出1", Decimal("10000"), "2025-03-31"),
        MonthlyOutcomeSchema(2, "支出2", Decimal("5000"), "2025-03-15"),
    ]


def test_monthly_outcomes_are_not_created_twice(api):
    api.get_monthly_outcomes(2025, 3)
    second = api.get_monthly_outcomes(2025, 3)
    assert second == [
        MonthlyOutcomeSchema(1, "支出1", Decimal("10000"), "2025-03-31"),
        MonthlyOutcomeSchema(2, "支出2", Decimal("5000"), "2025-03-15"),
    ]


def test_monthly_outcomes_before_templates_start(api):
    assert api.get_monthly_outcomes(2024, 12) == []


def _empty_api(savings=(), temporary=()):
    return PlanApi(
        jobs=MemoryPartTimeJobRepo(),
        monthly_outcomes=MemoryMonthlyOutcomeRepo(),
        temporary_outcomes=MemoryTemporaryOutcomeRepo(temporary),
        savings=MemorySavingRepo(savings),
    )


def test_future_inspect_deficit_is_negative():
    api = _empty_api(
        savings=[Saving((2030, 1), Decimal("1000"))],
        temporary=[TemporaryOutcome("臨時", Decimal("3000"), datetime(2030, 1, 10), id=1)],
    )
    assert api.get_future_inspect(2030, 1) == [
        FutureInspectResultSchema("2030-01-10", Decimal("-2000"), "", "臨時: 3000")
    ]


def test_future_inspect_nothing_planned():
    assert _empty_api().get_future_inspect(2030, 1) == []


def test_future_inspect_covers_two_years():
    api = _empty_api(
        temporary=[
            TemporaryOutcome("in", Decimal("1"), datetime(2032, 1, 31), id=1),
            TemporaryOutcome("out", Decimal("1"), datetime(2032, 2, 1), id=2),
        ]
    )
    assert [r.date for r in api.get_future_inspect(2030, 1)] == ["2032-01-31"]


def test_future_inspect_seeded_dates_are_ordered_and_in_range(api):
    results = api.get_future_inspect(2025, 3)
    dates = [r.date for r in results]
    assert dates == sorted(dates)
    assert len(set(dates)) == len(dates)
    assert dates[0] >= "2025-03-01"
    assert dates[-1] <= "2027-04-30"


def test_future_inspect_seeded_describes_entries(api):
    results = {r.date: r for r in api.get_future_inspect(2025, 3)}
    april = results["2025-04-21"]
    assert "アルバイト1: 12000" in april.incomes
    assert "臨時支出1: 5000" in april.outcomes


def test_future_inspect_creates_records_once(api):
    first = api.get_future_inspect(2025, 3)
    second = api.get_future_inspect(2025, 3)
    assert "2025-04-21" in {r.date for r in second}
    assert [r.date for r in second] == [r.date for r in first]
    assert second == first


def test_get_incomes_returns_schema(api):
    assert api.get_incomes(2025, 4) == [
        IncomeSchema("アルバイト1", Decimal("12000"), "2025-04-21")
    ]