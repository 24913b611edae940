"""Operations behind the planning and forecast views."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable

from zaimu.dates import get_opening_and_closing_date
from zaimu.detail_store import DetailRepos, MemorySavingRepo
from zaimu.forecast import BalanceStatus, inspect
from zaimu.jobs import get_or_create_part_time_job_incomes
from zaimu.monthly import get_or_create_monthly_outcomes
from zaimu.plan_store import (
    MemoryMonthlyOutcomeRepo,
    MemoryPartTimeJobRepo,
    MemoryTemporaryOutcomeRepo,
)
from zaimu.planned import get_incomes as _collect_incomes, get_temporary_outcomes

_DATE_FORMAT = "%Y-%m-%d"
_FORECAST_YEARS = 2


@dataclass(frozen=True)
class IncomeSchema:
    """A planned income as shown in the plan view."""

    name: str
    amount: Decimal
    date: str


@dataclass(frozen=True)
class PartTimeJobIncomeSchema:
    """One job's pay for a month as shown in the plan view."""

    id: int
    name: str
    hourly_wage: Decimal
    hour: Decimal
    payment_date: str
    total: Decimal


@dataclass(frozen=True)
class MonthlyOutcomeSchema:
    """One month's recurring outcome as shown in the plan view."""

    id: int
    name: str
    amount: Decimal
    payment_date: str


@dataclass(frozen=True)
class FutureInspectResultSchema:
    """The projected balance after one day's planned entries.

    ``amount`` is negative when the balance is in deficit.
    """

    date: str
    amount: Decimal
    incomes: str
    outcomes: str


def _format_date(date: datetime) -> str:
    return date.date().isoformat()


def _parse_decimal(text: str, what: str) -> Decimal:
    try:
        value = Decimal(text)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid {what} {text!r}") from exc
    if not value.is_finite():
        raise ValueError(f"Invalid {what} {text!r}")
    return value


def _parse_date(text: str) -> datetime:
    try:
        return datetime.strptime(text, _DATE_FORMAT)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid payment date {text!r}") from exc


def _describe(entries: Iterable) -> str:
    return ", ".join(f"{entry.name}: {entry.amount}" for entry in entries)


def _seeded_savings() -> MemorySavingRepo:
    return DetailRepos.seeded().savings


def _pay_schema(income) -> PartTimeJobIncomeSchema:
    return PartTimeJobIncomeSchema(
        id=income.id,
        name=income.name,
        hourly_wage=income.hourly_wage,
        hour=income.hour,
        payment_date=_format_date(income.payment_date),
        total=income.hourly_wage * income.hour,
    )


def _monthly_schema(outcome) -> MonthlyOutcomeSchema:
    return MonthlyOutcomeSchema(
        id=outcome.id,
        name=outcome.name,
        amount=outcome.amount,
        payment_date=_format_date(outcome.payment_date),
    )


@dataclass
class PlanApi:
    """Plan part-time pay and recurring outcomes and forecast the balance."""

    jobs: MemoryPartTimeJobRepo = field(default_factory=MemoryPartTimeJobRepo.seeded)
    monthly_outcomes: MemoryMonthlyOutcomeRepo = field(
        default_factory=MemoryMonthlyOutcomeRepo.seeded
    )
    temporary_outcomes: MemoryTemporaryOutcomeRepo = field(
        default_factory=MemoryTemporaryOutcomeRepo.seeded
    )
    savings: MemorySavingRepo = field(default_factory=_seeded_savings)

    def get_incomes(self, year, month) -> list[IncomeSchema]:
        """Return the pay recorded as paid within the month."""
        start_date, end_date = get_opening_and_closing_date(year, month)
        return [
            IncomeSchema(income.name, income.amount, _format_date(income.date))
            for income in _collect_incomes([self.jobs], start_date, end_date)
        ]

    def get_part_time_job_incomes(self, year, month) -> list[PartTimeJobIncomeSchema]:
        """Return each active job's pay for the month, creating missing records."""
        start_date, end_date = get_opening_and_closing_date(year, month)
        results = []
        for job in self.jobs.list_part_time_jobs(start_date, end_date):
            paid_on = job.get_payment_date(year, month)
            income = self.jobs.get_part_time_job_income_by_part_time_job_id(
                job.id, paid_on.year, paid_on.month
            )
            if income is None:
                income = job.to_part_time_job_income(year, month, Decimal(0), self.jobs)
            results.append(_pay_schema(income))
        return results

    def update_part_time_job_income(self, id, name, hourly_wage, hour, payment_date) -> None:
        """Change a pay record's details; raise LookupError if it does not exist."""
        wage = _parse_decimal(hourly_wage, "hourly wage")
        hours = _parse_decimal(hour, "hour")
        paid_on = _parse_date(payment_date)
        income = self.jobs.get_part_time_job_income_by_id(id)
        if income is None:
            raise LookupError(f"Part-time job income not found: {id}")
        self.jobs.update_part_time_job_income(income.update(name, wage, hours, paid_on))

    def get_monthly_outcomes(self, year, month) -> list[MonthlyOutcomeSchema]:
        """Return each active template's outcome for the month, creating missing ones."""
        start_date, end_date = get_opening_and_closing_date(year, month)
        repo = self.monthly_outcomes
        results = []
        for template in repo.list_monthly_outcome_template(start_date, end_date):
            paid_on = template.get_payment_date(year, month)
            outcome = repo.get_monthly_outcome_by_template_id(
                template.id, paid_on.year, paid_on.month
            )
            if outcome is None:
                outcome = template.to_monthly_outcome(year, month, repo)
            results.append(_monthly_schema(outcome))
        return results

    def get_future_inspect(self, year, month) -> list[FutureInspectResultSchema]:
        """Project the balance from the month through the same month two years on."""
        jobs, monthly, temporary = self.jobs, self.monthly_outcomes, self.temporary_outcomes
        results = inspect(
            (year, month),
            (year + _FORECAST_YEARS, month),
            self.savings,
            [lambda y, m: get_or_create_part_time_job_incomes(y, m, jobs)],
            [
                lambda y, m: get_or_create_monthly_outcomes(y, m, monthly),
                lambda y, m: get_temporary_outcomes(y, m, temporary),
            ],
        )
        return [
            FutureInspectResultSchema(
                date=_format_date(result.date),
                amount=result.amount
                if result.status is BalanceStatus.SURPLUS
                else -result.amount,
                incomes=_describe(result.incomes),
                outcomes=_describe(result.outcomes),
            )
            for result in results
        ]