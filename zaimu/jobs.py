"""Part-time jobs, their hourly wages and the incomes they produce."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from zaimu.dates import (
    InvalidDateError,
    YearMonth,
    get_end_of_month,
    get_next_ym,
    get_opening_and_closing_date,
)
from zaimu.planned import PlannedIncome, PlannedIncomeRepo


class TimingKind(enum.Enum):
    """When in the month a payment falls."""

    END = "end"
    MID = "mid"
    NEXT_MONTH_END = "next_month_end"
    NEXT_MONTH_MID = "next_month_mid"


_KINDS_WITH_DAY = (TimingKind.MID, TimingKind.NEXT_MONTH_MID)
_NEXT_MONTH_KINDS = (TimingKind.NEXT_MONTH_END, TimingKind.NEXT_MONTH_MID)


@dataclass(frozen=True)
class PaymentTiming:
    """A payment rule: month end, or a fixed day, this month or next."""

    kind: TimingKind
    day: int | None = None

    def __post_init__(self):
        if self.kind in _KINDS_WITH_DAY and self.day is None:
            raise ValueError(f"{self.kind.name} timing needs a day")
        if self.kind not in _KINDS_WITH_DAY and self.day is not None:
            raise ValueError(f"{self.kind.name} timing takes no day")

    def payment_date(self, year: int, month: int) -> datetime:
        """Return the payment day, at midnight, for work in the given month."""
        if self.kind in _NEXT_MONTH_KINDS:
            year, month = get_next_ym((year, month))
        if self.kind not in _KINDS_WITH_DAY:
            return get_end_of_month(year, month)
        try:
            return datetime(year, month, self.day)
        except (ValueError, OverflowError, TypeError) as exc:
            raise InvalidDateError(
                f"Invalid date: {year}-{month:02}-{self.day:02}"
            ) from exc


def _require_id(entity) -> int:
    if entity.id is None:
        raise ValueError(f"{type(entity).__name__} has no id")
    return entity.id


@dataclass(frozen=True)
class PartTimeHourlyWage:
    """An hourly wage that applies from a given month on."""

    part_time_job_id: int
    hourly_wage: Decimal
    start_year_and_month: YearMonth


@dataclass(frozen=True)
class PartTimeJobIncome:
    """The pay for one job's hours in one month."""

    part_time_job_id: int
    name: str
    hourly_wage: Decimal
    hour: Decimal
    payment_date: datetime
    id: int | None = None

    def to_income(self) -> PlannedIncome:
        """Return the pay as a planned income of wage times hours."""
        return PlannedIncome(
            name=self.name,
            amount=self.hourly_wage * self.hour,
            date=self.payment_date,
        )

    def update(self, name, hourly_wage, hour, payment_date) -> PartTimeJobIncome:
        """Return a copy with new details and the same ids."""
        return replace(
            self,
            name=name,
            hourly_wage=hourly_wage,
            hour=hour,
            payment_date=payment_date,
        )


@dataclass(frozen=True)
class PartTimeJob:
    """A part-time job and how it pays."""

    name: str
    payment_timing: PaymentTiming
    start_date: datetime
    end_date: datetime | None = None
    id: int | None = None

    def get_hourly_wage(self, year, month, repo) -> PartTimeHourlyWage | None:
        """Return the wage for the month; a failed lookup counts as none."""
        job_id = _require_id(self)
        try:
            return repo.get_part_time_job_hourly_wage(job_id, year, month)
        except Exception:
            return None

    def set_hourly_wage(self, hourly_wage, start_year_and_month, repo) -> None:
        """Set the wage starting at a month, replacing one already set there."""
        job_id = _require_id(self)
        start = tuple(start_year_and_month)
        try:
            existing = repo.get_part_time_job_hourly_wage_by_start_year_and_month(
                job_id, start
            )
        except Exception:
            existing = None
        if existing is not None:
            repo.update_part_time_job_hourly_wage(job_id, hourly_wage, start)
        else:
            repo.store_part_time_job_hourly_wage(job_id, hourly_wage, start)

    def get_payment_date(self, year, month) -> datetime:
        """Return the day the month's work is paid."""
        return self.payment_timing.payment_date(year, month)

    def to_part_time_job_income(self, year, month, hour, repo) -> PartTimeJobIncome:
        """Create, store and return the month's pay for ``hour`` hours."""
        job_id = _require_id(self)
        wage = self.get_hourly_wage(year, month, repo)
        income = PartTimeJobIncome(
            part_time_job_id=job_id,
            name=self.name,
            hourly_wage=wage.hourly_wage if wage is not None else Decimal(0),
            hour=hour,
            payment_date=self.get_payment_date(year, month),
        )
        new_id = repo.store_part_time_job_income(income)
        return replace(income, id=new_id)


class PartTimeJobRepo(PlannedIncomeRepo, Protocol):
    """Storage for jobs, wages and pay."""

    def list_incomes(self, start_date: datetime, end_date: datetime) -> list[PlannedIncome]:
        """Return pay dated between the two instants as planned incomes."""

    def list_part_time_jobs(self, start_date: datetime, end_date: datetime) -> list[PartTimeJob]:
        """Return the jobs active at some point between the two instants."""

    def get_part_time_job_by_id(self, id: int) -> PartTimeJob | None:
        """Return the job with this id, if any."""

    def store_part_time_job(self, part_time_job: PartTimeJob) -> int:
        """Store a new job and return the id it was given."""

    def update_part_time_job(self, part_time_job: PartTimeJob) -> None:
        """Replace the stored job that has the same id."""

    def get_part_time_job_hourly_wage(
        self, part_time_job_id: int, year: int, month: int
    ) -> PartTimeHourlyWage | None:
        """Return the wage that applies to the job in the month, if any."""

    def get_part_time_job_hourly_wage_by_start_year_and_month(
        self, part_time_job_id: int, start_year_and_month: YearMonth
    ) -> PartTimeHourlyWage | None:
        """Return the wage that starts exactly at the month, if any."""

    def store_part_time_job_hourly_wage(
        self, part_time_job_id: int, hourly_wage: Decimal, start_year_and_month: YearMonth
    ) -> None:
        """Store a wage starting at the month."""

    def update_part_time_job_hourly_wage(
        self, part_time_job_id: int, hourly_wage: Decimal, start_year_and_month: YearMonth
    ) -> None:
        """Change the wage that starts at the month."""

    def get_part_time_job_income_by_id(self, id: int) -> PartTimeJobIncome | None:
        """Return the pay record with this id, if any."""

    def get_part_time_job_income_by_part_time_job_id(
        self, part_time_job_id: int, year: int, month: int
    ) -> PartTimeJobIncome | None:
        """Return the job's pay paid in the month, if any."""

    def store_part_time_job_income(self, part_time_job_income: PartTimeJobIncome) -> int:
        """Store a new pay record and return the id it was given."""

    def update_part_time_job_income(self, part_time_job_income: PartTimeJobIncome) -> None:
        """Replace the stored pay record that has the same id."""


def get_or_create_part_time_job_incomes(year, month, repo) -> list[PlannedIncome]:
    """Return the month's pay for every active job, creating missing records."""
    start_date, end_date = get_opening_and_closing_date(year, month)
    incomes = []
    for job in repo.list_part_time_jobs(start_date, end_date):
        paid_on = job.get_payment_date(year, month)
        income = repo.get_part_time_job_income_by_part_time_job_id(
            _require_id(job), paid_on.year, paid_on.month
        )
        if income is None:
            income = job.to_part_time_job_income(year, month, Decimal(0), repo)
        incomes.append(income.to_income())
    return incomes