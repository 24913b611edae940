"""In-memory repositories for part-time jobs and planned outcomes."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from zaimu.dates import YearMonth
from zaimu.jobs import (
    PartTimeHourlyWage,
    PartTimeJob,
    PartTimeJobIncome,
    PaymentTiming,
    TimingKind,
)
from zaimu.monthly import MonthlyOutcome, MonthlyOutcomeTemplate
from zaimu.planned import PlannedIncome, PlannedOutcome, TemporaryOutcome


def _active_between(
    start: datetime, end: datetime | None, range_start: datetime, range_end: datetime
) -> bool:
    return start <= range_end and (end is None or end >= range_start)


def _keyed(items: Iterable, what: str) -> dict:
    keyed = {}
    for item in items:
        if item.id is None:
            raise ValueError(f"seeded {what} need an id")
        keyed[item.id] = item
    return keyed


def _id_of(item, what: str) -> int:
    if item.id is None:
        raise ValueError(f"cannot update a {what} without an id")
    return item.id


class MemoryPartTimeJobRepo:
    """Part-time jobs, their wages and their pay kept in memory."""

    def __init__(
        self,
        jobs: Iterable[PartTimeJob] = (),
        wages: Iterable[PartTimeHourlyWage] = (),
        incomes: Iterable[PartTimeJobIncome] = (),
    ):
        self._jobs: dict[int, PartTimeJob] = _keyed(jobs, "jobs")
        self._wages: list[PartTimeHourlyWage] = list(wages)
        self._incomes: dict[int, PartTimeJobIncome] = _keyed(incomes, "incomes")

    @classmethod
    def seeded(cls) -> MemoryPartTimeJobRepo:
        """Return a repository holding the sample jobs, wages and pay."""
        return cls(
            jobs=[
                PartTimeJob(
                    name="アルバイト1",
                    payment_timing=PaymentTiming(TimingKind.NEXT_MONTH_MID, 21),
                    start_date=datetime(2025, 1, 1),
                    end_date=datetime(2025, 12, 31),
                    id=1,
                ),
                PartTimeJob(
                    name="アルバイト2",
                    payment_timing=PaymentTiming(TimingKind.END),
                    start_date=datetime(2025, 3, 1),
                    end_date=None,
                    id=2,
                ),
            ],
            wages=[
                PartTimeHourlyWage(1, Decimal("1500"), (2025, 1)),
                PartTimeHourlyWage(1, Decimal("1600"), (2025, 5)),
                PartTimeHourlyWage(2, Decimal("1200"), (2025, 3)),
            ],
            incomes=[
                PartTimeJobIncome(
                    part_time_job_id=1,
                    name="アルバイト1",
                    hourly_wage=Decimal("1500"),
                    hour=Decimal("8"),
                    payment_date=datetime(2025, 4, 21),
                    id=1,
                )
            ],
        )

    def list_incomes(self, start_date: datetime, end_date: datetime) -> list[PlannedIncome]:
        """Return pay dated between the two instants as planned incomes."""
        return [
            income.to_income()
            for income in self._incomes.values()
            if start_date <= income.payment_date <= end_date
        ]

    def list_part_time_jobs(self, start_date: datetime, end_date: datetime) -> list[PartTimeJob]:
        """Return the jobs active at some point between the two instants."""
        return [
            job
            for job in self._jobs.values()
            if _active_between(job.start_date, job.end_date, start_date, end_date)
        ]

    def get_part_time_job_by_id(self, id: int) -> PartTimeJob | None:
        return self._jobs.get(id)

    def store_part_time_job(self, part_time_job: PartTimeJob) -> int:
        new_id = len(self._jobs) + 1
        self._jobs[new_id] = replace(part_time_job, id=new_id)
        return new_id

    def update_part_time_job(self, part_time_job: PartTimeJob) -> None:
        self._jobs[_id_of(part_time_job, "job")] = part_time_job

    def get_part_time_job_hourly_wage(
        self, part_time_job_id: int, year: int, month: int
    ) -> PartTimeHourlyWage | None:
        """Return the first wage of the job whose start year and month are not later."""
        return next(
            (
                wage
                for wage in self._wages
                if wage.part_time_job_id == part_time_job_id
                and wage.start_year_and_month[0] <= year
                and wage.start_year_and_month[1] <= month
            ),
            None,
        )

    def get_part_time_job_hourly_wage_by_start_year_and_month(
        self, part_time_job_id: int, start_year_and_month: YearMonth
    ) -> PartTimeHourlyWage | None:
        start = tuple(start_year_and_month)
        return next(
            (
                wage
                for wage in self._wages
                if wage.part_time_job_id == part_time_job_id
                and tuple(wage.start_year_and_month) == start
            ),
            None,
        )

    def store_part_time_job_hourly_wage(
        self, part_time_job_id: int, hourly_wage: Decimal, start_year_and_month: YearMonth
    ) -> None:
        self._wages.append(
            PartTimeHourlyWage(part_time_job_id, hourly_wage, tuple(start_year_and_month))
        )

    def update_part_time_job_hourly_wage(
        self, part_time_job_id: int, hourly_wage: Decimal, start_year_and_month: YearMonth
    ) -> None:
        """Change the wage starting at the month; raise LookupError if none does."""
        start = tuple(start_year_and_month)
        for position, wage in enumerate(self._wages):
            if (
                wage.part_time_job_id == part_time_job_id
                and tuple(wage.start_year_and_month) == start
            ):
                self._wages[position] = replace(wage, hourly_wage=hourly_wage)
                return
        raise LookupError(
            f"no hourly wage for job {part_time_job_id} starting {start[0]}-{start[1]:02}"
        )

    def get_part_time_job_income_by_id(self, id: int) -> PartTimeJobIncome | None:
        return self._incomes.get(id)

    def get_part_time_job_income_by_part_time_job_id(
        self, part_time_job_id: int, year: int, month: int
    ) -> PartTimeJobIncome | None:
        return next(
            (
                income
                for income in self._incomes.values()
                if income.part_time_job_id == part_time_job_id
                and income.payment_date.year == year
                and income.payment_date.month == month
            ),
            None,
        )

    def store_part_time_job_income(self, part_time_job_income: PartTimeJobIncome) -> int:
        new_id = len(self._incomes) + 1
        self._incomes[new_id] = replace(part_time_job_income, id=new_id)
        return new_id

    def update_part_time_job_income(self, part_time_job_income: PartTimeJobIncome) -> None:
        self._incomes[_id_of(part_time_job_income, "pay record")] = part_time_job_income


class MemoryMonthlyOutcomeRepo:
    """Monthly outcome templates and their instances kept in memory."""

    def __init__(
        self,
        templates: Iterable[MonthlyOutcomeTemplate] = (),
        outcomes: Iterable[MonthlyOutcome] = (),
    ):
        self._templates: dict[int, MonthlyOutcomeTemplate] = _keyed(templates, "templates")
        self._outcomes: dict[int, MonthlyOutcome] = _keyed(outcomes, "outcomes")

    @classmethod
    def seeded(cls) -> MemoryMonthlyOutcomeRepo:
        """Return a repository holding the sample templates and no instances."""
        return cls(
            templates=[
                MonthlyOutcomeTemplate(
                    name="支出1",
                    amount=Decimal("10000"),
                    payment_timing=PaymentTiming(TimingKind.END),
                    start_date=datetime(2025, 1, 1),
                    end_date=datetime(2025, 12, 31),
                    id=1,
                ),
                MonthlyOutcomeTemplate(
                    name="支出2",
                    amount=Decimal("5000"),
                    payment_timing=PaymentTiming(TimingKind.MID, 15),
                    start_date=datetime(2025, 3, 1),
                    end_date=None,
                    id=2,
                ),
            ]
        )

    def list_outcomes(self, start_date: datetime, end_date: datetime) -> list[PlannedOutcome]:
        """Return instances dated between the two instants as planned outcomes."""
        return [
            outcome.to_outcome()
            for outcome in self._outcomes.values()
            if start_date <= outcome.payment_date <= end_date
        ]

    def list_monthly_outcome_template(
        self, start_date: datetime, end_date: datetime
    ) -> list[MonthlyOutcomeTemplate]:
        """Return the templates active at some point between the two instants."""
        return [
            template
            for template in self._templates.values()
            if _active_between(template.start_date, template.end_date, start_date, end_date)
        ]

    def store_monthly_outcome(self, monthly_outcome: MonthlyOutcome) -> int:
        new_id = len(self._outcomes) + 1
        self._outcomes[new_id] = replace(monthly_outcome, id=new_id)
        return new_id

    def update_monthly_outcome(self, monthly_outcome: MonthlyOutcome) -> None:
        self._outcomes[_id_of(monthly_outcome, "monthly outcome")] = monthly_outcome

    def get_monthly_outcome_by_template_id(
        self, monthly_outcome_template_id: int, year: int, month: int
    ) -> MonthlyOutcome | None:
        return next(
            (
                outcome
                for outcome in self._outcomes.values()
                if outcome.monthly_outcome_template_id == monthly_outcome_template_id
                and outcome.payment_date.year == year
                and outcome.payment_date.month == month
            ),
            None,
        )


class MemoryTemporaryOutcomeRepo:
    """One-off outcomes kept in memory."""

    def __init__(self, outcomes: Iterable[TemporaryOutcome] = ()):
        self._outcomes: dict[int, TemporaryOutcome] = _keyed(outcomes, "outcomes")

    @classmethod
    def seeded(cls) -> MemoryTemporaryOutcomeRepo:
        """Return a repository holding the sample one-off outcomes."""
        return cls(
            [
                TemporaryOutcome("臨時支出1", Decimal("5000"), datetime(2025, 4, 21), id=1),
                TemporaryOutcome("臨時支出2", Decimal("100000"), datetime(2025, 5, 31), id=2),
            ]
        )

    def list_outcomes(self, start_date: datetime, end_date: datetime) -> list[PlannedOutcome]:
        """Return one-off outcomes between the two instants as planned outcomes."""
        return [outcome.to_outcome() for outcome in self.list_temporary_outcomes(start_date, end_date)]

    def list_temporary_outcomes(
        self, start_date: datetime, end_date: datetime
    ) -> list[TemporaryOutcome]:
        return [o for o in self._outcomes.values() if start_date <= o.date <= end_date]

    def store_temporary_outcome(self, temporary_outcome: TemporaryOutcome) -> int:
        new_id = len(self._outcomes) + 1
        self._outcomes[new_id] = replace(temporary_outcome, id=new_id)
        return new_id

    def update_temporary_outcome(self, temporary_outcome: TemporaryOutcome) -> None:
        self._outcomes[_id_of(temporary_outcome, "one-off outcome")] = temporary_outcome

    def get_temporary_outcome_by_id(self, id: int) -> TemporaryOutcome | None:
        return self._outcomes.get(id)