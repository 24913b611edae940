# zaimu

A small household-finance library. It keeps a ledger of incomes and
outcomes, carries a savings balance per month forward to the current
month, records a correction entry when the real balance differs from the
ledger, and forecasts the day-by-day balance from planned part-time job
pay, recurring monthly payments and one-off expenses.

Amounts are `decimal.Decimal`; dates are naive `datetime` values.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `zaimu.dates`: `get_next_ym` and `get_prev_ym` step a `(year, month)`
  pair; `get_end_of_month` returns midnight of the month's last day;
  `get_opening_and_closing_date` returns the month's first instant and its
  last day at 23:59:59. An impossible year or month raises
  `InvalidDateError` (a `ValueError`).
- `zaimu.ledger`: the frozen `Income` and `Outcome` records
  (`name`, `amount`, `date`, `id`). `Income.parse` / `Outcome.parse` build
  one from a textual amount and a year, month and day, raising `ValueError`
  for a bad amount and `InvalidDateError` for a bad day. `IncomeRepo` and
  `OutcomeRepo` are the storage protocols.
- `zaimu.saving`: `Saving`, the `SavingRepo` protocol and `update_saving`,
  which adds an amount to a month's saving and to every later month up to
  `today` (the current time by default). A month with no saving starts from
  the preceding month's, or from zero.
- `zaimu.adjustment`: `create_adjustment` replaces any earlier adjustment
  for the month, then books the difference between an entered balance and
  the recorded saving as an income or an outcome named `調整金`. It returns
  the new `Adjustment` (with an `AdjustmentKind` of `INCOME` or `OUTCOME`),
  or `None` when there is no difference.
- `zaimu.detail_store`: in-memory `MemoryIncomeRepo`, `MemoryOutcomeRepo`,
  `MemoryAdjustmentRepo` and `MemorySavingRepo`, grouped in `DetailRepos`.
  `DetailRepos.seeded(now)` fills them with sample entries dated `now` and
  savings for January and February 2025.
- `zaimu.planned`: `PlannedIncome`, `PlannedOutcome`, one-off
  `TemporaryIncome` / `TemporaryOutcome`, their repository protocols,
  `get_incomes` (collects from several repositories) and
  `get_temporary_outcomes`.
- `zaimu.jobs`: `PartTimeJob` with a `PaymentTiming` (`TimingKind.END`,
  `MID`, `NEXT_MONTH_END`, `NEXT_MONTH_MID`, the `MID` kinds taking a day),
  hourly wages (`PartTimeHourlyWage`), monthly pay (`PartTimeJobIncome`),
  the `PartTimeJobRepo` protocol and `get_or_create_part_time_job_incomes`.
- `zaimu.monthly`: `MonthlyOutcomeTemplate` (paid at month end or on a
  fixed day), the `MonthlyOutcome` it creates each month, the
  `MonthlyOutcomeRepo` protocol and `get_or_create_monthly_outcomes`.
- `zaimu.forecast`: `inspect` gathers planned entries from factory
  functions over a range of months and returns one `InspectResult` per day
  that has entries, in date order, with a `BalanceStatus` of `SURPLUS` or
  `DEFICIT` and a non-negative `amount`.
- `zaimu.plan_store`: in-memory `MemoryPartTimeJobRepo`,
  `MemoryMonthlyOutcomeRepo` and `MemoryTemporaryOutcomeRepo`, each with a
  `seeded()` constructor holding sample data from 2025.
- `zaimu.detail_api`: `DetailApi` takes plain strings (amounts, dates as
  `YYYY-MM-DD`) and returns `IncomeSchema`, `OutcomeSchema` and
  `SavingSchema` objects, keeping savings in step with every store, update
  and delete. Bad input raises `ValueError`; updating or deleting an id that
  does not exist does nothing.
- `zaimu.plan_api`: `PlanApi` lists planned pay and monthly outcomes
  (creating missing monthly records), updates a pay record
  (`LookupError` if it does not exist) and, through `get_future_inspect`,
  forecasts the balance from a month through the same month two years later
  as `FutureInspectResultSchema` rows whose `amount` is negative in deficit.

## Example

```python
from datetime import datetime

from zaimu.detail_api import DetailApi

api = DetailApi(today=datetime(2025, 3, 31))
api.store_income("Salary", "250000", "2025-02-25")
api.store_outcome("Rent", "80000", "2025-02-27")

for income in api.get_incomes(2025, 2):
    print(income.date, income.name, income.amount)

print(api.get_saving(2025, 2).amount)
```

```python
from zaimu.plan_api import PlanApi

plan = PlanApi()
for row in plan.get_future_inspect(2025, 4):
    print(row.date, row.amount, row.incomes, row.outcomes)
```

## What it does not do

- All storage is in memory and is lost when the process ends; there is no
  database or file storage. The repositories are plain objects, so your own
  classes with the same methods can stand in for them.
- There is no user interface and no command-line program; the package is a
  library to be called from Python.