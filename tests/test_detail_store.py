from datetime import datetime
from decimal import Decimal

import pytest

from zaimu.adjustment import Adjustment, AdjustmentKind
from zaimu.detail_store import (
    DetailRepos,
    MemoryAdjustmentRepo,
    MemoryIncomeRepo,
    MemoryOutcomeRepo,
    MemorySavingRepo,
)
from zaimu.ledger import Income, Outcome
from zaimu.saving import Saving


@pytest.mark.parametrize("repo_cls, entry_cls", [(MemoryIncomeRepo, Income), (MemoryOutcomeRepo, Outcome)])
def test_store_assigns_ids_and_round_trips(repo_cls, entry_cls):
    repo = repo_cls()
    entry = entry_cls("a", Decimal("10"), datetime(2025, 1, 5))
    first = repo.store(entry)
    second = repo.store(entry_cls("b", Decimal("20"), datetime(2025, 1, 6)))
    assert second == first + 1
    stored = repo.get_by_id(first)
    assert stored.id == first
    assert (stored.name, stored.amount, stored.date) == (entry.name, entry.amount, entry.date)
    assert repo.get_by_id(second).name == "b"


@pytest.mark.parametrize("repo_cls, entry_cls", [(MemoryIncomeRepo, Income), (MemoryOutcomeRepo, Outcome)])
def test_list_filters_inclusive_range(repo_cls, entry_cls):
    repo = repo_cls()
    start = datetime(2025, 1, 1)
    end = datetime(2025, 1, 31, 23, 59, 59)
    repo.store(entry_cls("start", Decimal("1"), start))
    repo.store(entry_cls("end", Decimal("1"), end))
    repo.store(entry_cls("after", Decimal("1"), datetime(2025, 2, 1)))
    assert sorted(e.name for e in repo.list(start, end)) == ["end", "start"]


@pytest.mark.parametrize("repo_cls, entry_cls", [(MemoryIncomeRepo, Income), (MemoryOutcomeRepo, Outcome)])
def test_update_and_delete(repo_cls, entry_cls):
    repo = repo_cls()
    entry_id = repo.store(entry_cls("a", Decimal("10"), datetime(2025, 1, 5)))
    changed = entry_cls("renamed", Decimal("99"), datetime(2025, 1, 9), id=entry_id)
    repo.update(changed)
    assert repo.get_by_id(entry_id) == changed
    repo.delete_by_id(entry_id)
    assert repo.get_by_id(entry_id) is None
    repo.delete_by_id(entry_id)
    assert repo.list(datetime(2025, 1, 1), datetime(2025, 12, 31)) == []


@pytest.mark.parametrize("repo_cls, entry_cls", [(MemoryIncomeRepo, Income), (MemoryOutcomeRepo, Outcome)])
def test_update_without_id_raises(repo_cls, entry_cls):
    with pytest.raises(ValueError):
        repo_cls().update(entry_cls("a", Decimal("1"), datetime(2025, 1, 1)))


def test_adjustment_repo_round_trip():
    repo = MemoryAdjustmentRepo()
    adjustment = Adjustment(AdjustmentKind.INCOME, 3, Decimal("5"), datetime(2025, 1, 31))
    repo.store((2025, 1), adjustment)
    assert repo.get((2025, 1)) == adjustment
    repo.delete((2025, 1))
    assert repo.get((2025, 1)) is None


def test_saving_repo_store_and_update():
    repo = MemorySavingRepo()
    repo.store((2025, 4), Saving((2025, 4), Decimal("10")))
    repo.update((2025, 4), Saving((2025, 4), Decimal("20")))
    assert repo.get((2025, 4)) == Saving((2025, 4), Decimal("20"))
    assert repo.get((2025, 5)) is None


def test_seeded_repositories_hold_sample_data():
    now = datetime(2025, 2, 14, 12, 0)
    repos = DetailRepos.seeded(now)
    assert repos.savings.get((2025, 1)).amount == Decimal("100000")
    assert repos.savings.get((2025, 2)).amount == Decimal("235000")
    incomes = repos.incomes.list(now, now)
    assert sorted(i.name for i in incomes) == ["Income 1", "Income 2"]
    outcomes = repos.outcomes.list(now, now)
    assert sorted(o.amount for o in outcomes) == [Decimal("5000"), Decimal("10000")]
    assert repos.adjustments.get((2025, 2)) is None


def test_default_repositories_are_independent():
    first = DetailRepos()
    second = DetailRepos()
    first.incomes.store(Income("a", Decimal("1"), datetime(2025, 1, 1)))
    assert second.incomes.list(datetime(2025, 1, 1), datetime(2025, 1, 1)) == []