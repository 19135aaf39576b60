from __future__ import annotations

from backend.core.aggregate import build_agent
from backend.core.history import HistoryLedger, build_entry
from backend.extractors.debt_sheet import DebtRow


def _agent(name: str, *amounts: tuple[float, float]):
    rows = [DebtRow(name=f"{name}-{index}", usd=usd, uzs=uzs) for index, (usd, uzs) in enumerate(amounts)]
    return build_agent(name, rows)


def _dates(ledger: HistoryLedger) -> list[str]:
    return [entry.date for entry in ledger.entries()]


def test_upsert_today_builds_snapshot_from_agents():
    ledger = HistoryLedger()
    agents = [_agent("Ali", (10, 1000), (5, 0)), _agent("Vali")]
    entry = ledger.upsert_today(agents, today="2024-05-12")

    assert entry.date == "2024-05-12"
    assert entry.total_usd == 15
    assert entry.total_uzs == 1000
    assert entry.total_debtors == 2
    assert entry.agent_count == 2
    assert [(item.name, item.debtor_count) for item in entry.agents] == [("Ali", 2), ("Vali", 0)]


def test_same_day_upsert_keeps_one_entry_with_latest_content():
    ledger = HistoryLedger()
    ledger.upsert_today([_agent("Ali", (10, 0))], today="2024-05-12")
    ledger.upsert_today([_agent("Ali", (20, 0)), _agent("Vali", (1, 0))], today="2024-05-12")

    assert len(ledger) == 1
    entry = ledger.find_by_date("2024-05-12")
    assert entry is not None
    assert entry.total_usd == 21
    assert entry.agent_count == 2


def test_ledger_stays_strictly_descending():
    ledger = HistoryLedger()
    for day in ["2024-05-10", "2024-05-14", "2024-05-01", "2024-05-12", "2024-05-14"]:
        ledger.upsert_today([_agent("Ali", (1, 0))], today=day)
        dates = _dates(ledger)
        assert dates == sorted(set(dates), reverse=True)
    assert _dates(ledger) == ["2024-05-14", "2024-05-12", "2024-05-10", "2024-05-01"]


def test_entries_limit():
    ledger = HistoryLedger(build_entry([], day) for day in ["2024-05-01", "2024-05-02", "2024-05-03"])
    assert [entry.date for entry in ledger.entries(2)] == ["2024-05-03", "2024-05-02"]
    assert len(ledger.entries()) == 3
    assert len(ledger.entries(0)) == 3
    assert len(ledger.entries(-4)) == 3
    assert len(ledger.entries(10)) == 3


def test_find_by_date_miss_returns_none():
    ledger = HistoryLedger([build_entry([], "2024-05-01")])
    assert ledger.find_by_date("2024-05-02") is None


def test_most_recent_excluding_today_skips_only_today():
    ledger = HistoryLedger(build_entry([], day) for day in ["2024-05-01", "2024-05-08", "2024-05-12"])
    assert ledger.most_recent_excluding_today("2024-05-12").date == "2024-05-08"
    # no upload yet today: the newest snapshot is the baseline, however old
    assert ledger.most_recent_excluding_today("2024-05-20").date == "2024-05-12"


def test_most_recent_excluding_today_with_only_today():
    ledger = HistoryLedger([build_entry([], "2024-05-12")])
    assert ledger.most_recent_excluding_today("2024-05-12") is None
    assert HistoryLedger().most_recent_excluding_today("2024-05-12") is None


def test_loading_entries_sorts_and_drops_duplicate_dates():
    first = build_entry([_agent("Ali", (1, 0))], "2024-05-02")
    duplicate = build_entry([_agent("Ali", (99, 0))], "2024-05-02")
    older = build_entry([], "2024-04-30")
    ledger = HistoryLedger([older, first, duplicate])

    assert _dates(ledger) == ["2024-05-02", "2024-04-30"]
    assert ledger.find_by_date("2024-05-02").total_usd == 1


def test_dates_projection():
    ledger = HistoryLedger([build_entry([_agent("Ali", (3, 4000))], "2024-05-02")])
    assert ledger.dates() == [{"date": "2024-05-02", "totalUSD": 3.0, "totalUZS": 4000.0}]
