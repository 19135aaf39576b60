from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from backend.application import DashboardService
from backend.core.validation import EmptyBatchError, SnapshotNotFoundError
from backend.domain import DashboardState, SheetUpload
from backend.infrastructure import InMemoryDashboardRepository, JsonFileDashboardRepository

from conftest import HEADER, workbook_bytes


@pytest.fixture()
def data_file(tmp_path):
    return tmp_path / "data.json"


def _service(repository, clock) -> DashboardService:
    service = DashboardService(repository, clock=clock)
    service.load()
    return service


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[1, 2, 3]",
        '{"agents": "many"}',
        '{"agents": [], "history": [{"date": "yesterday"}]}',
    ],
)
def test_unreadable_state_file_loads_empty(data_file, content):
    data_file.write_text(content, encoding="utf-8")
    state = JsonFileDashboardRepository(data_file).load()
    assert state.agents == []
    assert state.previous_agents is None
    assert state.last_updated is None
    assert len(state.history) == 0


def test_missing_file_loads_empty(data_file):
    state = JsonFileDashboardRepository(data_file).load()
    assert isinstance(state, DashboardState)
    assert state.agents == []
    assert not data_file.exists()


def test_missing_collections_default_to_empty(data_file):
    data_file.write_text(json.dumps({"agents": None, "lastUpdated": "2024-05-11T08:00:00Z"}), encoding="utf-8")
    state = JsonFileDashboardRepository(data_file).load()
    assert state.agents == []
    assert len(state.history) == 0
    assert state.last_updated == datetime(2024, 5, 11, 8, 0, tzinfo=timezone.utc)


def test_first_ingest_writes_camel_case_document(data_file, clock, two_debtor_sheet):
    service = _service(JsonFileDashboardRepository(data_file), clock)
    agents = service.ingest([SheetUpload("Aliyev 12.05.2024.xlsx", two_debtor_sheet)])

    assert [agent.name for agent in agents] == ["Aliyev"]
    document = json.loads(data_file.read_text(encoding="utf-8"))
    assert set(document) == {"agents", "lastUpdated", "previousData", "history"}
    assert document["previousData"] is None
    assert document["lastUpdated"].startswith("2024-05-12T09:30:00")

    agent = document["agents"][0]
    assert agent["totalUSD"] == 150
    assert agent["totalUZS"] == 2_500_000
    assert agent["debtorCount"] == 2
    assert agent["debtors"][0] == {"name": "Karimov Anvar", "usd": 150.0, "uzs": 0.0}

    (entry,) = document["history"]
    assert entry["date"] == "2024-05-12"
    assert entry["agentCount"] == 1
    assert entry["totalDebtors"] == 2

    leftovers = [path.name for path in data_file.parent.iterdir() if path.name != data_file.name]
    assert leftovers == []


def test_second_ingest_keeps_previous_agents(clock, two_debtor_sheet, empty_debt_sheet):
    repository = InMemoryDashboardRepository()
    service = _service(repository, clock)

    service.ingest([SheetUpload("Aliyev.xlsx", two_debtor_sheet)])
    clock.advance(hours=2)
    service.ingest([SheetUpload("Valiyev.xlsx", empty_debt_sheet)])

    state = service.state
    assert [agent.name for agent in state.agents] == ["Valiyev"]
    assert [agent.name for agent in state.previous_agents] == ["Aliyev"]
    assert len(state.history) == 1
    assert state.history.find_by_date("2024-05-12").total_debtors == 0
    assert repository.save_count == 2


def test_empty_batch_is_rejected_without_saving(clock):
    repository = InMemoryDashboardRepository()
    service = _service(repository, clock)
    with pytest.raises(EmptyBatchError):
        service.ingest([])
    assert repository.save_count == 0
    assert repository.document is None


def test_file_without_debtors_still_counts_as_agent(clock, two_debtor_sheet, empty_debt_sheet):
    service = _service(InMemoryDashboardRepository(), clock)
    service.ingest(
        [
            SheetUpload("fileA 01.05.2024.xlsx", two_debtor_sheet),
            SheetUpload("fileB.xlsx", empty_debt_sheet),
        ]
    )

    agents = service.state.agents
    assert [(agent.name, agent.debtor_count) for agent in agents] == [("fileA", 2), ("fileB", 0)]
    entry = service.state.history.find_by_date("2024-05-12")
    assert entry.agent_count == 2

    totals = service.current_totals()
    assert totals.total_usd == sum(agent.total_usd for agent in agents)
    assert totals.total_uzs == sum(agent.total_uzs for agent in agents)
    assert totals.total_debtors == sum(len(agent.debtors) for agent in agents)


def test_unreadable_file_is_skipped(clock, two_debtor_sheet):
    service = _service(InMemoryDashboardRepository(), clock)
    agents = service.ingest(
        [SheetUpload("broken.xlsx", b"not a workbook"), SheetUpload("Aliyev.xlsx", two_debtor_sheet)]
    )
    assert [agent.name for agent in agents] == ["Aliyev"]


def test_failed_save_leaves_state_untouched(clock, two_debtor_sheet):
    class FailingRepository(InMemoryDashboardRepository):
        def save(self, state):
            raise OSError("disk full")

    service = _service(FailingRepository(), clock)
    with pytest.raises(OSError):
        service.ingest([SheetUpload("Aliyev.xlsx", two_debtor_sheet)])
    assert service.state.agents == []
    assert len(service.state.history) == 0


def test_state_survives_reload(data_file, clock, two_debtor_sheet):
    first = _service(JsonFileDashboardRepository(data_file), clock)
    first.ingest([SheetUpload("Aliyev.xlsx", two_debtor_sheet)])

    second = _service(JsonFileDashboardRepository(data_file), clock)
    assert second.get_data() == first.get_data()
    assert second.get_dates() == [{"date": "2024-05-12", "totalUSD": 150.0, "totalUZS": 2_500_000.0}]


def test_data_changes_use_latest_earlier_snapshot(clock, two_debtor_sheet):
    service = _service(InMemoryDashboardRepository(), clock)
    service.ingest([SheetUpload("Aliyev.xlsx", two_debtor_sheet)])
    assert service.get_data()["changes"] is None

    clock.advance(days=1)
    bigger = workbook_bytes([HEADER, [1, "Yangi", None, 50, 0]])
    service.ingest([SheetUpload("Aliyev.xlsx", two_debtor_sheet), SheetUpload("Valiyev.xlsx", bigger)])

    data = service.get_data()
    assert data["historyCount"] == 2
    assert data["changes"] == {
        "usdChange": 50.0,
        "uzsChange": 0.0,
        "debtorChange": 1,
        "trend": "up",
        "previousDate": "2024-05-12",
    }
    assert [agent["name"] for agent in data["previousData"]] == ["Aliyev"]


def test_comparison_against_unknown_date(clock):
    service = _service(InMemoryDashboardRepository(), clock)
    with pytest.raises(SnapshotNotFoundError) as excinfo:
        service.get_comparison("2020-01-01")
    assert excinfo.value.date == "2020-01-01"


def test_save_rewrites_state_file(data_file, clock, two_debtor_sheet):
    service = _service(JsonFileDashboardRepository(data_file), clock)
    service.ingest([SheetUpload("Aliyev.xlsx", two_debtor_sheet)])
    data_file.unlink()

    service.save()

    reloaded = _service(JsonFileDashboardRepository(data_file), clock)
    assert reloaded.get_data() == service.get_data()
    assert reloaded.get_history() == service.get_history()
    assert [agent.name for agent in reloaded.state.agents] == ["Aliyev"]
