"""Application service owning the dashboard state."""
from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Sequence

from backend.core.aggregate import build_agents, compute_totals
from backend.core.columns import ColumnLayout, load_column_layout
from backend.core.comparison import compare
from backend.core.history import HistoryLedger
from backend.core.schema import AgentRecord, AggregateTotals, HistoryEntry
from backend.core.storage import data_file_path
from backend.core.validation import EmptyBatchError, SnapshotNotFoundError
from backend.domain import DashboardState, SheetUpload
from backend.infrastructure import DashboardRepository, JsonFileDashboardRepository

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _dump_agents(agents: Sequence[AgentRecord] | None) -> list[dict] | None:
    if agents is None:
        return None
    return [agent.model_dump(mode="json", by_alias=True) for agent in agents]


def _dump_entry(entry: HistoryEntry) -> dict:
    return entry.model_dump(mode="json", by_alias=True)


class DashboardService:
    """Single writer for the dashboard state.

    Every mutation builds a fresh :class:`DashboardState`, persists it and only
    then swaps it in under ``self._lock``; readers grab the current reference
    under the same lock and never see a half-applied upload.
    """

    def __init__(
        self,
        repository: DashboardRepository,
        *,
        layout: ColumnLayout | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._repository = repository
        self._layout = layout or ColumnLayout()
        self._clock = clock
        self._lock = threading.RLock()
        self._state = DashboardState()

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def load(self) -> DashboardState:
        state = self._repository.load()
        with self._lock:
            self._state = state
        logger.info("dashboard state loaded: %d agents, %d history entries", len(state.agents), len(state.history))
        return state

    def save(self) -> None:
        with self._lock:
            self._repository.save(self._state)

    @property
    def layout(self) -> ColumnLayout:
        return self._layout

    @property
    def state(self) -> DashboardState:
        with self._lock:
            return self._state

    def today(self) -> str:
        return self._clock().astimezone(timezone.utc).date().isoformat()

    # ------------------------------------------------------------------
    # ingestion
    # ------------------------------------------------------------------
    def ingest(self, batch: Sequence[SheetUpload]) -> list[AgentRecord]:
        if not batch:
            raise EmptyBatchError("at least one file must be provided")
        agents = build_agents(batch, self._layout)
        return self.commit_agents(agents, file_count=len(batch))

    def commit_agents(self, agents: Sequence[AgentRecord], *, file_count: int | None = None) -> list[AgentRecord]:
        """Replace the current agent list and record today's snapshot."""

        agents = list(agents)
        with self._lock:
            current = self._state
            history = HistoryLedger(current.history.entries())
            history.upsert_today(agents, today=self.today())
            updated = DashboardState(
                agents=agents,
                previous_agents=list(current.agents) if current.agents else current.previous_agents,
                last_updated=self._clock(),
                history=history,
            )
            self._repository.save(updated)
            self._state = updated

        logger.info(
            "ingested %d agents from %d files; %d history entries",
            len(agents),
            file_count if file_count is not None else len(agents),
            len(history),
        )
        return list(agents)

    # ------------------------------------------------------------------
    # read models
    # ------------------------------------------------------------------
    def current_totals(self) -> AggregateTotals:
        return compute_totals(self.state.agents)

    def get_data(self) -> dict[str, object]:
        state = self.state
        totals = compute_totals(state.agents)
        baseline = state.history.most_recent_excluding_today(self.today())
        changes = compare(totals, baseline)
        return {
            "agents": _dump_agents(state.agents),
            "previousData": _dump_agents(state.previous_agents),
            "lastUpdated": state.last_updated.isoformat() if state.last_updated else None,
            "totals": totals.model_dump(mode="json", by_alias=True),
            "changes": changes.model_dump(mode="json", by_alias=True) if changes else None,
            "historyCount": len(state.history),
        }

    def get_history(self, limit: int | None = None) -> dict[str, object]:
        entries = self.state.history.entries(limit)
        return {"count": len(entries), "history": [_dump_entry(entry) for entry in entries]}

    def get_comparison(self, date: str) -> dict[str, object]:
        state = self.state
        target = state.history.find_by_date(date)
        if target is None:
            raise SnapshotNotFoundError(date)
        totals = compute_totals(state.agents)
        changes = compare(totals, target)
        return {
            "current": totals.model_dump(mode="json", by_alias=True),
            "compared": _dump_entry(target),
            "changes": changes.model_dump(mode="json", by_alias=True) if changes else None,
        }

    def get_dates(self) -> list[dict[str, object]]:
        return self.state.history.dates()

    def get_status(self) -> dict[str, object]:
        state = self.state
        return {
            "status": "ok",
            "agents": len(state.agents),
            "lastUpdated": state.last_updated.isoformat() if state.last_updated else None,
            "historyCount": len(state.history),
        }


def build_dashboard_service(repository: DashboardRepository | None = None) -> DashboardService:
    """Construct the process' service from environment configuration and load it."""

    repository = repository or JsonFileDashboardRepository(data_file_path())
    service = DashboardService(repository, layout=load_column_layout())
    service.load()
    return service
