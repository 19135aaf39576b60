"""Infrastructure layer for dashboard state persistence."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from backend.core.history import HistoryLedger
from backend.core.schema import DashboardDocument
from backend.core.storage import read_json, write_json_atomic
from backend.domain import DashboardState

logger = logging.getLogger(__name__)


class DashboardRepository(Protocol):
    """Persistence contract for the dashboard state."""

    def load(self) -> DashboardState: ...

    def save(self, state: DashboardState) -> None: ...


def to_document(state: DashboardState) -> DashboardDocument:
    return DashboardDocument(
        agents=list(state.agents),
        last_updated=state.last_updated.isoformat() if state.last_updated else None,
        previous_data=list(state.previous_agents) if state.previous_agents is not None else None,
        history=state.history.entries(),
    )


def from_document(document: DashboardDocument) -> DashboardState:
    last_updated: datetime | None = None
    if document.last_updated:
        try:
            last_updated = datetime.fromisoformat(document.last_updated.replace("Z", "+00:00"))
        except ValueError:
            logger.warning("ignoring malformed lastUpdated value %r", document.last_updated)
    return DashboardState(
        agents=list(document.agents),
        previous_agents=list(document.previous_data) if document.previous_data is not None else None,
        last_updated=last_updated,
        history=HistoryLedger(document.history),
    )


class JsonFileDashboardRepository:
    """Stores the whole state as one JSON document, replaced atomically."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> DashboardState:
        if not self._path.exists():
            logger.info("no dashboard state at %s, starting empty", self._path)
            return DashboardState()
        try:
            raw = read_json(self._path)
            document = DashboardDocument.model_validate(raw)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("could not load dashboard state from %s, starting empty: %s", self._path, exc)
            return DashboardState()
        return from_document(document)

    def save(self, state: DashboardState) -> None:
        document = to_document(state)
        write_json_atomic(self._path, document.model_dump(mode="json", by_alias=True))


class InMemoryDashboardRepository:
    """Keeps the last saved document in memory; used in tests."""

    def __init__(self, document: DashboardDocument | None = None) -> None:
        self._document = document
        self.save_count = 0

    def load(self) -> DashboardState:
        if self._document is None:
            return DashboardState()
        return from_document(self._document)

    def save(self, state: DashboardState) -> None:
        self._document = to_document(state).model_copy(deep=True)
        self.save_count += 1

    @property
    def document(self) -> DashboardDocument | None:
        return self._document
