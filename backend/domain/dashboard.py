"""Domain entities for the debt dashboard."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from backend.core.history import HistoryLedger
from backend.core.schema import AgentRecord


@dataclass(frozen=True, slots=True)
class SheetUpload:
    """A single uploaded workbook: original filename plus raw bytes."""

    filename: str
    content: bytes


@dataclass(slots=True)
class DashboardState:
    """Root state: current agents, the prior upload and the daily ledger."""

    agents: list[AgentRecord] = field(default_factory=list)
    previous_agents: list[AgentRecord] | None = None
    last_updated: datetime | None = None
    history: HistoryLedger = field(default_factory=HistoryLedger)
