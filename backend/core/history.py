"""Daily snapshot ledger.

The ledger keeps at most one :class:`HistoryEntry` per UTC calendar day and is
always ordered newest first.  Re-uploading on the same day replaces that day's
entry instead of adding a second one.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Sequence

from backend.core.aggregate import compute_totals, summarize_agent
from backend.core.schema import AgentRecord, HistoryEntry


def utc_today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def build_entry(agents: Sequence[AgentRecord], date: str) -> HistoryEntry:
    totals = compute_totals(agents)
    return HistoryEntry(
        date=date,
        total_usd=totals.total_usd,
        total_uzs=totals.total_uzs,
        total_debtors=totals.total_debtors,
        agent_count=len(agents),
        agents=[summarize_agent(agent) for agent in agents],
    )


class HistoryLedger:
    def __init__(self, entries: Iterable[HistoryEntry] | None = None) -> None:
        self._entries: list[HistoryEntry] = []
        seen: set[str] = set()
        for entry in entries or ():
            if entry.date in seen:
                continue
            seen.add(entry.date)
            self._entries.append(entry)
        self._sort()

    def __len__(self) -> int:
        return len(self._entries)

    def _sort(self) -> None:
        self._entries.sort(key=lambda item: item.date, reverse=True)

    def upsert(self, entry: HistoryEntry) -> HistoryEntry:
        self._entries = [item for item in self._entries if item.date != entry.date]
        self._entries.append(entry)
        self._sort()
        return entry

    def upsert_today(self, agents: Sequence[AgentRecord], today: str | None = None) -> HistoryEntry:
        return self.upsert(build_entry(agents, today or utc_today()))

    def entries(self, limit: int | None = None) -> list[HistoryEntry]:
        if limit is not None and limit > 0:
            return list(self._entries[:limit])
        return list(self._entries)

    def find_by_date(self, date: str) -> HistoryEntry | None:
        for entry in self._entries:
            if entry.date == date:
                return entry
        return None

    def most_recent_excluding_today(self, today: str | None = None) -> HistoryEntry | None:
        """Latest snapshot not taken today; not necessarily yesterday's."""

        today = today or utc_today()
        for entry in self._entries:
            if entry.date != today:
                return entry
        return None

    def dates(self) -> list[dict[str, object]]:
        return [
            {"date": entry.date, "totalUSD": entry.total_usd, "totalUZS": entry.total_uzs}
            for entry in self._entries
        ]
