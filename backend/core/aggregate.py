"""Turn parsed debt rows into agent records and roll them up."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Sequence

from backend.core.agent_name import derive_agent_name
from backend.core.columns import ColumnLayout
from backend.core.schema import AgentRecord, AgentSummary, AggregateTotals, DebtorRecord
from backend.extractors import debt_sheet
from backend.extractors.debt_sheet import DebtRow, SheetParseError

if TYPE_CHECKING:  # pragma: no cover
    from backend.domain import SheetUpload

logger = logging.getLogger(__name__)


def build_agent(name: str, rows: Iterable[DebtRow]) -> AgentRecord:
    debtors: list[DebtorRecord] = []
    total_usd = 0.0
    total_uzs = 0.0
    for row in rows:
        debtors.append(DebtorRecord(name=row.name, usd=row.usd, uzs=row.uzs))
        total_usd += row.usd
        total_uzs += row.uzs
    return AgentRecord(
        name=name,
        debtors=debtors,
        total_usd=total_usd,
        total_uzs=total_uzs,
        debtor_count=len(debtors),
    )


def extract_agent(upload: SheetUpload, layout: ColumnLayout | None = None) -> AgentRecord | None:
    """Parse one uploaded workbook; ``None`` means the file was skipped."""

    try:
        result = debt_sheet.parse(upload.content, layout)
    except SheetParseError as exc:
        logger.warning("skipping %s: %s", upload.filename, exc)
        return None
    except Exception:  # noqa: BLE001 - failures are isolated per file
        logger.exception("skipping %s: unexpected parser failure", upload.filename)
        return None
    agent = build_agent(derive_agent_name(upload.filename), result.rows)
    logger.debug(
        "parsed %s (sheet=%s): %d of %d rows kept",
        upload.filename,
        result.sheet,
        agent.debtor_count,
        result.scanned_rows,
    )
    return agent


def build_agents(batch: Sequence[SheetUpload], layout: ColumnLayout | None = None) -> list[AgentRecord]:
    agents: list[AgentRecord] = []
    for upload in batch:
        agent = extract_agent(upload, layout)
        if agent is not None:
            agents.append(agent)
    return agents


def compute_totals(agents: Iterable[AgentRecord]) -> AggregateTotals:
    total_usd = 0.0
    total_uzs = 0.0
    total_debtors = 0
    for agent in agents:
        total_usd += agent.total_usd
        total_uzs += agent.total_uzs
        total_debtors += agent.debtor_count
    return AggregateTotals(total_usd=total_usd, total_uzs=total_uzs, total_debtors=total_debtors)


def summarize_agent(agent: AgentRecord) -> AgentSummary:
    return AgentSummary(
        name=agent.name,
        total_usd=agent.total_usd,
        total_uzs=agent.total_uzs,
        debtor_count=agent.debtor_count,
    )
