from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from backend.application import DashboardService
from backend.core.aggregate import extract_agent
from backend.core.schema import AgentRecord
from backend.core.validation import EmptyBatchError
from backend.domain import SheetUpload

logger = logging.getLogger(__name__)


@dataclass
class IngestionResult:
    agents: list[AgentRecord]
    file_count: int
    skipped: list[str]


class IngestionWorker:
    """Serialises upload batches and parses their files concurrently."""

    def __init__(self, service: DashboardService) -> None:
        self._service = service
        self._lock = asyncio.Lock()

    async def ingest(self, batch: list[SheetUpload]) -> IngestionResult:
        if not batch:
            raise EmptyBatchError("at least one file must be provided")

        async with self._lock:
            layout = self._service.layout
            parsed = await asyncio.gather(
                *(asyncio.to_thread(extract_agent, upload, layout) for upload in batch)
            )
            agents = [agent for agent in parsed if agent is not None]
            skipped = [upload.filename for upload, agent in zip(batch, parsed) if agent is None]
            if skipped:
                logger.warning("batch finished with %d skipped files: %s", len(skipped), ", ".join(skipped))
            committed = await asyncio.to_thread(self._service.commit_agents, agents, file_count=len(batch))
        return IngestionResult(agents=committed, file_count=len(batch), skipped=skipped)
