from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, constr, field_validator


class DebtorRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    usd: float = 0.0
    uzs: float = 0.0


class AgentRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    debtors: list[DebtorRecord] = Field(default_factory=list)
    total_usd: float = Field(default=0.0, alias="totalUSD")
    total_uzs: float = Field(default=0.0, alias="totalUZS")
    debtor_count: int = Field(default=0, alias="debtorCount")


class AgentSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    total_usd: float = Field(default=0.0, alias="totalUSD")
    total_uzs: float = Field(default=0.0, alias="totalUZS")
    debtor_count: int = Field(default=0, alias="debtorCount")


class AggregateTotals(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_usd: float = Field(default=0.0, alias="totalUSD")
    total_uzs: float = Field(default=0.0, alias="totalUZS")
    total_debtors: int = Field(default=0, alias="totalDebtors")


class HistoryEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: constr(pattern=r"^\d{4}-\d{2}-\d{2}$")
    total_usd: float = Field(default=0.0, alias="totalUSD")
    total_uzs: float = Field(default=0.0, alias="totalUZS")
    total_debtors: int = Field(default=0, alias="totalDebtors")
    agent_count: int = Field(default=0, alias="agentCount")
    agents: list[AgentSummary] = Field(default_factory=list)


class Comparison(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    usd_change: float = Field(alias="usdChange")
    uzs_change: float = Field(alias="uzsChange")
    debtor_change: int = Field(alias="debtorChange")
    trend: Literal["up", "down", "stable"] = "stable"
    previous_date: str | None = Field(default=None, alias="previousDate")


class DashboardDocument(BaseModel):
    """On-disk layout of the dashboard state."""

    model_config = ConfigDict(populate_by_name=True)

    agents: list[AgentRecord] = Field(default_factory=list)
    last_updated: str | None = Field(default=None, alias="lastUpdated")
    previous_data: list[AgentRecord] | None = Field(default=None, alias="previousData")
    history: list[HistoryEntry] = Field(default_factory=list)

    @field_validator("agents", "history", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value
