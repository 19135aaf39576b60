"""Parser for per-agent debt exports.

Each workbook lists the debtors of a single collection agent.  Only the first
sheet is read, as a raw grid without header inference; the configured header
rows are skipped and the remaining rows are scanned for USD/UZS amounts.
"""

from __future__ import annotations

import io
import math
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from backend.core.columns import ColumnLayout

SYNTHETIC_NAME_PREFIX = "Qarzdor"


class SheetParseError(ValueError):
    """Raised when a workbook cannot be read at all."""


@dataclass(frozen=True, slots=True)
class DebtRow:
    name: str
    usd: float
    uzs: float


@dataclass
class DebtSheetParseResult:
    rows: list[DebtRow]
    sheet: str | None = None
    scanned_rows: int = 0


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return not math.isnan(value)


def _amount(value: Any) -> float:
    return float(value) if _is_number(value) else 0.0


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if _is_number(value):
        return value == 0
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def _display_name(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _cell(row: list[Any], index: int) -> Any:
    if index >= len(row):
        return None
    return row[index]


def read_grid(source: bytes | Path) -> tuple[str | None, list[list[Any]]]:
    """Return the first sheet name and its rows as plain Python lists."""

    handle = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
    try:
        excel = pd.ExcelFile(handle)
        sheet_name = excel.sheet_names[0] if excel.sheet_names else None
        if sheet_name is None:
            return None, []
        frame = excel.parse(sheet_name=sheet_name, header=None, dtype=object)
    except Exception as exc:  # pandas/openpyxl raise a wide range of errors
        raise SheetParseError(f"unreadable workbook: {exc}") from exc
    return sheet_name, frame.values.tolist()


def parse_rows(grid: list[list[Any]], layout: ColumnLayout) -> list[DebtRow]:
    rows: list[DebtRow] = []
    for raw in grid[layout.header_rows:]:
        if not raw:
            continue
        usd_cell = _cell(raw, layout.usd)
        uzs_cell = _cell(raw, layout.uzs)
        if not (_is_number(usd_cell) or _is_number(uzs_cell)):
            continue

        usd = _amount(usd_cell)
        uzs = _amount(uzs_cell)
        if usd <= 0 and uzs <= 0:
            continue

        name_cell = _cell(raw, layout.name)
        if _is_blank(name_cell):
            name = f"{SYNTHETIC_NAME_PREFIX} {len(rows) + 1}"
        else:
            name = _display_name(name_cell)
        rows.append(DebtRow(name=name, usd=usd, uzs=uzs))
    return rows


def parse(source: bytes | Path, layout: ColumnLayout | None = None) -> DebtSheetParseResult:
    layout = layout or ColumnLayout()
    sheet_name, grid = read_grid(source)
    return DebtSheetParseResult(
        rows=parse_rows(grid, layout),
        sheet=sheet_name,
        scanned_rows=max(len(grid) - layout.header_rows, 0),
    )
