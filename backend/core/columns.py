"""Named column roles for agent debt spreadsheets.

Exports coming from the collection agents carry no machine-readable header,
so the parser relies on fixed positions.  The positions live in
``backend/config/debt_sheet_columns.yaml`` and can be overridden with the
``DEBT_SHEET_COLUMNS_FILE`` environment variable; the layout is validated
once when the application starts.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from backend.core.validation import ColumnLayoutError, validate_column_indices

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
DEFAULT_LAYOUT_FILE = CONFIG_DIR / "debt_sheet_columns.yaml"


@dataclass(frozen=True, slots=True)
class ColumnLayout:
    name: int = 1
    usd: int = 3
    uzs: int = 4
    header_rows: int = 1

    def validate(self) -> "ColumnLayout":
        validate_column_indices({"name": self.name, "usd": self.usd, "uzs": self.uzs})
        if isinstance(self.header_rows, bool) or not isinstance(self.header_rows, int) or self.header_rows < 0:
            raise ColumnLayoutError(f"header_rows must be a non-negative integer, got {self.header_rows!r}")
        return self


def _layout_path() -> Path:
    override = os.getenv("DEBT_SHEET_COLUMNS_FILE")
    if override:
        return Path(override).expanduser()
    return DEFAULT_LAYOUT_FILE


def load_column_layout(path: Path | None = None) -> ColumnLayout:
    """Read and validate the column layout, falling back to built-in defaults."""

    path = path or _layout_path()
    if not path.exists():
        if path != DEFAULT_LAYOUT_FILE:
            raise ColumnLayoutError(f"column layout file not found: {path}")
        return ColumnLayout().validate()

    with path.open("r", encoding="utf-8") as fp:
        raw = yaml.safe_load(fp) or {}
    if not isinstance(raw, dict):
        raise ColumnLayoutError(f"column layout must be a mapping: {path}")

    columns = raw.get("columns") or {}
    if not isinstance(columns, dict):
        raise ColumnLayoutError("'columns' must map role names to indices")
    unknown = set(columns) - {"name", "usd", "uzs"}
    if unknown:
        raise ColumnLayoutError(f"unknown column roles: {', '.join(sorted(unknown))}")

    defaults = ColumnLayout()
    layout = ColumnLayout(
        name=columns.get("name", defaults.name),
        usd=columns.get("usd", defaults.usd),
        uzs=columns.get("uzs", defaults.uzs),
        header_rows=raw.get("header_rows", defaults.header_rows),
    )
    return layout.validate()
