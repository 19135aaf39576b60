from __future__ import annotations

import re
import unicodedata

_DATED_SUFFIX = re.compile(r"\s*\d+\.\d+\.\d+\.xls[xm]?$", re.IGNORECASE)
_EXTENSION = re.compile(r"\.xls[xm]?$", re.IGNORECASE)


def derive_agent_name(filename: str) -> str:
    """Turn ``"Aliyev 12.05.2024.xlsx"`` into ``"Aliyev"``."""

    name = unicodedata.normalize("NFC", filename)
    name = _DATED_SUFFIX.sub("", name)
    name = _EXTENSION.sub("", name)
    return name.strip()
