from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def _base_root() -> Path:
    env_root = os.getenv("DASHBOARD_DATA_DIR")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path(__file__).resolve().parents[2] / "data"


def data_file_path() -> Path:
    """Location of the persisted dashboard document."""

    env_file = os.getenv("DASHBOARD_DATA_FILE")
    if env_file:
        return Path(env_file).expanduser().resolve()
    return _base_root() / "data.json"


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as fp:
        return json.load(fp)


def write_json_atomic(path: Path, payload: Any) -> Path:
    """Write ``payload`` next to ``path`` and swap it in with ``os.replace``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fp:
            json.dump(payload, fp, ensure_ascii=False, indent=2)
            fp.flush()
            os.fsync(fp.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path
