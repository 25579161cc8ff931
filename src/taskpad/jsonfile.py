"""Reading and writing the JSON files kept under .taskpad/."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_json(path: Path) -> Any | None:
    """Load JSON from path, or return None if the file doesn't exist."""
    if not path.exists():
        return None

    with open(path) as f:
        return json.load(f)


def write_json(path: Path, data: Any) -> None:
    """Write data as indented JSON, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        json.dump(data, f, indent=2)
