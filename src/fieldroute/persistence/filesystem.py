"""File-based persistence for optimization run outputs."""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from ..config import settings


class FileStorage:
    """Writes one directory per optimization run under ``<data_root>/outputs``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "routes") -> Path:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        path = self.output_root / f"{prefix}_{timestamp}"
        path.mkdir(parents=True, exist_ok=False)
        return path

    def make_route_run_directory(self, route_date: date) -> Path:
        return self.make_run_directory(prefix=f"routes_{route_date.isoformat()}")

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent, default=str)

    def write_csv(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)

    def save_route_run(self, route_date: date, summary: Mapping[str, Any], stops_csv: str) -> Path:
        """Store ``summary.json`` and ``stops.csv`` for one run; returns the run directory."""
        run_dir = self.make_route_run_directory(route_date)
        self.write_json(run_dir / "summary.json", dict(summary))
        self.write_csv(run_dir / "stops.csv", stops_csv)
        return run_dir
