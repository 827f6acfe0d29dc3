import json
from datetime import date
from pathlib import Path

from src.fieldroute.persistence.filesystem import FileStorage


def test_file_storage_creates_run_directory(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory(prefix="routes_2024-03-01")

    assert run_dir.exists()
    assert run_dir.is_dir()
    assert run_dir.parent == tmp_path / "outputs"
    assert run_dir.name.startswith("routes_2024-03-01_")


def test_file_storage_writes_json_and_csv(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)
    run_dir = storage.make_run_directory()

    summary_path = run_dir / "summary.json"
    stops_path = run_dir / "stops.csv"

    storage.write_json(summary_path, {"total_routes": 1})
    storage.write_csv(stops_path, "job_id,stop_order\nJ1,1\n")

    assert summary_path.read_text(encoding="utf-8") == '{\n  "total_routes": 1\n}'
    assert stops_path.read_text(encoding="utf-8") == "job_id,stop_order\nJ1,1\n"


def test_save_route_run_writes_both_files(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path)

    run_dir = storage.save_route_run(date(2024, 3, 1), {"summary": {"total_routes": 0}}, "job_id\n")

    assert run_dir.name.startswith("routes_2024-03-01_")
    assert json.loads((run_dir / "summary.json").read_text(encoding="utf-8")) == {"summary": {"total_routes": 0}}
    assert (run_dir / "stops.csv").read_text(encoding="utf-8") == "job_id\n"
