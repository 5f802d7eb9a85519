from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from .errors import InvalidInputError
from .models import Process
from .validation import make_process

logger = logging.getLogger(__name__)

FIELDNAMES = ["pid", "arrival_time", "burst_time"]

# Short column names used by older saved lists.
_ALIASES = {
    "arrival_time": "arrival",
    "burst_time": "burst",
}


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a process list from a JSON or CSV file. A file that does not exist
    yet is an empty list.
    """
    path = Path(path)
    _check_suffix(path)

    if not path.exists():
        logger.debug("No saved processes at %s", path)
        return []

    if path.suffix.lower() == ".json":
        processes = _load_json(path)
    else:
        processes = _load_csv(path)

    logger.debug("Loaded %d processes from %s", len(processes), path)
    return processes


def save_workload(path: str | Path, processes: Iterable[Process]) -> None:
    path = Path(path)
    _check_suffix(path)
    rows = [{"pid": p.pid, "arrival_time": p.arrival_time, "burst_time": p.burst_time} for p in processes]

    if path.suffix.lower() == ".json":
        with path.open("w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2)
    else:
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
            writer.writeheader()
            writer.writerows(rows)

    logger.debug("Saved %d processes to %s", len(rows), path)


def add_process(path: str | Path, pid: Any, arrival: Any, burst: Any) -> Process:
    """
    Validate one entry and append it to the stored list.
    """
    process = make_process(pid, arrival, burst)
    processes = load_workload(path)
    processes.append(process)
    save_workload(path, processes)
    return process


def clear_workload(path: str | Path) -> None:
    path = Path(path)
    if path.exists():
        path.unlink()
        logger.debug("Cleared saved processes at %s", path)


def _check_suffix(path: Path) -> None:
    suffix = path.suffix.lower()
    if suffix not in (".json", ".csv"):
        raise InvalidInputError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInputError(f"{path}: not valid JSON ({exc})") from exc
        except UnicodeDecodeError as exc:
            raise InvalidInputError(f"{path}: not valid UTF-8 ({exc})") from exc

    if not isinstance(raw, list):
        raise InvalidInputError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        try:
            rows = list(csv.DictReader(f))
        except UnicodeDecodeError as exc:
            raise InvalidInputError(f"{path}: not valid UTF-8 ({exc})") from exc

    return [_process_from_mapping(row) for row in rows]


def _field(mapping: Mapping[str, Any], name: str) -> Any:
    if name in mapping:
        return mapping[name]
    return mapping.get(_ALIASES.get(name, name))


def _process_from_mapping(mapping: Any) -> Process:
    if not isinstance(mapping, Mapping):
        raise InvalidInputError(f"Invalid process entry: {mapping!r}")

    return make_process(
        mapping.get("pid"),
        _field(mapping, "arrival_time"),
        _field(mapping, "burst_time"),
    )
