"""Core controllog SDK: event and posting writers.

Events go to ``events.jsonl`` and postings to ``postings.jsonl`` under a
per-day directory inside the configured log directory. Postings attached to a
single event are expected to balance (sum to zero) per account type.
"""

import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

_STATE: Dict[str, Any] = {
    "project_id": None,
    "log_dir": None,
}
_LOCK = threading.Lock()


def init(project_id: str, log_dir: Path) -> None:
    """Configure the SDK. Must be called before emitting events."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    _STATE["project_id"] = project_id
    _STATE["log_dir"] = log_dir
    logger.debug(f"controllog initialized: project={project_id} dir={log_dir}")


def new_id() -> str:
    """Return a fresh unique identifier."""
    return str(uuid.uuid4())


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _day_dir() -> Path:
    log_dir = _STATE["log_dir"]
    if log_dir is None:
        raise RuntimeError("controllog not initialized; call controllog.init() first")
    day = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    path = Path(log_dir) / "controllog" / day
    path.mkdir(parents=True, exist_ok=True)
    return path


def _write_jsonl(path: Path, data: Dict[str, Any]) -> None:
    """Append one JSON record to a JSONL file."""
    line = json.dumps(data, default=str)
    with _LOCK:
        with open(path, "a") as f:
            f.write(line + "\n")


def event(
    kind: str,
    actor: Optional[Dict[str, Any]] = None,
    run_id: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
    project_id: Optional[str] = None,
    source: str = "runtime",
    task_id: Optional[str] = None,
    postings: Optional[List[Dict[str, Any]]] = None,
    event_id: Optional[str] = None,
) -> str:
    """Write an event (and optional postings). Returns the event ID."""
    event_id = event_id or new_id()
    record = {
        "event_id": event_id,
        "event_time": _now_iso(),
        "kind": kind,
        "actor_json": actor or {},
        "project_id": project_id or _STATE["project_id"],
        "run_id": run_id,
        "task_id": task_id,
        "source": source,
        "payload_json": payload or {},
    }
    day_dir = _day_dir()
    _write_jsonl(day_dir / "events.jsonl", record)

    for posting in postings or []:
        post(event_id=event_id, **posting)

    return event_id


def post(
    event_id: str,
    account_type: str,
    account_id: str,
    unit: str,
    delta_numeric: float,
    dims: Optional[Dict[str, Any]] = None,
) -> str:
    """Write a single posting tied to an event. Returns the posting ID."""
    posting_id = new_id()
    record = {
        "posting_id": posting_id,
        "event_id": event_id,
        "account_type": account_type,
        "account_id": account_id,
        "unit": unit,
        "delta_numeric": delta_numeric,
        "dims_json": dims or {},
    }
    _write_jsonl(_day_dir() / "postings.jsonl", record)
    return posting_id
