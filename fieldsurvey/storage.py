"""
Design (storage.py)
- Purpose: Load and save the record collection to/from a local key-value document (JSON).
- Inputs: Path (from get_storage_path()), storage key, list of BeneficiaryRecord for save.
- Outputs: list[BeneficiaryRecord] | None on load; None on save.
- Side effects: Reads/writes file. On load failure returns None (caller falls back to the
                seed record); on save failure logs and carries on.
- Thread-safety: Call from main thread only (the store persists after each mutation).
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import APP_DIR_NAME, SEED_RECORD, STORAGE_FILENAME, STORAGE_KEY
from .logs import get_logger
from .models import BeneficiaryRecord

log = get_logger(__name__)


def get_storage_path() -> Path:
    """
    Resolve path for the storage document. Prefer the per-user app data dir so records
    survive reinstalls. Fallback to the project dir (or next to the executable when frozen).
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) / APP_DIR_NAME if appdata else None
    else:
        data_home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
        base = Path(data_home) / "fieldsurvey"
    if base is not None:
        try:
            base.mkdir(parents=True, exist_ok=True)
            return base / STORAGE_FILENAME
        except OSError:
            log.warning("Cannot create data dir %s; using fallback location", base)
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        fallback = Path(sys.executable).parent
    else:
        fallback = Path(__file__).resolve().parent.parent
    return fallback / STORAGE_FILENAME


def _read_document(path: Path) -> Dict[str, Any]:
    """Whole key-value document; {} when missing or unreadable."""
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        log.warning("Storage file %s unreadable: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        log.warning("Storage file %s is not a key-value document", path)
        return {}
    return data


def load_records(path: Path, key: str = STORAGE_KEY) -> Optional[List[BeneficiaryRecord]]:
    """
    Load the record list saved under key. Returns None on missing file/key or any parse
    error; a single malformed record invalidates the whole snapshot.
    """
    data = _read_document(path)
    if key not in data:
        return None
    raw = data[key]
    if not isinstance(raw, list):
        log.warning("Snapshot under %r is not a list; ignoring it", key)
        return None
    records: List[BeneficiaryRecord] = []
    for item in raw:
        if not isinstance(item, dict):
            log.warning("Snapshot under %r holds a non-object entry; ignoring it", key)
            return None
        try:
            records.append(BeneficiaryRecord.from_dict(item))
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("Snapshot under %r has a malformed record (%s); ignoring it", key, exc)
            return None
    return records


def save_records(records: List[BeneficiaryRecord], path: Path, key: str = STORAGE_KEY) -> None:
    """
    Overwrite the snapshot under key with the full collection; other keys are preserved.
    Logs OSError (e.g. read-only location) instead of raising.
    """
    data = _read_document(path)
    data[key] = [r.to_dict() for r in records]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as exc:
        log.error("Could not save %d record(s) to %s: %s", len(records), path, exc)
        return
    log.debug("Saved %d record(s) to %s", len(records), path)


def seed_records(timestamp: int) -> List[BeneficiaryRecord]:
    """The single example record used when nothing has been saved yet."""
    return [BeneficiaryRecord.from_dict({**SEED_RECORD, "timestamp": timestamp})]
