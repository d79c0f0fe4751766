"""
Design (repository.py)
- Purpose: Own the record collection behind a tiny API so the form, dashboard and exporter
           never touch storage directly. The store is the single source of truth.
- Inputs: RecordDraft objects from the entry form.
- Outputs: Immutable snapshots (tuples) of the current records, newest first.
- Side effects: append() publishes the new collection to subscribers; the storage persister
                is always subscribed, so every mutation rewrites the full snapshot.
- Append-only: there is deliberately no update/remove/clear; saved records form an audit trail.
- Thread-safety: Main (Tk) thread only.
"""

from pathlib import Path
from typing import Callable, List, Tuple

from .config import STORAGE_KEY
from .logs import get_logger
from .models import BeneficiaryRecord, RecordDraft
from .storage import load_records, save_records, seed_records
from .utils import new_record_id, now_ms

log = get_logger(__name__)

Records = Tuple[BeneficiaryRecord, ...]
Subscriber = Callable[[Records], None]


class RecordStore:
    """
    Design (RecordStore)
    - State:
        _records: list of BeneficiaryRecord, index 0 = newest
        _subscribers: callbacks receiving the full collection after every mutation
        _loaded: whether load() has run
    """

    def __init__(
        self,
        path: Path,
        key: str = STORAGE_KEY,
        id_factory: Callable[[], str] = new_record_id,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.path = path
        self.key = key
        self._id_factory = id_factory
        self._clock = clock
        self._records: List[BeneficiaryRecord] = []
        self._subscribers: List[Subscriber] = [lambda _records: self.persist()]
        self._loaded = False

    def __enter__(self) -> "RecordStore":
        self.load()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.persist()

    def __len__(self) -> int:
        return len(self._records)

    # -------- Loading / persistence --------

    def load(self) -> Records:
        """
        Purpose: Read the saved snapshot once; fall back to the seed record.
        Outputs: Current collection.
        Side effects: First call only: reads storage. A missing or corrupt snapshot is
                      logged (storage module) and replaced by the seed, never raised.
        """
        if self._loaded:
            return self.snapshot()
        saved = load_records(self.path, self.key)
        if saved is None:
            log.info("No saved records at %s; starting from the seed record", self.path)
            self._records = seed_records(self._clock())
        else:
            log.info("Loaded %d record(s) from %s", len(saved), self.path)
            self._records = saved
        self._loaded = True
        return self.snapshot()

    def persist(self) -> None:
        """Overwrite the durable snapshot with the full collection."""
        save_records(self._records, self.path, self.key)

    # -------- Mutation --------

    def append(self, draft: RecordDraft) -> BeneficiaryRecord:
        """
        Purpose: Create a record from a draft and put it at the front of the collection.
        Inputs: draft (all fields except id/timestamp).
        Outputs: The new record, with id and timestamp assigned exactly once here.
        Side effects: Publishes the new collection (persists it).
        """
        if not self._loaded:
            self.load()
        record = draft.to_record(record_id=self._id_factory(), timestamp=self._clock())
        self._records.insert(0, record)
        log.info(
            "Added record %s (serial %s, %s, %s)",
            record.id, record.serial_number, record.beneficiary_id, record.status.value,
        )
        self._publish()
        return record

    # -------- Observers --------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Purpose: Register a callback for every future mutation.
        Outputs: A function that removes the callback again.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self) -> None:
        records = self.snapshot()
        for callback in list(self._subscribers):
            callback(records)

    # -------- Snapshots for safe reading --------

    def snapshot(self) -> Records:
        """Immutable copy of the collection, newest first."""
        return tuple(self._records)
