import json
import logging
from typing import List, Optional, Sequence

from spendwise.contracts.analysis_record import AnalysisRecord
from spendwise.core.errors import PersistenceReadError
from spendwise.infrastructure.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

HISTORY_KEY = "spendwise_history"
HISTORY_LIMIT = 50


class HistoryStore:
    """
    Newest-first log of past analyses, capped at HISTORY_LIMIT entries.

    Lifecycle:
    - load() once at startup
    - append() / clear() are the only mutators
    - every mutation persists the whole log under HISTORY_KEY
    """

    def __init__(self, kv: KeyValueStore, key: str = HISTORY_KEY, limit: int = HISTORY_LIMIT):
        self.kv = kv
        self.key = key
        self.limit = limit
        self._records: List[AnalysisRecord] = []

    @property
    def records(self) -> Sequence[AnalysisRecord]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def load(self) -> Sequence[AnalysisRecord]:
        raw = self.kv.get(self.key)
        if raw is None:
            self._records = []
            return self.records

        try:
            self._records = self._decode(raw)
        except PersistenceReadError:
            logger.exception("Failed to load history, starting with an empty log")
            self._records = []

        return self.records

    def append(self, record: AnalysisRecord) -> None:
        records = [record, *self._records][: self.limit]
        self._persist(records)
        self._records = records

    def clear(self) -> None:
        self._records = []
        self.kv.remove(self.key)

    def find(self, record_id: str) -> Optional[AnalysisRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def _persist(self, records: List[AnalysisRecord]) -> None:
        payload = json.dumps(
            [record.to_dict() for record in records],
            ensure_ascii=False,
        )
        self.kv.set(self.key, payload)

    def _decode(self, raw: str) -> List[AnalysisRecord]:
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise PersistenceReadError(f"History is not valid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise PersistenceReadError("History must be a JSON array")

        try:
            records = [AnalysisRecord.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceReadError(f"Malformed history entry: {exc}") from exc

        return records[: self.limit]
