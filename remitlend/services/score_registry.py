# ─────────────────────────────────────────────────────────────────────────────
# Score Registry — in-process credit score records
# ─────────────────────────────────────────────────────────────────────────────
# Mirrors the remittance score contract the backend fronts:
#   mint once per user, repayments add amount // 100 points,
#   history hash can be replaced without touching the score.
#
# Thread-safe: sync route handlers run in the threadpool, so every
# read-modify-write happens under a threading.Lock.
# ─────────────────────────────────────────────────────────────────────────────

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace

from remitlend.exceptions import ScoreAlreadyExistsError, ScoreNotFoundError

POINTS_DIVISOR = 100


def points_for_repayment(repayment_amount: int) -> int:
    """Score points earned by one repayment (250 → 2, 1000 → 10)."""
    if repayment_amount < 0:
        raise ValueError("repayment_amount must be non-negative")
    return repayment_amount // POINTS_DIVISOR


@dataclass(frozen=True)
class ScoreRecord:
    user_id: str
    score: int
    history_hash: str


@dataclass
class ScoreRegistry:
    """Score records keyed by user ID."""

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _records: dict[str, ScoreRecord] = field(default_factory=dict, repr=False)

    def mint(self, user_id: str, score: int, history_hash: str) -> ScoreRecord:
        record = ScoreRecord(user_id=user_id, score=score, history_hash=history_hash)
        with self._lock:
            if user_id in self._records:
                raise ScoreAlreadyExistsError(user_id)
            self._records[user_id] = record
        return record

    def get_score(self, user_id: str) -> int:
        """Current score; users without a record score 0."""
        with self._lock:
            record = self._records.get(user_id)
        return record.score if record is not None else 0

    def get_metadata(self, user_id: str) -> ScoreRecord | None:
        with self._lock:
            return self._records.get(user_id)

    def update_score(self, user_id: str, repayment_amount: int) -> ScoreRecord:
        """Apply one repayment and return the updated record."""
        points = points_for_repayment(repayment_amount)
        with self._lock:
            record = self._require(user_id)
            updated = replace(record, score=record.score + points)
            self._records[user_id] = updated
        return updated

    def update_history_hash(self, user_id: str, history_hash: str) -> ScoreRecord:
        with self._lock:
            record = self._require(user_id)
            updated = replace(record, history_hash=history_hash)
            self._records[user_id] = updated
        return updated

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _require(self, user_id: str) -> ScoreRecord:
        # Caller holds the lock
        record = self._records.get(user_id)
        if record is None:
            raise ScoreNotFoundError(user_id)
        return record
