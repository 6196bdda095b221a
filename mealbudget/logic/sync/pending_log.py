"""Pending operation log for optimistic, two-phase updates.

A mutation is applied to memory first, recorded here, and then mirrored to
storage. Confirmed operations leave the log; failed ones stay with their error
so the caller can retry or discard them. A reload from storage clears the log.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

logger = logging.getLogger(__name__)

PENDING = "pending"
FAILED = "failed"


@dataclass
class PendingOperation:
    kind: str
    payload: Dict[str, Any]
    id: str = field(default_factory=lambda: str(uuid4()))
    status: str = PENDING
    attempts: int = 0
    error: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self):
        return {
            "id": self.id,
            "kind": self.kind,
            "status": self.status,
            "attempts": self.attempts,
            "error": self.error,
            "created_at": self.created_at.isoformat(),
        }


class PendingLog:
    def __init__(self):
        self._ops: Dict[str, PendingOperation] = {}

    def record(self, kind: str, **payload) -> PendingOperation:
        op = PendingOperation(kind, payload)
        self._ops[op.id] = op
        return op

    def start(self, op: PendingOperation) -> PendingOperation:
        op.status = PENDING
        op.attempts += 1
        op.error = None
        return op

    def confirm(self, op: PendingOperation) -> None:
        self._ops.pop(op.id, None)

    def fail(self, op: PendingOperation, error: Exception) -> None:
        op.status = FAILED
        op.error = str(error)
        logger.warning("Operation %s (%s) failed after %d attempt(s): %s", op.id, op.kind, op.attempts, error)

    def get(self, op_id: str) -> Optional[PendingOperation]:
        return self._ops.get(op_id)

    def discard(self, op_id: str) -> bool:
        return self._ops.pop(op_id, None) is not None

    def failed(self) -> List[PendingOperation]:
        return [op for op in self._ops.values() if op.status == FAILED]

    def clear(self) -> None:
        self._ops.clear()

    def __len__(self) -> int:
        return len(self._ops)

    def __iter__(self):
        return iter(list(self._ops.values()))
