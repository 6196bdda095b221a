"""Web-facing observers for planner events.

Subscribes to the GLOBAL_EVENT_BUS for plan, budget and grocery events and
keeps a small in-memory ring buffer that /api/events serves, so the pages can
poll for changes (since=<last_id_seen>) instead of reloading.

Each stored event gets an auto-increment id used as the polling cursor. The
buffer is per-process and capped at MAX_EVENTS.
"""
from __future__ import annotations
import itertools
import logging
from collections import deque
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Deque, Dict, Optional

from .Event_Bus import (
    GLOBAL_EVENT_BUS, PLAN_SLOT_ASSIGNED, PLAN_SLOT_REMOVED, PLAN_SYNC_FAILED,
    BUDGET_SET, BUDGET_OVER, GROCERY_CHANGED,
)

logger = logging.getLogger(__name__)

MAX_EVENTS = 300

_lock = Lock()
_events: Deque[Dict[str, Any]] = deque(maxlen=MAX_EVENTS)
_ids = itertools.count(1)
_started = False

WATCHED = (PLAN_SLOT_ASSIGNED, PLAN_SLOT_REMOVED, PLAN_SYNC_FAILED, BUDGET_SET, BUDGET_OVER, GROCERY_CHANGED)


def _flatten(payload: Any) -> Dict[str, Any]:
    """Reduce a payload to JSON-friendly fields for the UI."""
    out: Dict[str, Any] = {}
    if not isinstance(payload, dict):
        return out
    slot = payload.get('slot')
    if slot is not None and hasattr(slot, 'meal'):
        out['slot_id'] = slot.id
        out['date'] = slot.date.isoformat()
        out['meal_slot'] = slot.meal_slot.value
        out['meal'] = getattr(slot.meal, 'name', '')
    budget = payload.get('budget')
    if budget is not None and hasattr(budget, 'week_key'):
        out['week_key'] = budget.week_key
        out['amount'] = str(budget.amount)
    elif budget is not None:
        out['budget'] = str(budget)
    op = payload.get('operation')
    if op is not None and hasattr(op, 'kind'):
        out['operation'] = op.kind
        out['operation_id'] = op.id
    for k in ('week_key', 'error', 'count'):
        if k in payload and k not in out:
            out[k] = payload[k]
    for k in ('used', 'total'):
        if k in payload:
            out[k] = str(payload[k])
    return out


def _record(event_name: str, payload: Any):
    with _lock:
        evt = {'id': next(_ids), 'type': event_name, 'ts': datetime.now(timezone.utc).isoformat()}
        evt.update(_flatten(payload))
        _events.append(evt)


def start(bus=None):
    """Subscribe the recorder to every watched event. Safe to call more than once."""
    global _started
    bus = bus or GLOBAL_EVENT_BUS
    with _lock:
        if _started:
            return
        _started = True
    for name in WATCHED:
        bus.subscribe(name, _record)
    logger.info("Web observers subscribed to %d planner events", len(WATCHED))


def get_events(since: Optional[int] = None, limit: Optional[int] = None) -> Dict[str, Any]:
    """Events with id > since (all buffered events when since is None), oldest first.

    next_cursor is the id of the newest buffered event, or since unchanged when
    nothing was recorded yet. limit keeps only the newest N of the selection.
    """
    with _lock:
        selected = [e for e in _events if since is None or e['id'] > since]
        newest = _events[-1]['id'] if _events else (since or 0)
    if limit is not None and limit >= 0:
        selected = selected[-limit:] if limit else []
    return {'events': selected, 'next_cursor': newest}


__all__ = ['start', 'get_events', 'MAX_EVENTS', 'WATCHED']
