"""In-process event bus for planner notifications.

Event names:
  plan.slot_assigned -> payload {"slot": PlannedSlot, "week_key": str}
  plan.slot_removed  -> payload {"slot": PlannedSlot, "week_key": str}
  plan.sync_failed   -> payload {"operation": PendingOperation, "error": str}
  budget.set         -> payload {"budget": WeeklyBudget}
  budget.over        -> payload {"week_key": str, "used": Decimal, "budget": Decimal}
  grocery.changed    -> payload {"count": int, "total": Decimal}

Listeners are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, List

logger = logging.getLogger(__name__)

# Event names
PLAN_SLOT_ASSIGNED = "plan.slot_assigned"
PLAN_SLOT_REMOVED = "plan.slot_removed"
PLAN_SYNC_FAILED = "plan.sync_failed"
BUDGET_SET = "budget.set"
BUDGET_OVER = "budget.over"
GROCERY_CHANGED = "grocery.changed"


Listener = Callable[[str, Any], None]


class EventBus:
	"""Synchronous fan-out of named events to listeners, in subscription order."""

	def __init__(self):
		self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Listener) -> Listener:
		"""Register once per event; returns the callback."""
		registered = self._listeners[event_name]
		if callback not in registered:
			registered.append(callback)
		return callback

	def unsubscribe(self, event_name: str, callback: Listener) -> bool:
		registered = self._listeners.get(event_name)
		if not registered or callback not in registered:
			return False
		registered.remove(callback)
		return True

	def listeners(self, event_name: str) -> List[Listener]:
		return list(self._listeners.get(event_name, ()))

	def clear(self):
		self._listeners.clear()

	def publish(self, event_name: str, payload: Any) -> int:
		"""Deliver to every listener; returns how many received it without raising."""
		delivered = 0
		for listener in self.listeners(event_name):
			try:
				listener(event_name, payload)
			except Exception:  # listener errors never reach the publisher
				logger.exception("Error delivering %s to %s", event_name, listener)
			else:
				delivered += 1
		return delivered


# Process-wide bus shared by the hosts and the web observers
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'Listener', 'GLOBAL_EVENT_BUS',
	'PLAN_SLOT_ASSIGNED', 'PLAN_SLOT_REMOVED', 'PLAN_SYNC_FAILED',
	'BUDGET_SET', 'BUDGET_OVER', 'GROCERY_CHANGED',
]
