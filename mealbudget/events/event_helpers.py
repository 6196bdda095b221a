"""Event helper utilities.

Thin publishing functions so the planner hosts do not build payload dicts
inline. Each helper takes an optional bus (defaults to GLOBAL_EVENT_BUS) so
tests can observe an isolated bus.
"""
from __future__ import annotations
from decimal import Decimal
from typing import Any, Optional

from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    PLAN_SLOT_ASSIGNED, PLAN_SLOT_REMOVED, PLAN_SYNC_FAILED,
    BUDGET_SET, BUDGET_OVER, GROCERY_CHANGED,
)

__all__ = [
    'publish_slot_assigned', 'publish_slot_removed', 'publish_sync_failed',
    'publish_budget_set', 'publish_budget_over', 'publish_grocery_changed',
]


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else GLOBAL_EVENT_BUS


def publish_slot_assigned(slot: Any, week_key: str, bus: Optional[EventBus] = None):
    _bus(bus).publish(PLAN_SLOT_ASSIGNED, {'slot': slot, 'week_key': week_key})


def publish_slot_removed(slot: Any, week_key: str, bus: Optional[EventBus] = None):
    _bus(bus).publish(PLAN_SLOT_REMOVED, {'slot': slot, 'week_key': week_key})


def publish_sync_failed(operation: Any, error: Exception, bus: Optional[EventBus] = None):
    _bus(bus).publish(PLAN_SYNC_FAILED, {'operation': operation, 'error': str(error)})


def publish_budget_set(budget: Any, bus: Optional[EventBus] = None):
    _bus(bus).publish(BUDGET_SET, {'budget': budget})


def publish_budget_over(week_key: str, used: Decimal, budget: Decimal, bus: Optional[EventBus] = None):
    _bus(bus).publish(BUDGET_OVER, {'week_key': week_key, 'used': used, 'budget': budget})


def publish_grocery_changed(count: int, total: Decimal, bus: Optional[EventBus] = None):
    _bus(bus).publish(GROCERY_CHANGED, {'count': count, 'total': total})
