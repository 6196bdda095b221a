"""Core business logic layer.

Subpackages:
- planning: week keys, the weekly grid and the planner host
- budget: ledger evaluation and ceiling persistence
- shopping: grocery aggregation and the grocery list host
- costing: ingredient and meal cost math
- sync: pending operation log for optimistic updates
"""
__all__ = ["planning", "budget", "shopping", "costing", "sync"]
