"""
Ancestry Service - ordered ancestry over multi-root type hierarchies

Resolves, for a query entity and an ordered registry of entities, the
registered ancestors from most-base to most-derived, and walks them:
- Deterministic ordering with registry-order tie-breaks
- Diamond / multiple-inheritance hierarchies, duplicate registrations
- Per-ancestor visitation with instance narrowing
"""

__version__ = "0.1.0"
