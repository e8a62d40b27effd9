"""Ancestor resolution over an ordered entity registry.

Given a registry (registration order matters, duplicates allowed) and a
query entity, produce the registered ancestors of the query from most-base
to most-derived. Each step picks the most ancestral remaining candidate,
drops every occurrence of it and appends it to the output.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence, TypeVar

from .sequence import append, ensure_sequence, filter_seq, max_by


logger = logging.getLogger(__name__)

E = TypeVar("E")

# derives_from(a, b) is True when a is an ancestor of, or equal to, b
DerivesFrom = Callable[[Any, Any], bool]


def native_derives_from(ancestor: Any, descendant: Any) -> bool:
    """Derivation relation for native Python classes (``issubclass``)."""
    return (
        isinstance(ancestor, type)
        and isinstance(descendant, type)
        and issubclass(descendant, ancestor)
    )


def _label(entity: Any) -> str:
    return getattr(entity, "__name__", None) or getattr(entity, "name", None) or repr(entity)


def resolve_ancestors(
    registry: Sequence[E],
    query: E,
    derives_from: DerivesFrom = native_derives_from,
) -> tuple[E, ...]:
    """
    Resolve the registered ancestors of ``query`` in base-to-derived order.

    The query itself is included (last) when it is registered. Entities the
    relation cannot order keep the tie-break of ``max_by``.

    Args:
        registry: Registered entities in registration order
        query: The entity whose ancestry is resolved
        derives_from: Reflexive relation, True when the first argument is an
            ancestor of or equal to the second

    Returns:
        Tuple of ancestors, empty if none are registered
    """
    entries = ensure_sequence(registry)
    remaining = filter_seq(entries, lambda candidate: derives_from(candidate, query))
    logger.debug(
        f"{len(remaining)} of {len(entries)} registry entries are ancestors of {_label(query)}"
    )

    ancestors: tuple[E, ...] = ()
    while remaining:
        most_ancestral = max_by(remaining, derives_from)
        remaining = filter_seq(remaining, lambda candidate: candidate != most_ancestral)
        ancestors = append(ancestors, most_ancestral)
        logger.debug(f"Selected {_label(most_ancestral)}, {len(remaining)} candidates left")

    return ancestors


class AncestorResolver:
    """Resolver bound to one derivation relation."""

    def __init__(self, derives_from: DerivesFrom = native_derives_from):
        self.derives_from = derives_from

    def resolve(self, registry: Sequence[E], query: E) -> tuple[E, ...]:
        return resolve_ancestors(registry, query, self.derives_from)

    def is_ancestor(self, ancestor: Any, descendant: Any) -> bool:
        return self.derives_from(ancestor, descendant)
