"""Hierarchy walking - apply an operation to an instance once per ancestor.

The walker visits an ancestor sequence in order, handing each entity and the
instance to a caller-supplied visit callable. ``narrowing`` builds a visit
that first checks the instance really is an instance of the entity and
quietly skips the step when it is not.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from .resolver import DerivesFrom, native_derives_from, resolve_ancestors
from .sequence import ensure_sequence


logger = logging.getLogger(__name__)

Visit = Callable[[Any, Any], None]


def walk(ancestors: Sequence[Any], instance: Any, visit: Visit) -> int:
    """
    Call ``visit(entity, instance)`` for each entity, in order.

    Returns:
        The number of visits made
    """
    visits = 0
    for entity in ensure_sequence(ancestors):
        visit(entity, instance)
        visits += 1
    return visits


def narrow_instance(entity: Any, instance: Any) -> Any | None:
    """
    View ``instance`` through the shape of ``entity``.

    Uses the entity's own ``narrow`` callable if it has one, otherwise an
    isinstance check against its native type (or the entity itself when it
    is a class). Returns None when the instance does not narrow.
    """
    narrow = getattr(entity, "narrow", None)
    if callable(narrow) and not isinstance(entity, type):
        return narrow(instance)

    target = entity if isinstance(entity, type) else getattr(entity, "type_", None)
    if isinstance(target, type) and isinstance(instance, target):
        return instance
    return None


def narrowing(action: Callable[[Any, Any], None]) -> Visit:
    """Wrap ``action(entity, view)`` so it only runs when the instance narrows."""

    def visit(entity: Any, instance: Any) -> None:
        view = narrow_instance(entity, instance)
        if view is None:
            logger.debug(f"Instance does not narrow to {entity!r}, skipping")
            return
        action(entity, view)

    return visit


def walk_hierarchy(
    registry: Sequence[Any],
    query: Any,
    instance: Any,
    visit: Visit,
    derives_from: DerivesFrom = native_derives_from,
) -> tuple:
    """Resolve the ancestors of ``query`` and walk them over ``instance``.

    Returns:
        The resolved ancestor sequence
    """
    ancestors = resolve_ancestors(registry, query, derives_from)
    walk(ancestors, instance, visit)
    return ancestors


@dataclass(frozen=True)
class WalkStep:
    """One visited ancestor."""
    name: str
    narrowed: bool


@dataclass
class WalkTrace:
    """
    Visit callable that records every step of a walk.

    Each step notes whether the instance narrowed to that entity; narrowed
    steps are also passed on to ``action`` when one is given.
    """
    action: Callable[[Any, Any], None] | None = None
    steps: list[WalkStep] = field(default_factory=list)

    def __call__(self, entity: Any, instance: Any) -> None:
        view = narrow_instance(entity, instance)
        self.steps.append(WalkStep(name=_entity_name(entity), narrowed=view is not None))
        if view is not None and self.action is not None:
            self.action(entity, view)

    @property
    def names(self) -> list[str]:
        return [step.name for step in self.steps]

    @property
    def narrowed_names(self) -> list[str]:
        return [step.name for step in self.steps if step.narrowed]


def _entity_name(entity: Any) -> str:
    if isinstance(entity, type):
        return entity.__qualname__
    return getattr(entity, "name", None) or repr(entity)
