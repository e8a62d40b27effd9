"""
Thread-safe entity registry.

Holds entity definitions by name together with the ordered registration
sequence (duplicates allowed) that ancestor resolution runs against.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, Iterator, List, Optional

from ..resolver import resolve_ancestors
from .types import Entity, HierarchyCycleError, HierarchyDefinitionError, UnknownEntityError

logger = logging.getLogger(__name__)


class EntityRegistry:
    """
    Thread-safe registry of hierarchy entities.

    Supports:
    - Definitions keyed by name, with direct-parent links
    - An ordered registration sequence, which may repeat entities
    - Reflexive, transitive derivation checks over the parent links
    - Ancestor resolution for a query entity
    """

    def __init__(self):
        self._entities: Dict[str, Entity] = {}
        self._order: List[str] = []
        self._closure: Dict[str, frozenset[str]] = {}
        self._lock = threading.RLock()

    # =========================================================================
    # Definitions
    # =========================================================================

    def define(self, entity: Entity) -> None:
        """
        Define an entity without registering it.

        Raises:
            HierarchyDefinitionError: If an entity with the same name exists
        """
        with self._lock:
            if entity.name in self._entities:
                raise HierarchyDefinitionError(f"Entity '{entity.name}' already defined")
            self._entities[entity.name] = entity
            self._closure.clear()

    def define_or_update(self, entity: Entity) -> None:
        """Define an entity, replacing any existing definition with that name."""
        with self._lock:
            self._entities[entity.name] = entity
            self._closure.clear()

    def get(self, name: str) -> Optional[Entity]:
        with self._lock:
            return self._entities.get(name)

    def get_or_raise(self, name: str) -> Entity:
        """
        Get an entity by name, raising if not defined.

        Raises:
            UnknownEntityError: If the entity is not defined
        """
        with self._lock:
            if name not in self._entities:
                raise UnknownEntityError(name)
            return self._entities[name]

    def exists(self, name: str) -> bool:
        with self._lock:
            return name in self._entities

    def all_entities(self) -> List[Entity]:
        """Get all defined entities, in definition order."""
        with self._lock:
            return list(self._entities.values())

    def entity_names(self) -> List[str]:
        with self._lock:
            return list(self._entities.keys())

    # =========================================================================
    # Registration sequence
    # =========================================================================

    def register(self, entity: Entity | str) -> None:
        """
        Append an entity to the registration sequence.

        An Entity that is not yet defined is defined first. Registering the
        same entity more than once is allowed.

        Raises:
            UnknownEntityError: If given a name that is not defined
        """
        with self._lock:
            if isinstance(entity, Entity):
                if entity.name not in self._entities:
                    self.define(entity)
                name = entity.name
            else:
                name = entity
                if name not in self._entities:
                    raise UnknownEntityError(name)
            self._order.append(name)

    def register_many(self, entities: Iterable[Entity | str]) -> None:
        """Register several entities atomically, in the given order."""
        with self._lock:
            for entity in entities:
                self.register(entity)

    def registration_order(self) -> tuple[Entity, ...]:
        """Snapshot of the registration sequence, duplicates included."""
        with self._lock:
            return tuple(self._entities[name] for name in self._order)

    def count(self) -> int:
        """Number of entries in the registration sequence."""
        with self._lock:
            return len(self._order)

    def clear(self) -> None:
        """Remove all definitions and registrations."""
        with self._lock:
            self._entities.clear()
            self._order.clear()
            self._closure.clear()

    # =========================================================================
    # Derivation
    # =========================================================================

    def _strict_ancestors(self, entity: Entity) -> frozenset[str]:
        """Names of every ancestor reachable through parent links."""
        cached = self._closure.get(entity.name)
        if cached is not None and self._entities.get(entity.name) is entity:
            return cached

        found: set[str] = set()
        path: list[str] = [entity.name]
        on_path: set[str] = {entity.name}
        stack: list[Iterator[str]] = [iter(entity.parents)]

        while stack:
            parent_name = next(stack[-1], None)
            if parent_name is None:
                stack.pop()
                on_path.discard(path.pop())
                continue
            if parent_name in on_path:
                cycle = path[path.index(parent_name):] + [parent_name]
                raise HierarchyCycleError(cycle)
            if parent_name in found:
                continue
            found.add(parent_name)
            parent = self._entities.get(parent_name)
            if parent is None:
                continue
            known = self._closure.get(parent_name)
            if known is not None:
                found.update(known)
                continue
            path.append(parent_name)
            on_path.add(parent_name)
            stack.append(iter(parent.parents))

        result = frozenset(found)
        if self._entities.get(entity.name) is entity:
            self._closure[entity.name] = result
        return result

    def ancestors_of(self, entity: Entity | str) -> frozenset[str]:
        """
        Names of all strict ancestors of an entity, registered or not.

        Raises:
            UnknownEntityError: If given a name that is not defined
            HierarchyCycleError: If the parent links loop back on themselves
        """
        with self._lock:
            if not isinstance(entity, Entity):
                entity = self.get_or_raise(entity)
            return self._strict_ancestors(entity)

    def derives_from(self, ancestor: Entity, descendant: Entity) -> bool:
        """True when ``ancestor`` is ``descendant`` or one of its ancestors."""
        if ancestor == descendant:
            return True
        with self._lock:
            return ancestor.name in self._strict_ancestors(descendant)

    def validate(self) -> None:
        """
        Check that every parent is defined and the parent links are acyclic.

        Raises:
            HierarchyDefinitionError: If a parent is not defined
            HierarchyCycleError: If the parent links form a cycle
        """
        with self._lock:
            for entity in self._entities.values():
                for parent_name in entity.parents:
                    if parent_name not in self._entities:
                        raise HierarchyDefinitionError(
                            f"Parent '{parent_name}' of '{entity.name}' is not defined"
                        )
            for entity in self._entities.values():
                self._strict_ancestors(entity)

    def resolve(self, query: Entity | str) -> tuple[Entity, ...]:
        """
        Resolve the registered ancestors of ``query``, base first.

        Args:
            query: Entity or the name of a defined entity

        Raises:
            UnknownEntityError: If given a name that is not defined
        """
        with self._lock:
            if not isinstance(query, Entity):
                query = self.get_or_raise(query)
            snapshot = self.registration_order()
        return resolve_ancestors(snapshot, query, self.derives_from)

    # =========================================================================
    # Native classes
    # =========================================================================

    @classmethod
    def from_classes(cls, classes: Iterable[type]) -> "EntityRegistry":
        """
        Build a registry from native Python classes, in the given order.

        Each class's parents are the other registered classes it subclasses,
        so derivation follows ``issubclass`` within the registered set.
        Repeated classes are registered again.

        Raises:
            HierarchyDefinitionError: If two distinct classes share a qualified name
        """
        ordered = list(classes)
        distinct: List[type] = []
        for klass in ordered:
            if klass not in distinct:
                distinct.append(klass)

        registry = cls()
        for klass in distinct:
            existing = registry.get(klass.__qualname__)
            if existing is not None and existing.type_ is not klass:
                raise HierarchyDefinitionError(
                    f"Classes {existing.type_!r} and {klass!r} share the name '{klass.__qualname__}'"
                )
            parents = tuple(
                other.__qualname__
                for other in distinct
                if other is not klass and issubclass(klass, other)
            )
            registry.define(Entity.from_class(klass, parents))

        registry.register_many(klass.__qualname__ for klass in ordered)
        logger.debug(f"Registered {len(ordered)} classes ({len(distinct)} distinct)")
        return registry

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, name: str) -> bool:
        return self.exists(name)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.registration_order())
