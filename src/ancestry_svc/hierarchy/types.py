"""
Entity data model.

An Entity describes one registered type in a hierarchy: its identifier,
display metadata, the names of its direct parents and, optionally, the
native class it stands for and a way to narrow an instance to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional


class HierarchyError(Exception):
    """Base class for hierarchy definition and lookup errors."""
    pass


class UnknownEntityError(HierarchyError, KeyError):
    """Raised when an entity name is not defined in the registry."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Entity '{self.name}' not found"


class HierarchyDefinitionError(HierarchyError, ValueError):
    """Raised when a hierarchy definition is malformed."""
    pass


class HierarchyCycleError(HierarchyDefinitionError):
    """Raised when parent links form a cycle."""

    def __init__(self, path: list[str]):
        super().__init__(f"Cycle detected in entity hierarchy: {' -> '.join(path)}")
        self.path = path


@dataclass(frozen=True)
class Entity:
    """
    A registered type in a derivation hierarchy.

    Entities compare and hash by ``name`` only, so two descriptors for the
    same identifier are the same entity regardless of their metadata.
    """

    # Required: unique identifier within a registry
    name: str

    display_name: str = field(default="", compare=False)
    parents: tuple[str, ...] = field(default=(), compare=False)  # direct parents only
    description: str = field(default="", compare=False)

    # Native class this entity describes, used for isinstance narrowing
    type_: Optional[type] = field(default=None, compare=False, repr=False)
    # Custom narrowing: returns a view of the instance, or None if it does not apply
    narrow: Optional[Callable[[Any], Any]] = field(default=None, compare=False, repr=False)

    @property
    def label(self) -> str:
        return self.display_name or self.name

    def to_dict(self) -> dict:
        """Convert to a plain dictionary (native type and narrowing excluded)."""
        data: dict[str, Any] = {"name": self.name}
        if self.display_name:
            data["display_name"] = self.display_name
        if self.parents:
            data["parents"] = list(self.parents)
        if self.description:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, name: str, data: dict | None) -> "Entity":
        """
        Create an Entity from a dictionary.

        Args:
            name: The entity identifier
            data: Dictionary of entity attributes (may be None)

        Returns:
            Entity instance

        Raises:
            HierarchyDefinitionError: If ``parents`` is not a list of names, or
                a text attribute is a list or mapping
        """
        data = data or {}
        parents = data.get("parents") or []
        if isinstance(parents, str):
            parents = [parents]
        if not isinstance(parents, (list, tuple)):
            raise HierarchyDefinitionError(f"Parents of '{name}' must be a list of names")
        return cls(
            name=str(name),
            display_name=_text(name, "display_name", data.get("display_name")),
            parents=tuple(str(p) for p in parents),
            description=_text(name, "description", data.get("description")),
        )

    @classmethod
    def from_class(cls, klass: type, parents: tuple[str, ...] = ()) -> "Entity":
        """Describe a native Python class."""
        return cls(
            name=klass.__qualname__,
            display_name=klass.__name__,
            parents=parents,
            description=(klass.__doc__ or "").strip(),
            type_=klass,
        )


def _text(name: str, key: str, value: Any) -> str:
    """Normalise an optional scalar attribute to a string."""
    if value is None:
        return ""
    if isinstance(value, (dict, list, tuple, set)):
        raise HierarchyDefinitionError(f"'{key}' of '{name}' must be text")
    return str(value)
