"""
Entity Hierarchy Layer

Named entity definitions with direct-parent links, an ordered registration
sequence, and loaders/serializers for YAML hierarchy files.
"""

from .types import (
    Entity,
    HierarchyError,
    HierarchyDefinitionError,
    HierarchyCycleError,
    UnknownEntityError,
)
from .registry import EntityRegistry
from .loader import load_hierarchy_from_yaml, load_hierarchy_from_dict
from .serializer import save_hierarchy_to_yaml

__all__ = [
    "Entity",
    "EntityRegistry",
    "HierarchyError",
    "HierarchyDefinitionError",
    "HierarchyCycleError",
    "UnknownEntityError",
    "load_hierarchy_from_yaml",
    "load_hierarchy_from_dict",
    "save_hierarchy_to_yaml",
]
