"""
Hierarchy definition loaders.

Load entity hierarchies from YAML or JSON files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from .registry import EntityRegistry
from .types import Entity, HierarchyDefinitionError

logger = logging.getLogger(__name__)


def load_hierarchy_from_dict(
    data: dict[str, Any],
    registry: Optional[EntityRegistry] = None,
) -> EntityRegistry:
    """
    Load a hierarchy from a dictionary.

    Expected format:
        registry: [I, C, Z, G, D]   # optional, duplicates allowed
        entities:
          A:
            display_name: Root A
          C:
            parents: [A]

    Without a ``registry`` list every entity is registered once, in
    definition order.

    Args:
        data: Parsed hierarchy definition
        registry: Optional registry to populate

    Returns:
        The populated registry

    Raises:
        HierarchyDefinitionError: If the definition is malformed, references an
            undefined entity, or its parent links form a cycle
    """
    if not isinstance(data, dict):
        raise HierarchyDefinitionError("Hierarchy definition must be a mapping")

    entities_data = data.get("entities") or {}
    if not isinstance(entities_data, dict):
        raise HierarchyDefinitionError("'entities' must map entity names to attributes")

    if registry is None:
        registry = EntityRegistry()

    for name, attrs in entities_data.items():
        if attrs is not None and not isinstance(attrs, dict):
            raise HierarchyDefinitionError(f"Attributes of '{name}' must be a mapping")
        entity = Entity.from_dict(name, attrs)
        if registry.exists(entity.name):
            logger.warning(f"Entity '{entity.name}' redefined, replacing previous definition")
        registry.define_or_update(entity)
        logger.debug(f"Loaded entity: {entity.name}")

    registry.validate()

    order = data.get("registry")
    if order is None:
        order = list(entities_data.keys())
    elif not isinstance(order, list):
        raise HierarchyDefinitionError("'registry' must be a list of entity names")

    for name in order:
        if not registry.exists(str(name)):
            raise HierarchyDefinitionError(f"Registered entity '{name}' is not defined")
        registry.register(str(name))

    logger.info(
        f"Loaded {len(registry.entity_names())} entities, {registry.count()} registry entries"
    )
    return registry


def load_hierarchy_from_yaml(
    file_path: str | Path,
    registry: Optional[EntityRegistry] = None,
) -> EntityRegistry:
    """
    Load a hierarchy from a YAML (or JSON) file.

    Raises:
        FileNotFoundError: If the file does not exist
        HierarchyDefinitionError: If the definition is malformed
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Hierarchy file not found: {path}")

    logger.info(f"Loading hierarchy file: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            if path.suffix == ".json":
                import json
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, ValueError) as e:
            raise HierarchyDefinitionError(f"Cannot parse {path}: {e}") from e

    return load_hierarchy_from_dict(data or {}, registry)
