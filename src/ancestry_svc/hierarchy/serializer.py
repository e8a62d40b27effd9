"""
Hierarchy serializer.

Save an entity registry to YAML in the format the loader reads.
"""

from pathlib import Path

import yaml

from .registry import EntityRegistry


def hierarchy_to_dict(registry: EntityRegistry) -> dict:
    """Build the loader's dictionary form of a registry."""
    entities = {}
    for entity in registry.all_entities():
        data = entity.to_dict()
        data.pop("name")
        entities[entity.name] = data

    return {
        "registry": [entity.name for entity in registry.registration_order()],
        "entities": entities,
    }


def save_hierarchy_to_yaml(registry: EntityRegistry, file_path: str | Path) -> None:
    """
    Save a registry to a YAML file.

    Output format:
        # Entity Hierarchy
        registry: [I, C, Z, ...]
        entities:
          A: {}
          C:
            parents: [A]

    Args:
        registry: The registry to save
        file_path: Path to write the YAML file
    """
    data = hierarchy_to_dict(registry)

    path = Path(file_path)
    with open(path, "w", encoding="utf-8") as f:
        f.write("# Entity Hierarchy\n")
        f.write("# Registration order first, then entity definitions\n\n")
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
