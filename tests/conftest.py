"""Shared test fixtures for the ancestry service tests.

The diamond hierarchy used throughout:

                                    F
                                   / \\
     A                            H   \\
    / \\                          / \\   \\
   B   C                        I   J   G
  /   / \\                        \\ /   / \\
 T   D   E                        K   L   Z
"""

from pathlib import Path

import pytest
import yaml

from ancestry_svc.hierarchy.loader import load_hierarchy_from_dict
from ancestry_svc.hierarchy.registry import EntityRegistry


# =============================================================================
# Hierarchy Fixtures
# =============================================================================

DIAMOND_REGISTRY = ["I", "C", "Z", "G", "D", "F", "L", "C", "I", "A", "T", "B", "J", "K", "H", "E", "E"]

DIAMOND_PARENTS = {
    "A": [], "B": ["A"], "C": ["A"], "T": ["B"], "D": ["C"], "E": ["C"],
    "F": [], "G": ["F"], "L": ["G"], "Z": ["G"], "H": ["F"],
    "I": ["H"], "J": ["H"], "K": ["I", "J"],
}


@pytest.fixture
def diamond_definition() -> dict:
    """Hierarchy definition in loader format."""
    return {
        "registry": list(DIAMOND_REGISTRY),
        "entities": {name: {"parents": list(parents)} for name, parents in DIAMOND_PARENTS.items()},
    }


@pytest.fixture
def diamond_registry(diamond_definition) -> EntityRegistry:
    """Entity registry for the diamond hierarchy."""
    return load_hierarchy_from_dict(diamond_definition)


@pytest.fixture
def diamond_yaml(tmp_path, diamond_definition) -> Path:
    """The diamond hierarchy written to a YAML file."""
    path = tmp_path / "hierarchy.yaml"
    path.write_text(yaml.safe_dump(diamond_definition, sort_keys=False), encoding="utf-8")
    return path
