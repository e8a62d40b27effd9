"""FastAPI routes for the Hierarchy API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException

from .types import Entity, HierarchyError
from .registry import EntityRegistry
from .loader import load_hierarchy_from_yaml
from .models import (
    EntityModel,
    EntityListResponse,
    AncestorsResponse,
    ReloadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hierarchy", tags=["Hierarchy"])

# Configuration - set during app startup
_registry: EntityRegistry | None = None
_definition_file: str | None = None


def configure(
    registry: EntityRegistry,
    definition_file: Optional[str] = None,
) -> None:
    """Configure the Hierarchy routes.

    Args:
        registry: The entity registry to serve
        definition_file: Optional YAML file the reload endpoint reads
    """
    global _registry, _definition_file
    _registry = registry
    _definition_file = definition_file


def current_registry() -> EntityRegistry | None:
    """The configured registry, or None before startup."""
    return _registry


def _get_registry() -> EntityRegistry:
    """Get the entity registry, raising if not configured."""
    if _registry is None:
        raise HTTPException(status_code=503, detail="Hierarchy registry not initialized")
    return _registry


def _entity_to_model(entity: Entity) -> EntityModel:
    return EntityModel(
        name=entity.name,
        display_name=entity.display_name,
        parents=list(entity.parents),
        description=entity.description,
    )


@router.get("/entities", response_model=EntityListResponse)
async def list_entities():
    """
    List the registry.

    Returns the registration order (duplicates included) and every distinct
    entity definition.
    """
    registry = _get_registry()
    order = registry.registration_order()

    return EntityListResponse(
        registry=[entity.name for entity in order],
        entities=[_entity_to_model(e) for e in registry.all_entities()],
        count=len(order),
    )


@router.get("/ancestors/{name}", response_model=AncestorsResponse)
async def get_ancestors(name: str):
    """
    Resolve the registered ancestors of an entity, most-base first.

    An entity with no registered ancestors yields an empty list.
    """
    registry = _get_registry()
    ancestors = registry.resolve(name)

    return AncestorsResponse(
        query=name,
        ancestors=[entity.name for entity in ancestors],
        count=len(ancestors),
    )


@router.post("/reload", response_model=ReloadResponse)
async def reload_hierarchy():
    """
    Reload the hierarchy from its definition file.

    The current registry is only replaced when the file loads cleanly.
    """
    global _registry
    _get_registry()

    if not _definition_file:
        raise HTTPException(status_code=400, detail="No hierarchy definition file configured")

    source_path = Path(_definition_file)
    if not source_path.exists():
        raise HTTPException(status_code=404, detail=f"Hierarchy file not found: {source_path}")

    try:
        registry = load_hierarchy_from_yaml(source_path)
    except HierarchyError as e:
        logger.error(f"Failed to reload hierarchy: {e}")
        raise HTTPException(status_code=400, detail=f"Failed to reload: {e}")

    _registry = registry
    count = len(registry.entity_names())
    logger.info(f"Reloaded {count} entities from {source_path}")

    return ReloadResponse(
        success=True,
        message=f"Reloaded {count} entities from {source_path}",
        entities_loaded=count,
        file_path=str(source_path.absolute()),
    )
