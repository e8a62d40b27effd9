"""Ancestry service HTTP entry point.

Start with:
    PYTHONPATH=src uvicorn ancestry_svc.main:app --host 0.0.0.0 --port 8060

Set ANCESTRY_CONFIG to a YAML config file to serve a hierarchy definition
file; without one the demonstration hierarchy is served.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .config import Config
from .demo import build_demo_registry
from .hierarchy import routes as hierarchy_routes
from .hierarchy.loader import load_hierarchy_from_yaml
from .hierarchy.registry import EntityRegistry
from .hierarchy.types import HierarchyError, UnknownEntityError

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    status: str
    entities: int
    registry_entries: int


def build_registry(config: Config) -> EntityRegistry:
    """Load the configured hierarchy, falling back to the demonstration one."""
    if config.hierarchy.definition_file:
        return load_hierarchy_from_yaml(config.hierarchy.definition_file)
    logger.info("No hierarchy definition file configured, serving demo hierarchy")
    return build_demo_registry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    logger.info("Starting ancestry service...")

    config = Config.from_env()
    registry = build_registry(config)
    hierarchy_routes.configure(registry, config.hierarchy.definition_file)

    logger.info(f"Ancestry service started with {registry.count()} registry entries")

    yield

    logger.info("Ancestry service stopped")


app = FastAPI(
    title="Ancestry Service",
    description="Resolves the registered ancestors of an entity, most-base first.",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(hierarchy_routes.router)


@app.exception_handler(UnknownEntityError)
async def unknown_entity_handler(request: Request, exc: UnknownEntityError):
    return JSONResponse(
        status_code=404,
        content={"error": "Not found", "detail": str(exc)},
    )


@app.exception_handler(HierarchyError)
async def hierarchy_error_handler(request: Request, exc: HierarchyError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid hierarchy", "detail": str(exc)},
    )


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    registry = hierarchy_routes.current_registry()
    return HealthResponse(
        status="healthy" if registry is not None else "starting",
        entities=len(registry.entity_names()) if registry is not None else 0,
        registry_entries=registry.count() if registry is not None else 0,
    )


def run():
    """Run the service with uvicorn."""
    import uvicorn

    config = Config.from_env()
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format=config.logging.format,
    )

    uvicorn.run(
        "ancestry_svc.main:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.reload,
    )


if __name__ == "__main__":
    run()
