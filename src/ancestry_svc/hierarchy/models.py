"""
Pydantic models for the Hierarchy API.

Provides response models for the hierarchy endpoints.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class EntityModel(BaseModel):
    """Entity representation for API responses."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "C",
                "display_name": "C",
                "parents": ["A"],
                "description": "",
            }
        }
    )

    name: str = Field(..., description="Entity identifier")
    display_name: str = Field("", description="Human-readable name")
    parents: List[str] = Field(default_factory=list, description="Direct parent entity names")
    description: str = Field("", description="Free-text description")


class EntityListResponse(BaseModel):
    """Response model for listing the registry."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "registry": ["C", "D", "C", "A"],
                "entities": [
                    {"name": "A", "parents": []},
                    {"name": "C", "parents": ["A"]},
                ],
                "count": 4,
            }
        }
    )

    registry: List[str] = Field(..., description="Registration order, duplicates included")
    entities: List[EntityModel] = Field(..., description="Distinct entity definitions")
    count: int = Field(..., description="Number of registry entries")


class AncestorsResponse(BaseModel):
    """Response model for ancestor resolution."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "query": "D",
                "ancestors": ["A", "C", "D"],
                "count": 3,
            }
        }
    )

    query: str = Field(..., description="Queried entity")
    ancestors: List[str] = Field(..., description="Registered ancestors, most-base first")
    count: int = Field(..., description="Number of ancestors")


class ReloadResponse(BaseModel):
    """Response model for reload operations."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Status message")
    entities_loaded: int = Field(0, description="Number of entities loaded")
    file_path: Optional[str] = Field(None, description="Definition file that was read")
