"""
Sync Application DTOs
=====================

Data Transfer Objects for the third-party API.

These Pydantic models define the canonical user contract and its JSON wire
envelope. Field values are typed as Any: the mapper carries driver values
through untouched and only serialization renders them.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class CanonicalUser(BaseModel):
    """A user record in the shape the third-party API expects."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Any = Field(..., description="User ID as stored")
    name: Any = Field(..., description="Display name")
    email: Any = Field(..., description="Email address")
    created_at: Any = Field(..., alias="createdAt", description="Creation timestamp as stored")


class UserSyncPayload(BaseModel):
    """Request body sent to the third-party API."""

    users: List[CanonicalUser] = Field(
        default_factory=list,
        description="Users in query result order"
    )

    def to_json(self) -> str:
        """Render the body with wire field names (createdAt)."""
        return self.model_dump_json(by_alias=True)
