"""Partition descriptor — The unit of work handed to one cursor."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PartitionDescriptor(BaseModel):
    """Scope of one scan, as planned by the external split manager."""

    model_config = ConfigDict(frozen=True)

    index: str = Field(min_length=1, description="Index (or index pattern) to scan")
    shard: int | None = Field(default=None, ge=0, description="Restrict the scan to a single shard")
    routing: str | None = Field(default=None, description="Custom routing value")
