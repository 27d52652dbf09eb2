"""Raw search hits as returned by the store."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from searchtable.stores.base.exceptions import StoreProtocolError


class RawHit(BaseModel):
    """One matching document.

    ``fields`` is set when field projection was requested, ``source`` when the
    full document body was. Either may be missing when the document holds none
    of the requested data.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id", description="Document identifier")
    index: str = Field(alias="_index", description="Index the document lives in")
    fields: dict[str, Any] | None = Field(default=None, description="Projected field name -> value(s)")
    source: dict[str, Any] | None = Field(default=None, alias="_source", description="Full document body")

    @classmethod
    def from_response(cls, hit: dict[str, Any]) -> RawHit:
        """Parse one entry of a response's ``hits.hits`` list."""
        try:
            return cls.model_validate(hit)
        except ValidationError as e:
            raise StoreProtocolError(f"Malformed search hit: {e}") from e
