"""Request and response schemas for document generation."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, Field

from crtlo.schemas import CamelModel


class DocumentCreate(CamelModel):
    """Body of POST /api/documents."""

    document_type: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="e.g. access-notice, lease-addendum",
    )
    title: str = Field(..., min_length=1)
    property_id: str | None = Field(default=None, max_length=64)
    data: dict[str, Any] | None = Field(
        default=None, description="Facts to fill into the document"
    )


class DocumentResponse(CamelModel):
    id: str
    user_id: str
    property_id: str | None = None
    document_type: str
    title: str
    content: str
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("document_metadata", "metadata"),
    )
    created_at: datetime | None = None
