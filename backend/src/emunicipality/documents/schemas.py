"""Pydantic schemas for Document request endpoints.

Request bodies declare every field optional: required-field and enum checks
happen in the service so they produce the standard 400 envelope with a
field-specific message. Type errors (e.g. a non-numeric user_id) and ids
outside the positive 64-bit range are still rejected by pydantic.

Timestamps are UTC on the way in and on the way out.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..params import MAX_ENTITY_ID
from ..utils import as_utc


class DocumentCreate(BaseModel):
    """Request schema for creating a document request (POST /documents).

    Status is always set to pending and request_date to the current time;
    neither can be supplied.
    """
    model_config = ConfigDict(json_schema_extra={
        "example": {"user_id": 1, "doctype_id": 2, "notes": "urgent"}
    })

    user_id: Optional[int] = Field(
        None, ge=1, le=MAX_ENTITY_ID, description="Requesting user (must exist)", examples=[1]
    )
    doctype_id: Optional[int] = Field(
        None,
        ge=1,
        le=MAX_ENTITY_ID,
        validation_alias=AliasChoices("doctype_id", "type_id"),
        description="Requested document type (must exist). 'type_id' is accepted as an alias.",
        examples=[2],
    )
    notes: Optional[str] = Field(None, description="Free-text notes", examples=["urgent"])


class DocumentUpdate(BaseModel):
    """Request schema for updating a document request (PUT /documents/{id}).

    Merge-patch: omitted or null fields keep their stored values.
    """
    model_config = ConfigDict(json_schema_extra={
        "example": {"status": "approved"}
    })

    user_id: Optional[int] = Field(None, ge=1, le=MAX_ENTITY_ID)
    doctype_id: Optional[int] = Field(
        None,
        ge=1,
        le=MAX_ENTITY_ID,
        validation_alias=AliasChoices("doctype_id", "type_id"),
    )
    status: Optional[str] = Field(
        None,
        description="pending | approved | rejected | in_progress",
        examples=["approved"],
    )
    issue_date: Optional[datetime] = Field(
        None,
        description="When the document was issued. An offset is converted to UTC; a naive value is read as UTC.",
    )
    notes: Optional[str] = None

    @field_validator("issue_date")
    @classmethod
    def issue_date_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)


class DocumentResponse(BaseModel):
    """Document request enriched with its user's and document type's display fields."""
    model_config = ConfigDict(from_attributes=True)

    document_id: int
    user_id: int
    doctype_id: int
    status: str
    request_date: datetime
    issue_date: Optional[datetime] = None
    notes: Optional[str] = None
    user_name: Optional[str] = Field(None, description="Owning user's username")
    user_email: Optional[str] = Field(None, description="Owning user's email")
    doctype_name: Optional[str] = None
    doctype_description: Optional[str] = None

    @field_validator("request_date", "issue_date")
    @classmethod
    def timestamps_in_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Stored timestamps are UTC; SQLite returns them without an offset."""
        return as_utc(v)
