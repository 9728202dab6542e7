"""Pydantic schemas for Document type endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DocTypeCreate(BaseModel):
    model_config = ConfigDict(json_schema_extra={
        "example": {"name": "Birth Certificate", "description": "Official birth certificate"}
    })

    name: Optional[str] = Field(None, description="Unique document type name")
    description: Optional[str] = None


class DocTypeUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class DocTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    doctype_id: int
    name: str
    description: Optional[str] = None
