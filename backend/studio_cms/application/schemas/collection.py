"""Pydantic DTOs for ordered collections and their editors."""

from typing import Any

from pydantic import BaseModel, Field


class OrderedRecordResponse(BaseModel):
    """One record, flattened: key, order and the domain's fields side by side."""

    id: str
    order: int | float | None = None
    fields: dict[str, Any] = Field(default_factory=dict)


class CollectionResponse(BaseModel):
    domain: str
    section: str
    mode: str
    sync_state: str
    items: list[OrderedRecordResponse]


class FieldUpdate(BaseModel):
    """Single-field edit."""

    field: str = Field(..., min_length=1, max_length=64, examples=["name"])
    value: Any = Field(..., examples=["Brand Identity"])


class FieldUpdateResponse(BaseModel):
    id: str
    field: str
    value: Any


class ReorderRequest(BaseModel):
    """A drag result. A missing destination means the drag was cancelled."""

    source_index: int = Field(..., ge=0)
    destination_index: int | None = Field(None, ge=0)


class ReorderResponse(BaseModel):
    cancelled: bool
    written: int
    items: list[OrderedRecordResponse]


class CreatedResponse(BaseModel):
    id: str
