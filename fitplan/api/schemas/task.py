"""Schemas for the task list API."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskRecord(BaseModel):
    """Wire shape of a stored task."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    completed: bool = False
    parent_id: Optional[str] = Field(default=None, alias="parentId")


class TaskCreateRequest(BaseModel):
    """Partial record; any client-sent ``id`` is ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = ""
    completed: bool = False
    parent_id: Optional[str] = Field(default=None, alias="parentId")


class TaskUpdateRequest(BaseModel):
    """Full record replacing the stored one with the same ``id``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    id: str
    title: str = ""
    completed: bool = False
    parent_id: Optional[str] = Field(default=None, alias="parentId")


class TaskDeleteRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str


class TaskDeleteResponse(BaseModel):
    success: bool = True
