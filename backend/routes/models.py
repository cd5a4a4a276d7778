"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel, Field


class CreateCharacter(BaseModel):
    id: str = Field(pattern=r"^[a-z0-9][a-z0-9-]*$", max_length=64)
    name: str


class ModuleStatus(BaseModel):
    key: str
    name: str
    installed: bool
