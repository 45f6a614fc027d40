"""Type definitions for grants and directory listings."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Grant(BaseModel):
    """A filesystem root the user explicitly authorized the agent to use."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque unique grant identifier")
    root_path: str = Field(..., description="Authorized root; candidate paths must start with it")
    granted_at: int = Field(..., ge=0, description="Grant time in epoch seconds")

    @field_validator("root_path")
    @classmethod
    def root_path_not_empty(cls, v: str) -> str:
        """Reject empty roots (an empty prefix would authorize everything)."""
        if not v:
            raise ValueError("root_path must not be empty")
        return v


class FileInfo(BaseModel):
    """One directory entry returned by list_directory."""

    name: str = Field(..., description="Entry name")
    path: str = Field(..., description="Full path of the entry")
    is_directory: bool = Field(..., description="Whether the entry is a directory")
    size: int = Field(0, ge=0, description="Size in bytes (0 if unavailable)")
    modified: int = Field(0, ge=0, description="Modified time in epoch seconds (0 if unavailable)")
