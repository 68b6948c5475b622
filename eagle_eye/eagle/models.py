"""
Pydantic models for Eagle API responses.

Commands render the decoded `data` member as-is; these models only validate
the envelope and the few fields commands derive output from.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EagleResponse(BaseModel):
    """The {status, data} envelope every Eagle endpoint returns."""

    model_config = ConfigDict(extra="allow")

    status: str
    data: Any = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


class LibraryRef(BaseModel):
    """Name and path of the open library."""

    model_config = ConfigDict(extra="ignore")

    name: str
    path: str


class LibraryInfo(BaseModel):
    """Subset of /api/library/info used to derive file paths."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    library: LibraryRef
    folders: list[Any] = Field(default_factory=list)
    smart_folders: list[Any] = Field(default_factory=list, alias="smartFolders")
    quick_access: list[Any] = Field(default_factory=list, alias="quickAccess")
    tags_groups: list[Any] = Field(default_factory=list, alias="tagsGroups")
    modification_time: int | None = Field(default=None, alias="modificationTime")

