from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from timetrack.core.config import settings
from timetrack.schemas.common import UTCDateTime

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class ProjectBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    color: str = Field(default=settings.DEFAULT_PROJECT_COLOR, pattern=HEX_COLOR_PATTERN)


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)


class ProjectInDBBase(ProjectBase):
    id: str
    created_at: UTCDateTime
    updated_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class Project(ProjectInDBBase):
    pass
