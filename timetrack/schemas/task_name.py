from pydantic import BaseModel, ConfigDict, Field

from timetrack.schemas.common import UTCDateTime


class TaskNameBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)


class TaskNameCreate(TaskNameBase):
    pass


class TaskNameInDBBase(TaskNameBase):
    id: str
    created_at: UTCDateTime
    updated_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class TaskName(TaskNameInDBBase):
    pass
