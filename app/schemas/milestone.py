from pydantic import BaseModel, Field, field_validator
from typing import Optional
import datetime
from app.models.milestone import MilestoneType


class MilestoneBase(BaseModel):
    title: str = Field(..., min_length=1)
    date: datetime.date
    type: MilestoneType = MilestoneType.custom
    completed: bool = False


class MilestoneCreate(MilestoneBase):
    """client_id comes from the URL path, never from the body."""

    class Config:
        extra = "forbid"


class MilestoneUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    completed: Optional[bool] = None

    class Config:
        extra = "forbid"

    @field_validator("title", "completed")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class MilestoneResponse(MilestoneBase):
    id: str
    client_id: str

    class Config:
        from_attributes = True
