from pydantic import BaseModel
from typing import Optional, List
import datetime
from app.schemas.milestone import MilestoneResponse


class CalendarCell(BaseModel):
    """A blank cell has day=None and no milestones."""
    day: Optional[int] = None
    date: Optional[datetime.date] = None
    milestones: List[MilestoneResponse] = []

    class Config:
        from_attributes = True


class CalendarMonthResponse(BaseModel):
    year: int
    month: int
    month_name: str
    weekdays: List[str]
    weeks: List[List[CalendarCell]]
    # None past the first or last representable month
    previous: Optional[datetime.date] = None
    next: Optional[datetime.date] = None
