from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud import client as client_crud
from app.crud import milestone as milestone_crud
from app.schemas.milestone import MilestoneCreate, MilestoneUpdate
from app.schemas.calendar_grid import CalendarMonthResponse
from app.models.milestone import ProjectMilestone
from app.core.exceptions import NotFoundError
from app.core.logging_config import logger
from app.services.calendar_grid import (
    WEEKDAY_HEADERS,
    build_month_grid,
    default_month,
    month_start,
    shift_month,
)
import calendar
from datetime import date


class MilestoneService:
    """
    Service layer for project milestones and the calendar view over them.
    """

    def __init__(self):
        self.crud = milestone_crud

    def _require_client(self, db: Session, client_id: str) -> None:
        if client_crud.get(db=db, id=client_id) is None:
            raise NotFoundError("Client not found")

    def get_milestones(self, db: Session, client_id: str) -> List[ProjectMilestone]:
        """
        List a client's milestones.

        An unknown client simply has no milestones.
        """
        return self.crud.get_by_client(db=db, client_id=client_id)

    def create_milestone(
        self,
        db: Session,
        client_id: str,
        milestone_data: MilestoneCreate
    ) -> ProjectMilestone:
        """
        Create a milestone under a client.

        Args:
            db: Database session
            client_id: Owning client ID
            milestone_data: Milestone creation data

        Returns:
            Created ProjectMilestone instance

        Raises:
            NotFoundError: If client not found
        """
        self._require_client(db, client_id)
        milestone = self.crud.create(db=db, obj_in=milestone_data, client_id=client_id)
        logger.info(
            f"Milestone created: id={milestone.id}, client_id={client_id}, "
            f"type={milestone.type.value}, date={milestone.date.isoformat()}"
        )
        return milestone

    def update_milestone(
        self,
        db: Session,
        client_id: str,
        milestone_id: str,
        milestone_data: MilestoneUpdate
    ) -> ProjectMilestone:
        """
        Update a milestone's title or completed flag.

        Raises:
            NotFoundError: If the milestone does not exist under this client
        """
        milestone = self.crud.get(db=db, id=milestone_id)
        if milestone is None or milestone.client_id != client_id:
            raise NotFoundError("Milestone not found")

        return self.crud.update(db=db, id=milestone_id, obj_in=milestone_data)

    def get_calendar(
        self,
        db: Session,
        client_id: str,
        year: Optional[int] = None,
        month: Optional[int] = None,
        today: Optional[date] = None
    ) -> CalendarMonthResponse:
        """
        Project a client's milestones onto a month grid.

        Without year/month the grid opens on the earliest milestone's
        month, or the current month when there are none.

        Raises:
            NotFoundError: If client not found
            ValidationFailedError: If month is outside 1-12
        """
        self._require_client(db, client_id)
        milestones = self.crud.get_by_client(db=db, client_id=client_id)

        if year is None or month is None:
            default_year, default_month_number = default_month(milestones, today=today)
            year = year if year is not None else default_year
            month = month if month is not None else default_month_number

        weeks = build_month_grid(year, month, milestones)
        prev_year, prev_month = shift_month(year, month, -1)
        next_year, next_month = shift_month(year, month, 1)

        return CalendarMonthResponse.model_validate({
            "year": year,
            "month": month,
            "month_name": calendar.month_name[month],
            "weekdays": WEEKDAY_HEADERS,
            "weeks": weeks,
            "previous": month_start(prev_year, prev_month),
            "next": month_start(next_year, next_month),
        }, from_attributes=True)


# Create a singleton instance
milestone_service = MilestoneService()
