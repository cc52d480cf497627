from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.schemas.milestone import MilestoneCreate, MilestoneUpdate, MilestoneResponse
from app.schemas.calendar_grid import CalendarMonthResponse
from app.services.milestone import milestone_service
from app.core.logging_config import logger

router = APIRouter()


@router.get("/{client_id}/milestones", response_model=List[MilestoneResponse])
def get_milestones(
    client_id: str,
    db: Session = Depends(get_db)
):
    """
    List milestones for a client.
    """
    return milestone_service.get_milestones(db=db, client_id=client_id)


@router.post(
    "/{client_id}/milestones",
    response_model=MilestoneResponse,
    status_code=status.HTTP_201_CREATED
)
def create_milestone(
    client_id: str,
    milestone_data: MilestoneCreate,
    db: Session = Depends(get_db)
):
    """
    Create a milestone under a client.

    Example:
        ```json
        {
            "title": "Kickoff Meeting",
            "date": "2025-01-15",
            "type": "kickoff"
        }
        ```

    Raises:
        400: If the body fails validation
        404: If client not found
    """
    logger.info(f"Creating milestone for client {client_id}: {milestone_data.title}")
    return milestone_service.create_milestone(
        db=db,
        client_id=client_id,
        milestone_data=milestone_data
    )


@router.patch("/{client_id}/milestones/{milestone_id}", response_model=MilestoneResponse)
def update_milestone(
    client_id: str,
    milestone_id: str,
    milestone_data: MilestoneUpdate,
    db: Session = Depends(get_db)
):
    """
    Update a milestone (typically toggling completed).
    """
    return milestone_service.update_milestone(
        db=db,
        client_id=client_id,
        milestone_id=milestone_id,
        milestone_data=milestone_data
    )


@router.get("/{client_id}/calendar", response_model=CalendarMonthResponse)
def get_calendar(
    client_id: str,
    year: Optional[int] = Query(None, ge=1, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db)
):
    """
    Month grid with the client's milestones placed on their days.

    Weeks start on Sunday; blank cells pad the first and last week.

    Args:
        client_id: Client ID
        year: Calendar year (defaults with month to the earliest milestone)
        month: Month number 1-12
        db: Database session
    """
    return milestone_service.get_calendar(db=db, client_id=client_id, year=year, month=month)
