from fastapi import APIRouter, Depends, Body
from sqlalchemy.orm import Session
from typing import Optional
from app.database import get_db
from app.dependencies import get_onboarding_service
from app.schemas.client import ClientResponse
from app.schemas.onboarding import (
    OnboardingSummaryResponse,
    SignContractRequest,
    SystemSurveyRequest,
    ScheduleKickoffRequest
)
from app.services.onboarding import OnboardingService
from app.core.logging_config import logger

router = APIRouter()


@router.get("/{client_id}/onboarding", response_model=OnboardingSummaryResponse)
def get_onboarding_summary(
    client_id: str,
    db: Session = Depends(get_db),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """
    Derived onboarding state, status label and wizard step gating.
    """
    return service.get_summary(db=db, client_id=client_id)


@router.post("/{client_id}/onboarding/sign-contract", response_model=ClientResponse)
def sign_contract(
    client_id: str,
    data: Optional[SignContractRequest] = Body(None),
    db: Session = Depends(get_db),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """
    Sign the service agreement and advance to step 2.

    Raises:
        404: If client not found
        409: If the contract is already signed
    """
    logger.info(f"Signing contract for client {client_id}")
    return service.sign_contract(db=db, client_id=client_id, data=data)


@router.post("/{client_id}/onboarding/system-survey", response_model=ClientResponse)
def complete_system_survey(
    client_id: str,
    data: Optional[SystemSurveyRequest] = Body(None),
    db: Session = Depends(get_db),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """
    Submit system details and advance to step 3.

    Raises:
        404: If client not found
        409: If the contract is not signed or the survey is already done
    """
    logger.info(f"Completing system survey for client {client_id}")
    return service.complete_system_survey(db=db, client_id=client_id, data=data)


@router.post("/{client_id}/onboarding/schedule-kickoff", response_model=ClientResponse)
def schedule_kickoff(
    client_id: str,
    data: Optional[ScheduleKickoffRequest] = Body(None),
    db: Session = Depends(get_db),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """
    Schedule the kickoff meeting and advance to step 4.

    Raises:
        404: If client not found
        409: If system details are incomplete, no meeting URL is set, or
            kickoff is already scheduled
    """
    logger.info(f"Scheduling kickoff for client {client_id}")
    return service.schedule_kickoff(db=db, client_id=client_id, data=data)


@router.post("/{client_id}/onboarding/resources-accessed", response_model=ClientResponse)
def mark_resources_accessed(
    client_id: str,
    db: Session = Depends(get_db),
    service: OnboardingService = Depends(get_onboarding_service)
):
    """
    Record that the client opened their security resources.

    Raises:
        404: If client not found
        409: If kickoff is not scheduled
    """
    logger.info(f"Marking resources accessed for client {client_id}")
    return service.mark_resources_accessed(db=db, client_id=client_id)
