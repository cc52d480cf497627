from pydantic import BaseModel, Field
from typing import Optional, List
from app.schemas.client import ClientResponse


class SignContractRequest(BaseModel):
    """Contract fields merged when the agreement is signed (step 1)"""
    service_package: Optional[str] = None
    zoho_contract_id: Optional[str] = None
    zoho_meeting_url: Optional[str] = None

    class Config:
        extra = "forbid"


class SystemSurveyRequest(BaseModel):
    """Environment details captured by the system survey (step 2)"""
    salesforce_edition: Optional[str] = None
    number_of_users: Optional[str] = None
    integrations: Optional[List[str]] = None
    compliance_requirements: Optional[List[str]] = None

    class Config:
        extra = "forbid"


class ScheduleKickoffRequest(BaseModel):
    """Optional meeting URL to store before scheduling (step 3)"""
    zoho_meeting_url: Optional[str] = Field(None, min_length=1)

    class Config:
        extra = "forbid"


class StepView(BaseModel):
    number: int
    name: str
    completed: bool
    active: bool
    enabled: bool

    class Config:
        from_attributes = True


class OnboardingSummaryResponse(BaseModel):
    client: ClientResponse
    state: str
    status_label: str
    current_step: int
    is_complete: bool
    steps: List[StepView]
