from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime


class ClientBase(BaseModel):
    name: str = Field(..., min_length=1)
    industry: Optional[str] = None
    primary_contact_name: str = Field(..., min_length=1)
    primary_contact_email: EmailStr
    salesforce_edition: Optional[str] = None
    number_of_users: Optional[str] = None
    integrations: Optional[List[str]] = None
    compliance_requirements: Optional[List[str]] = None
    service_package: Optional[str] = None
    zoho_contract_id: Optional[str] = None
    zoho_meeting_url: Optional[str] = None


class ClientCreate(ClientBase):
    """Onboarding always starts at step 1 with every flag false."""

    class Config:
        extra = "forbid"


class ClientUpdate(BaseModel):
    """
    Raw partial update.

    Flags are merged as sent; ordering is the caller's responsibility.
    current_step is not accepted here, it is recomputed from the flags.
    """
    name: Optional[str] = Field(None, min_length=1)
    industry: Optional[str] = None
    primary_contact_name: Optional[str] = Field(None, min_length=1)
    primary_contact_email: Optional[EmailStr] = None
    salesforce_edition: Optional[str] = None
    number_of_users: Optional[str] = None
    integrations: Optional[List[str]] = None
    compliance_requirements: Optional[List[str]] = None
    service_package: Optional[str] = None
    zoho_contract_id: Optional[str] = None
    zoho_meeting_url: Optional[str] = None
    contract_signed: Optional[bool] = None
    system_details_complete: Optional[bool] = None
    kickoff_scheduled: Optional[bool] = None
    resources_accessed: Optional[bool] = None

    class Config:
        extra = "forbid"

    @field_validator(
        "name", "primary_contact_name", "primary_contact_email",
        "contract_signed", "system_details_complete", "kickoff_scheduled", "resources_accessed"
    )
    @classmethod
    def reject_null(cls, v):
        # Omit a field to leave it unchanged; these columns cannot be null
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class ClientResponse(ClientBase):
    id: str
    current_step: str
    contract_signed: bool
    system_details_complete: bool
    kickoff_scheduled: bool
    resources_accessed: bool
    created_at: datetime

    class Config:
        from_attributes = True
