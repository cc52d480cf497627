from pydantic import BaseModel, field_validator
from typing import Optional, List


class IntegrationStatusBase(BaseModel):
    slack_connected: bool = False
    zoho_connected: bool = False
    n8n_connected: bool = False
    slack_webhook_url: Optional[str] = None
    n8n_webhook_url: Optional[str] = None


class IntegrationStatusCreate(IntegrationStatusBase):
    pass


class IntegrationStatusUpdate(BaseModel):
    slack_connected: Optional[bool] = None
    zoho_connected: Optional[bool] = None
    n8n_connected: Optional[bool] = None
    slack_webhook_url: Optional[str] = None
    n8n_webhook_url: Optional[str] = None

    class Config:
        extra = "forbid"

    @field_validator("slack_connected", "zoho_connected", "n8n_connected")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class IntegrationStatusResponse(IntegrationStatusBase):
    id: str
    client_id: str

    class Config:
        from_attributes = True


class IntegrationChannel(BaseModel):
    """One row of the integration panel."""
    kind: str
    name: str
    label: str
    connected: bool


class IntegrationPanelResponse(BaseModel):
    client_id: str
    channels: List[IntegrationChannel]
