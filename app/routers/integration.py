from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.integration import (
    IntegrationStatusUpdate,
    IntegrationStatusResponse,
    IntegrationPanelResponse
)
from app.services.integration import integration_service

router = APIRouter()


@router.get("/{client_id}/integrations", response_model=IntegrationStatusResponse)
def get_integration_status(
    client_id: str,
    db: Session = Depends(get_db)
):
    """
    Retrieve the stored integration status for a client.

    Raises:
        404: If the client has no integration status
    """
    return integration_service.get_status(db=db, client_id=client_id)


@router.patch("/{client_id}/integrations", response_model=IntegrationStatusResponse)
def update_integration_status(
    client_id: str,
    status_data: IntegrationStatusUpdate,
    db: Session = Depends(get_db)
):
    """
    Partially update a client's integration status.

    Raises:
        404: If the client has no integration status
    """
    return integration_service.update_status(db=db, client_id=client_id, status_data=status_data)


@router.get("/{client_id}/integrations/panel", response_model=IntegrationPanelResponse)
def get_integration_panel(
    client_id: str,
    db: Session = Depends(get_db)
):
    """
    Connected/disconnected display rows for Slack, Zoho and n8n.
    """
    return {
        "client_id": client_id,
        "channels": integration_service.get_panel(db=db, client_id=client_id),
    }
