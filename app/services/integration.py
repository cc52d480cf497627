from typing import Any, List
from sqlalchemy.orm import Session
from app.crud import integration_status as integration_crud
from app.schemas.integration import IntegrationStatusUpdate, IntegrationChannel
from app.models.integration import IntegrationStatus
from app.core.exceptions import NotFoundError
from app.core.logging_config import logger


# (kind, display name, stored flag, connected label, disconnected label)
CHANNELS = (
    ("chat_notifications", "Slack Notifications", "slack_connected", "Connected", "Disconnected"),
    ("meeting_scheduling", "Zoho Meetings", "zoho_connected", "Ready", "Not Ready"),
    ("automation_webhook", "n8n Automation", "n8n_connected", "Configured", "Not Configured"),
)


def integration_panel(status: Any) -> List[IntegrationChannel]:
    """
    Display rows for the three channels, in fixed order.

    "Connected" only reflects what was last written to the store; no
    endpoint is contacted.
    """
    channels = []
    for kind, name, flag, on_label, off_label in CHANNELS:
        connected = bool(getattr(status, flag, False))
        channels.append(IntegrationChannel(
            kind=kind,
            name=name,
            label=on_label if connected else off_label,
            connected=connected,
        ))
    return channels


class IntegrationService:
    """
    Service layer for a client's integration status.
    """

    def __init__(self):
        self.crud = integration_crud

    def get_status(self, db: Session, client_id: str) -> IntegrationStatus:
        """
        Get the integration status for a client.

        Raises:
            NotFoundError: If the client has no integration status
        """
        status = self.crud.get_by_client(db=db, client_id=client_id)
        if status is None:
            raise NotFoundError("Integration status not found")
        return status

    def update_status(
        self,
        db: Session,
        client_id: str,
        status_data: IntegrationStatusUpdate
    ) -> IntegrationStatus:
        """
        Partially update a client's integration status.

        Raises:
            NotFoundError: If the client has no integration status
        """
        status = self.crud.update_by_client(db=db, client_id=client_id, obj_in=status_data)
        if status is None:
            raise NotFoundError("Integration status not found")

        logger.info(
            f"Integration status updated: client_id={client_id}, "
            f"fields={sorted(status_data.model_dump(exclude_unset=True))}"
        )
        return status

    def get_panel(self, db: Session, client_id: str) -> List[IntegrationChannel]:
        return integration_panel(self.get_status(db=db, client_id=client_id))


# Create a singleton instance
integration_service = IntegrationService()
