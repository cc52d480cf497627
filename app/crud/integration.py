from typing import Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.integration import IntegrationStatus
from app.schemas.integration import IntegrationStatusCreate, IntegrationStatusUpdate


class CRUDIntegrationStatus(CRUDBase[IntegrationStatus, IntegrationStatusCreate, IntegrationStatusUpdate]):
    """
    CRUD operations for IntegrationStatus model.

    Modeled one-to-many for flexibility; in practice each client has one
    row and get_by_client returns the oldest.
    """

    def get_by_client(self, db: Session, client_id: str) -> Optional[IntegrationStatus]:
        statuses = self.get_multi(db=db, limit=1, filters={"client_id": client_id})
        return statuses[0] if statuses else None

    def update_by_client(
        self,
        db: Session,
        *,
        client_id: str,
        obj_in: IntegrationStatusUpdate
    ) -> Optional[IntegrationStatus]:
        """
        Partially update the client's integration status.

        Returns:
            Updated instance or None when the client has no status row
        """
        existing = self.get_by_client(db=db, client_id=client_id)
        if existing is None:
            return None
        return self.update(db=db, id=existing.id, obj_in=obj_in)


# Create a singleton instance
integration_status = CRUDIntegrationStatus(IntegrationStatus)
