from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud import client as client_crud
from app.crud import integration_status as integration_crud
from app.schemas.client import ClientCreate, ClientUpdate
from app.schemas.integration import IntegrationStatusCreate
from app.models.client import Client
from app.core.exceptions import NotFoundError
from app.core.locks import ClientLockRegistry, client_locks
from app.core.logging_config import logger
from app.services.onboarding_state import compute_current_step, is_monotonic, read_flags


class ClientService:
    """
    Service layer for client records.

    Handles creation (with the client's integration status row) and the
    raw partial update used by PATCH /clients/{id}. Gated onboarding
    transitions live in OnboardingService.
    """

    def __init__(self, locks: Optional[ClientLockRegistry] = None):
        self.crud = client_crud
        self.locks = locks or client_locks

    def get_client(self, db: Session, client_id: str) -> Client:
        """
        Get a client by ID.

        Args:
            db: Database session
            client_id: Client ID

        Returns:
            Client instance

        Raises:
            NotFoundError: If client not found
        """
        client = self.crud.get(db=db, id=client_id)

        if not client:
            raise NotFoundError("Client not found")

        return client

    def get_clients(
        self,
        db: Session,
        email: Optional[str] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[Client]:
        """
        Get all clients, optionally only the one with a given contact email.

        Args:
            db: Database session
            email: Primary contact email to match exactly
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of Client instances
        """
        if email is not None:
            client = self.crud.get_by_email(db=db, email=email)
            return [client] if client else []
        return self.crud.get_all(db=db, skip=skip, limit=limit)

    def create_client(self, db: Session, client_data: ClientCreate) -> Client:
        """
        Create a client at step 1 along with its integration status.

        The two rows are written in separate commits; there is no
        cross-entity transaction.

        Args:
            db: Database session
            client_data: Client creation data

        Returns:
            Created Client instance
        """
        client = self.crud.create(db=db, obj_in=client_data)
        integration_crud.create(db=db, obj_in=IntegrationStatusCreate(), client_id=client.id)
        logger.info(f"Client created: id={client.id}, name={client.name}")
        return client

    def update_client(self, db: Session, client_id: str, client_data: ClientUpdate) -> Client:
        """
        Merge fields into a client as sent.

        Flag ordering is not enforced here; current_step is recomputed
        from whatever flags result.

        Args:
            db: Database session
            client_id: Client ID
            client_data: Partial client data

        Returns:
            Updated Client instance

        Raises:
            NotFoundError: If client not found
        """
        with self.locks.hold(client_id):
            client = self.crud.get_for_update(db=db, id=client_id)
            if client is None:
                db.rollback()
                raise NotFoundError("Client not found")

            self.crud.apply(client, client_data)
            flags = read_flags(client)
            client.current_step = compute_current_step(flags)
            if not is_monotonic(flags):
                logger.warning(f"Client {client_id} flags are out of order after raw update: {flags}")

            db.add(client)
            db.commit()
            db.refresh(client)
        return client


# Create a singleton instance
client_service = ClientService()
