from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.database import get_db
from app.schemas.client import ClientCreate, ClientUpdate, ClientResponse
from app.services.client import client_service
from app.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=List[ClientResponse])
def get_clients(
    email: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """
    Retrieve all clients.

    Args:
        email: Only return the client with this primary contact email
        skip: Number of records to skip (default: 0)
        limit: Maximum number of records to return (default: 100)
        db: Database session

    Returns:
        List of clients
    """
    return client_service.get_clients(db=db, email=email, skip=skip, limit=limit)


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(
    client_id: str,
    db: Session = Depends(get_db)
):
    """
    Retrieve a specific client by ID.

    Raises:
        404: If client not found
    """
    return client_service.get_client(db=db, client_id=client_id)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    client_data: ClientCreate,
    db: Session = Depends(get_db)
):
    """
    Start onboarding for a new client.

    The client begins at step 1 with every completion flag false, and an
    integration status record is created alongside it.

    Args:
        client_data: Client creation data
        db: Database session

    Returns:
        Created client
    """
    logger.info(f"Creating client: name={client_data.name}")
    return client_service.create_client(db=db, client_data=client_data)


@router.patch("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: str,
    client_data: ClientUpdate,
    db: Session = Depends(get_db)
):
    """
    Merge fields into a client.

    This is a raw merge, not a gated transition: flags are written as
    sent. current_step cannot be sent and is recomputed from the flags.

    Raises:
        400: If the body fails validation
        404: If client not found
    """
    logger.info(f"Updating client {client_id}: fields={sorted(client_data.model_dump(exclude_unset=True))}")
    return client_service.update_client(db=db, client_id=client_id, client_data=client_data)
