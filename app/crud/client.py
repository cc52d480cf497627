from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.crud.base import CRUDBase
from app.models.client import Client
from app.schemas.client import ClientCreate, ClientUpdate


class CRUDClient(CRUDBase[Client, ClientCreate, ClientUpdate]):
    """
    CRUD operations for Client model.
    """

    def get_by_email(self, db: Session, email: str) -> Optional[Client]:
        """
        Find a client by primary contact email.
        """
        stmt = select(Client).where(Client.primary_contact_email == email)
        return db.execute(stmt).scalars().first()

    def get_all(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Client]:
        return self.get_multi(db=db, skip=skip, limit=limit)


# Create a singleton instance
client = CRUDClient(Client)
