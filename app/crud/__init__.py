from app.crud.base import CRUDBase
from .client import client
from .milestone import milestone
from .integration import integration_status

__all__ = ["CRUDBase", "client", "milestone", "integration_status"]
