from app.services.client import client_service
from app.services.milestone import milestone_service
from .integration import integration_service

__all__ = ["client_service", "milestone_service", "integration_service"]
