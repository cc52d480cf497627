"""
Demo data: one client at the start of onboarding with a January 2025
project plan, matching the sample the wizard UI was designed around.
"""

from datetime import date
from typing import Optional
from sqlalchemy.orm import Session
from app.crud import client as client_crud
from app.models.client import Client
from app.models.milestone import MilestoneType
from app.schemas.client import ClientCreate
from app.schemas.integration import IntegrationStatusUpdate
from app.schemas.milestone import MilestoneCreate
from app.services.client import client_service
from app.services.integration import integration_service
from app.services.milestone import milestone_service
from app.core.logging_config import logger

DEMO_CLIENT = ClientCreate(
    name="Acme Health Systems",
    industry="Healthcare Technology",
    primary_contact_name="Taylor Morgan",
    primary_contact_email="taylor@acmehealth.com",
    salesforce_edition="Professional",
    number_of_users="150",
    compliance_requirements=["HIPAA", "SOC 2", "GDPR"],
    service_package="Security Assessment Pro",
)

DEMO_MILESTONES = [
    MilestoneCreate(title="Kickoff Meeting", date=date(2025, 1, 15), type=MilestoneType.kickoff),
    MilestoneCreate(title="Security Review", date=date(2025, 1, 22), type=MilestoneType.review),
    MilestoneCreate(title="Final Delivery", date=date(2025, 1, 29), type=MilestoneType.delivery),
]


def seed_demo_data(db: Session) -> Optional[Client]:
    """
    Insert the demo client unless it already exists.

    Returns:
        The created Client, or None when it was already present
    """
    if client_crud.get_by_email(db=db, email=DEMO_CLIENT.primary_contact_email):
        logger.info("Demo client already present, skipping seed")
        return None

    client = client_service.create_client(db=db, client_data=DEMO_CLIENT)
    for milestone in DEMO_MILESTONES:
        milestone_service.create_milestone(db=db, client_id=client.id, milestone_data=milestone)
    integration_service.update_status(
        db=db,
        client_id=client.id,
        status_data=IntegrationStatusUpdate(
            slack_connected=True,
            zoho_connected=True,
            n8n_connected=True,
        ),
    )
    logger.info(f"Seeded demo client {client.id} with {len(DEMO_MILESTONES)} milestones")
    return client
