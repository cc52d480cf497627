import uuid
from sqlalchemy import Column, String, Boolean, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import JSONB
from app.database import Base, TimestampMixin

JSONList = JSON().with_variant(JSONB(), "postgresql")


def new_id() -> str:
    return str(uuid.uuid4())


class Client(Base, TimestampMixin):
    """
    One onboarding engagement.

    The four boolean flags are the onboarding state; current_step is a
    convenience column recomputed from them on every write.
    """
    __tablename__ = "client"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    industry = Column(String, nullable=True)
    primary_contact_name = Column(String, nullable=False)
    primary_contact_email = Column(String, nullable=False, index=True)

    # Environment descriptors, filled in by the system survey
    salesforce_edition = Column(String, nullable=True)
    number_of_users = Column(String, nullable=True)
    integrations = Column(JSONList, nullable=True)  # list of str
    compliance_requirements = Column(JSONList, nullable=True)  # list of str

    service_package = Column(String, nullable=True)
    zoho_contract_id = Column(String, nullable=True)
    zoho_meeting_url = Column(String, nullable=True)

    current_step = Column(String(1), nullable=False, default="1")  # "1".."4"
    contract_signed = Column(Boolean, nullable=False, default=False)
    system_details_complete = Column(Boolean, nullable=False, default=False)
    kickoff_scheduled = Column(Boolean, nullable=False, default=False)
    resources_accessed = Column(Boolean, nullable=False, default=False)

    milestones = relationship("ProjectMilestone", back_populates="client")
    integration_statuses = relationship("IntegrationStatus", back_populates="client")
