from sqlalchemy import Column, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base, TimestampMixin
from app.models.client import new_id

class IntegrationStatus(Base, TimestampMixin):
    """
    Last-written connection flags for a client's three channels.
    Display-only; nothing here gates onboarding transitions.
    """
    __tablename__ = "integration_status"

    id = Column(String(36), primary_key=True, default=new_id)
    client_id = Column(String(36), ForeignKey("client.id", ondelete="CASCADE"), nullable=False, index=True)
    slack_connected = Column(Boolean, nullable=False, default=False)  # chat notifications
    zoho_connected = Column(Boolean, nullable=False, default=False)  # meeting scheduling
    n8n_connected = Column(Boolean, nullable=False, default=False)  # automation webhook
    slack_webhook_url = Column(String, nullable=True)
    n8n_webhook_url = Column(String, nullable=True)

    client = relationship("Client", back_populates="integration_statuses")
