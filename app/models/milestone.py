import enum
from sqlalchemy import Column, String, Boolean, Date, Enum, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base, TimestampMixin
from app.models.client import new_id

class MilestoneType(str, enum.Enum):
    kickoff = "kickoff"
    review = "review"
    delivery = "delivery"
    custom = "custom"

class ProjectMilestone(Base, TimestampMixin):
    __tablename__ = "project_milestone"

    id = Column(String(36), primary_key=True, default=new_id)
    client_id = Column(String(36), ForeignKey("client.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    date = Column(Date, nullable=False)  # calendar date, no time component
    type = Column(Enum(MilestoneType), nullable=False, default=MilestoneType.custom)
    completed = Column(Boolean, nullable=False, default=False)

    client = relationship("Client", back_populates="milestones")
