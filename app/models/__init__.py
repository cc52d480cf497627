from .client import Client
from .integration import IntegrationStatus
from .milestone import MilestoneType, ProjectMilestone
