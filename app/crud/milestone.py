from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.crud.base import CRUDBase
from app.models.milestone import ProjectMilestone, MilestoneType
from app.schemas.milestone import MilestoneCreate, MilestoneUpdate


class CRUDMilestone(CRUDBase[ProjectMilestone, MilestoneCreate, MilestoneUpdate]):
    """
    CRUD operations for ProjectMilestone model.
    """

    def get_by_client(
        self,
        db: Session,
        client_id: str,
        *,
        skip: int = 0,
        limit: int = 1000
    ) -> List[ProjectMilestone]:
        """
        List milestones owned by a client.
        """
        return self.get_multi(
            db=db, skip=skip, limit=limit, filters={"client_id": client_id}
        )

    def get_kickoff(self, db: Session, client_id: str) -> Optional[ProjectMilestone]:
        """
        Canonical kickoff milestone for a client: the earliest-dated one
        of type kickoff, or None when the client has none.
        """
        stmt = (
            select(ProjectMilestone)
            .where(
                ProjectMilestone.client_id == client_id,
                ProjectMilestone.type == MilestoneType.kickoff,
            )
            .order_by(ProjectMilestone.date, ProjectMilestone.created_at)
        )
        return db.execute(stmt).scalars().first()


# Create a singleton instance
milestone = CRUDMilestone(ProjectMilestone)
