from typing import Any, Dict, Optional, Tuple
from sqlalchemy.orm import Session
from app.crud import client as client_crud
from app.crud import milestone as milestone_crud
from app.crud import integration_status as integration_crud
from app.schemas.onboarding import SignContractRequest, SystemSurveyRequest, ScheduleKickoffRequest
from app.models.client import Client
from app.core.exceptions import NotFoundError, PreconditionFailedError
from app.core.locks import ClientLockRegistry, client_locks
from app.core.logging_config import logger
from app.services.notifications import EventName, NotificationSink, NullNotifier, OnboardingEvent
from app.services.onboarding_state import (
    FLAG_ORDER,
    Transition,
    compute_current_step,
    derive_state,
    read_flags,
    status_label,
    step_views,
    transition_fields,
    transition_flag,
)


class OnboardingService:
    """
    Gated onboarding transitions.

    Every transition runs check-and-write as one unit per client: the
    per-client lock is held while the row is re-read (FOR UPDATE where
    supported), the precondition is checked, and the new fields are
    committed. A rejected transition writes nothing. The notification
    sink is called after the lock is released and its failures never
    reach the caller.
    """

    def __init__(
        self,
        notifier: Optional[NotificationSink] = None,
        locks: Optional[ClientLockRegistry] = None
    ):
        self.crud = client_crud
        self.notifier = notifier or NullNotifier()
        self.locks = locks or client_locks

    def _transition(
        self,
        db: Session,
        client_id: str,
        transition: Transition,
        fields: Optional[Dict[str, Any]] = None
    ) -> Tuple[Client, bool]:
        """Apply a transition; returns the client and whether its flag changed."""
        fields = fields or {}
        with self.locks.hold(client_id):
            try:
                client = self.crud.get_for_update(db=db, id=client_id)
                if client is None:
                    raise NotFoundError("Client not found")

                # Check against the client as it would look with the request's
                # fields merged, without touching the loaded row yet
                candidate = {column: getattr(client, column) for column in FLAG_ORDER}
                candidate["zoho_meeting_url"] = client.zoho_meeting_url
                candidate.update(fields)
                changed = not candidate[transition_flag(transition)]
                updates = transition_fields(candidate, transition)
            except (NotFoundError, PreconditionFailedError) as e:
                db.rollback()
                logger.info(f"Transition {transition.value} rejected for client {client_id}: {e.message}")
                raise

            self.crud.apply(client, {**fields, **updates})
            if transition is Transition.schedule_kickoff:
                self._complete_kickoff_milestone(db, client_id)

            db.add(client)
            db.commit()
            db.refresh(client)

        logger.info(
            f"Transition {transition.value} applied: client_id={client_id}, "
            f"state={derive_state(client).value}, current_step={client.current_step}"
        )
        return client, changed

    def _complete_kickoff_milestone(self, db: Session, client_id: str) -> None:
        # Best-effort: a client without a kickoff milestone is fine
        kickoff = milestone_crud.get_kickoff(db=db, client_id=client_id)
        if kickoff is not None and not kickoff.completed:
            kickoff.completed = True
            db.add(kickoff)
            logger.info(f"Kickoff milestone {kickoff.id} marked completed for client {client_id}")

    def _emit(self, db: Session, client: Client, name: EventName, text: str, payload: Dict[str, Any]) -> None:
        status = integration_crud.get_by_client(db=db, client_id=client.id)
        event = OnboardingEvent(
            name=name,
            client_id=client.id,
            client_name=client.name,
            text=text,
            payload=payload,
            slack_webhook_url=status.slack_webhook_url if status else None,
            n8n_webhook_url=status.n8n_webhook_url if status else None,
        )
        try:
            self.notifier.notify(event)
        except Exception as e:
            logger.error(f"Notification for {name.value} failed: {type(e).__name__}: {str(e)}")

    def sign_contract(
        self,
        db: Session,
        client_id: str,
        data: Optional[SignContractRequest] = None
    ) -> Client:
        """
        Sign the service agreement (step 1 -> 2).

        Merges the package, contract ID and meeting URL that were sent.
        A null field leaves the stored value as it is.

        Args:
            db: Database session
            client_id: Client ID
            data: Contract fields

        Returns:
            Updated Client instance

        Raises:
            NotFoundError: If client not found
            PreconditionFailedError: If the contract is already signed
        """
        client, _ = self._transition(
            db, client_id, Transition.sign_contract,
            data.model_dump(exclude_none=True) if data else None
        )
        self._emit(
            db, client, EventName.CONTRACT_SIGNED,
            f"🧾 Contract signed for {client.name} (SOW/MSA).",
            {"id": client.id, "service_package": client.service_package},
        )
        return client

    def complete_system_survey(
        self,
        db: Session,
        client_id: str,
        data: Optional[SystemSurveyRequest] = None
    ) -> Client:
        """
        Submit the system survey (step 2 -> 3).

        Raises:
            NotFoundError: If client not found
            PreconditionFailedError: If the contract is not signed or the
                survey was already submitted
        """
        client, _ = self._transition(
            db, client_id, Transition.complete_system_survey,
            data.model_dump(exclude_none=True) if data else None
        )
        self._emit(
            db, client, EventName.SYSTEM_DETAILS_COMPLETE,
            f"🛠️ System details received for {client.name}.",
            {
                "id": client.id,
                "salesforce_edition": client.salesforce_edition,
                "number_of_users": client.number_of_users,
            },
        )
        return client

    def schedule_kickoff(
        self,
        db: Session,
        client_id: str,
        data: Optional[ScheduleKickoffRequest] = None
    ) -> Client:
        """
        Schedule the kickoff meeting (step 3 -> 4).

        A meeting URL sent with the request is stored first. The client's
        kickoff milestone, if any, is marked completed in the same commit.

        Raises:
            NotFoundError: If client not found
            PreconditionFailedError: If system details are incomplete, no
                meeting URL is present, or kickoff is already scheduled
        """
        fields = data.model_dump(exclude_none=True) if data else {}
        client, _ = self._transition(db, client_id, Transition.schedule_kickoff, fields)
        self._emit(
            db, client, EventName.KICKOFF_SCHEDULED,
            f"📅 Kickoff scheduled for {client.name}: {client.zoho_meeting_url}",
            {"id": client.id, "meeting_url": client.zoho_meeting_url},
        )
        return client

    def mark_resources_accessed(self, db: Session, client_id: str) -> Client:
        """
        Record that the client opened the security resources.

        Repeating the call after kickoff is a no-op success and only the
        first call notifies.

        Raises:
            NotFoundError: If client not found
            PreconditionFailedError: If kickoff is not scheduled
        """
        client, first_access = self._transition(db, client_id, Transition.mark_resources_accessed)
        if first_access:
            self._emit(
                db, client, EventName.RESOURCES_ACCESSED,
                f"📚 {client.name} opened their security resources.",
                {"id": client.id},
            )
        return client

    def get_summary(self, db: Session, client_id: str) -> Dict[str, Any]:
        """
        Derived onboarding view for the client summary panel.

        Raises:
            NotFoundError: If client not found
        """
        client = self.crud.get(db=db, id=client_id)
        if client is None:
            raise NotFoundError("Client not found")

        state = derive_state(client)
        return {
            "client": client,
            "state": state.value,
            "status_label": status_label(client),
            "current_step": int(compute_current_step(read_flags(client))),
            "is_complete": client.resources_accessed,
            "steps": step_views(client),
        }
