"""
Outbound onboarding notifications.

Best-effort delivery of transition events to a Slack incoming webhook
and an n8n workflow webhook. Delivery runs on a small worker pool so a
slow or failing endpoint never delays or fails the transition that
produced the event.
"""

import enum
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import Settings
from app.core.logging_config import logger


class EventName(str, enum.Enum):
    CONTRACT_SIGNED = "CONTRACT_SIGNED"
    SYSTEM_DETAILS_COMPLETE = "SYSTEM_DETAILS_COMPLETE"
    KICKOFF_SCHEDULED = "KICKOFF_SCHEDULED"
    RESOURCES_ACCESSED = "RESOURCES_ACCESSED"


@dataclass
class OnboardingEvent:
    name: EventName
    client_id: str
    client_name: str
    text: str
    payload: Dict[str, Any] = field(default_factory=dict)
    # Per-client targets; None falls back to the notifier defaults
    slack_webhook_url: Optional[str] = None
    n8n_webhook_url: Optional[str] = None

    def slack_body(self) -> Dict[str, Any]:
        return {"text": self.text}

    def n8n_body(self) -> Dict[str, Any]:
        return {"name": self.name.value, "client": self.client_name, "payload": self.payload}


class NotificationSink:
    """Receives events after a transition commits. Must never raise."""

    def notify(self, event: OnboardingEvent) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass


class NullNotifier(NotificationSink):
    """Drops every event."""

    def notify(self, event: OnboardingEvent) -> None:
        logger.debug(f"Notification dropped (no sink configured): {event.name.value} client={event.client_id}")


class RecordingNotifier(NotificationSink):
    """Keeps events in memory; used by the test suite and local demos."""

    def __init__(self):
        self.events: List[OnboardingEvent] = []

    def notify(self, event: OnboardingEvent) -> None:
        self.events.append(event)

    @property
    def names(self) -> List[str]:
        return [event.name.value for event in self.events]


class WebhookNotifier(NotificationSink):
    """
    Fire-and-forget webhook poster.

    Each event is posted to Slack as ``{"text": ...}`` and to n8n as
    ``{"name", "client", "payload"}``. A channel with no URL is skipped.
    HTTP failures are logged and swallowed; there are no retries.
    """

    def __init__(
        self,
        slack_webhook_url: Optional[str] = None,
        n8n_webhook_url: Optional[str] = None,
        timeout: float = 5.0,
        max_workers: int = 2,
        http_client: Optional[httpx.Client] = None
    ):
        self.slack_webhook_url = slack_webhook_url
        self.n8n_webhook_url = n8n_webhook_url
        self.http_client = http_client or httpx.Client(timeout=timeout)
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="onboarding-webhook"
        )
        logger.info(
            f"Webhook notifier initialized: slack={'on' if slack_webhook_url else 'off'}, "
            f"n8n={'on' if n8n_webhook_url else 'off'}, workers={max_workers}"
        )

    def notify(self, event: OnboardingEvent) -> Future:
        """
        Queue delivery of ``event`` and return immediately.

        Returns:
            Future resolving once both channels were attempted
        """
        future = self._executor.submit(self.deliver, event)
        future.add_done_callback(self._log_unexpected)
        return future

    def deliver(self, event: OnboardingEvent) -> Dict[str, bool]:
        """
        Post ``event`` to every configured channel synchronously.

        Returns:
            Channel name -> whether a 2xx response was received
        """
        results = {}
        slack_url = event.slack_webhook_url or self.slack_webhook_url
        if slack_url:
            results["slack"] = self._post("slack", slack_url, event.slack_body(), event)
        n8n_url = event.n8n_webhook_url or self.n8n_webhook_url
        if n8n_url:
            results["n8n"] = self._post("n8n", n8n_url, event.n8n_body(), event)
        return results

    def _post(self, channel: str, url: str, body: Dict[str, Any], event: OnboardingEvent) -> bool:
        try:
            response = self.http_client.post(url, json=body)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(
                f"{channel} webhook failed for {event.name.value} client={event.client_id}: "
                f"{type(e).__name__}: {str(e)}"
            )
            return False
        logger.info(f"{channel} webhook delivered: {event.name.value} client={event.client_id}")
        return True

    @staticmethod
    def _log_unexpected(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error(f"Webhook delivery crashed: {type(error).__name__}: {str(error)}")

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        self.http_client.close()


def build_notifier(settings: Settings) -> NotificationSink:
    """
    Notifier for the running process.

    Always a WebhookNotifier, since per-client webhook URLs stored on
    integration status rows can enable delivery even when no global
    URL is configured.
    """
    return WebhookNotifier(
        slack_webhook_url=settings.SLACK_WEBHOOK_URL,
        n8n_webhook_url=settings.N8N_WEBHOOK_URL,
        timeout=settings.WEBHOOK_TIMEOUT_SECONDS,
        max_workers=settings.NOTIFICATION_WORKERS,
    )
