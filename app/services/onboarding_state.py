"""
Onboarding state machine.

Pure functions over a client's four completion flags. Nothing here
touches the database; the onboarding service loads a client, asks this
module whether a transition is legal, applies the returned field set and
commits.

The state is never stored. It is derived from the flags every time, so
it cannot drift from them.
"""

import enum
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

from app.core.exceptions import PreconditionFailedError


class OnboardingState(str, enum.Enum):
    awaiting_contract = "awaiting_contract"
    contract_signed = "contract_signed"
    system_details_complete = "system_details_complete"
    kickoff_scheduled = "kickoff_scheduled"
    resources_accessed = "resources_accessed"


# Flags in the only order they may turn true
FLAG_ORDER: Tuple[str, ...] = (
    "contract_signed",
    "system_details_complete",
    "kickoff_scheduled",
    "resources_accessed",
)

STATE_ORDER: Tuple[OnboardingState, ...] = tuple(OnboardingState)

STATUS_LABELS = {
    OnboardingState.awaiting_contract: "Awaiting Contract",
    OnboardingState.contract_signed: "Contract Signed",
    OnboardingState.system_details_complete: "System Details Complete",
    OnboardingState.kickoff_scheduled: "Kickoff Scheduled",
}

STEP_NAMES = ("Service Contract", "System Details", "Schedule Kickoff", "Resources Access")

FIRST_STEP = 1
LAST_STEP = 4


class Transition(str, enum.Enum):
    sign_contract = "sign_contract"
    complete_system_survey = "complete_system_survey"
    schedule_kickoff = "schedule_kickoff"
    mark_resources_accessed = "mark_resources_accessed"


# Transition -> (flag it sets, flag that must already be true)
TRANSITION_FLAGS = {
    Transition.sign_contract: ("contract_signed", None),
    Transition.complete_system_survey: ("system_details_complete", "contract_signed"),
    Transition.schedule_kickoff: ("kickoff_scheduled", "system_details_complete"),
    Transition.mark_resources_accessed: ("resources_accessed", "kickoff_scheduled"),
}


def transition_flag(transition: Transition) -> str:
    """The flag a transition turns true."""
    return TRANSITION_FLAGS[transition][0]


def read_flags(client: Any) -> Dict[str, bool]:
    """Read the four flags from a model instance or a mapping."""
    if isinstance(client, Mapping):
        return {flag: bool(client.get(flag, False)) for flag in FLAG_ORDER}
    return {flag: bool(getattr(client, flag, False)) for flag in FLAG_ORDER}


def completed_prefix(flags: Mapping[str, bool]) -> int:
    """Number of leading flags (in FLAG_ORDER) that are true."""
    count = 0
    for flag in FLAG_ORDER:
        if not flags.get(flag):
            break
        count += 1
    return count


def is_monotonic(flags: Mapping[str, bool]) -> bool:
    """True when the set of true flags is a prefix of FLAG_ORDER."""
    return completed_prefix(flags) == sum(1 for flag in FLAG_ORDER if flags.get(flag))


def compute_current_step(flags: Mapping[str, bool]) -> str:
    """
    Next step to perform, as the "1".."4" string stored on the client.

    Resource access is the last step, so a fully complete client stays
    on "4".
    """
    return str(min(FIRST_STEP + completed_prefix(flags), LAST_STEP))


def derive_state(client: Any) -> OnboardingState:
    """
    Highest-index true flag wins; no true flag means awaiting contract.

    Args:
        client: Client model instance or mapping with the flag fields

    Returns:
        Derived OnboardingState
    """
    flags = read_flags(client)
    for index in range(len(FLAG_ORDER) - 1, -1, -1):
        if flags[FLAG_ORDER[index]]:
            return STATE_ORDER[index + 1]
    return OnboardingState.awaiting_contract


def status_label(client: Any) -> str:
    """
    Human-readable project status for summary views.

    Checked in reverse priority (kickoff, survey, contract) so the most
    advanced true flag wins however the flags were set. Resource access
    has no label of its own and reads as "Kickoff Scheduled".
    """
    flags = read_flags(client)
    if flags["kickoff_scheduled"]:
        return STATUS_LABELS[OnboardingState.kickoff_scheduled]
    if flags["system_details_complete"]:
        return STATUS_LABELS[OnboardingState.system_details_complete]
    if flags["contract_signed"]:
        return STATUS_LABELS[OnboardingState.contract_signed]
    return STATUS_LABELS[OnboardingState.awaiting_contract]


def has_meeting_url(client: Any) -> bool:
    if isinstance(client, Mapping):
        url = client.get("zoho_meeting_url")
    else:
        url = getattr(client, "zoho_meeting_url", None)
    return bool(url and url.strip())


def _reject(transition: Transition, client: Any, message: str) -> PreconditionFailedError:
    return PreconditionFailedError(
        message,
        transition=transition.value,
        state=derive_state(client).value,
    )


def check_transition(client: Any, transition: Transition) -> None:
    """
    Validate that ``transition`` is legal for the client's current flags.

    Raises:
        PreconditionFailedError: If the transition is out of order, was
            already performed, or (for kickoff) no meeting URL is set
    """
    flags = read_flags(client)
    target, required = TRANSITION_FLAGS[transition]

    if required is not None and not flags[required]:
        messages = {
            Transition.complete_system_survey: "Contract must be signed before the system survey",
            Transition.schedule_kickoff: "System details must be complete before scheduling kickoff",
            Transition.mark_resources_accessed: "Kickoff must be scheduled before resources can be accessed",
        }
        raise _reject(transition, client, messages[transition])

    if transition is Transition.mark_resources_accessed:
        # Repeat access is harmless
        return

    if flags[target]:
        messages = {
            Transition.sign_contract: "Contract is already signed",
            Transition.complete_system_survey: "System survey is already complete",
            Transition.schedule_kickoff: "Kickoff is already scheduled",
        }
        raise _reject(transition, client, messages[transition])

    if transition is Transition.schedule_kickoff and not has_meeting_url(client):
        raise _reject(transition, client, "A meeting URL is required to schedule kickoff")


def transition_fields(client: Any, transition: Transition) -> Dict[str, Any]:
    """
    Flag and step fields a legal transition writes.

    Args:
        client: Client before the transition
        transition: Transition being applied

    Returns:
        Dict of field updates including the recomputed current_step
    """
    check_transition(client, transition)
    target = transition_flag(transition)
    flags = read_flags(client)
    flags[target] = True
    return {target: True, "current_step": compute_current_step(flags)}


@dataclass(frozen=True)
class StepView:
    number: int
    name: str
    completed: bool
    active: bool
    enabled: bool


def step_views(client: Any) -> List[StepView]:
    """
    Wizard stepper rows: which steps are done, which is current, and
    which step's action the UI may offer right now. The meeting URL is
    not considered here since the kickoff request may supply it.
    """
    flags = read_flags(client)
    current = int(compute_current_step(flags))
    views = []
    for index, (name, flag) in enumerate(zip(STEP_NAMES, FLAG_ORDER)):
        number = index + 1
        views.append(StepView(
            number=number,
            name=name,
            completed=flags[flag],
            active=number == current and not flags[flag],
            enabled=not flags[flag] and (index == 0 or flags[FLAG_ORDER[index - 1]]),
        ))
    return views
