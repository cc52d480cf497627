"""
Unit tests for the onboarding state machine (pure functions, no database).
"""

import itertools

import pytest

from app.core.exceptions import PreconditionFailedError
from app.services.onboarding_state import (
    FLAG_ORDER,
    OnboardingState,
    Transition,
    check_transition,
    compute_current_step,
    derive_state,
    is_monotonic,
    status_label,
    step_views,
    transition_fields,
)


def fresh_client(**overrides):
    client = {flag: False for flag in FLAG_ORDER}
    client["zoho_meeting_url"] = "https://meeting.zoho.com/acme-kickoff"
    client["current_step"] = "1"
    client.update(overrides)
    return client


def flags_for(count):
    """The first ``count`` flags true, the rest false."""
    return {flag: index < count for index, flag in enumerate(FLAG_ORDER)}


# ---------------------------------------------------------------------------
# Derived state and labels
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("count, expected", [
    (0, OnboardingState.awaiting_contract),
    (1, OnboardingState.contract_signed),
    (2, OnboardingState.system_details_complete),
    (3, OnboardingState.kickoff_scheduled),
    (4, OnboardingState.resources_accessed),
])
def test_derive_state_follows_completed_prefix(count, expected):
    assert derive_state(flags_for(count)) == expected


def test_derive_state_uses_highest_true_flag_even_out_of_order():
    client = fresh_client(kickoff_scheduled=True)
    assert derive_state(client) == OnboardingState.kickoff_scheduled


@pytest.mark.parametrize("flags", [
    dict(zip(FLAG_ORDER, values))
    for values in itertools.product([False, True], repeat=len(FLAG_ORDER))
])
def test_status_label_is_reverse_priority_and_ignores_current_step(flags):
    if flags["kickoff_scheduled"]:
        expected = "Kickoff Scheduled"
    elif flags["system_details_complete"]:
        expected = "System Details Complete"
    elif flags["contract_signed"]:
        expected = "Contract Signed"
    else:
        expected = "Awaiting Contract"

    for step in ("1", "2", "3", "4"):
        assert status_label({**flags, "current_step": step}) == expected


def test_fully_complete_client_reads_as_kickoff_scheduled():
    assert status_label(flags_for(4)) == "Kickoff Scheduled"


# ---------------------------------------------------------------------------
# current_step and monotonicity helpers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("count, step", [(0, "1"), (1, "2"), (2, "3"), (3, "4"), (4, "4")])
def test_compute_current_step(count, step):
    assert compute_current_step(flags_for(count)) == step


def test_compute_current_step_counts_only_the_prefix():
    flags = {**flags_for(1), "kickoff_scheduled": True}
    assert compute_current_step(flags) == "2"
    assert not is_monotonic(flags)


def test_is_monotonic_for_every_prefix():
    for count in range(len(FLAG_ORDER) + 1):
        assert is_monotonic(flags_for(count))


# ---------------------------------------------------------------------------
# Transition preconditions
# ---------------------------------------------------------------------------

def test_sign_contract_fields():
    assert transition_fields(fresh_client(), Transition.sign_contract) == {
        "contract_signed": True,
        "current_step": "2",
    }


def test_full_happy_path_advances_steps():
    client = fresh_client()
    expected_steps = ["2", "3", "4", "4"]
    for transition, step in zip(Transition, expected_steps):
        client.update(transition_fields(client, transition))
        assert client["current_step"] == step
    assert derive_state(client) == OnboardingState.resources_accessed


def test_survey_before_contract_is_rejected():
    with pytest.raises(PreconditionFailedError) as exc_info:
        check_transition(fresh_client(), Transition.complete_system_survey)

    assert exc_info.value.transition == "complete_system_survey"
    assert exc_info.value.state == "awaiting_contract"


def test_resign_is_rejected():
    client = fresh_client(contract_signed=True)
    with pytest.raises(PreconditionFailedError, match="already signed"):
        check_transition(client, Transition.sign_contract)


@pytest.mark.parametrize("url", [None, "", "   "])
def test_kickoff_requires_meeting_url(url):
    client = fresh_client(contract_signed=True, system_details_complete=True, zoho_meeting_url=url)
    with pytest.raises(PreconditionFailedError, match="meeting URL"):
        check_transition(client, Transition.schedule_kickoff)


def test_kickoff_requires_system_details_before_url_check():
    client = fresh_client(contract_signed=True, zoho_meeting_url=None)
    with pytest.raises(PreconditionFailedError, match="System details"):
        check_transition(client, Transition.schedule_kickoff)


def test_resources_accessed_requires_kickoff():
    with pytest.raises(PreconditionFailedError):
        check_transition(fresh_client(**flags_for(2)), Transition.mark_resources_accessed)


def test_resources_accessed_repeat_is_allowed():
    client = fresh_client(**flags_for(4))
    assert transition_fields(client, Transition.mark_resources_accessed) == {
        "resources_accessed": True,
        "current_step": "4",
    }


def test_every_transition_sequence_keeps_flags_a_prefix():
    transitions = list(Transition)
    for sequence in itertools.product(transitions, repeat=5):
        client = fresh_client()
        for transition in sequence:
            try:
                client.update(transition_fields(client, transition))
            except PreconditionFailedError:
                pass
            assert is_monotonic(client)
            assert client["current_step"] == compute_current_step(client)


# ---------------------------------------------------------------------------
# Step gating
# ---------------------------------------------------------------------------

def test_step_views_for_fresh_client():
    views = step_views(fresh_client())
    assert [v.name for v in views] == [
        "Service Contract", "System Details", "Schedule Kickoff", "Resources Access",
    ]
    assert [v.enabled for v in views] == [True, False, False, False]
    assert [v.active for v in views] == [True, False, False, False]
    assert not any(v.completed for v in views)


def test_step_views_after_survey():
    views = step_views(fresh_client(**flags_for(2)))
    assert [v.completed for v in views] == [True, True, False, False]
    assert [v.enabled for v in views] == [False, False, True, False]
    assert [v.active for v in views] == [False, False, True, False]


def test_step_views_when_complete():
    views = step_views(fresh_client(**flags_for(4)))
    assert all(v.completed for v in views)
    assert not any(v.enabled or v.active for v in views)
