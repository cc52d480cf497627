from app.services.demo_seed import seed_demo_data
from app.services.integration import integration_service
from app.services.milestone import milestone_service
from app.services.onboarding_state import status_label


def test_seed_creates_demo_client(db):
    client = seed_demo_data(db)

    assert client.name == "Acme Health Systems"
    assert client.current_step == "1"
    assert status_label(client) == "Awaiting Contract"
    assert client.compliance_requirements == ["HIPAA", "SOC 2", "GDPR"]

    titles = [m.title for m in milestone_service.get_milestones(db, client.id)]
    assert titles == ["Kickoff Meeting", "Security Review", "Final Delivery"]

    status = integration_service.get_status(db, client.id)
    assert (status.slack_connected, status.zoho_connected, status.n8n_connected) == (True, True, True)


def test_seed_is_skipped_when_present(db):
    seed_demo_data(db)
    assert seed_demo_data(db) is None
