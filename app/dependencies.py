from fastapi import Request
from app.services.onboarding import OnboardingService


def get_onboarding_service(request: Request) -> OnboardingService:
    """
    FastAPI dependency returning the process-wide OnboardingService.

    The service (and its notification sink) is built in the application
    lifespan and kept on ``app.state``; one is created lazily when the
    app runs without its lifespan, e.g. under a bare TestClient.

    Args:
        request: Current request, used to reach the application state

    Returns:
        OnboardingService bound to the configured notifier
    """
    service = getattr(request.app.state, "onboarding_service", None)
    if service is None:
        service = OnboardingService()
        request.app.state.onboarding_service = service
    return service
