from fastapi import status


class OnboardingError(Exception):
    """
    Base class for recoverable onboarding errors.

    Each subclass maps to one HTTP status; the handlers in main.py turn
    them into ``{"detail": message}`` responses.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(OnboardingError):
    """Referenced entity id does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class ValidationFailedError(OnboardingError):
    """Input fields fail type, shape or required-ness constraints."""
    status_code = status.HTTP_400_BAD_REQUEST


class PreconditionFailedError(OnboardingError):
    """A state-machine transition was attempted out of order."""
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str, transition: str, state: str):
        super().__init__(message)
        self.transition = transition
        self.state = state
