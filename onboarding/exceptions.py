class OnboardingError(Exception):
    """Base exception for all onboarding-core errors."""


class InvalidRequestError(OnboardingError):
    """Raised when a request is malformed; no session state has been touched."""
