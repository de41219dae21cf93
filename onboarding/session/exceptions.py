from onboarding.exceptions import OnboardingError


class SessionNotFoundError(OnboardingError):
    """Raised when no session exists for the given identifier."""


class SessionStoreError(OnboardingError):
    """Raised when a stored session payload cannot be read back."""
