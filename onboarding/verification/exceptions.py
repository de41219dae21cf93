class VerificationError(Exception):
    """Raised when a verification provider fails or returns an unreadable payload."""


class VerificationNetworkError(VerificationError):
    """Raised when the verification provider cannot be reached or times out."""
