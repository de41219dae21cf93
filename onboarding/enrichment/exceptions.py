class RegistryError(Exception):
    """Raised when a registry lookup fails or returns an unreadable payload."""


class RegistryNetworkError(RegistryError):
    """Raised when the registry cannot be reached or times out."""
