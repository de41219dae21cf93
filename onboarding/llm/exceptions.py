class LLMError(Exception):
    """Raised when a language-model call fails or returns unusable output."""


class LLMNetworkError(LLMError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class LLMResponseError(LLMError):
    """Raised when the model's output does not match the expected shape."""
