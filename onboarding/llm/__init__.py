from onboarding.llm.client_base import BaseLLMClient
from onboarding.llm.exceptions import LLMError, LLMNetworkError, LLMResponseError
from onboarding.llm.factory import LLMClientFactory

__all__ = [
    "BaseLLMClient",
    "LLMClientFactory",
    "LLMError",
    "LLMNetworkError",
    "LLMResponseError",
]
