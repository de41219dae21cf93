from abc import ABC, abstractmethod


class BaseLLMClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object] | None = None,
        schema_name: str = "response",
    ) -> str:
        """Return provider response as plain text.

        When json_schema is given the provider is asked for a JSON object
        matching it; the caller still decodes and checks the text.
        """
