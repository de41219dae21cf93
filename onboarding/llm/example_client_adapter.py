"""Offline chat client.

Returns canned output keyed by schema name. No network calls; used for local
development, demos and as the template for new provider adapters.
"""

import json
from typing import ClassVar

from onboarding.llm.client_base import BaseLLMClient


class ExampleClientAdapter(BaseLLMClient):
    DEFAULT_RESPONSES: ClassVar[dict[str, dict[str, object]]] = {
        "conversation_reply": {
            "intent": "provide_information",
            "reply": (
                "Thanks! Let's keep going. Tell me your business name, "
                "or upload a document and I'll fill in what I can."
            ),
        },
        "field_extraction": {},
        "document_business_proof": {
            "business_name": "ABC Enterprises",
            "gstin": "27AABCU9603R1ZM",
            "address": "123 Main Street, Mumbai",
            "city": "Mumbai",
            "state": "Maharashtra",
            "pincode": "400001",
        },
    }
    DEFAULT_TEXT: ClassVar[str] = "I'm here to help you finish your application."

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
        _ = model, temperature, system_prompt, user_prompt
        if json_schema is None:
            return self.DEFAULT_TEXT
        return json.dumps(self.DEFAULT_RESPONSES.get(schema_name, {}))
