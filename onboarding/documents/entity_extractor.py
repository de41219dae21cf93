from onboarding.domain.models import DocumentCategory
from onboarding.llm.client_base import BaseLLMClient
from onboarding.llm.json_decoder import (
    decode_string_fields,
    nullable_string_schema,
    parse_json_object,
)
from onboarding.llm.prompt_loader import load_prompt
from onboarding.logging.logger import Log

EXTRACTION_KEYS: dict[DocumentCategory, tuple[str, ...]] = {
    DocumentCategory.BUSINESS_PROOF: (
        "business_name",
        "gstin",
        "trade_license",
        "address",
        "city",
        "state",
        "pincode",
        "registration_date",
    ),
    DocumentCategory.IDENTITY_PROOF: (
        "name",
        "pan",
        "aadhaar",
        "father_name",
        "dob",
        "address",
    ),
    DocumentCategory.BANK_PROOF: (
        "account_number",
        "ifsc",
        "bank_name",
        "branch",
        "account_holder",
        "account_type",
    ),
    DocumentCategory.ADDRESS_PROOF: (
        "name",
        "address",
        "city",
        "state",
        "pincode",
        "document_date",
    ),
}


class EntityExtractor:
    """Turns OCR text into a flat per-category key/value extraction via the LLM."""

    def __init__(
        self,
        client: BaseLLMClient,
        model: str,
        temperature: float = 0.0,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._system_prompt = load_prompt("document_system")

    def extract(self, text: str, category: DocumentCategory) -> dict[str, str]:
        """Extract entities from document text.

        Raises:
            LLMError: on provider failure or when the output shape is wrong.
        """
        if not text.strip():
            return {}
        keys = EXTRACTION_KEYS[category]
        prompt = load_prompt(f"document_{category.value}").format(
            text=text,
            keys=", ".join(keys),
        )
        Log.debug("Document extraction prompt", category=category.value, chars=len(prompt))
        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=nullable_string_schema(keys),
            schema_name=f"document_{category.value}",
        )
        Log.debug("Document extraction response", category=category.value, raw=raw_response)
        return decode_string_fields(parse_json_object(raw_response), keys)
