import io
import json
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from onboarding.config.settings import Settings
from onboarding.conversation.orchestrator import ConversationOrchestrator
from onboarding.documents.entity_extractor import EntityExtractor
from onboarding.documents.processor import DocumentProcessor
from onboarding.enrichment.gateway import EnrichmentGateway
from onboarding.enrichment.static_client import (
    StaticPostalCodeRegistry,
    StaticRoutingCodeRegistry,
)
from onboarding.llm.client_base import BaseLLMClient
from onboarding.ocr.simulated_adapter import SimulatedOcrAdapter
from onboarding.service import OnboardingService
from onboarding.session.repository import InMemorySessionRepository
from onboarding.verification.gateway import VerificationGateway
from onboarding.verification.static_verifier import (
    StaticBankAccountVerifier,
    StaticKycVerifier,
    StaticNegativeListVerifier,
)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a single-page business certificate PDF with known text."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Certificate of Registration")
    c.drawString(72, 700, "Business Name: ABC Traders")
    c.drawString(72, 680, "GSTIN: 27ABCDE1234F1Z5")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


class ScriptedLLMClient(BaseLLMClient):
    """Answers by schema name; a value that is an exception is raised instead."""

    def __init__(self, responses: dict[str, object] | None = None) -> None:
        self.responses: dict[str, object] = dict(responses or {})
        self.calls: list[dict[str, object]] = []

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
        self.calls.append({
            "model": model,
            "schema_name": schema_name,
            "user_prompt": user_prompt,
            "json_schema": json_schema,
        })
        response = self.responses.get(schema_name, {})
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            return response
        return json.dumps(response)


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 5, 10, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        llm_provider="example",
        enrichment_provider="example",
        session_store="memory",
        ocr_engine="simulated",
    )


@pytest.fixture()
def llm_client() -> ScriptedLLMClient:
    return ScriptedLLMClient({
        "conversation_reply": {"intent": "provide_information", "reply": "Got it, thanks!"},
        "field_extraction": {},
    })


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def make_service(
    settings: Settings,
    llm_client: ScriptedLLMClient,
    clock: FakeClock,
) -> Callable[..., OnboardingService]:
    def _make(**overrides: object) -> OnboardingService:
        effective = settings.model_copy(update=overrides) if overrides else settings
        return OnboardingService(
            repository=InMemorySessionRepository(),
            orchestrator=ConversationOrchestrator(client=llm_client, model="test-model"),
            document_processor=DocumentProcessor(
                ocr_engine=SimulatedOcrAdapter(),
                extractor=EntityExtractor(client=llm_client, model="test-model"),
            ),
            enrichment_gateway=EnrichmentGateway({
                "postal_code": StaticPostalCodeRegistry(),
                "bank_routing_code": StaticRoutingCodeRegistry(),
            }),
            verification_gateway=VerificationGateway([
                StaticBankAccountVerifier(),
                StaticKycVerifier(),
                StaticNegativeListVerifier(["Shady Traders"]),
            ]),
            settings=effective,
            clock=clock,
        )

    return _make


@pytest.fixture()
def service(make_service: Callable[..., OnboardingService]) -> OnboardingService:
    return make_service()
