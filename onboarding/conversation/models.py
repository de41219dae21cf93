from dataclasses import dataclass, field

from onboarding.domain.models import Step


@dataclass(frozen=True)
class ConversationReply:
    reply: str
    suggested_actions: list[str]
    current_step: Step
    field_patch: dict[str, object] = field(default_factory=dict)
    intent: str | None = None
    degraded: bool = False
    intervention: bool = False
