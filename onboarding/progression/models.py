from dataclasses import dataclass

from onboarding.domain.models import Step


@dataclass(frozen=True)
class ProgressReport:
    current_step: Step
    completed_steps: list[Step]
    percent_complete: int
    estimated_seconds_remaining: int
    fields_completed: int
    fields_total: int
    documents_uploaded: int
    documents_required: int
