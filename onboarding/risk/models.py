from dataclasses import dataclass, field
from enum import StrEnum

from onboarding.config.settings import Settings


@dataclass(frozen=True)
class BehaviorCounters:
    """Behavioural signals for one session at one point in time."""

    seconds_on_step: float = 0.0
    seconds_in_session: float = 0.0
    fields_completed: int = 0
    fields_required: int = 0
    validation_failures: int = 0
    help_requests: int = 0
    tab_hidden_events: int = 0
    field_revisits: int = 0


@dataclass(frozen=True)
class RiskWeights:
    """Thresholds and weights of the additive drop-off heuristic."""

    step_time_threshold_seconds: float = 120
    step_time_weight: float = 0.3
    session_time_threshold_seconds: float = 900
    low_completion_ratio: float = 0.3
    slow_progress_weight: float = 0.2
    validation_failure_threshold: int = 3
    validation_failure_weight: float = 0.2
    help_request_threshold: int = 2
    help_request_weight: float = 0.1
    tab_hidden_allowance: int = 2
    tab_hidden_weight: float = 0.1
    tab_hidden_cap: float = 0.2
    field_revisit_threshold: int = 5
    field_revisit_weight: float = 0.1

    @classmethod
    def from_settings(cls, settings: Settings) -> "RiskWeights":
        return cls(
            step_time_threshold_seconds=settings.risk_step_time_threshold_seconds,
            step_time_weight=settings.risk_step_time_weight,
            session_time_threshold_seconds=settings.risk_session_time_threshold_seconds,
            low_completion_ratio=settings.risk_low_completion_ratio,
            slow_progress_weight=settings.risk_slow_progress_weight,
            validation_failure_threshold=settings.risk_validation_failure_threshold,
            validation_failure_weight=settings.risk_validation_failure_weight,
            help_request_threshold=settings.risk_help_request_threshold,
            help_request_weight=settings.risk_help_request_weight,
            tab_hidden_allowance=settings.risk_tab_hidden_allowance,
            tab_hidden_weight=settings.risk_tab_hidden_weight,
            tab_hidden_cap=settings.risk_tab_hidden_cap,
            field_revisit_threshold=settings.risk_field_revisit_threshold,
            field_revisit_weight=settings.risk_field_revisit_weight,
        )


class InterventionLevel(StrEnum):
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Intervention:
    level: InterventionLevel
    message: str
    suggested_actions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RiskAssessment:
    risk: float
    counters: BehaviorCounters
    intervention: Intervention | None = None
