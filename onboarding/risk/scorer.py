"""Heuristic drop-off risk: an additive sum of independent weighted thresholds.

Not a statistical model. Nothing is calibrated or persisted; swap the
RiskWeights passed in to retune.
"""

from onboarding.risk.models import (
    BehaviorCounters,
    Intervention,
    InterventionLevel,
    RiskAssessment,
    RiskWeights,
)

HIGH_RISK_THRESHOLD = 0.7
MEDIUM_RISK_THRESHOLD = 0.5

_DEFAULT_WEIGHTS = RiskWeights()


def score_drop_off_risk(
    counters: BehaviorCounters,
    weights: RiskWeights = _DEFAULT_WEIGHTS,
) -> float:
    """Return a drop-off risk in [0, 1]."""
    risk = 0.0
    if counters.seconds_on_step > weights.step_time_threshold_seconds:
        risk += weights.step_time_weight
    if (
        counters.seconds_in_session > weights.session_time_threshold_seconds
        and _completion_ratio(counters) < weights.low_completion_ratio
    ):
        risk += weights.slow_progress_weight
    if counters.validation_failures > weights.validation_failure_threshold:
        risk += weights.validation_failure_weight
    if counters.help_requests > weights.help_request_threshold:
        risk += weights.help_request_weight
    excess_hidden = max(0, counters.tab_hidden_events - weights.tab_hidden_allowance)
    risk += min(excess_hidden * weights.tab_hidden_weight, weights.tab_hidden_cap)
    if counters.field_revisits > weights.field_revisit_threshold:
        risk += weights.field_revisit_weight
    return min(max(risk, 0.0), 1.0)


def _completion_ratio(counters: BehaviorCounters) -> float:
    if counters.fields_required <= 0:
        return 1.0
    return counters.fields_completed / counters.fields_required


def select_intervention(risk: float) -> Intervention | None:
    if risk > HIGH_RISK_THRESHOLD:
        return Intervention(
            level=InterventionLevel.HIGH,
            message=(
                "I notice you might be stuck. No worries! I'm here to help. "
                "What's confusing you right now?"
            ),
            suggested_actions=["Explain this step", "Show an example", "Skip for now"],
        )
    if risk > MEDIUM_RISK_THRESHOLD:
        return Intervention(
            level=InterventionLevel.MEDIUM,
            message=(
                "Taking your time is fine! Would you like me to explain this "
                "section or auto-fill details from your documents?"
            ),
            suggested_actions=["Yes, explain this", "Auto-fill from documents", "I'm fine, thanks"],
        )
    return None


def assess(
    counters: BehaviorCounters,
    weights: RiskWeights = _DEFAULT_WEIGHTS,
) -> RiskAssessment:
    risk = score_drop_off_risk(counters, weights)
    return RiskAssessment(risk=risk, counters=counters, intervention=select_intervention(risk))
