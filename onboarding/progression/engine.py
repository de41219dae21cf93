"""Forward-only step progression over a fixed linear order of steps.

The engine only ever moves a session forward, and never past ``review``:
``review -> submitted`` belongs to the submit operation. Moving backward
is an explicit user request handled by ``go_back``.
"""

from datetime import datetime

from onboarding.domain.models import (
    FORM_REQUIRED_FIELDS,
    MANDATORY_DOCUMENT_CATEGORIES,
    STEP_ORDER,
    SUBMISSION_REQUIRED_FIELDS,
    Session,
    Step,
)
from onboarding.logging.logger import Log
from onboarding.progression.models import ProgressReport

SECONDS_PER_MISSING_FIELD = 30

_LAST_AUTOMATIC_STEP = Step.REVIEW


def step_index(step: Step) -> int:
    return STEP_ORDER.index(step)


def completed_steps(step: Step) -> list[Step]:
    """Every step strictly before ``step``."""
    return list(STEP_ORDER[: step_index(step)])


def can_leave(session: Session) -> bool:
    """Whether the gate out of the session's current step holds."""
    record = session.record
    match session.current_step:
        case Step.WELCOME:
            return record.is_filled("business_name")
        case Step.BUSINESS_INFO:
            return (
                record.is_filled("business_name")
                and record.is_filled("owner_name")
                and (record.is_filled("tax_registration_number") or record.is_filled("tax_id"))
            )
        case Step.DOCUMENT_UPLOAD:
            # Presence only; invalid documents still count.
            return MANDATORY_DOCUMENT_CATEGORIES <= session.uploaded_categories()
        case Step.FORM_COMPLETION:
            return not record.missing(FORM_REQUIRED_FIELDS)
        case Step.VERIFICATION:
            return True
    return False


def next_step(step: Step) -> Step | None:
    index = step_index(step)
    if index + 1 >= len(STEP_ORDER):
        return None
    return STEP_ORDER[index + 1]


def advance(session: Session, now: datetime | None = None) -> list[Step]:
    """Move forward through every gate that currently holds.

    Returns:
        The steps entered, in order; empty when the session did not move.
    """
    entered: list[Step] = []
    while step_index(session.current_step) < step_index(_LAST_AUTOMATIC_STEP):
        if not can_leave(session):
            break
        target = next_step(session.current_step)
        if target is None:
            break
        session.move_to(target, now)
        entered.append(target)
    if entered:
        Log.info(
            "Step advanced",
            session_id=session.session_id,
            step=session.current_step.value,
        )
    return entered


def can_go_back(current: Step, target: Step) -> bool:
    if current is Step.SUBMITTED:
        return False
    return step_index(target) < step_index(current)


def build_progress(session: Session) -> ProgressReport:
    fields_total = len(SUBMISSION_REQUIRED_FIELDS)
    fields_completed = len(session.record.filled(SUBMISSION_REQUIRED_FIELDS))
    documents_uploaded = len(MANDATORY_DOCUMENT_CATEGORIES & session.uploaded_categories())
    return ProgressReport(
        current_step=session.current_step,
        completed_steps=completed_steps(session.current_step),
        percent_complete=round(fields_completed / fields_total * 100),
        estimated_seconds_remaining=max(0, fields_total - fields_completed)
        * SECONDS_PER_MISSING_FIELD,
        fields_completed=fields_completed,
        fields_total=fields_total,
        documents_uploaded=documents_uploaded,
        documents_required=len(MANDATORY_DOCUMENT_CATEGORIES),
    )
