"""Helpers for reading an accumulated list of responses.

Every lookup of an absent question yields a neutral default instead of raising.
"""

import logging
from typing import List, Optional, Sequence

from cyberrisk.util.types import Proficiency, Question, QuestionKind, Response
from cyberrisk.engine.catalog import (
    COMPLIANCE_QUESTION_ID, CURRENCY_QUESTION_ID, PROFICIENCY_QUESTION_ID,
)

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = 'gbp'
COMPLEXITY_FRAMEWORK_THRESHOLD = 4


def find_response(responses: Sequence[Response], question_id: str) -> Optional[Response]:
    """Return the latest response for a question id, or None."""
    found = None
    for response in responses:
        if response.question_id == question_id:
            found = response
    return found


def selected_options(responses: Sequence[Response], question_id: str) -> List[str]:
    """Selected option ids for a question (empty when unanswered)."""
    response = find_response(responses, question_id)
    if response is None:
        return []
    return list(response.selected_options)


def first_selected(responses: Sequence[Response], question_id: str) -> Optional[str]:
    options = selected_options(responses, question_id)
    return options[0] if options else None


def slider_value(responses: Sequence[Response], question_id: str) -> Optional[float]:
    response = find_response(responses, question_id)
    return response.slider_value if response else None


def upsert_response(responses: Sequence[Response], response: Response) -> List[Response]:
    """Return a new list where `response` replaces any earlier answer to the same question.

    The replacement moves to the end so list order stays "most recent last".
    """
    updated = [r for r in responses if r.question_id != response.question_id]
    updated.append(response)
    return updated


def resolve_proficiency(responses: Sequence[Response]) -> Proficiency:
    """Proficiency is always derived from the proficiency question, default intermediate."""
    selected = first_selected(responses, PROFICIENCY_QUESTION_ID)
    if selected is None:
        return Proficiency.INTERMEDIATE
    try:
        return Proficiency(selected)
    except ValueError:
        logger.warning(f"Unknown proficiency '{selected}', using intermediate")
        return Proficiency.INTERMEDIATE


def resolve_currency(responses: Sequence[Response], default: str = DEFAULT_CURRENCY) -> str:
    """Currency code chosen in the currency question, else the default."""
    return first_selected(responses, CURRENCY_QUESTION_ID) or default


def is_answered(question: Question, response: Optional[Response]) -> bool:
    """Whether a response actually answers the question (step validity)."""
    if response is None:
        return False
    kind = question.kind
    if kind == QuestionKind.SLIDER:
        return response.slider_value is not None
    if kind == QuestionKind.TEXT:
        return bool(response.text_value and response.text_value.strip())
    return len(response.selected_options) > 0


def count_selected_frameworks(responses: Sequence[Response]) -> int:
    """Number of compliance frameworks selected, ignoring the 'none' option."""
    return len([f for f in selected_options(responses, COMPLIANCE_QUESTION_ID) if f != 'none'])


def compliance_complexity_applies(responses: Sequence[Response]) -> bool:
    """Shared trigger for the over-compliance warning and the ROI complexity penalty."""
    return count_selected_frameworks(responses) >= COMPLEXITY_FRAMEWORK_THRESHOLD
