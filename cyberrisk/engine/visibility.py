"""Question visibility resolver.

Decides which questions to present given the answers so far and the
user's declared proficiency. Catalog order is always preserved.
"""

import logging
from typing import List, Sequence

from cyberrisk.util.types import Condition, ConditionOperator, Proficiency, Question, Response
from cyberrisk.engine.catalog import BOOTSTRAP_QUESTION_IDS, Catalog
from cyberrisk.engine.responses import find_response, resolve_proficiency

logger = logging.getLogger(__name__)


def _as_number(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def evaluate_condition(condition: Condition, responses: Sequence[Response]) -> bool:
    """Evaluate one condition against accumulated responses.

    A condition on an unanswered question is false, and so is an unknown
    operator (fail closed).
    """
    response = find_response(responses, condition.question_id)
    if response is None:
        return False

    try:
        operator = ConditionOperator(condition.operator)
    except ValueError:
        logger.warning(f"Unknown condition operator '{condition.operator}' on {condition.question_id}")
        return False

    if operator == ConditionOperator.INCLUDES:
        return condition.value in response.selected_options
    if operator == ConditionOperator.EXCLUDES:
        return condition.value not in response.selected_options
    if operator == ConditionOperator.EQUALS:
        if response.selected_options and response.selected_options[0] == condition.value:
            return True
        return response.slider_value is not None and response.slider_value == condition.value
    if operator == ConditionOperator.GREATER_THAN:
        return _as_number(response.slider_value) > _as_number(condition.value)
    return _as_number(response.slider_value) < _as_number(condition.value)


def should_show_question(question: Question, responses: Sequence[Response],
                         proficiency: Proficiency) -> bool:
    """Apply bootstrap, proficiency, hideIf and showIf checks in that order."""
    if question.id in BOOTSTRAP_QUESTION_IDS:
        return True

    if proficiency == Proficiency.NOVICE:
        if question.expert_only:
            return False
        # Novices only see the curated subset or explicitly gated extras
        if not question.novice_friendly and not question.show_if:
            return False
    elif proficiency == Proficiency.INTERMEDIATE and question.expert_only:
        return False

    if any(evaluate_condition(c, responses) for c in question.hide_if):
        return False

    if question.show_if:
        return any(evaluate_condition(c, responses) for c in question.show_if)

    return True


def visible_questions(catalog: Catalog, responses: Sequence[Response]) -> List[Question]:
    """Subset of the catalog to present, in catalog order."""
    proficiency = resolve_proficiency(responses)
    visible = [q for q in catalog if should_show_question(q, responses, proficiency)]
    logger.debug(f"{len(visible)}/{len(catalog)} questions visible for {proficiency.value}")
    return visible


def visible_responses(catalog: Catalog, responses: Sequence[Response]) -> List[Response]:
    """Drop responses whose question is unknown or currently hidden."""
    for response in responses:
        if response.question_id not in catalog:
            logger.warning(f"Ignoring response for unknown question '{response.question_id}'")

    # A hidden answer can still gate a follow-up, so filter until nothing changes
    kept = list(responses)
    while True:
        visible_ids = {q.id for q in visible_questions(catalog, kept)}
        filtered = [r for r in kept if r.question_id in visible_ids]
        if len(filtered) == len(kept):
            return filtered
        kept = filtered
