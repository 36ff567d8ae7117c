"""Risk scoring model.

Two entry points share one per-question scoring primitive:
- calculate_live_risk_score: cheap, run after every single answer
- calculate_risk_score: full score with breakdown, trend and confidence

Only answered, currently visible questions count toward a score - stale
answers to hidden questions never leak in.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional, Sequence

from cyberrisk.util.numbers import round_half_up
from cyberrisk.util.types import (
    ImpactTier, Proficiency, Question, QuestionKind, Response, SliderQuestion,
)
from cyberrisk.engine.catalog import (
    BOOTSTRAP_QUESTION_IDS, CONTROLS_QUESTION_ID, INCIDENTS_QUESTION_ID,
    MATURITY_QUESTION_ID, THREATS_QUESTION_ID, Catalog,
)
from cyberrisk.engine.responses import (
    find_response, first_selected, is_answered, resolve_proficiency, selected_options,
)
from cyberrisk.engine.visibility import visible_questions, visible_responses

logger = logging.getLogger(__name__)


class RiskCategory(Enum):
    """Overall risk bucket."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class RiskTrend(Enum):
    """Direction of the organisation's posture, from the full score."""
    IMPROVING = "improving"
    STABLE = "stable"
    WORSENING = "worsening"


class LiveTrend(Enum):
    """Direction hint shown next to the live score."""
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


SLIDER_ANCHOR_TOLERANCE = 12.5
CHOICE_POINTS = 20
SERIOUS_INCIDENT_MULTIPLIER = 1.5
SERIOUS_INCIDENTS = frozenset({'ransomware-attack', 'data-breach', 'supply-chain-compromise'})

PROFICIENCY_MULTIPLIERS = {
    Proficiency.EXPERT: 1.2,
    Proficiency.INTERMEDIATE: 1.0,
    Proficiency.NOVICE: 0.8,
}

BREAKDOWN_CATEGORIES = ('technical', 'operational', 'compliance', 'financial')

# Questions not listed here still count toward the overall score
CATEGORY_BY_QUESTION = {
    'cyber-maturity': 'technical',
    'threat-priorities': 'technical',
    'enterprise-complexity': 'technical',
    'current-security-controls': 'technical',
    'infrastructure-complexity': 'technical',
    'security-incidents': 'technical',
    'org-profile': 'operational',
    'delivery-preferences': 'operational',
    'startup-priorities': 'operational',
    'data-sensitivity': 'operational',
    'compliance-needs': 'compliance',
    'budget-flexibility': 'financial',
    'urgency-timeline': 'financial',
}

LOWEST_MATURITY = frozenset({'ad-hoc', 'basic'})
TOP_MATURITY = frozenset({'advanced', 'optimized'})
WORSENING_THREAT_COUNT = 3
IMPROVING_CONTROL_COUNT = 6


@dataclass
class QuestionContribution:
    """One question's share of the total.

    protective is the magnitude of the negative (risk-reducing) part already
    included in score.
    """
    score: float = 0.0
    max_score: float = 0.0
    impact: Optional[ImpactTier] = None
    protective: float = 0.0


@dataclass
class LiveRiskScore:
    score: int
    impact: ImpactTier
    trend: LiveTrend

    def to_dict(self) -> Dict[str, Any]:
        return {'score': self.score, 'impact': self.impact.value, 'trend': self.trend.value}


@dataclass
class RiskScore:
    """Full risk score. Recomputed wholesale on every call."""
    overall: int
    category: RiskCategory
    breakdown: Dict[str, int] = field(default_factory=dict)
    trend: RiskTrend = RiskTrend.STABLE
    confidence: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'overall': self.overall,
            'category': self.category.value,
            'breakdown': dict(self.breakdown),
            'trend': self.trend.value,
            'confidence': self.confidence,
        }


def category_for(score: float) -> RiskCategory:
    if score <= 25:
        return RiskCategory.LOW
    elif score <= 50:
        return RiskCategory.MEDIUM
    elif score <= 75:
        return RiskCategory.HIGH
    return RiskCategory.CRITICAL


def impact_for(score: float) -> ImpactTier:
    if score <= 25:
        return ImpactTier.LOW
    elif score <= 50:
        return ImpactTier.MEDIUM
    elif score <= 75:
        return ImpactTier.HIGH
    return ImpactTier.CRITICAL


def _nearest_anchor_impact(question: SliderQuestion, value: float) -> Optional[ImpactTier]:
    nearest = None
    nearest_distance = None
    for anchor in question.options:
        try:
            distance = abs(float(anchor.value) - value)
        except (TypeError, ValueError):
            continue
        if distance <= SLIDER_ANCHOR_TOLERANCE and (nearest_distance is None or distance < nearest_distance):
            nearest, nearest_distance = anchor, distance
    return nearest.impact if nearest else None


def question_contribution(question: Question, response: Optional[Response]) -> QuestionContribution:
    """Score one answered question. Unanswered or unscorable questions contribute nothing."""
    if question.id in BOOTSTRAP_QUESTION_IDS or not is_answered(question, response):
        return QuestionContribution()

    weight = question.weight
    kind = question.kind
    if kind == QuestionKind.TEXT:
        return QuestionContribution()

    if kind == QuestionKind.SLIDER:
        value = float(response.slider_value)
        return QuestionContribution(
            score=(100 - value) * weight,
            max_score=weight * 100,
            impact=_nearest_anchor_impact(question, value),
        )

    contribution = QuestionContribution(max_score=weight * 100)
    for option_id in response.selected_options:
        option = question.option(option_id)
        if option is None:
            logger.warning(f"Ignoring unknown option '{option_id}' for {question.id}")
            continue
        points = option.risk_multiplier * weight * CHOICE_POINTS
        contribution.score += points
        if points < 0:
            contribution.protective += -points
        contribution.impact = option.impact

    if question.id == INCIDENTS_QUESTION_ID and SERIOUS_INCIDENTS.intersection(response.selected_options):
        contribution.score *= SERIOUS_INCIDENT_MULTIPLIER
    return contribution


def _normalize(total: float, maximum: float) -> int:
    if maximum <= 0:
        return 0
    return round_half_up(min(100.0, max(0.0, total / maximum * 100)))


def calculate_live_risk_score(responses: Sequence[Response], catalog: Catalog) -> LiveRiskScore:
    """Incremental score over visible, answered questions.

    Responses are expected most-recent-last; the trend follows the last
    scored answer's impact tier.
    """
    responses = visible_responses(catalog, responses)
    visible = {q.id: q for q in visible_questions(catalog, responses)}

    total = 0.0
    maximum = 0.0
    last_impact: Optional[ImpactTier] = None
    for response in responses:
        question = visible.get(response.question_id)
        if question is None:
            continue
        contribution = question_contribution(question, response)
        if contribution.max_score <= 0:
            continue
        total += contribution.score
        maximum += contribution.max_score
        last_impact = contribution.impact

    score = _normalize(total, maximum)

    if last_impact in (ImpactTier.HIGH, ImpactTier.CRITICAL):
        trend = LiveTrend.UP
    elif last_impact == ImpactTier.LOW:
        trend = LiveTrend.DOWN
    else:
        trend = LiveTrend.STABLE

    return LiveRiskScore(score=score, impact=impact_for(score), trend=trend)


def _protective_control_count(question: Optional[Question], responses: Sequence[Response]) -> int:
    if question is None or question.kind not in (QuestionKind.MULTI_SELECT, QuestionKind.SINGLE_SELECT):
        return 0
    count = 0
    for option_id in selected_options(responses, CONTROLS_QUESTION_ID):
        option = question.option(option_id)
        if option is not None and option.risk_multiplier < 0:
            count += 1
    return count


def _trend(responses: Sequence[Response], catalog: Catalog) -> RiskTrend:
    maturity = first_selected(responses, MATURITY_QUESTION_ID)
    threats = selected_options(responses, THREATS_QUESTION_ID)
    incidents = selected_options(responses, INCIDENTS_QUESTION_ID)

    if maturity in LOWEST_MATURITY and len(threats) > WORSENING_THREAT_COUNT:
        return RiskTrend.WORSENING
    if SERIOUS_INCIDENTS.intersection(incidents):
        return RiskTrend.WORSENING

    controls = _protective_control_count(catalog.get(CONTROLS_QUESTION_ID), responses)
    if maturity in TOP_MATURITY or controls > IMPROVING_CONTROL_COUNT:
        return RiskTrend.IMPROVING
    return RiskTrend.STABLE


def calculate_risk_score(responses: Sequence[Response], catalog: Catalog) -> RiskScore:
    """Full risk score over the currently visible questions."""
    responses = visible_responses(catalog, responses)
    proficiency = resolve_proficiency(responses)
    multiplier = PROFICIENCY_MULTIPLIERS[proficiency]
    visible = visible_questions(catalog, responses)

    answered = 0
    total = 0.0
    maximum = 0.0
    controls_bonus = 0.0
    category_totals = {name: 0.0 for name in BREAKDOWN_CATEGORIES}
    scored: List[Response] = []

    for question in visible:
        response = find_response(responses, question.id)
        if not is_answered(question, response):
            continue
        answered += 1
        scored.append(response)

        contribution = question_contribution(question, response)
        score = contribution.score * multiplier
        if question.id == CONTROLS_QUESTION_ID:
            # Protective controls are subtracted once, after all per-question sums
            protective = contribution.protective * multiplier
            controls_bonus += protective
            score += protective

        total += score
        maximum += contribution.max_score * multiplier

        bucket = CATEGORY_BY_QUESTION.get(question.id)
        if bucket:
            category_totals[bucket] += score

    total = max(0.0, total - controls_bonus)
    overall = _normalize(total, maximum)

    quarter = maximum * 0.25
    breakdown = {name: _normalize(value, quarter) for name, value in category_totals.items()}

    confidence = round_half_up(100 * answered / len(visible)) if visible else 0

    risk_score = RiskScore(
        overall=overall,
        category=category_for(overall),
        breakdown=breakdown,
        trend=_trend(scored, catalog),
        confidence=confidence,
    )
    logger.debug(
        f"Risk score {overall} ({risk_score.category.value}), "
        f"{answered}/{len(visible)} answered, proficiency={proficiency.value}"
    )
    return risk_score
