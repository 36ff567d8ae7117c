"""
ROI Model
=========
Deterministic investment / loss-prevention arithmetic driven by organisation
size, industry, risk score and the number of compliance frameworks targeted.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional, Sequence, Tuple

from cyberrisk.util.numbers import round_half_up
from cyberrisk.util.types import Response
from cyberrisk.engine.catalog import INDUSTRY_QUESTION_ID, ORG_PROFILE_QUESTION_ID
from cyberrisk.engine.currency import format_currency, format_range
from cyberrisk.engine.responses import (
    compliance_complexity_applies, count_selected_frameworks, first_selected, selected_options,
)
from cyberrisk.engine.scoring import RiskScore

logger = logging.getLogger(__name__)

# (base investment, base loss estimate) in GBP
SIZE_BASELINES = {
    'startup': (15_000, 150_000),
    'enterprise': (150_000, 2_500_000),
    'multinational': (300_000, 5_000_000),
}
DEFAULT_BASELINE = (50_000, 600_000)

# industry -> (investment multiplier, loss multiplier)
INDUSTRY_MULTIPLIERS = {
    'financial': (1.5, 3.0),
    'healthcare': (1.4, 2.5),
}

PENALTY_FREE_FRAMEWORKS = 3
PENALTY_COST_STEP = 0.25
PENALTY_EFFICIENCY_STEP = 8
MAX_EFFICIENCY_LOSS = 30
BASE_RISK_REDUCTION = 60
MAX_RISK_REDUCTION = 85
MIN_PAYBACK_MONTHS = 3


@dataclass
class ComplianceComplexityPenalty:
    is_applicable: bool
    description: str
    additional_cost: float
    efficiency_loss: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'isApplicable': self.is_applicable,
            'description': self.description,
            'additionalCost': self.additional_cost,
            'efficiencyLoss': self.efficiency_loss,
        }


@dataclass
class ROIModel:
    investment_range: str
    estimated_loss_prevention: float
    payback_period: str
    risk_reduction: int
    compliance_complexity_penalty: Optional[ComplianceComplexityPenalty] = None
    currency: str = 'gbp'

    @property
    def loss_prevention_label(self) -> str:
        """estimated_loss_prevention (GBP) formatted in the display currency"""
        return format_currency(self.estimated_loss_prevention, self.currency)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'investmentRange': self.investment_range,
            'estimatedLossPrevention': self.estimated_loss_prevention,
            'paybackPeriod': self.payback_period,
            'riskReduction': self.risk_reduction,
        }
        if self.compliance_complexity_penalty is not None:
            data['complianceComplexityPenalty'] = self.compliance_complexity_penalty.to_dict()
        return data


def size_baseline(responses: Sequence[Response]) -> Tuple[float, float]:
    """Base (investment, loss) pair for the organisation-size tier."""
    profile = selected_options(responses, ORG_PROFILE_QUESTION_ID)
    for tier in ('startup', 'enterprise', 'multinational'):
        if tier in profile:
            return SIZE_BASELINES[tier]
    return DEFAULT_BASELINE


def calculate_roi(responses: Sequence[Response], risk_score: RiskScore,
                  currency: str = 'gbp') -> ROIModel:
    """Build the ROI model. Pure arithmetic, no randomness."""
    investment, loss_estimate = size_baseline(responses)

    industry = first_selected(responses, INDUSTRY_QUESTION_ID)
    invest_mult, loss_mult = INDUSTRY_MULTIPLIERS.get(industry, (1.0, 1.0))
    investment *= invest_mult
    loss_estimate *= loss_mult

    loss_estimate *= 1 + risk_score.overall / 100

    penalty = None
    efficiency_loss = 0
    if compliance_complexity_applies(responses):
        frameworks = count_selected_frameworks(responses)
        extra = frameworks - PENALTY_FREE_FRAMEWORKS
        penalized = investment * (1 + extra * PENALTY_COST_STEP)
        additional_cost = penalized - investment
        investment = penalized
        efficiency_loss = min(MAX_EFFICIENCY_LOSS, extra * PENALTY_EFFICIENCY_STEP)
        penalty = ComplianceComplexityPenalty(
            is_applicable=True,
            description=(
                f"Targeting {frameworks} compliance frameworks at once adds overlapping audits, "
                f"duplicated evidence collection and checkbox-driven controls that dilute real "
                f"risk reduction. An additional {format_currency(additional_cost, currency)} "
                f"of investment is estimated to cover the overhead."
            ),
            additional_cost=round(additional_cost, 2),
            efficiency_loss=efficiency_loss,
        )

    risk_reduction = min(MAX_RISK_REDUCTION, BASE_RISK_REDUCTION + investment / 10_000)
    risk_reduction -= efficiency_loss

    annual_prevented = loss_estimate * (risk_reduction / 100)
    if annual_prevented > 0:
        payback_months = max(MIN_PAYBACK_MONTHS, round_half_up(investment / (annual_prevented / 12)))
    else:
        payback_months = MIN_PAYBACK_MONTHS

    roi = ROIModel(
        investment_range=format_range(investment * 0.8, investment * 1.2, currency),
        estimated_loss_prevention=round_half_up(annual_prevented),
        payback_period=f"{payback_months} months",
        risk_reduction=round_half_up(risk_reduction),
        compliance_complexity_penalty=penalty,
        currency=currency,
    )
    logger.debug(
        f"ROI: investment={investment:.0f} loss={loss_estimate:.0f} "
        f"reduction={risk_reduction:.1f}% payback={payback_months}m"
    )
    return roi
