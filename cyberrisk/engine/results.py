"""
Assessment Results
==================
Aggregates risk score, compliance gaps, service recommendations, ROI model,
threat profile and benchmark into one report-ready object.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Sequence

from cyberrisk.util.types import Response
from cyberrisk.engine.catalog import DEFAULT_CATALOG, INDUSTRY_QUESTION_ID, THREATS_QUESTION_ID, Catalog
from cyberrisk.engine.compliance import ComplianceGap, analyze_compliance_gaps
from cyberrisk.engine.recommendations import ServiceRecommendation, generate_service_recommendations
from cyberrisk.engine.responses import first_selected, resolve_currency, selected_options
from cyberrisk.engine.roi import ROIModel, calculate_roi
from cyberrisk.engine.scoring import RiskScore, calculate_risk_score
from cyberrisk.engine.visibility import visible_responses

logger = logging.getLogger(__name__)

INDUSTRY_AVERAGES = {
    'financial': 78,
    'healthcare': 75,
}
DEFAULT_INDUSTRY_AVERAGE = 68
PEER_BAND = 10


@dataclass
class BenchmarkData:
    industry_average: int
    peer_comparison: str

    def to_dict(self) -> Dict[str, Any]:
        return {'industryAverage': self.industry_average, 'peerComparison': self.peer_comparison}


@dataclass
class AssessmentResults:
    """Everything the report renders, computed from visible answers only"""
    risk_score: RiskScore
    compliance_gaps: List[ComplianceGap] = field(default_factory=list)
    service_recommendations: List[ServiceRecommendation] = field(default_factory=list)
    roi_model: Optional[ROIModel] = None
    threat_profile: List[str] = field(default_factory=list)
    benchmark_data: Optional[BenchmarkData] = None
    currency: str = 'gbp'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'riskScore': self.risk_score.to_dict(),
            'complianceGaps': [g.to_dict() for g in self.compliance_gaps],
            'serviceRecommendations': [r.to_dict() for r in self.service_recommendations],
            'roiModel': self.roi_model.to_dict() if self.roi_model else None,
            'threatProfile': list(self.threat_profile),
            'benchmarkData': self.benchmark_data.to_dict() if self.benchmark_data else None,
        }


def benchmark_for(responses: Sequence[Response], overall: int) -> BenchmarkData:
    industry = first_selected(responses, INDUSTRY_QUESTION_ID)
    average = INDUSTRY_AVERAGES.get(industry, DEFAULT_INDUSTRY_AVERAGE)

    if overall > average + PEER_BAND:
        comparison = 'Above Average Risk'
    elif overall < average - PEER_BAND:
        comparison = 'Below Average Risk'
    else:
        comparison = 'Average Risk'

    return BenchmarkData(industry_average=average, peer_comparison=comparison)


def generate_assessment_results(responses: Sequence[Response], catalog: Catalog = DEFAULT_CATALOG,
                                currency: Optional[str] = None) -> AssessmentResults:
    """Run every analysis over the currently visible answers.

    Args:
        responses: Accumulated answers, most recent last
        catalog: Question catalog the answers refer to
        currency: Default display currency when the currency question is unanswered

    Returns:
        AssessmentResults
    """
    visible = visible_responses(catalog, responses)
    if len(visible) != len(responses):
        logger.debug(f"Ignoring {len(responses) - len(visible)} answers to hidden or unknown questions")

    currency = resolve_currency(visible, currency or 'gbp')
    risk_score = calculate_risk_score(visible, catalog)

    results = AssessmentResults(
        risk_score=risk_score,
        compliance_gaps=analyze_compliance_gaps(visible),
        service_recommendations=generate_service_recommendations(visible, risk_score, currency),
        roi_model=calculate_roi(visible, risk_score, currency),
        threat_profile=selected_options(visible, THREATS_QUESTION_ID),
        benchmark_data=benchmark_for(visible, risk_score.overall),
        currency=currency,
    )

    logger.info(
        f"Assessment complete: risk {risk_score.overall} ({risk_score.category.value}), "
        f"{len(results.compliance_gaps)} gaps, {len(results.service_recommendations)} recommendations"
    )
    return results
