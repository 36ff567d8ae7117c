"""
Service Recommendation Generator
================================
Rule-based selection of services to recommend after an assessment.

Each rule appends zero or one recommendation. Rules run in a fixed order and
the output keeps that order - priority is informational, not a sort key.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional, Sequence, Tuple

from cyberrisk.util.types import Response
from cyberrisk.engine.catalog import (
    BUDGET_QUESTION_ID, COMPLIANCE_QUESTION_ID, INDUSTRY_QUESTION_ID, MATURITY_QUESTION_ID,
    ORG_PROFILE_QUESTION_ID, THREATS_QUESTION_ID, URGENCY_QUESTION_ID,
)
from cyberrisk.engine.currency import format_range
from cyberrisk.engine.responses import first_selected, selected_options, slider_value
from cyberrisk.engine.scoring import LOWEST_MATURITY, RiskScore

logger = logging.getLogger(__name__)


class RecommendationPriority(Enum):
    """Recommendation priority levels"""
    ESSENTIAL = "Essential"
    RECOMMENDED = "Recommended"
    OPTIONAL = "Optional"


STARTUP = 'startup'
ENTERPRISE = 'enterprise'
OTHER = 'other'

THREAT_LABELS = {
    'ransomware': 'Ransomware attacks',
    'data-breach': 'Data breaches',
    'phishing': 'Phishing & email attacks',
    'insider-threat': 'Insider threats',
    'supply-chain': 'Supply chain compromise',
    'cloud-security': 'Cloud misconfiguration & breaches',
    'regulatory-compliance': 'Regulatory non-compliance',
    'business-disruption': 'Business continuity disruption',
    'financial-fraud': 'Financial fraud',
    'ip-theft': 'Intellectual property theft',
    'reputation-damage': 'Reputation damage',
    'advanced-threats': 'Advanced persistent threats',
}

INDUSTRY_RISKS = {
    'financial': 'Regulatory sanctions from financial supervisors',
    'healthcare': 'Patient data exposure and clinical disruption',
    'government': 'Exposure of public-sector and citizen data',
    'manufacturing': 'OT/IT convergence and production downtime',
    'retail': 'Payment card data theft',
}


@dataclass
class PricingEstimate:
    range: str
    model: str
    factors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'range': self.range, 'model': self.model, 'factors': list(self.factors)}


@dataclass
class ImplementationPlan:
    phase1: str
    phase2: str
    phase3: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'phase1': self.phase1, 'phase2': self.phase2}
        if self.phase3:
            data['phase3'] = self.phase3
        return data


@dataclass
class ServiceRecommendation:
    """A recommended service with display-ready copy"""
    id: str
    name: str
    description: str
    priority: RecommendationPriority
    timeframe: str
    benefits: List[str]
    technical_details: List[str]
    pricing_estimate: PricingEstimate
    hanco_advantage: List[str]
    addressed_risks: List[str]
    implementation: ImplementationPlan
    scaling_options: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'priority': self.priority.value,
            'timeframe': self.timeframe,
            'benefits': list(self.benefits),
            'technicalDetails': list(self.technical_details),
            'pricingEstimate': self.pricing_estimate.to_dict(),
            'hancoAdvantage': list(self.hanco_advantage),
            'addressedRisks': list(self.addressed_risks),
            'implementation': self.implementation.to_dict(),
            'scalingOptions': list(self.scaling_options),
        }


@dataclass
class RecommendationContext:
    """Answers the rules read, pulled out of the responses once"""
    segment: str
    industry: Optional[str]
    maturity: Optional[str]
    threats: List[str]
    frameworks: List[str]
    urgency: List[str]
    budget: Optional[float]
    risk_score: RiskScore
    currency: str

    @property
    def immediate_threat(self) -> bool:
        return 'immediate-threat' in self.urgency

    def threat_labels(self, *threat_ids: str) -> List[str]:
        return [THREAT_LABELS[t] for t in threat_ids if t in self.threats]


class RecommendationEngine:
    """Generate service recommendations from answers and the risk score"""

    def __init__(self):
        self.rules = [
            self._security_advisory,
            self._managed_soc,
            self._vulnerability_management,
            self._incident_response,
            self._compliance_governance,
            self._cloud_security,
            self._security_training,
        ]

    def generate(self, responses: Sequence[Response], risk_score: RiskScore,
                 currency: str = 'gbp') -> List[ServiceRecommendation]:
        """
        Generate recommendations

        Returns:
            Recommendations in rule order (not sorted by priority)
        """
        context = self.build_context(responses, risk_score, currency)
        recommendations = []
        for rule in self.rules:
            recommendation = rule(context)
            if recommendation is not None:
                recommendations.append(recommendation)

        logger.debug(
            f"{len(recommendations)} recommendations for segment={context.segment}: "
            f"{[r.id for r in recommendations]}"
        )
        return recommendations

    @staticmethod
    def build_context(responses: Sequence[Response], risk_score: RiskScore,
                      currency: str = 'gbp') -> RecommendationContext:
        profile = selected_options(responses, ORG_PROFILE_QUESTION_ID)
        if 'startup' in profile:
            segment = STARTUP
        elif 'enterprise' in profile or 'multinational' in profile:
            segment = ENTERPRISE
        else:
            segment = OTHER

        return RecommendationContext(
            segment=segment,
            industry=first_selected(responses, INDUSTRY_QUESTION_ID),
            maturity=first_selected(responses, MATURITY_QUESTION_ID),
            threats=selected_options(responses, THREATS_QUESTION_ID),
            frameworks=[f for f in selected_options(responses, COMPLIANCE_QUESTION_ID) if f != 'none'],
            urgency=selected_options(responses, URGENCY_QUESTION_ID),
            budget=slider_value(responses, BUDGET_QUESTION_ID),
            risk_score=risk_score,
            currency=currency,
        )

    # ----- shared helpers -----

    @staticmethod
    def _by_segment(context: RecommendationContext, startup, enterprise, other):
        if context.segment == STARTUP:
            return startup
        elif context.segment == ENTERPRISE:
            return enterprise
        return other

    def _price(self, context: RecommendationContext, bands: Tuple[Tuple[float, float], ...],
               suffix: str, scale: float = 1.0) -> str:
        low, high = self._by_segment(context, *bands)
        return format_range(low * scale, high * scale, context.currency, suffix)

    @staticmethod
    def _pricing_model(context: RecommendationContext, base: str) -> str:
        """Budget flexibility only shapes how the service is billed"""
        if context.budget is None:
            return base
        if context.budget <= 37.5:
            return f"{base}, phased monthly billing with ROI checkpoints"
        if context.budget > 62.5:
            return f"{base}, annual commitment discount available"
        return base

    # ----- rules, in output order -----

    def _security_advisory(self, context: RecommendationContext) -> Optional[ServiceRecommendation]:
        weak_programme = context.maturity in ('ad-hoc', 'basic', 'developing', 'uncertain')
        if not weak_programme and context.risk_score.overall < 50:
            return None

        essential = context.maturity in LOWEST_MATURITY or context.maturity == 'uncertain'
        return ServiceRecommendation(
            id='security-advisory',
            name=self._by_segment(context, 'Fractional CISO for Startups',
                                  'Virtual CISO & Security Strategy',
                                  'Virtual CISO Advisory'),
            description=self._by_segment(
                context,
                'Senior security leadership on a part-time basis to build a programme that satisfies investors and enterprise customers.',
                'Board-level security leadership to align a multi-entity security programme with business risk and regulatory expectations.',
                'Experienced security leadership to turn ad-hoc controls into a structured, measurable programme.',
            ),
            priority=RecommendationPriority.ESSENTIAL if essential else RecommendationPriority.RECOMMENDED,
            timeframe=self._by_segment(context, '1-2 weeks to onboard', '2-4 weeks to onboard', '1-3 weeks to onboard'),
            benefits=[
                'Clear security roadmap tied to business priorities',
                'Board and investor-ready risk reporting',
                'Policy framework and ownership defined',
            ],
            technical_details=[
                'Current-state maturity assessment against NIST CSF',
                'Risk register and treatment plan',
                'Security policy suite and governance cadence',
            ],
            pricing_estimate=PricingEstimate(
                range=self._price(context, ((1_500, 3_000), (8_000, 15_000), (3_500, 6_500)), '/month'),
                model=self._pricing_model(context, 'Monthly retainer'),
                factors=['Days per month', 'Organisation complexity', 'Reporting requirements'],
            ),
            hanco_advantage=[
                'Former CISOs from regulated industries',
                'Vendor-neutral advice',
                'Templates proven across hundreds of programmes',
            ],
            addressed_risks=['Lack of security ownership', 'Unprioritised security spending']
                            + context.threat_labels('regulatory-compliance'),
            implementation=ImplementationPlan(
                phase1='Discovery workshops and maturity baseline',
                phase2='Roadmap, policies and risk register',
                phase3='Ongoing governance and board reporting',
            ),
            scaling_options=self._by_segment(
                context,
                ['Scale to full-time CISO as you grow', 'Add investor due-diligence support'],
                ['Regional deputy CISOs', 'Group-wide security operating model'],
                ['Increase advisory days', 'Add compliance programme management'],
            ),
        )

    def _managed_soc(self, context: RecommendationContext) -> Optional[ServiceRecommendation]:
        score = context.risk_score
        if not (score.overall > 60 or context.immediate_threat or score.breakdown.get('technical', 0) > 70):
            return None

        essential = context.immediate_threat or 'ransomware' in context.threats or score.overall > 75
        if context.immediate_threat:
            timeframe = 'Emergency deployment within 24-48 hours'
        else:
            timeframe = self._by_segment(context, '2-3 weeks', '6-8 weeks', '3-4 weeks')

        return ServiceRecommendation(
            id='managed-soc',
            name=self._by_segment(context, 'Startup SOC Essentials',
                                  'Enterprise Managed SOC & MDR',
                                  '24/7 Managed SOC'),
            description=self._by_segment(
                context,
                'Round-the-clock monitoring sized for lean teams, with analysts who respond so your engineers can keep building.',
                'Follow-the-sun security operations with threat hunting, SIEM management and integration into your existing tooling.',
                'Continuous monitoring, detection and response delivered by a dedicated analyst team.',
            ),
            priority=RecommendationPriority.ESSENTIAL if essential else RecommendationPriority.RECOMMENDED,
            timeframe=timeframe,
            benefits=[
                '24/7 threat detection and response',
                'Reduced mean time to detect and contain',
                'No need to hire and retain a night shift',
            ],
            technical_details=[
                'SIEM and EDR telemetry correlation',
                'MITRE ATT&CK mapped detection rules',
                'Containment playbooks with agreed escalation',
            ],
            pricing_estimate=PricingEstimate(
                range=self._price(context, ((2_000, 4_000), (15_000, 35_000), (5_000, 12_000)), '/month'),
                model=self._pricing_model(context, 'Per-endpoint monthly subscription'),
                factors=['Number of endpoints', 'Log volume', 'Response SLA'],
            ),
            hanco_advantage=[
                'UK-based analysts with 15-minute critical SLA',
                'Bring-your-own SIEM supported',
                'Monthly threat briefings included',
            ],
            addressed_risks=context.threat_labels('ransomware', 'advanced-threats', 'insider-threat', 'data-breach')
                            or ['Undetected intrusions'],
            implementation=ImplementationPlan(
                phase1='Log source onboarding and baseline tuning',
                phase2='Detection engineering and playbook sign-off',
                phase3='Threat hunting and continuous improvement',
            ),
            scaling_options=self._by_segment(
                context,
                ['Add cloud workload monitoring', 'Upgrade to full MDR'],
                ['Dedicated analyst pod', 'OT network monitoring', 'Global follow-the-sun coverage'],
                ['Add threat hunting', 'Extend to cloud and SaaS logs'],
            ),
        )

    def _vulnerability_management(self, context: RecommendationContext) -> ServiceRecommendation:
        score = context.risk_score
        essential = score.overall > 50 or score.breakdown.get('technical', 0) > 60
        return ServiceRecommendation(
            id='vulnerability-management',
            name=self._by_segment(context, 'Vulnerability Scanning & Pen Testing Starter',
                                  'Enterprise Vulnerability Management Programme',
                                  'Managed Vulnerability Management'),
            description=self._by_segment(
                context,
                'Continuous scanning plus an annual penetration test to catch the issues customers and investors ask about.',
                'Risk-based vulnerability management across on-premise, cloud and legacy estates with remediation tracking.',
                'Regular scanning, prioritisation and remediation guidance so critical exposures are fixed first.',
            ),
            priority=RecommendationPriority.ESSENTIAL if essential else RecommendationPriority.RECOMMENDED,
            timeframe=self._by_segment(context, '1-2 weeks', '4-6 weeks', '2-3 weeks'),
            benefits=[
                'Known exposures found before attackers do',
                'Risk-ranked remediation backlog',
                'Evidence for audits and customer questionnaires',
            ],
            technical_details=[
                'Authenticated internal and external scanning',
                'CVSS and exploitability based prioritisation',
                'Remediation verification rescans',
            ],
            pricing_estimate=PricingEstimate(
                range=self._price(context, ((500, 1_500), (6_000, 15_000), (1_500, 4_000)), '/month'),
                model=self._pricing_model(context, 'Per-asset monthly subscription'),
                factors=['Number of assets', 'Scan frequency', 'Penetration test scope'],
            ),
            hanco_advantage=[
                'CREST-accredited testers',
                'Findings triaged by humans, not just tools',
                'Remediation support included',
            ],
            addressed_risks=['Unpatched vulnerabilities'] + context.threat_labels('ransomware', 'cloud-security'),
            implementation=ImplementationPlan(
                phase1='Asset discovery and first scan',
                phase2='Prioritised remediation plan',
                phase3='Continuous scanning and quarterly reviews',
            ),
            scaling_options=self._by_segment(
                context,
                ['Add application testing', 'Move to quarterly pen tests'],
                ['Attack surface management', 'Red team exercises'],
                ['Add web application testing', 'Increase scan frequency'],
            ),
        )

    def _incident_response(self, context: RecommendationContext) -> Optional[ServiceRecommendation]:
        high_impact_threats = 'ransomware' in context.threats or 'data-breach' in context.threats
        if not (context.immediate_threat or high_impact_threats or context.risk_score.overall > 50):
            return None

        industry_risk = INDUSTRY_RISKS.get(context.industry)
        risks = context.threat_labels('ransomware', 'data-breach', 'business-disruption')
        if industry_risk:
            risks.append(industry_risk)

        return ServiceRecommendation(
            id='incident-response',
            name=self._by_segment(context, 'Incident Response Retainer - Startup',
                                  'Enterprise Incident Response Retainer',
                                  'Incident Response Retainer'),
            description=self._by_segment(
                context,
                'Guaranteed access to responders and a ready-made plan, so one incident does not end the company.',
                'Pre-agreed response capacity, crisis management and forensic support across business units and regions.',
                'On-call incident responders plus a tested plan to contain and recover quickly.',
            ),
            priority=RecommendationPriority.ESSENTIAL if context.immediate_threat else RecommendationPriority.RECOMMENDED,
            timeframe='Retainer active within 24 hours' if context.immediate_threat else '1-2 weeks',
            benefits=[
                'Guaranteed response times',
                'Faster containment and recovery',
                'Regulator and insurer-ready incident reports',
            ],
            technical_details=[
                'Incident response plan and playbooks',
                'Digital forensics and root cause analysis',
                'Tabletop exercises for leadership',
            ],
            pricing_estimate=PricingEstimate(
                range=self._price(context, ((5_000, 10_000), (40_000, 90_000), (12_000, 25_000)), '/year'),
                model=self._pricing_model(context, 'Annual retainer with pre-paid response hours'),
                factors=['Response SLA', 'Pre-paid hours', 'Number of sites'],
            ),
            hanco_advantage=[
                'Responders on site within 4 hours in the UK',
                'Unused hours convert to proactive services',
                'Experience with ransomware negotiation and recovery',
            ],
            addressed_risks=risks or ['Prolonged incident impact'],
            implementation=ImplementationPlan(
                phase1='Retainer onboarding and contact tree',
                phase2='Plan review and playbook development',
                phase3='Annual tabletop exercise',
            ),
            scaling_options=self._by_segment(
                context,
                ['Add cyber insurance readiness review'],
                ['Multi-region response teams', 'Crisis communications support'],
                ['Increase pre-paid hours', 'Add forensic readiness assessment'],
            ),
        )

    def _compliance_governance(self, context: RecommendationContext) -> Optional[ServiceRecommendation]:
        deadline = 'compliance-deadline' in context.urgency
        if not (context.frameworks or deadline or context.risk_score.breakdown.get('compliance', 0) > 50):
            return None

        frameworks = [f.upper() for f in context.frameworks]
        scale = max(1, len(context.frameworks))
        risks = ['Audit failure'] + context.threat_labels('regulatory-compliance')
        if context.industry in INDUSTRY_RISKS:
            risks.append(INDUSTRY_RISKS[context.industry])

        factors = ['Number of frameworks', 'Existing documentation', 'Audit timeline']
        if frameworks:
            factors.append(f"Frameworks in scope: {', '.join(frameworks)}")

        return ServiceRecommendation(
            id='compliance-governance',
            name=self._by_segment(context, 'Compliance Readiness for Startups',
                                  'Enterprise GRC Programme',
                                  'Compliance & Governance Programme'),
            description=self._by_segment(
                context,
                'Get audit-ready for the frameworks your customers ask for without building a compliance team.',
                'Unified governance, risk and compliance across frameworks, with control mapping to avoid duplicated effort.',
                'Gap remediation and evidence management to reach and maintain certification.',
            ),
            priority=RecommendationPriority.ESSENTIAL if deadline else RecommendationPriority.RECOMMENDED,
            timeframe=self._by_segment(context, '8-12 weeks', '3-6 months', '2-4 months'),
            benefits=[
                'Controls mapped once, reused across frameworks',
                'Audit evidence collected continuously',
                'Reduced regulatory exposure',
            ],
            technical_details=[
                'Gap analysis against each selected framework',
                'Unified control framework and policy set',
                'Evidence collection and audit support',
            ],
            pricing_estimate=PricingEstimate(
                range=self._price(context, ((8_000, 15_000), (25_000, 60_000), (12_000, 25_000)),
                                  ' per programme', scale=scale),
                model=self._pricing_model(context, 'Fixed-fee readiness project'),
                factors=factors,
            ),
            hanco_advantage=[
                'Certified ISO 27001 lead implementers',
                'Pass-first-time track record',
                'Ongoing compliance-as-a-service available',
            ],
            addressed_risks=risks,
            implementation=ImplementationPlan(
                phase1='Gap assessment and control mapping',
                phase2='Remediation and policy rollout',
                phase3='Pre-audit review and certification support',
            ),
            scaling_options=self._by_segment(
                context,
                ['Add SOC 2 readiness', 'Continuous compliance monitoring'],
                ['Group-wide GRC tooling', 'Third-party risk management'],
                ['Add additional frameworks', 'Internal audit support'],
            ),
        )

    def _cloud_security(self, context: RecommendationContext) -> Optional[ServiceRecommendation]:
        cloud_concern = 'cloud-security' in context.threats
        if not (cloud_concern or context.segment == ENTERPRISE or context.industry == 'technology'):
            return None

        return ServiceRecommendation(
            id='cloud-security',
            name=self._by_segment(context, 'Cloud Security Foundations',
                                  'Multi-Cloud Security Posture Management',
                                  'Cloud Security Review & Hardening'),
            description=self._by_segment(
                context,
                'Secure-by-default cloud accounts and guardrails that keep pace with rapid releases.',
                'Continuous posture management across cloud providers with policy-as-code guardrails.',
                'Configuration review and hardening of your cloud estate against CIS benchmarks.',
            ),
            priority=RecommendationPriority.RECOMMENDED if cloud_concern else RecommendationPriority.OPTIONAL,
            timeframe=self._by_segment(context, '2-4 weeks', '6-10 weeks', '3-5 weeks'),
            benefits=[
                'Misconfigurations caught before exposure',
                'Least-privilege identity in the cloud',
                'Guardrails that do not slow delivery',
            ],
            technical_details=[
                'CIS benchmark configuration assessment',
                'Cloud identity and access review',
                'Policy-as-code guardrails',
            ],
            pricing_estimate=PricingEstimate(
                range=self._price(context, ((1_000, 2_500), (10_000, 25_000), (3_000, 7_000)), '/month'),
                model=self._pricing_model(context, 'Per-account monthly subscription'),
                factors=['Number of cloud accounts', 'Providers in use', 'Workload count'],
            ),
            hanco_advantage=[
                'Certified AWS, Azure and GCP engineers',
                'Infrastructure-as-code remediation',
                'Works with your DevOps pipeline',
            ],
            addressed_risks=context.threat_labels('cloud-security', 'data-breach') or ['Cloud misconfiguration'],
            implementation=ImplementationPlan(
                phase1='Cloud posture assessment',
                phase2='Hardening and guardrail deployment',
                phase3='Continuous posture monitoring',
            ),
            scaling_options=self._by_segment(
                context,
                ['Add container security', 'Kubernetes hardening'],
                ['Cloud-native application protection', 'Multi-cloud SOC integration'],
                ['Add workload protection', 'Extend to SaaS posture'],
            ),
        )

    def _security_training(self, context: RecommendationContext) -> Optional[ServiceRecommendation]:
        people_threats = 'phishing' in context.threats or 'insider-threat' in context.threats
        if not (people_threats or context.segment == STARTUP or context.maturity in LOWEST_MATURITY):
            return None

        return ServiceRecommendation(
            id='security-training',
            name=self._by_segment(context, 'Security Awareness Essentials',
                                  'Enterprise Security Culture Programme',
                                  'Security Awareness & Phishing Simulation'),
            description=self._by_segment(
                context,
                'Short, practical training that builds good habits from day one.',
                'Role-based training, phishing simulation and culture metrics across the organisation.',
                'Ongoing awareness training with realistic phishing simulations.',
            ),
            priority=RecommendationPriority.RECOMMENDED if 'phishing' in context.threats else RecommendationPriority.OPTIONAL,
            timeframe=self._by_segment(context, '1 week', '4-6 weeks', '2 weeks'),
            benefits=[
                'Fewer successful phishing attacks',
                'Staff who report suspicious activity',
                'Training evidence for auditors',
            ],
            technical_details=[
                'Monthly micro-learning modules',
                'Phishing simulation campaigns',
                'Click and report rate dashboards',
            ],
            pricing_estimate=PricingEstimate(
                range=self._price(context, ((1_500, 3_000), (20_000, 50_000), (5_000, 10_000)), '/year'),
                model=self._pricing_model(context, 'Per-user annual licence'),
                factors=['Number of users', 'Languages required', 'Simulation frequency'],
            ),
            hanco_advantage=[
                'Content written for UK businesses',
                'Simulations based on live threat intelligence',
                'Board-level awareness sessions included',
            ],
            addressed_risks=context.threat_labels('phishing', 'insider-threat') or ['Human error'],
            implementation=ImplementationPlan(
                phase1='Baseline phishing simulation',
                phase2='Training rollout',
            ),
            scaling_options=self._by_segment(
                context,
                ['Add secure coding training for developers'],
                ['Role-based modules', 'Security champions network'],
                ['Add executive training', 'Increase simulation frequency'],
            ),
        )


def generate_service_recommendations(responses: Sequence[Response], risk_score: RiskScore,
                                     currency: str = 'gbp') -> List[ServiceRecommendation]:
    return RecommendationEngine().generate(responses, risk_score, currency)
