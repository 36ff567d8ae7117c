"""
Unit Tests for Risk Scoring (live and full score)
"""

import pytest
from cyberrisk.util.types import ImpactTier, Response, TextQuestion
from cyberrisk.engine.catalog import DEFAULT_CATALOG, get_question
from cyberrisk.engine.responses import upsert_response
from cyberrisk.engine.scoring import (
    LiveTrend, RiskCategory, RiskTrend, calculate_live_risk_score, calculate_risk_score,
    category_for, question_contribution,
)


class TestQuestionContribution:
    """Test suite for the per-question scoring primitive"""

    def test_bootstrap_questions_score_nothing(self):
        """Test currency and proficiency never contribute"""
        question = get_question('user-proficiency')
        contribution = question_contribution(question, Response('user-proficiency', ['expert']))
        assert contribution.score == 0
        assert contribution.max_score == 0

    def test_select_contribution(self):
        """Test select score is multiplier * weight * 20 per option"""
        question = get_question('cyber-maturity')
        contribution = question_contribution(question, Response('cyber-maturity', ['ad-hoc']))
        assert contribution.score == pytest.approx(2.8 * 1.8 * 20)
        assert contribution.max_score == pytest.approx(180)
        assert contribution.impact == ImpactTier.CRITICAL

    def test_unknown_option_ignored(self):
        """Test unknown option ids add nothing"""
        question = get_question('cyber-maturity')
        contribution = question_contribution(question, Response('cyber-maturity', ['legendary']))
        assert contribution.score == 0

    def test_serious_incident_multiplier(self):
        """Test serious incidents amplify the incident score"""
        question = get_question('security-incidents')
        contribution = question_contribution(question, Response('security-incidents', ['ransomware-attack']))
        assert contribution.score == pytest.approx(2.2 * 2.2 * 20 * 1.5)

        contribution = question_contribution(question, Response('security-incidents', ['phishing-attempts']))
        assert contribution.score == pytest.approx(1.3 * 2.2 * 20)

    def test_slider_contribution(self):
        """Test slider score is (100 - value) * weight with nearest-anchor impact"""
        question = get_question('budget-flexibility')
        contribution = question_contribution(question, Response('budget-flexibility', slider_value=25))
        assert contribution.score == pytest.approx(75)
        assert contribution.max_score == pytest.approx(100)
        assert contribution.impact == ImpactTier.MEDIUM

        contribution = question_contribution(question, Response('budget-flexibility', slider_value=60))
        assert contribution.impact == ImpactTier.LOW

    def test_text_contribution(self):
        """Test free-text answers are never scored"""
        question = TextQuestion(id='notes', title='Notes', description='', required=False, weight=1.5)
        contribution = question_contribution(question, Response('notes', text_value='we use a password manager'))
        assert contribution.score == 0
        assert contribution.max_score == 0


class TestLiveRiskScore:
    """Test suite for the incremental live score"""

    def test_empty_is_zero(self):
        """Test no scored answers gives a neutral score"""
        live = calculate_live_risk_score([Response('user-proficiency', ['novice'])], DEFAULT_CATALOG)
        assert live.score == 0
        assert live.impact == ImpactTier.LOW
        assert live.trend == LiveTrend.STABLE

    def test_single_answer(self):
        """Test live score for a single critical answer"""
        live = calculate_live_risk_score([Response('cyber-maturity', ['ad-hoc'])], DEFAULT_CATALOG)
        assert live.score == 56
        assert live.impact == ImpactTier.HIGH
        assert live.trend == LiveTrend.UP

    def test_trend_follows_last_answer(self):
        """Test trend reflects the impact of the most recent answer"""
        responses = [Response('cyber-maturity', ['ad-hoc']), Response('budget-flexibility', slider_value=100)]
        assert calculate_live_risk_score(responses, DEFAULT_CATALOG).trend == LiveTrend.DOWN

        responses = [Response('cyber-maturity', ['ad-hoc']), Response('data-sensitivity', ['employee-data'])]
        assert calculate_live_risk_score(responses, DEFAULT_CATALOG).trend == LiveTrend.STABLE


class TestRiskScore:
    """Test suite for the full risk score"""

    @pytest.fixture
    def worst_case(self):
        """Fixture with the riskiest answer to every visible question"""
        return [
            Response('user-proficiency', ['expert']),
            Response('current-security-controls', ['minimal-controls']),
            Response('data-sensitivity', ['government-data', 'health-records', 'payment-data']),
            Response('security-incidents', ['ransomware-attack', 'data-breach']),
            Response('org-profile', ['multinational']),
            Response('industry-vertical', ['financial']),
            Response('cyber-maturity', ['ad-hoc']),
            Response('compliance-needs', ['nis2', 'hipaa', 'pci-dss', 'gdpr']),
            Response('threat-priorities', ['ransomware', 'advanced-threats', 'data-breach', 'supply-chain']),
            Response('urgency-timeline', ['immediate-threat']),
            Response('budget-flexibility', slider_value=0),
        ]

    def test_bounds(self, worst_case):
        """Test overall and breakdown stay within 0-100"""
        score = calculate_risk_score(worst_case, DEFAULT_CATALOG)
        assert 0 <= score.overall <= 100
        for value in score.breakdown.values():
            assert 0 <= value <= 100
        assert set(score.breakdown) == {'technical', 'operational', 'compliance', 'financial'}

    def test_idempotent(self, worst_case):
        """Test the same answers always give the same score"""
        first = calculate_risk_score(worst_case, DEFAULT_CATALOG)
        second = calculate_risk_score(worst_case, DEFAULT_CATALOG)
        assert first.to_dict() == second.to_dict()

    def test_novice_bootstrap_only_scores_zero(self):
        """Test answering only the bootstrap questions gives zero risk"""
        responses = [Response('currency-preference', ['gbp']), Response('user-proficiency', ['novice'])]
        score = calculate_risk_score(responses, DEFAULT_CATALOG)
        assert score.overall == 0
        assert score.category == RiskCategory.LOW
        assert 0 < score.confidence < 100

    def test_protective_controls_never_increase_score(self):
        """Test adding MFA lowers (never raises) the overall score"""
        without = [Response('current-security-controls', ['minimal-controls'])]
        with_mfa = [Response('current-security-controls', ['minimal-controls', 'mfa-enabled'])]

        before = calculate_risk_score(without, DEFAULT_CATALOG).overall
        after = calculate_risk_score(with_mfa, DEFAULT_CATALOG).overall
        assert before == 30
        assert after == 22

    def test_protective_controls_leave_technical_breakdown(self):
        """Test MFA lowers the overall score without moving the technical breakdown"""
        base = [
            Response('data-sensitivity', ['public-data-only']),
            Response('org-profile', ['sme']),
            Response('budget-flexibility', slider_value=100),
        ]
        without = calculate_risk_score(
            [Response('current-security-controls', ['minimal-controls'])] + base, DEFAULT_CATALOG)
        with_mfa = calculate_risk_score(
            [Response('current-security-controls', ['minimal-controls', 'mfa-enabled'])] + base,
            DEFAULT_CATALOG)

        assert without.breakdown['technical'] == 40
        assert with_mfa.breakdown['technical'] == without.breakdown['technical']
        assert without.overall == 18
        assert with_mfa.overall == 16

    def test_hidden_answers_do_not_leak(self):
        """Test answers to questions that became hidden are ignored"""
        responses = [
            Response('org-profile', ['startup']),
            Response('startup-priorities', ['limited-budget', 'rapid-scaling']),
            Response('cyber-maturity', ['basic']),
        ]
        responses = upsert_response(responses, Response('org-profile', ['enterprise']))
        clean = [r for r in responses if r.question_id != 'startup-priorities']

        assert calculate_risk_score(responses, DEFAULT_CATALOG).to_dict() == \
            calculate_risk_score(clean, DEFAULT_CATALOG).to_dict()
        assert calculate_live_risk_score(responses, DEFAULT_CATALOG) == \
            calculate_live_risk_score(clean, DEFAULT_CATALOG)

    def test_stale_gate_answers_do_not_leak(self):
        """Test a hidden answer cannot open a follow-up that then gets scored"""
        responses = [
            Response('user-proficiency', ['novice']),
            Response('compliance-needs', ['gdpr']),
            Response('audit-frequency', ['multiple-regulators']),
            Response('cyber-maturity', ['managed']),
        ]
        clean = [Response('user-proficiency', ['novice']), Response('cyber-maturity', ['managed'])]

        full = calculate_risk_score(responses, DEFAULT_CATALOG)
        assert full.to_dict() == calculate_risk_score(clean, DEFAULT_CATALOG).to_dict()
        assert full.overall == 28
        assert calculate_live_risk_score(responses, DEFAULT_CATALOG).score == 28

    def test_trend_worsening(self):
        """Test low maturity with many threats, or a serious incident, is worsening"""
        responses = [
            Response('cyber-maturity', ['ad-hoc']),
            Response('threat-priorities', ['ransomware', 'phishing', 'supply-chain', 'data-breach']),
        ]
        assert calculate_risk_score(responses, DEFAULT_CATALOG).trend == RiskTrend.WORSENING

        responses = [Response('security-incidents', ['data-breach'])]
        assert calculate_risk_score(responses, DEFAULT_CATALOG).trend == RiskTrend.WORSENING

    def test_trend_improving(self):
        """Test mature programmes or many controls are improving"""
        responses = [Response('cyber-maturity', ['advanced'])]
        assert calculate_risk_score(responses, DEFAULT_CATALOG).trend == RiskTrend.IMPROVING

        controls = ['endpoint-protection', 'firewall-configured', 'mfa-enabled', 'backup-strategy',
                    'patch-management', 'security-monitoring', 'employee-training']
        responses = [Response('current-security-controls', controls)]
        assert calculate_risk_score(responses, DEFAULT_CATALOG).trend == RiskTrend.IMPROVING

    def test_trend_stable(self):
        """Test neither signal gives a stable trend"""
        responses = [Response('cyber-maturity', ['managed'])]
        assert calculate_risk_score(responses, DEFAULT_CATALOG).trend == RiskTrend.STABLE

    def test_category_thresholds(self):
        """Test category boundaries"""
        assert category_for(25) == RiskCategory.LOW
        assert category_for(26) == RiskCategory.MEDIUM
        assert category_for(50) == RiskCategory.MEDIUM
        assert category_for(75) == RiskCategory.HIGH
        assert category_for(76) == RiskCategory.CRITICAL
