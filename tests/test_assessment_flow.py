"""
End-to-end test of a full assessment: questionnaire, persistence and report data
"""

import pytest
from cyberrisk import AssessmentSession, load_results
from cyberrisk.engine.recommendations import RecommendationPriority
from cyberrisk.state.response_store import JsonFileStore


@pytest.fixture
def store(tmp_path):
    """File-backed store so the run mirrors what the report renderer reads"""
    return JsonFileStore(tmp_path / 'state')


@pytest.fixture
def finished(store):
    """A financial enterprise under active ransomware threat, over-targeting compliance"""
    session = AssessmentSession(store=store)
    session.start()
    session.answer('currency-preference', ['usd'])
    session.answer('user-proficiency', ['intermediate'])
    session.answer('current-security-controls', ['endpoint-protection', 'firewall-configured'])
    session.answer('data-sensitivity', ['customer-pii', 'payment-data'])
    session.answer('security-incidents', ['phishing-attempts'])
    session.answer('org-profile', ['enterprise'])
    session.answer('industry-vertical', ['financial'])
    session.answer('cyber-maturity', ['basic'])
    session.answer('compliance-needs', ['gdpr', 'nis2', 'iso27001', 'pci-dss', 'sox'])
    session.answer('budget-flexibility', slider_value=30)
    session.answer('urgency-timeline', ['immediate-threat'])
    session.answer('threat-priorities', ['ransomware', 'phishing'])
    session.answer('enterprise-complexity', ['multi-cloud'])
    return session, session.finish()


def test_compliance_warning_shown(finished):
    session, _ = finished
    assert session.compliance_warning() is not None


def test_risk_score(finished):
    _, results = finished
    score = results.risk_score
    assert 0 < score.overall <= 100
    assert score.category.value in ('Low', 'Medium', 'High', 'Critical')
    assert 0 < score.confidence <= 100


def test_report_sections(finished):
    _, results = finished
    assert [g.framework for g in results.compliance_gaps] == [
        'GDPR', 'NIS2 Directive', 'ISO 27001', 'PCI DSS', 'SOX']
    assert results.threat_profile == ['ransomware', 'phishing']
    assert results.benchmark_data.industry_average == 78
    assert results.currency == 'usd'


def test_roi_penalised(finished):
    _, results = finished
    roi = results.roi_model
    assert roi.compliance_complexity_penalty.efficiency_loss == 16
    assert roi.risk_reduction == 69
    assert roi.investment_range.startswith('$')


def test_recommendations(finished):
    _, results = finished
    by_id = {r.id: r for r in results.service_recommendations}

    assert results.service_recommendations[0].id == 'security-advisory'
    assert by_id['security-advisory'].priority == RecommendationPriority.ESSENTIAL
    assert by_id['managed-soc'].timeframe == 'Emergency deployment within 24-48 hours'
    assert by_id['managed-soc'].name == 'Enterprise Managed SOC & MDR'
    assert by_id['incident-response'].priority == RecommendationPriority.ESSENTIAL
    assert 'cloud-security' in by_id
    assert 'security-training' in by_id


def test_reload_from_persisted_state(finished, store):
    _, results = finished
    assert load_results(store).to_dict() == results.to_dict()
