"""
Unit Tests for the Question Catalog, Response Helpers and Visibility Resolver
"""

import pytest
from cyberrisk.util.types import (
    Condition, Proficiency, Question, QuestionKind, Response, SelectQuestion, TextQuestion,
)
from cyberrisk.engine.catalog import (
    BOOTSTRAP_QUESTION_IDS, DEFAULT_CATALOG, Catalog, get_question,
)
from cyberrisk.engine.responses import (
    compliance_complexity_applies, count_selected_frameworks, find_response, is_answered,
    resolve_currency, resolve_proficiency, upsert_response,
)
from cyberrisk.engine.visibility import (
    evaluate_condition, should_show_question, visible_questions, visible_responses,
)


def ids(questions):
    return [q.id for q in questions]


class TestCatalog:
    """Test suite for the default question catalog"""

    def test_catalog_size_and_order(self):
        """Test catalog holds every question with bootstrap questions first"""
        assert len(DEFAULT_CATALOG) == 23
        assert DEFAULT_CATALOG.ids()[:2] == ['currency-preference', 'user-proficiency']

    def test_ids_are_unique(self):
        """Test no question id appears twice"""
        assert len(set(DEFAULT_CATALOG.ids())) == len(DEFAULT_CATALOG)

    def test_duplicate_ids_rejected(self):
        """Test building a catalog with duplicate ids fails"""
        question = get_question('org-profile')
        with pytest.raises(ValueError):
            Catalog([question, question])

    def test_question_kinds(self):
        """Test each concrete question reports its kind"""
        assert get_question('current-security-controls').kind == QuestionKind.MULTI_SELECT
        assert get_question('cyber-maturity').kind == QuestionKind.SINGLE_SELECT
        assert get_question('budget-flexibility').kind == QuestionKind.SLIDER
        text = TextQuestion(id='notes', title='Notes', description='', required=False, weight=0)
        assert text.kind == QuestionKind.TEXT

    def test_base_question_not_instantiable(self):
        """Test only the concrete question kinds can be built"""
        with pytest.raises(TypeError):
            Question(id='x', title='', description='', required=False, weight=1)

    def test_unknown_question_lookup(self):
        """Test lookups of unknown ids"""
        assert DEFAULT_CATALOG.get('no-such-question') is None
        with pytest.raises(KeyError):
            get_question('no-such-question')

    def test_option_lookup(self):
        """Test option lookup on a select question"""
        question = get_question('current-security-controls')
        assert isinstance(question, SelectQuestion)
        assert question.option('mfa-enabled').risk_multiplier < 0
        assert question.option('not-an-option') is None


class TestResponseHelpers:
    """Test suite for response list helpers"""

    def test_upsert_replaces_and_moves_to_end(self):
        """Test a later answer replaces the earlier one"""
        responses = [Response('org-profile', ['sme']), Response('cyber-maturity', ['basic'])]
        updated = upsert_response(responses, Response('org-profile', ['enterprise']))

        assert len(updated) == 2
        assert updated[-1].selected_options == ['enterprise']
        assert find_response(updated, 'org-profile').selected_options == ['enterprise']

    def test_proficiency_defaults(self):
        """Test proficiency resolution falls back to intermediate"""
        assert resolve_proficiency([]) == Proficiency.INTERMEDIATE
        assert resolve_proficiency([Response('user-proficiency', ['wizard'])]) == Proficiency.INTERMEDIATE
        assert resolve_proficiency([Response('user-proficiency', ['expert'])]) == Proficiency.EXPERT

    def test_currency_resolution(self):
        """Test currency comes from the currency question"""
        assert resolve_currency([]) == 'gbp'
        assert resolve_currency([], 'eur') == 'eur'
        assert resolve_currency([Response('currency-preference', ['usd'])]) == 'usd'

    def test_is_answered_per_kind(self):
        """Test step validity for each question kind"""
        controls = get_question('current-security-controls')
        budget = get_question('budget-flexibility')
        text = TextQuestion(id='notes', title='Notes', description='', required=False, weight=0)

        assert not is_answered(controls, None)
        assert not is_answered(controls, Response('current-security-controls'))
        assert is_answered(controls, Response('current-security-controls', ['mfa-enabled']))
        assert is_answered(budget, Response('budget-flexibility', slider_value=0))
        assert not is_answered(budget, Response('budget-flexibility'))
        assert not is_answered(text, Response('notes', text_value='   '))
        assert is_answered(text, Response('notes', text_value='hello'))

    def test_framework_count_ignores_none(self):
        """Test 'none' is not counted as a framework"""
        responses = [Response('compliance-needs', ['gdpr', 'iso27001', 'nist', 'none'])]
        assert count_selected_frameworks(responses) == 3
        assert not compliance_complexity_applies(responses)

        responses = [Response('compliance-needs', ['gdpr', 'iso27001', 'nist', 'sox'])]
        assert compliance_complexity_applies(responses)


class TestVisibility:
    """Test suite for the visibility resolver"""

    def test_novice_sees_curated_subset(self):
        """Test novices never see expert-level questions"""
        visible = ids(visible_questions(DEFAULT_CATALOG, [Response('user-proficiency', ['novice'])]))

        for hidden in ('compliance-needs', 'threat-priorities', 'infrastructure-complexity',
                       'technology-stack', 'security-team-capability', 'geographic-operations'):
            assert hidden not in visible
        assert 'cyber-maturity' in visible
        assert 'current-security-controls' in visible

    def test_bootstrap_always_visible(self):
        """Test currency and proficiency questions are shown at every level"""
        for level in ('novice', 'intermediate', 'expert'):
            visible = ids(visible_questions(DEFAULT_CATALOG, [Response('user-proficiency', [level])]))
            assert BOOTSTRAP_QUESTION_IDS.issubset(visible)

    def test_expert_sees_advanced_questions(self):
        """Test expert-level questions are visible above novice"""
        visible = ids(visible_questions(DEFAULT_CATALOG, [Response('user-proficiency', ['expert'])]))
        assert 'compliance-needs' in visible
        assert 'threat-priorities' in visible

    def test_catalog_order_preserved(self):
        """Test visible questions keep catalog order"""
        visible = ids(visible_questions(DEFAULT_CATALOG, []))
        catalog_ids = DEFAULT_CATALOG.ids()
        assert visible == [i for i in catalog_ids if i in visible]

    def test_enterprise_branch(self):
        """Test enterprise follow-up is shown only for enterprise-scale organisations"""
        enterprise = ids(visible_questions(DEFAULT_CATALOG, [Response('org-profile', ['enterprise'])]))
        multinational = ids(visible_questions(DEFAULT_CATALOG, [Response('org-profile', ['multinational'])]))
        startup = ids(visible_questions(DEFAULT_CATALOG, [Response('org-profile', ['startup'])]))

        assert 'enterprise-complexity' in enterprise
        assert 'enterprise-complexity' in multinational
        assert 'enterprise-complexity' not in startup
        assert 'startup-priorities' in startup
        assert 'startup-priorities' not in enterprise

    def test_novice_still_gets_gated_followups(self):
        """Test show-if gated questions appear for novices when their condition holds"""
        responses = [Response('user-proficiency', ['novice']), Response('org-profile', ['startup'])]
        assert 'startup-priorities' in ids(visible_questions(DEFAULT_CATALOG, responses))

    def test_condition_on_unanswered_question_is_false(self):
        """Test excludes on an unanswered question does not show the follow-up"""
        assert not evaluate_condition(Condition('industry-vertical', 'excludes', 'other'), [])
        assert 'industry-specific-threats' not in ids(visible_questions(DEFAULT_CATALOG, []))

        responses = [Response('industry-vertical', ['financial'])]
        assert 'industry-specific-threats' in ids(visible_questions(DEFAULT_CATALOG, responses))

        responses = [Response('industry-vertical', ['other'])]
        assert 'industry-specific-threats' not in ids(visible_questions(DEFAULT_CATALOG, responses))

    def test_unknown_operator_fails_closed(self):
        """Test an unknown operator evaluates to False"""
        responses = [Response('org-profile', ['startup'])]
        assert not evaluate_condition(Condition('org-profile', 'contains', 'startup'), responses)

    def test_numeric_operators(self):
        """Test greaterThan / lessThan / equals on slider values"""
        responses = [Response('budget-flexibility', slider_value=60)]
        assert evaluate_condition(Condition('budget-flexibility', 'greaterThan', 50), responses)
        assert not evaluate_condition(Condition('budget-flexibility', 'lessThan', 50), responses)
        assert evaluate_condition(Condition('budget-flexibility', 'equals', 60), responses)

    def test_hide_if_suppresses_question(self):
        """Test a true hide-if condition suppresses the question"""
        question = get_question('compliance-needs')
        assert should_show_question(question, [], Proficiency.EXPERT)

        responses = [Response('user-proficiency', ['novice'])]
        assert not should_show_question(question, responses, Proficiency.EXPERT)

    def test_visible_responses_drop_hidden_and_unknown(self):
        """Test stale answers to hidden questions are filtered out"""
        responses = [
            Response('user-proficiency', ['novice']),
            Response('compliance-needs', ['gdpr']),
            Response('made-up-question', ['x']),
            Response('cyber-maturity', ['basic']),
        ]
        kept = [r.question_id for r in visible_responses(DEFAULT_CATALOG, responses)]
        assert kept == ['user-proficiency', 'cyber-maturity']

    def test_visible_responses_follow_hidden_gates(self):
        """Test a follow-up gated on a hidden answer is dropped as well"""
        responses = [
            Response('user-proficiency', ['novice']),
            Response('compliance-needs', ['gdpr']),
            Response('audit-frequency', ['quarterly-reviews']),
        ]
        assert 'audit-frequency' in ids(visible_questions(DEFAULT_CATALOG, responses))
        kept = [r.question_id for r in visible_responses(DEFAULT_CATALOG, responses)]
        assert kept == ['user-proficiency']
