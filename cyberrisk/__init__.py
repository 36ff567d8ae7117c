"""
Cyber Risk Assessment Engine - Core modules
"""

__version__ = "1.0"

from .engine.catalog import DEFAULT_CATALOG, Catalog
from .engine.results import AssessmentResults, generate_assessment_results
from .engine.scoring import calculate_live_risk_score, calculate_risk_score
from .engine.visibility import visible_questions
from .state.session import AssessmentSession, load_results, open_session

__all__ = [
    'DEFAULT_CATALOG',
    'Catalog',
    'AssessmentResults',
    'generate_assessment_results',
    'calculate_live_risk_score',
    'calculate_risk_score',
    'visible_questions',
    'AssessmentSession',
    'load_results',
    'open_session',
]
