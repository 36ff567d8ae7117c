"""Assessment session: the caller layer around the pure engine.

Owns the accumulated responses for one run-through of the questionnaire,
enforces preconditions (known question ids, at least one answer before
finishing) and persists state in the layout the report renderer reads.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from cyberrisk.util.env import get_repo_root, load_config
from cyberrisk.util.log import setup_logging
from cyberrisk.util.types import EngineConfig, Question, Response
from cyberrisk.engine.catalog import DEFAULT_CATALOG, Catalog
from cyberrisk.engine.responses import (
    DEFAULT_CURRENCY, compliance_complexity_applies, count_selected_frameworks, find_response,
    is_answered, resolve_currency, upsert_response,
)
from cyberrisk.engine.results import AssessmentResults, generate_assessment_results
from cyberrisk.engine.scoring import LiveRiskScore, calculate_live_risk_score
from cyberrisk.engine.visibility import visible_questions
from cyberrisk.state.response_store import AssessmentStore, JsonFileStore, KeyValueStore, LeadData

logger = logging.getLogger(__name__)


class EmptyAssessmentError(ValueError):
    """Raised when results are requested before anything was answered."""


class UnknownQuestionError(KeyError):
    """Raised when answering a question id the catalog does not have."""


class AssessmentSession:
    """One questionnaire run.

    Responses are kept most-recent-last; answering a question again replaces
    the earlier answer.
    """

    def __init__(self, catalog: Catalog = DEFAULT_CATALOG, store: Optional[KeyValueStore] = None,
                 default_currency: str = DEFAULT_CURRENCY):
        self.catalog = catalog
        self.store = AssessmentStore(store) if store is not None else None
        self.default_currency = default_currency
        self.responses: List[Response] = []
        self.lead: Optional[LeadData] = None

    def start(self) -> None:
        """Begin a fresh assessment, discarding previous answers and lead data."""
        self.responses = []
        self.lead = None
        if self.store is not None:
            self.store.clear()
        logger.info(f"Assessment started ({len(self.catalog)} questions in catalog)")

    def answer(self, question_id: str, selected_options: Optional[Sequence[str]] = None,
               slider_value: Optional[float] = None, text_value: Optional[str] = None) -> Response:
        """Record an answer, replacing any earlier answer to the same question."""
        if question_id not in self.catalog:
            raise UnknownQuestionError(question_id)

        response = Response(
            question_id=question_id,
            selected_options=list(selected_options or []),
            slider_value=slider_value,
            text_value=text_value,
        )
        self.responses = upsert_response(self.responses, response)
        logger.debug(f"Answered {question_id}: {response.to_dict()}")
        return response

    def visible_questions(self) -> List[Question]:
        return visible_questions(self.catalog, self.responses)

    def live_score(self) -> LiveRiskScore:
        return calculate_live_risk_score(self.responses, self.catalog)

    def is_answered(self, question_id: str) -> bool:
        """Whether the step for this question can be advanced past."""
        question = self.catalog.get(question_id)
        if question is None:
            raise UnknownQuestionError(question_id)
        return is_answered(question, find_response(self.responses, question_id))

    @property
    def currency(self) -> str:
        return resolve_currency(self.responses, self.default_currency)

    def compliance_warning(self) -> Optional[str]:
        """Warning shown when too many frameworks are targeted at once, else None."""
        if not compliance_complexity_applies(self.responses):
            return None
        count = count_selected_frameworks(self.responses)
        return (
            f"You have selected {count} compliance frameworks. Pursuing this many at once "
            f"often leads to overlapping audits and checkbox compliance; consider "
            f"prioritising the frameworks your customers and regulators actually require."
        )

    def capture_lead(self, lead: Optional[LeadData] = None) -> LeadData:
        """Store lead details, or the anonymous placeholder when the form was skipped."""
        self.lead = lead or LeadData.anonymous()
        if self.store is not None:
            self.store.save_lead(self.lead)
        return self.lead

    def finish(self) -> AssessmentResults:
        """Persist state and compute the final results.

        Raises:
            EmptyAssessmentError: if no question has been answered
        """
        if not self.responses:
            raise EmptyAssessmentError("Cannot generate results without any responses")

        if self.lead is None:
            self.capture_lead()
        if self.store is not None:
            self.store.save_responses(self.responses)

        return generate_assessment_results(self.responses, self.catalog, self.default_currency)


def load_results(store: KeyValueStore, catalog: Catalog = DEFAULT_CATALOG,
                 default_currency: str = DEFAULT_CURRENCY) -> Optional[AssessmentResults]:
    """Rebuild results from persisted state, or None when nothing was stored."""
    responses = AssessmentStore(store).load_responses()
    if not responses:
        logger.info("No persisted responses, nothing to report")
        return None
    return generate_assessment_results(responses, catalog, default_currency)


def open_session(config: Optional[EngineConfig] = None, catalog: Catalog = DEFAULT_CATALOG) -> AssessmentSession:
    """Build a file-backed session from configuration and set up logging."""
    if config is None:
        config = load_config()

    log_file = Path(config.log_file) if config.log_file else None
    setup_logging(log_file=log_file, level=config.log_level)

    state_dir = Path(config.state_dir)
    if not state_dir.is_absolute():
        state_dir = get_repo_root() / state_dir

    logger.info(f"Opening assessment session with config: {config.to_dict()}")
    return AssessmentSession(catalog, JsonFileStore(state_dir), config.default_currency)
