"""Core data types and enums used across the assessment engine.

These types make the questionnaire and its answers explicit.
No magic strings floating around - every tier, operator and kind has a defined meaning.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple, Union


class QuestionKind(Enum):
    """How a question is answered.

    multiSelect / singleSelect: pick option ids
    slider: a 0-100 value, options are labeled anchor points
    text: free text, never scored
    """
    MULTI_SELECT = "multiSelect"
    SINGLE_SELECT = "singleSelect"
    SLIDER = "slider"
    TEXT = "text"


class ImpactTier(Enum):
    """Risk impact tier of an option or a live score."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ConditionOperator(Enum):
    """Operators usable in visibility conditions."""
    INCLUDES = "includes"
    EXCLUDES = "excludes"
    EQUALS = "equals"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"


class Proficiency(Enum):
    """User-declared expertise level."""
    NOVICE = "novice"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"


OptionValue = Union[str, float, int]


@dataclass(frozen=True)
class Condition:
    """A single show/hide condition evaluated against prior answers.

    The operator is kept as the raw string from the rule table so that an
    unknown operator can fail closed at evaluation time instead of at import.
    """
    question_id: str
    operator: str
    value: OptionValue


@dataclass(frozen=True)
class VisibilityRule:
    """hide_if: any true condition suppresses the question.
    show_if: at least one condition must be true (OR allow-list).
    """
    hide_if: Tuple[Condition, ...] = ()
    show_if: Tuple[Condition, ...] = ()


@dataclass(frozen=True)
class Option:
    """One selectable answer, or one slider anchor point."""
    id: str
    label: str
    value: OptionValue
    risk_multiplier: float  # negative = protective control
    impact: ImpactTier
    tooltip: str = ""


@dataclass(frozen=True)
class Question:
    """Fields shared by every question kind.

    Only the concrete variants are instantiated; each one reports its `kind`.
    """
    id: str
    title: str
    description: str
    required: bool
    weight: float
    tooltip: str = ""
    novice_friendly: bool = False
    expert_only: bool = False
    visibility: Optional[VisibilityRule] = None

    def __post_init__(self):
        if type(self) is Question:
            raise TypeError("Question is abstract, use SelectQuestion, SliderQuestion or TextQuestion")

    @property
    def show_if(self) -> Tuple[Condition, ...]:
        return self.visibility.show_if if self.visibility else ()

    @property
    def hide_if(self) -> Tuple[Condition, ...]:
        return self.visibility.hide_if if self.visibility else ()


@dataclass(frozen=True)
class SelectQuestion(Question):
    """Single or multi choice question."""
    multiple: bool = True
    options: Tuple[Option, ...] = ()

    @property
    def kind(self) -> QuestionKind:
        return QuestionKind.MULTI_SELECT if self.multiple else QuestionKind.SINGLE_SELECT

    def option(self, option_id: str) -> Optional[Option]:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None


@dataclass(frozen=True)
class SliderQuestion(Question):
    """0-100 slider; options are anchor points matched by nearest value."""
    options: Tuple[Option, ...] = ()

    @property
    def kind(self) -> QuestionKind:
        return QuestionKind.SLIDER


@dataclass(frozen=True)
class TextQuestion(Question):
    """Free text question. Carries no options and never moves the score."""

    @property
    def kind(self) -> QuestionKind:
        return QuestionKind.TEXT


@dataclass
class Response:
    """The answer to one question.

    One Response per question id - a later answer replaces, never appends.
    Serializes to the camelCase layout the presentation layer persists.
    """
    question_id: str
    selected_options: List[str] = field(default_factory=list)
    slider_value: Optional[float] = None
    text_value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted JSON shape."""
        data: Dict[str, Any] = {
            'questionId': self.question_id,
            'selectedOptions': list(self.selected_options),
        }
        if self.slider_value is not None:
            data['sliderValue'] = self.slider_value
        if self.text_value is not None:
            data['textValue'] = self.text_value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Response':
        """Build from the persisted JSON shape.

        Missing or malformed fields become neutral defaults (no options,
        no slider value, no text) rather than raising.
        """
        options = data.get('selectedOptions')
        if not isinstance(options, (list, tuple)):
            options = []

        slider_value = data.get('sliderValue')
        if slider_value is not None:
            try:
                slider_value = float(slider_value)
            except (TypeError, ValueError):
                slider_value = None
            else:
                if not math.isfinite(slider_value):
                    slider_value = None

        text_value = data.get('textValue')
        if text_value is not None and not isinstance(text_value, str):
            text_value = None

        return cls(
            question_id=str(data.get('questionId', '')),
            selected_options=[str(o) for o in options],
            slider_value=slider_value,
            text_value=text_value,
        )


@dataclass
class EngineConfig:
    """Runtime configuration for the assessment engine.

    All values come from the environment (or .env) with sane defaults.
    """
    default_currency: str = "gbp"
    state_dir: str = "state"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dict for logging."""
        return {
            'default_currency': self.default_currency,
            'state_dir': self.state_dir,
            'log_level': self.log_level,
            'log_file': self.log_file,
        }
