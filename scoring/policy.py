"""
Policy values for the screening simulation.

Every knob the simulated ATS exposes lives here as a frozen dataclass, so a
score is always a pure function of (resume, keywords, policies, identity).
Raw values are coerced on construction; arithmetic downstream never sees a
non-numeric or out-of-range field.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from utils.sanitizers import coerce_number

logger = logging.getLogger(__name__)

EXACT_MATCH_THRESHOLD = 70


class MatchMode(Enum):
    """How keywords are resolved against resume text."""
    EXACT = "exact"
    LOOSE = "loose"


class FormatStyle(Enum):
    """Document format the resume was submitted in."""
    PLAIN = "plain"
    PDF = "pdf"
    TABLE = "table"

    @property
    def penalty(self) -> float:
        return FORMAT_PROFILES[self]['penalty']

    @property
    def label(self) -> str:
        return FORMAT_PROFILES[self]['label']

    @property
    def note(self) -> str:
        return FORMAT_PROFILES[self]['note']

    @classmethod
    def coerce(cls, value: Union[str, "FormatStyle", None]) -> "FormatStyle":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning(f"Unknown format style {value!r}, using plain")
            return cls.PLAIN


FORMAT_PROFILES = {
    FormatStyle.PLAIN: {
        'label': 'Plain text / clean doc',
        'penalty': 0.0,
        'note': 'Highest parser success'
    },
    FormatStyle.PDF: {
        'label': 'PDF or image-like scan',
        'penalty': 12.0,
        'note': 'Text extraction loss, tables break parsing'
    },
    FormatStyle.TABLE: {
        'label': 'Table-heavy or columns',
        'penalty': 8.0,
        'note': 'Column order is often misread'
    },
}


class PenaltyOrder(Enum):
    """Whether fixed penalties are subtracted after or before the bias multiplier."""
    AFTER_BIAS = "after_bias"
    BEFORE_BIAS = "before_bias"

    @classmethod
    def coerce(cls, value: Union[str, "PenaltyOrder", None]) -> "PenaltyOrder":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning(f"Unknown penalty order {value!r}, using after_bias")
            return cls.AFTER_BIAS


def split_keywords(value: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    """
    Parse comma-separated keyword input into trimmed, non-empty entries.

    Lists (as loaded from YAML) are accepted too; their items are split the
    same way so ``["React, Vite"]`` and ``"React, Vite"`` agree.
    """
    if value is None:
        return ()
    if isinstance(value, (str, int, float)):
        parts = str(value).split(',')
    elif isinstance(value, Mapping):
        logger.warning(f"Ignoring keyword mapping {value!r}, expected text or a list")
        return ()
    else:
        parts = []
        for item in value:
            parts.extend(str(item).split(','))
    return tuple(part.strip() for part in parts if part.strip())


@dataclass(frozen=True)
class KeywordSpec:
    """Required and preferred keywords for one screening run."""
    required: Tuple[str, ...] = ()
    preferred: Tuple[str, ...] = ()

    @classmethod
    def from_input(cls, required, preferred) -> "KeywordSpec":
        return cls(required=split_keywords(required), preferred=split_keywords(preferred))

    @classmethod
    def from_config(cls, config) -> "KeywordSpec":
        return cls.from_input(config.required_keywords, config.preferred_keywords)


@dataclass(frozen=True)
class MatchingPolicy:
    """Keyword strictness knob (0-100)."""
    strictness: int = 70

    def __post_init__(self):
        object.__setattr__(
            self, 'strictness',
            coerce_number(self.strictness, 70, 0, 100, integer=True)
        )

    @property
    def mode(self) -> MatchMode:
        if self.strictness >= EXACT_MATCH_THRESHOLD:
            return MatchMode.EXACT
        return MatchMode.LOOSE

    @classmethod
    def from_config(cls, config) -> "MatchingPolicy":
        return cls(strictness=config.keyword_strictness)


@dataclass(frozen=True)
class SectionWeights:
    """Relative weight of each resume section; the sum is not enforced."""
    experience: float = 50
    skills: float = 30
    education: float = 20

    def __post_init__(self):
        for name, default in (('experience', 50), ('skills', 30), ('education', 20)):
            object.__setattr__(
                self, name,
                coerce_number(getattr(self, name), default, 0, 100)
            )

    @property
    def total(self) -> float:
        return self.experience + self.skills + self.education

    @property
    def factor(self) -> float:
        return (self.experience * 0.5 + self.skills * 0.3 + self.education * 0.2) / 100

    @classmethod
    def from_mapping(cls, data: Optional[Mapping]) -> "SectionWeights":
        if not isinstance(data, Mapping):
            data = {}
        return cls(
            experience=data.get('experience', 50),
            skills=data.get('skills', 30),
            education=data.get('education', 20),
        )


@dataclass(frozen=True)
class ScoringPolicy:
    """Everything besides keyword strictness that shapes the score."""
    section_weights: SectionWeights = field(default_factory=SectionWeights)
    min_years: int = 3
    format_style: FormatStyle = FormatStyle.PLAIN
    pass_threshold: int = 70
    knockouts: Tuple[str, ...] = ()
    penalty_order: PenaltyOrder = PenaltyOrder.AFTER_BIAS

    def __post_init__(self):
        weights = self.section_weights
        if not isinstance(weights, SectionWeights):
            weights = SectionWeights.from_mapping(weights)
        object.__setattr__(self, 'section_weights', weights)
        object.__setattr__(self, 'min_years', coerce_number(self.min_years, 3, 0, 15, integer=True))
        object.__setattr__(self, 'format_style', FormatStyle.coerce(self.format_style))
        object.__setattr__(
            self, 'pass_threshold',
            coerce_number(self.pass_threshold, 70, 0, 100, integer=True)
        )
        knockouts = self.knockouts or ()
        if isinstance(knockouts, (str, int, float)):
            knockouts = (knockouts,)
        object.__setattr__(
            self, 'knockouts',
            tuple(str(k).strip() for k in knockouts if str(k).strip())
        )
        object.__setattr__(self, 'penalty_order', PenaltyOrder.coerce(self.penalty_order))

    @property
    def format_penalty(self) -> float:
        return self.format_style.penalty

    @property
    def knockouts_enabled(self) -> bool:
        return bool(self.knockouts)

    @classmethod
    def from_config(cls, config) -> "ScoringPolicy":
        return cls(
            section_weights=SectionWeights.from_mapping(config.section_weights),
            min_years=config.min_years,
            format_style=config.format_style,
            pass_threshold=config.pass_threshold,
            knockouts=tuple(config.knockouts or ()),
            penalty_order=config.penalty_order,
        )


@dataclass(frozen=True)
class IdentityLabel:
    """A name key and the multiplicative bias factor it carries."""
    name: str
    bias_factor: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, 'bias_factor', coerce_number(self.bias_factor, 1.0, 0.0, 1.0))


DEFAULT_IDENTITY_LABELS: Dict[str, float] = {
    'John': 1.0,
    'Demetrius': 0.11,
    'Kenya': 0.45,
}


def build_identity_labels(profiles: Optional[Mapping[str, float]] = None) -> List[IdentityLabel]:
    """Turn a ``{name: bias_factor}`` mapping into ordered labels."""
    if not isinstance(profiles, Mapping) or not profiles:
        profiles = DEFAULT_IDENTITY_LABELS
    return [IdentityLabel(str(name), factor) for name, factor in profiles.items()]


def find_identity(labels: List[IdentityLabel], name: Optional[str]) -> IdentityLabel:
    """Look up a label by name; unknown names fall back to the first label."""
    for label in labels:
        if label.name == name:
            return label
    if not labels:
        return IdentityLabel('John', 1.0)
    logger.warning(f"Unknown identity label {name!r}, using {labels[0].name}")
    return labels[0]


@dataclass(frozen=True)
class DemographicCohort:
    """Synthetic demographic grouping used for pass-rate projection."""
    label: str
    baseline: float
    sensitivity: float

    def __post_init__(self):
        object.__setattr__(self, 'baseline', coerce_number(self.baseline, 0.0, 0.0, 100.0))
        object.__setattr__(self, 'sensitivity', coerce_number(self.sensitivity, 0.0, 0.0))


DEFAULT_COHORTS: Tuple[DemographicCohort, ...] = (
    DemographicCohort('White-sounding names', 85, 0.3),
    DemographicCohort('Black-sounding names', 9, 0.9),
    DemographicCohort('Female-coded names', 68, 0.5),
    DemographicCohort('Hispanic-coded names', 14, 0.7),
)


def build_cohorts(entries: Optional[Iterable[Mapping]] = None) -> Tuple[DemographicCohort, ...]:
    """Build cohorts from ``[{label, baseline, sensitivity}, ...]`` config entries."""
    if not entries:
        return DEFAULT_COHORTS
    cohorts = []
    for entry in entries:
        if not isinstance(entry, Mapping) or not entry.get('label'):
            logger.warning(f"Skipping malformed cohort entry: {entry!r}")
            continue
        cohorts.append(DemographicCohort(
            str(entry['label']),
            entry.get('baseline', 0),
            entry.get('sensitivity', 0),
        ))
    return tuple(cohorts) or DEFAULT_COHORTS
