"""
Score composition for the simulated ATS.

Combines keyword coverage, section weighting, experience and strictness into
a base score, then applies the identity-bias multiplier, fixed penalties and
the knockout override to reach a pass/reject decision.
"""
import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .matcher import KeywordMatcher
from .policy import (
    IdentityLabel,
    KeywordSpec,
    MatchingPolicy,
    PenaltyOrder,
    ScoringPolicy,
)
from .resume import ResumeDocument

logger = logging.getLogger(__name__)

SHORT_RESUME_WORDS = 180
SHORT_RESUME_PENALTY_RATE = 0.22
BELOW_MIN_YEARS_PENALTY = 10.0
EMPTY_REQUIRED_RATIO = 1.0
EMPTY_PREFERRED_RATIO = 0.7

PROXY_INDICATORS = (
    'ivy league',
    'stanford',
    'harvard',
    'spelman',
    'hbcus',
    'black in tech',
    'latinx',
    'veteran',
    'sorority',
    'fraternity',
    'girls who code',
)
MAX_PROXY_SIGNALS = 4


def clamp(value: float, minimum: float = 0.0, maximum: float = 100.0) -> float:
    return min(maximum, max(minimum, value))


def bias_step_score(base_score: float, bias_factor: float, penalties: float, order: PenaltyOrder) -> float:
    """Score right after the bias multiplier, before any later subtraction."""
    if order is PenaltyOrder.BEFORE_BIAS:
        return (base_score - penalties) * bias_factor
    return base_score * bias_factor


def apply_bias(base_score: float, bias_factor: float, penalties: float, order: PenaltyOrder) -> float:
    """Combine the bias multiplier with fixed penalties in the configured order."""
    score = bias_step_score(base_score, bias_factor, penalties, order)
    if order is PenaltyOrder.AFTER_BIAS:
        score -= penalties
    return score


class Decision(Enum):
    PASS = "Pass"
    REJECT = "Reject"


@dataclass(frozen=True)
class ScoreResult:
    """Full breakdown of one screening run."""
    base_score: float
    bias_factor: float
    bias_adjusted_score: float
    format_penalty: float
    short_penalty: float
    experience_penalty: float
    final_score: float
    decision: Decision
    knockout_triggered: bool = False
    knockout_matches: Tuple[str, ...] = ()
    required_ratio: float = EMPTY_REQUIRED_RATIO
    preferred_ratio: float = EMPTY_PREFERRED_RATIO
    section_weight_factor: float = 0.0
    strictness_modifier: float = 1.0
    experience_score: float = 0.0
    experience_years: int = 1
    min_years: int = 0
    word_count: int = 0
    is_short: bool = False
    identity: str = ''
    matched_required: Tuple[str, ...] = ()
    missing_required: Tuple[str, ...] = ()
    matched_preferred: Tuple[str, ...] = ()
    missing_preferred: Tuple[str, ...] = ()
    proxy_signals: Tuple[str, ...] = field(default=())

    @property
    def passed(self) -> bool:
        return self.decision is Decision.PASS

    @property
    def found_keywords(self) -> Tuple[str, ...]:
        return self.matched_required + self.matched_preferred

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['decision'] = self.decision.value
        for key, value in data.items():
            if isinstance(value, tuple):
                data[key] = list(value)
        return data


class ATSScorer:
    """
    Rule-based resume scorer.

    Stateless apart from the synonym table; every call to ``compute_score``
    recomputes from scratch.
    """

    def __init__(self, synonyms: Optional[Mapping[str, Sequence[str]]] = None):
        self.synonyms = synonyms

    def detect_knockouts(self, document: ResumeDocument, scoring: ScoringPolicy) -> List[str]:
        """Knockout phrases present (case-insensitively) in the resume text."""
        lower_text = document.lower_text
        return [phrase for phrase in scoring.knockouts if phrase.lower() in lower_text]

    def detect_proxy_signals(self, document: ResumeDocument) -> List[str]:
        """Phrases that can stand in for demographics even when names are hidden."""
        lower_text = document.lower_text
        found = [proxy for proxy in PROXY_INDICATORS if proxy in lower_text]
        return found[:MAX_PROXY_SIGNALS]

    def compute_score(
        self,
        document: ResumeDocument,
        keywords: KeywordSpec,
        matching: MatchingPolicy,
        scoring: ScoringPolicy,
        identity: IdentityLabel
    ) -> ScoreResult:
        """
        Compute the screening score and decision.

        Args:
            document: Parsed resume
            keywords: Required / preferred keywords
            matching: Keyword strictness policy
            scoring: Weights, thresholds, penalties and knockouts
            identity: Identity label carrying the bias factor

        Returns:
            ScoreResult with the final score, decision and factor breakdown
        """
        matcher = KeywordMatcher(document.text, matching, self.synonyms)
        matched_required, missing_required = matcher.partition(keywords.required)
        matched_preferred, missing_preferred = matcher.partition(keywords.preferred)

        if keywords.required:
            required_ratio = len(matched_required) / len(keywords.required)
        else:
            required_ratio = EMPTY_REQUIRED_RATIO

        if keywords.preferred:
            preferred_ratio = len(matched_preferred) / len(keywords.preferred)
        else:
            preferred_ratio = EMPTY_PREFERRED_RATIO

        section_weight_factor = scoring.section_weights.factor
        strictness_modifier = 1 - (matching.strictness - 60) / 250
        experience_score = min(
            100.0, (document.experience_years / max(1, scoring.min_years)) * 40
        )

        base_score = clamp(
            (
                required_ratio * 60
                + preferred_ratio * 25
                + experience_score
                + section_weight_factor * 15
            ) * strictness_modifier
        )

        format_penalty = scoring.format_penalty
        is_short = document.word_count < SHORT_RESUME_WORDS
        short_penalty = base_score * SHORT_RESUME_PENALTY_RATE if is_short else 0.0

        adjusted = apply_bias(
            base_score, identity.bias_factor, format_penalty + short_penalty, scoring.penalty_order
        )
        bias_adjusted_score = bias_step_score(
            base_score, identity.bias_factor, format_penalty + short_penalty, scoring.penalty_order
        )

        experience_penalty = 0.0
        if document.experience_years < scoring.min_years:
            experience_penalty = BELOW_MIN_YEARS_PENALTY
            adjusted -= experience_penalty

        knockout_matches = self.detect_knockouts(document, scoring)
        knockout_triggered = bool(knockout_matches)
        if knockout_triggered:
            adjusted = 0.0

        final_score = clamp(adjusted)

        if final_score >= scoring.pass_threshold and not knockout_triggered:
            decision = Decision.PASS
        else:
            decision = Decision.REJECT

        logger.info(
            f"Scored resume for {identity.name}: base={base_score:.1f} "
            f"final={final_score:.1f} decision={decision.value}",
            extra={
                'identity': identity.name,
                'final_score': round(final_score, 2),
                'decision': decision.value,
                'knockout': knockout_triggered,
            }
        )

        return ScoreResult(
            base_score=base_score,
            bias_factor=identity.bias_factor,
            bias_adjusted_score=bias_adjusted_score,
            format_penalty=format_penalty,
            short_penalty=short_penalty,
            experience_penalty=experience_penalty,
            final_score=final_score,
            decision=decision,
            knockout_triggered=knockout_triggered,
            knockout_matches=tuple(knockout_matches),
            required_ratio=required_ratio,
            preferred_ratio=preferred_ratio,
            section_weight_factor=section_weight_factor,
            strictness_modifier=strictness_modifier,
            experience_score=experience_score,
            experience_years=document.experience_years,
            min_years=scoring.min_years,
            word_count=document.word_count,
            is_short=is_short,
            identity=identity.name,
            matched_required=tuple(matched_required),
            missing_required=tuple(missing_required),
            matched_preferred=tuple(matched_preferred),
            missing_preferred=tuple(missing_preferred),
            proxy_signals=tuple(self.detect_proxy_signals(document)),
        )
