"""Rule-based screening engine."""
from .policy import (
    DemographicCohort,
    FormatStyle,
    IdentityLabel,
    KeywordSpec,
    MatchingPolicy,
    MatchMode,
    PenaltyOrder,
    ScoringPolicy,
    SectionWeights,
)
from .resume import ResumeDocument
from .matcher import KeywordMatcher
from .scorer import ATSScorer, Decision, ScoreResult
from .projections import compare_identities, project_cohorts

__all__ = [
    'ATSScorer',
    'Decision',
    'DemographicCohort',
    'FormatStyle',
    'IdentityLabel',
    'KeywordMatcher',
    'KeywordSpec',
    'MatchingPolicy',
    'MatchMode',
    'PenaltyOrder',
    'ResumeDocument',
    'ScoreResult',
    'ScoringPolicy',
    'SectionWeights',
    'compare_identities',
    'project_cohorts',
]
