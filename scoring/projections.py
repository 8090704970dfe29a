"""
What-if projections over the current score.

Cohort projection depends on the policy knobs only; the identity comparison
re-applies the bias multiplier with every other input held fixed.
"""
import logging
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .policy import DemographicCohort, IdentityLabel, MatchingPolicy, ScoringPolicy
from .scorer import ScoreResult, apply_bias, clamp

logger = logging.getLogger(__name__)

STRICTNESS_DRAG_START = 70


@dataclass(frozen=True)
class CohortProjection:
    label: str
    baseline: float
    sensitivity: float
    adjusted_rate: float


@dataclass(frozen=True)
class IdentityComparison:
    name: str
    bias_factor: float
    score: float


def project_cohorts(
    cohorts: Sequence[DemographicCohort],
    matching: MatchingPolicy,
    scoring: ScoringPolicy,
    is_short: bool
) -> List[CohortProjection]:
    """
    Project per-cohort pass rates for the current policy.

    Args:
        cohorts: Cohorts with baseline rate and sensitivity
        matching: Keyword strictness policy
        scoring: Scoring policy (format penalty and pass threshold are used)
        is_short: Whether the resume falls under the short-resume cutoff

    Returns:
        One projection per cohort, in input order
    """
    if not cohorts:
        return []

    baselines = np.array([c.baseline for c in cohorts], dtype=float)
    sensitivity = np.array([c.sensitivity for c in cohorts], dtype=float)

    drag = np.full_like(baselines, scoring.format_penalty * 0.8)
    if matching.strictness > STRICTNESS_DRAG_START:
        drag += (matching.strictness - STRICTNESS_DRAG_START) * sensitivity * 0.2
    if is_short:
        drag += 6 * sensitivity

    rates = np.clip(baselines - drag + (100 - scoring.pass_threshold) * 0.2, 0, 100)

    return [
        CohortProjection(c.label, c.baseline, c.sensitivity, float(rate))
        for c, rate in zip(cohorts, rates)
    ]


def compare_identities(
    result: ScoreResult,
    labels: Sequence[IdentityLabel],
    scoring: ScoringPolicy
) -> List[IdentityComparison]:
    """
    Score the same resume under every identity label.

    Uses the current base score and penalties; the minimum-years penalty and
    knockout override are left out so only the bias factor varies.
    """
    penalties = result.format_penalty + result.short_penalty
    comparisons = []
    for label in labels:
        score = clamp(apply_bias(result.base_score, label.bias_factor, penalties, scoring.penalty_order))
        comparisons.append(IdentityComparison(label.name, label.bias_factor, score))

    logger.debug(f"Identity comparison: {[(c.name, round(c.score)) for c in comparisons]}")
    return comparisons
