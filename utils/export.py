"""
Export helpers for the results download buttons.
"""
import json
import time
from dataclasses import asdict
from typing import Optional, Sequence

import pandas as pd


def result_to_json(result, cohorts: Sequence = (), identities: Sequence = (),
                   timestamp: Optional[float] = None) -> str:
    """
    Serialize one screening run as JSON.

    Args:
        result: ScoreResult
        cohorts: CohortProjection list
        identities: IdentityComparison list
        timestamp: Export time (defaults to now)

    Returns:
        JSON string
    """
    export_data = {
        'timestamp': time.time() if timestamp is None else timestamp,
        'result': result.to_dict(),
        'cohorts': [asdict(c) for c in cohorts],
        'identity_comparison': [asdict(i) for i in identities],
    }
    return json.dumps(export_data, indent=2)


def projections_to_frame(cohorts: Sequence, identities: Sequence) -> pd.DataFrame:
    """One row per cohort projection and per identity comparison."""
    rows = []
    for cohort in cohorts:
        rows.append({
            'Kind': 'cohort',
            'Label': cohort.label,
            'Baseline': cohort.baseline,
            'Sensitivity': cohort.sensitivity,
            'Bias Factor': None,
            'Value': round(cohort.adjusted_rate, 2),
        })
    for identity in identities:
        rows.append({
            'Kind': 'identity',
            'Label': identity.name,
            'Baseline': None,
            'Sensitivity': None,
            'Bias Factor': identity.bias_factor,
            'Value': round(identity.score, 2),
        })
    return pd.DataFrame(
        rows, columns=['Kind', 'Label', 'Baseline', 'Sensitivity', 'Bias Factor', 'Value']
    )


def projections_to_csv(cohorts: Sequence, identities: Sequence) -> str:
    """CSV export of cohort projections and the identity comparison."""
    return projections_to_frame(cohorts, identities).to_csv(index=False)
