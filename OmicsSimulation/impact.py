"""Parameter change classification for "what changed" comparisons."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from OmicsSimulation.config import SimulationParameters

CHANGE_EPSILON = 0.001
HIGH_IMPACT_PERCENT = 50.0
MEDIUM_IMPACT_PERCENT = 20.0

PARAMETER_LABELS = {
    "tf_concentration": "TF Concentration",
    "binding_affinity": "Binding Affinity (Kd)",
    "hill_coefficient": "Hill Coefficient",
    "methylation_factor": "Methylation Factor",
    "mutation_severity": "Mutation Severity",
    "translation_efficiency": "Translation Efficiency",
    "protein_degradation": "Protein Degradation",
    "expression_noise": "Expression Noise",
    "weight_genomics": "Genomics Weight",
    "weight_transcriptomics": "Transcriptomics Weight",
    "weight_proteomics": "Proteomics Weight",
}


@dataclass(frozen=True)
class ParameterChange:
    key: str
    label: str
    previous: float
    current: float
    delta: float
    percent_change: float
    impact: str


def classify_impact(percent_change: float) -> str:
    if percent_change > HIGH_IMPACT_PERCENT:
        return "high"
    if percent_change > MEDIUM_IMPACT_PERCENT:
        return "medium"
    return "low"


def percent_change(previous: float, current: float) -> float:
    """Absolute relative change in percent; a change away from 0 is infinite."""
    delta = current - previous
    if previous == 0:
        return math.inf
    return abs(delta / previous) * 100.0


def classify_parameter_changes(
    previous: SimulationParameters,
    current: SimulationParameters,
    epsilon: float = CHANGE_EPSILON,
) -> List[ParameterChange]:
    """List parameters that moved by more than epsilon, largest relative change first.

    Ties keep parameter declaration order.
    """
    prev_values = previous.as_dict()
    changes: List[ParameterChange] = []
    for key, new_value in current.as_dict().items():
        old_value = prev_values[key]
        delta = new_value - old_value
        if abs(delta) <= epsilon:
            continue
        pct = percent_change(old_value, new_value)
        changes.append(
            ParameterChange(
                key=key,
                label=PARAMETER_LABELS.get(key, key),
                previous=old_value,
                current=new_value,
                delta=delta,
                percent_change=pct,
                impact=classify_impact(pct),
            )
        )
    changes.sort(key=lambda c: c.percent_change, reverse=True)
    return changes
