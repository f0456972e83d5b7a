"""Predefined parameter scenarios and random parameter generation."""

from __future__ import annotations

from typing import Dict

import numpy as np

from OmicsSimulation.config import SimulationParameters

PRESET_NAMES: Dict[str, str] = {
    "healthy": "Healthy State",
    "high-risk": "High Disease Risk",
    "drug-treated": "Drug Treatment",
    "epigenetic-silenced": "Epigenetic Silencing",
    "tf-overexpression": "TF Overexpression (Cancer Model)",
}

_PRESETS: Dict[str, SimulationParameters] = {
    "healthy": SimulationParameters(
        tf_concentration=50,
        binding_affinity=1,
        hill_coefficient=2,
        methylation_factor=0,
        mutation_severity=0,
        translation_efficiency=0.7,
        protein_degradation=0.1,
        expression_noise=0.05,
        weight_genomics=0.3,
        weight_transcriptomics=0.4,
        weight_proteomics=0.3,
    ),
    "high-risk": SimulationParameters(
        tf_concentration=300,
        binding_affinity=0.2,
        hill_coefficient=3,
        methylation_factor=0.5,
        mutation_severity=0.8,
        translation_efficiency=0.3,
        protein_degradation=0.4,
        expression_noise=0.3,
        weight_genomics=0.4,
        weight_transcriptomics=0.3,
        weight_proteomics=0.3,
    ),
    "drug-treated": SimulationParameters(
        tf_concentration=30,
        binding_affinity=2,
        hill_coefficient=2,
        methylation_factor=0.05,
        mutation_severity=0.1,
        translation_efficiency=2.0,
        protein_degradation=0.05,
        expression_noise=0.08,
        weight_genomics=0.3,
        weight_transcriptomics=0.4,
        weight_proteomics=0.3,
    ),
    "epigenetic-silenced": SimulationParameters(
        tf_concentration=80,
        binding_affinity=1,
        hill_coefficient=2,
        methylation_factor=0.9,
        mutation_severity=0.3,
        translation_efficiency=0.4,
        protein_degradation=0.25,
        expression_noise=0.2,
        weight_genomics=0.6,
        weight_transcriptomics=0.25,
        weight_proteomics=0.15,
    ),
    "tf-overexpression": SimulationParameters(
        tf_concentration=800,
        binding_affinity=0.1,
        hill_coefficient=4,
        methylation_factor=0.0,
        mutation_severity=0.6,
        translation_efficiency=1.2,
        protein_degradation=0.03,
        expression_noise=0.2,
        weight_genomics=0.3,
        weight_transcriptomics=0.3,
        weight_proteomics=0.4,
    ),
}


def get_preset(name: str) -> SimulationParameters:
    """Return a fresh copy of a preset's parameters."""
    try:
        return _PRESETS[name].copy()
    except KeyError:
        raise KeyError(f"Unknown preset: {name} (choose from {sorted(_PRESETS)})") from None


def randomize_parameters(rng: np.random.Generator) -> SimulationParameters:
    """Draw exploratory parameters; integration weights are normalised to sum 1."""
    w = rng.random(3)
    w = w / w.sum()
    return SimulationParameters(
        tf_concentration=float(rng.random() * 500 + 10),
        binding_affinity=float(rng.random() * 10 + 0.1),
        hill_coefficient=float(rng.integers(1, 4)),
        methylation_factor=float(rng.random() * 0.8),
        mutation_severity=float(rng.random() * 0.8),
        translation_efficiency=float(rng.random() * 2 + 0.2),
        protein_degradation=float(rng.random() * 0.5 + 0.05),
        expression_noise=float(rng.random() * 0.3 + 0.05),
        weight_genomics=float(w[0]),
        weight_transcriptomics=float(w[1]),
        weight_proteomics=float(w[2]),
    )
