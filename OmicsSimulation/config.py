"""Simulation parameters and run configuration.

SimulationParameters holds the user-adjustable model knobs read by every
simulation step. SimulationConfig fixes the time grid (dt, max_time) and the
run inputs; the number of steps is max_time / dt rounded up, so a 50 h run at
dt = 0.1 h takes exactly 500 steps.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from OmicsSimulation.risk import normalize_weights


@dataclass
class SimulationParameters:
    """Model parameters shared by all genes in a run.

    Units: tf_concentration in nM, binding_affinity (Kd) in uM,
    protein_degradation per hour. methylation_factor and mutation_severity
    are fractions in [0, 1]. The three integration weights need not sum to 1;
    they are normalised when the risk model uses them.
    """
    tf_concentration: float = 50.0
    binding_affinity: float = 1.0
    hill_coefficient: float = 2.0
    methylation_factor: float = 0.0
    mutation_severity: float = 0.0
    translation_efficiency: float = 0.7
    protein_degradation: float = 0.1
    expression_noise: float = 0.1
    weight_genomics: float = 0.3
    weight_transcriptomics: float = 0.4
    weight_proteomics: float = 0.3

    def validate(self) -> None:
        for key, value in self.as_dict().items():
            if not math.isfinite(value):
                raise ValueError(f"{key} must be finite; got {value}")
            if value < 0:
                raise ValueError(f"{key} must be non-negative; got {value}")

    def as_dict(self) -> dict[str, float]:
        return {f.name: float(getattr(self, f.name)) for f in dataclasses.fields(self)}

    def copy(self) -> "SimulationParameters":
        return dataclasses.replace(self)

    def normalized_weights(self) -> tuple[float, float, float]:
        return normalize_weights(self.weight_genomics, self.weight_transcriptomics, self.weight_proteomics)

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(cls))

    @classmethod
    def from_mapping(
        cls,
        raw: Mapping[str, Any],
        base: "SimulationParameters | None" = None,
    ) -> "SimulationParameters":
        """Build parameters from a mapping, overriding `base` (or defaults).

        Unknown keys are rejected.
        """
        unknown = set(raw) - set(cls.field_names())
        if unknown:
            raise ValueError(f"Unknown simulation parameters: {sorted(unknown)}")
        params = (base or cls()).copy()
        for key, value in raw.items():
            try:
                setattr(params, key, float(value))
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Parameter {key} must be numeric; got {value!r}") from exc
        params.validate()
        return params


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration for one simulation run."""
    dt: float = 0.1
    max_time: float = 50.0
    random_seed: int | None = None
    selected_genes: tuple[str, ...] = ()
    selected_diseases: tuple[str, ...] = ()
    parameters: SimulationParameters = field(default_factory=SimulationParameters)
    preset: str | None = None
    genes_path: str | None = None
    out_path: str | None = None
    risk_out_path: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "selected_genes", tuple(self.selected_genes))
        object.__setattr__(self, "selected_diseases", tuple(self.selected_diseases))
        if not math.isfinite(self.dt) or self.dt <= 0:
            raise ValueError("dt must be positive")
        if not math.isfinite(self.max_time) or self.max_time <= 0:
            raise ValueError("max_time must be positive")
        if self.random_seed is not None and self.random_seed < 0:
            raise ValueError("random_seed must be non-negative")
        if len(set(self.selected_genes)) != len(self.selected_genes):
            raise ValueError("selected_genes must not contain duplicates")
        if len(set(self.selected_diseases)) != len(self.selected_diseases):
            raise ValueError("selected_diseases must not contain duplicates")
        self.parameters.validate()

    @property
    def max_steps(self) -> int:
        """Number of steps until the clock reaches max_time."""
        return compute_max_steps(self.max_time, self.dt)


def compute_max_steps(max_time: float, dt: float) -> int:
    """Steps of length dt needed to reach max_time, tolerant to float error."""
    return int(math.ceil(max_time / dt - 1e-9))
