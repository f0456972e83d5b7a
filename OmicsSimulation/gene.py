"""Gene and disease records used by the simulator.

Genes carry the baseline expression/protein levels and the maximal
transcription rate used by the Hill model. Diseases carry a signed weight
per gene symbol plus a bias for the logistic risk model.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class Gene:
    """Catalog entry for a gene.

    baseline_tpm and baseline_protein are reference levels used to normalise
    the omics signals in the risk model, so both must be positive.
    """
    symbol: str
    name: str
    description: str
    baseline_tpm: float
    vmax: float
    baseline_protein: float
    default_eta: float

    def validate(self) -> None:
        if not self.symbol or not str(self.symbol).strip():
            raise ValueError("Gene symbol must be non-empty")
        values = (self.baseline_tpm, self.vmax, self.baseline_protein, self.default_eta)
        if not all(math.isfinite(v) for v in values):
            raise ValueError(f"Gene values must be finite for {self.symbol}")
        if self.baseline_tpm <= 0:
            raise ValueError(f"baseline_tpm must be positive for {self.symbol}")
        if self.baseline_protein <= 0:
            raise ValueError(f"baseline_protein must be positive for {self.symbol}")
        if self.vmax < 0:
            raise ValueError(f"vmax must be non-negative for {self.symbol}")
        if self.default_eta < 0:
            raise ValueError(f"default_eta must be non-negative for {self.symbol}")


@dataclass(frozen=True)
class Disease:
    """Catalog entry for a disease with per-gene association weights.

    The weights are copied into a read-only mapping, so catalogs built from
    the same records cannot change each other's risk model.
    """
    name: str
    description: str
    gene_weights: Mapping[str, float] = field(default_factory=dict, hash=False)
    bias: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "gene_weights", MappingProxyType(dict(self.gene_weights)))

    def validate(self) -> None:
        if not self.name or not str(self.name).strip():
            raise ValueError("Disease name must be non-empty")
        if not math.isfinite(self.bias):
            raise ValueError(f"bias must be finite for {self.name}")
        bad = sorted(s for s, w in self.gene_weights.items() if not math.isfinite(w))
        if bad:
            raise ValueError(f"Gene weights must be finite for {self.name}: {bad}")

    def weight_for(self, symbol: str) -> float:
        """Weight of a gene for this disease; genes without an entry weigh 0."""
        return float(self.gene_weights.get(symbol, 0.0))
