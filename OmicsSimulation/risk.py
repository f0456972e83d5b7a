"""Disease risk model.

Per selected gene, the three omics signals are normalised by the gene's
baseline and multiplied by the disease's weight for that gene. Layer scores
are averaged over genes, combined with the normalised integration weights
plus the disease bias, and mapped to a 0-100 risk with a logistic curve:

    score = w_G * G + w_T * T + w_P * P + bias
    risk  = 100 / (1 + exp(-1.5 * score))

SIGNAL_SCALE and SIGMOID_STEEPNESS are tuning constants chosen to spread
risks over a useful range; they have no biological derivation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Mapping, Sequence

from OmicsSimulation.gene import Disease, Gene

if TYPE_CHECKING:
    from OmicsSimulation.config import SimulationParameters

SIGNAL_SCALE = 2.0
SIGMOID_STEEPNESS = 1.5

HIGH_RISK_THRESHOLD = 70.0
MODERATE_RISK_THRESHOLD = 40.0


@dataclass(frozen=True)
class LayerValues:
    """One value per omics layer."""
    genomic: float = 0.0
    transcriptomic: float = 0.0
    proteomic: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return {
            "genomic": self.genomic,
            "transcriptomic": self.transcriptomic,
            "proteomic": self.proteomic,
        }


@dataclass(frozen=True)
class DiseaseRiskResult:
    """Risk for one disease plus the averaged per-layer scores behind it.

    contributions are the gene-averaged layer scores before the integration
    weights and bias are applied; they are signed and unclamped.
    """
    name: str
    risk: float
    contributions: LayerValues

    @property
    def risk_class(self) -> str:
        return classify_risk(self.risk)


@dataclass(frozen=True)
class FlowSummary:
    """Mean layer values across selected genes and mean risk across diseases."""
    genomic: float
    transcriptomic: float
    proteomic: float
    disease_risk: float


def normalize_weights(w1: float, w2: float, w3: float) -> tuple[float, float, float]:
    """Scale integration weights to sum to 1.

    All-zero weights fall back to a near-even split for display; the risk
    model itself short-circuits that case to zero risk.
    """
    total = w1 + w2 + w3
    if total == 0:
        return (0.33, 0.33, 0.34)
    return (w1 / total, w2 / total, w3 / total)


def _logistic(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def classify_risk(risk: float) -> str:
    if risk >= HIGH_RISK_THRESHOLD:
        return "high"
    if risk >= MODERATE_RISK_THRESHOLD:
        return "moderate"
    return "low"


def compute_disease_risk(
    gene_values: Mapping[str, LayerValues],
    disease: Disease,
    w1: float,
    w2: float,
    w3: float,
    selected_genes: Sequence[Gene],
) -> DiseaseRiskResult:
    """Risk in [0, 100] for one disease given current per-gene layer values.

    Every selected gene with a value entry counts toward the average, even
    when the disease has no weight for it; such genes dilute the scores of
    the weighted ones.
    """
    total_weight = w1 + w2 + w3
    if total_weight == 0:
        return DiseaseRiskResult(name=disease.name, risk=0.0, contributions=LayerValues())

    norm_w1 = w1 / total_weight
    norm_w2 = w2 / total_weight
    norm_w3 = w3 / total_weight

    genomic_score = 0.0
    transcriptomic_score = 0.0
    proteomic_score = 0.0
    total_genes = 0

    for gene in selected_genes:
        values = gene_values.get(gene.symbol)
        if values is None:
            continue
        weight = disease.weight_for(gene.symbol)
        norm_g = (values.genomic / gene.baseline_tpm) * SIGNAL_SCALE
        norm_t = (values.transcriptomic / gene.baseline_tpm) * SIGNAL_SCALE
        norm_p = (values.proteomic / gene.baseline_protein) * SIGNAL_SCALE
        genomic_score += weight * norm_g
        transcriptomic_score += weight * norm_t
        proteomic_score += weight * norm_p
        total_genes += 1

    if total_genes > 0:
        genomic_score /= total_genes
        transcriptomic_score /= total_genes
        proteomic_score /= total_genes

    combined = (
        norm_w1 * genomic_score
        + norm_w2 * transcriptomic_score
        + norm_w3 * proteomic_score
        + disease.bias
    )
    risk = 100.0 * _logistic(SIGMOID_STEEPNESS * combined)

    return DiseaseRiskResult(
        name=disease.name,
        risk=max(0.0, min(100.0, risk)),
        contributions=LayerValues(genomic_score, transcriptomic_score, proteomic_score),
    )


def compute_risks(
    gene_values: Mapping[str, LayerValues],
    diseases: Sequence[Disease],
    params: "SimulationParameters",
    selected_genes: Sequence[Gene],
) -> List[DiseaseRiskResult]:
    """Risk results for each disease using the parameters' integration weights."""
    return [
        compute_disease_risk(
            gene_values,
            disease,
            params.weight_genomics,
            params.weight_transcriptomics,
            params.weight_proteomics,
            selected_genes,
        )
        for disease in diseases
    ]


def compute_flows(
    gene_values: Mapping[str, LayerValues],
    selected_genes: Sequence[Gene],
    diseases: Sequence[Disease],
    params: "SimulationParameters",
) -> FlowSummary:
    """Aggregate layer values and risk for the genomics -> disease flow view.

    Layer means divide by the number of selected genes; genes without values
    count as zero.
    """
    if not selected_genes:
        return FlowSummary(0.0, 0.0, 0.0, 0.0)

    avg_g = avg_t = avg_p = 0.0
    for gene in selected_genes:
        values = gene_values.get(gene.symbol)
        if values is not None:
            avg_g += values.genomic
            avg_t += values.transcriptomic
            avg_p += values.proteomic
    n_genes = len(selected_genes)

    avg_risk = 0.0
    if diseases:
        results = compute_risks(gene_values, diseases, params, selected_genes)
        avg_risk = sum(r.risk for r in results) / len(results)

    return FlowSummary(avg_g / n_genes, avg_t / n_genes, avg_p / n_genes, avg_risk)


def gene_contributions(
    gene_values: Mapping[str, LayerValues],
    diseases: Sequence[Disease],
    selected_genes: Sequence[Gene],
    params: "SimulationParameters",
) -> Dict[str, Dict[str, float]]:
    """Per-disease, per-gene contribution scores for comparison charts.

    contribution = |w_gene| * (w_G * E/Vmax + w_T * T/Vmax + w_P * P/P0) * 100
    """
    nw1, nw2, nw3 = normalize_weights(
        params.weight_genomics, params.weight_transcriptomics, params.weight_proteomics
    )
    out: Dict[str, Dict[str, float]] = {}
    for disease in diseases:
        per_gene: Dict[str, float] = {}
        for gene in selected_genes:
            values = gene_values.get(gene.symbol)
            if values is None:
                per_gene[gene.symbol] = 0.0
                continue
            norm_g = values.genomic / gene.vmax if gene.vmax > 0 else 0.0
            norm_t = values.transcriptomic / gene.vmax if gene.vmax > 0 else 0.0
            norm_p = values.proteomic / gene.baseline_protein
            weight = abs(disease.weight_for(gene.symbol))
            per_gene[gene.symbol] = weight * (nw1 * norm_g + nw2 * norm_t + nw3 * norm_p) * 100.0
        out[disease.name] = per_gene
    return out
