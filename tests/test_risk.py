"""Tests for the disease risk model."""

from __future__ import annotations

import math

import pytest

from OmicsSimulation.config import SimulationParameters
from OmicsSimulation.gene import Disease
from OmicsSimulation.risk import (
    LayerValues,
    classify_risk,
    compute_disease_risk,
    compute_flows,
    compute_risks,
    gene_contributions,
    normalize_weights,
)


def _expected_risk(score: float) -> float:
    return 100.0 / (1.0 + math.exp(-1.5 * score))


def test_zero_weights_give_zero_risk(toy_genes, toy_disease) -> None:
    values = {"A": LayerValues(10.0, 10.0, 100.0)}
    result = compute_disease_risk(values, toy_disease, 0.0, 0.0, 0.0, toy_genes)
    assert result.risk == 0.0
    assert result.contributions == LayerValues(0.0, 0.0, 0.0)


def test_single_weighted_gene(toy_genes, toy_disease) -> None:
    values = {"A": LayerValues(10.0, 10.0, 100.0)}
    result = compute_disease_risk(values, toy_disease, 0.3, 0.4, 0.3, toy_genes[:1])
    # each layer normalises to (value / baseline) * 2 = 2
    assert result.contributions.genomic == pytest.approx(2.0)
    assert result.contributions.transcriptomic == pytest.approx(2.0)
    assert result.contributions.proteomic == pytest.approx(2.0)
    assert result.risk == pytest.approx(_expected_risk(2.0))


def test_unweighted_gene_still_dilutes_average(toy_genes, toy_disease) -> None:
    values = {
        "A": LayerValues(10.0, 10.0, 100.0),
        "B": LayerValues(10.0, 10.0, 100.0),
    }
    alone = compute_disease_risk(values, toy_disease, 1.0, 1.0, 1.0, toy_genes[:1])
    diluted = compute_disease_risk(values, toy_disease, 1.0, 1.0, 1.0, toy_genes)
    assert diluted.contributions.genomic == pytest.approx(1.0)
    assert diluted.risk == pytest.approx(_expected_risk(1.0))
    assert diluted.risk < alone.risk


def test_unweighted_gene_alone_contributes_nothing(toy_genes, toy_disease) -> None:
    values = {"B": LayerValues(10.0, 10.0, 100.0)}
    result = compute_disease_risk(values, toy_disease, 0.3, 0.4, 0.3, toy_genes[1:])
    assert result.contributions == LayerValues(0.0, 0.0, 0.0)
    # only the bias (0) remains
    assert result.risk == pytest.approx(50.0)


def test_genes_without_values_are_skipped(toy_genes, toy_disease) -> None:
    values = {"A": LayerValues(10.0, 10.0, 100.0)}
    with_missing = compute_disease_risk(values, toy_disease, 1.0, 1.0, 1.0, toy_genes)
    alone = compute_disease_risk(values, toy_disease, 1.0, 1.0, 1.0, toy_genes[:1])
    assert with_missing.risk == pytest.approx(alone.risk)


def test_no_values_gives_bias_only_risk(toy_genes) -> None:
    disease = Disease("Biased", "", {"A": 1.0}, bias=-1.5)
    result = compute_disease_risk({}, disease, 0.3, 0.4, 0.3, toy_genes)
    assert result.risk == pytest.approx(_expected_risk(-1.5))


def test_weights_are_normalised_before_use(toy_genes, toy_disease) -> None:
    values = {"A": LayerValues(10.0, 5.0, 0.0)}
    a = compute_disease_risk(values, toy_disease, 1.0, 1.0, 2.0, toy_genes[:1])
    b = compute_disease_risk(values, toy_disease, 10.0, 10.0, 20.0, toy_genes[:1])
    assert a.risk == pytest.approx(b.risk)
    # 0.25 * 2 + 0.25 * 1 + 0.5 * 0
    assert a.risk == pytest.approx(_expected_risk(0.75))


@pytest.mark.parametrize("scale", [-1e6, -500.0, -1.0, 0.0, 1.0, 500.0, 1e6])
def test_risk_is_bounded(toy_genes, scale: float) -> None:
    disease = Disease("Wide", "", {"A": scale, "B": -scale}, bias=scale)
    values = {
        "A": LayerValues(1e4, 1e3, 1e5),
        "B": LayerValues(0.0, 1.0, 2.0),
    }
    for weights in [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.2, 0.5, 0.3)]:
        result = compute_disease_risk(values, disease, *weights, toy_genes)
        assert 0.0 <= result.risk <= 100.0


@pytest.mark.parametrize(
    "weights",
    [(0.3, 0.4, 0.3), (1.0, 0.0, 0.0), (5.0, 2.0, 0.5), (1e-9, 0.0, 3.0)],
)
def test_normalized_weights_sum_to_one(weights) -> None:
    assert sum(normalize_weights(*weights)) == pytest.approx(1.0)


def test_normalize_zero_weights_fallback() -> None:
    assert normalize_weights(0.0, 0.0, 0.0) == (0.33, 0.33, 0.34)


def test_classify_risk_bands() -> None:
    assert classify_risk(85.0) == "high"
    assert classify_risk(70.0) == "high"
    assert classify_risk(40.0) == "moderate"
    assert classify_risk(39.9) == "low"


def test_catalog_disease_risk(catalog) -> None:
    tp53 = catalog.get_gene("TP53")
    values = {"TP53": LayerValues(tp53.baseline_tpm, tp53.baseline_tpm, tp53.baseline_protein)}
    disease = catalog.get_disease("Breast Cancer")
    result = compute_disease_risk(values, disease, 0.3, 0.4, 0.3, [tp53])
    # 0.8 * 2 per layer, bias -1.5
    assert result.risk == pytest.approx(_expected_risk(1.6 - 1.5))
    assert result.risk_class == "moderate"


def test_compute_risks_one_per_disease(catalog) -> None:
    genes = [catalog.get_gene("TP53"), catalog.get_gene("BRCA1")]
    values = {g.symbol: LayerValues(1.0, 1.0, g.baseline_protein) for g in genes}
    results = compute_risks(values, catalog.list_diseases(), SimulationParameters(), genes)
    assert [r.name for r in results] == [d.name for d in catalog.list_diseases()]


def test_flows_average_over_selected_genes(toy_genes, toy_disease) -> None:
    values = {"A": LayerValues(4.0, 6.0, 100.0)}
    flows = compute_flows(values, toy_genes, [toy_disease], SimulationParameters())
    assert flows.genomic == pytest.approx(2.0)
    assert flows.transcriptomic == pytest.approx(3.0)
    assert flows.proteomic == pytest.approx(50.0)
    expected = compute_disease_risk(values, toy_disease, 0.3, 0.4, 0.3, toy_genes).risk
    assert flows.disease_risk == pytest.approx(expected)


def test_flows_empty_selection(toy_disease) -> None:
    flows = compute_flows({}, [], [toy_disease], SimulationParameters())
    assert (flows.genomic, flows.transcriptomic, flows.proteomic, flows.disease_risk) == (0, 0, 0, 0)


def test_gene_contributions(toy_genes, toy_disease) -> None:
    values = {"A": LayerValues(10.0, 20.0, 50.0)}
    params = SimulationParameters(weight_genomics=1.0, weight_transcriptomics=1.0, weight_proteomics=2.0)
    out = gene_contributions(values, [toy_disease], toy_genes, params)
    # |1.0| * (0.25 * 10/20 + 0.25 * 20/20 + 0.5 * 50/100) * 100
    assert out["Toy Disease"]["A"] == pytest.approx(62.5)
    assert out["Toy Disease"]["B"] == 0.0
