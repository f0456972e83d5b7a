"""Tests for the gene and disease catalog."""

from __future__ import annotations

import pytest

from OmicsSimulation.catalog import EntityCatalog, default_catalog
from OmicsSimulation.gene import Disease, Gene


def test_builtin_records(catalog) -> None:
    symbols = [g.symbol for g in catalog.list_genes()]
    assert symbols == ["TP53", "BRCA1", "EGFR", "APOE", "INS", "IL6", "TNF", "GAPDH", "VEGFA", "MYC"]
    assert len(catalog.list_diseases()) == 6
    assert "Breast Cancer" in catalog
    assert "TP53" in catalog


def test_lookup(catalog) -> None:
    tp53 = catalog.get_gene("TP53")
    assert tp53.baseline_tpm == 45.2
    assert tp53.vmax == 100.0
    assert tp53.baseline_protein == 320.5
    disease = catalog.get_disease("Type 2 Diabetes")
    assert disease.bias == -1.6
    assert disease.weight_for("INS") == -0.9


def test_unknown_keys_raise(catalog) -> None:
    with pytest.raises(KeyError, match="NOPE"):
        catalog.get_gene("NOPE")
    with pytest.raises(KeyError, match="Flu"):
        catalog.get_disease("Flu")


def test_missing_weight_is_zero() -> None:
    disease = Disease("Sparse", "", gene_weights={"TP53": 0.5})
    assert disease.weight_for("MYC") == 0.0


def test_search_genes(catalog) -> None:
    found = {g.symbol for g in catalog.search_genes("tumor")}
    assert found == {"TP53", "TNF"}
    assert [g.symbol for g in catalog.search_genes("P53")] == ["TP53"]


def test_merge_adds_and_replaces(catalog) -> None:
    new = Gene("FOXP3", "Forkhead Box P3", "", 20.0, 60.0, 150.0, 0.7)
    replaced = Gene("TP53", "Tumor Protein P53", "", 50.0, 110.0, 300.0, 0.7)
    assert catalog.merge_genes([new, replaced]) == 2
    assert catalog.get_gene("FOXP3") == new
    assert catalog.get_gene("TP53").baseline_tpm == 50.0


def test_merge_is_all_or_nothing(catalog) -> None:
    good = Gene("FOXP3", "Forkhead Box P3", "", 20.0, 60.0, 150.0, 0.7)
    bad = Gene("BAD", "Bad", "", 0.0, 60.0, 150.0, 0.7)
    with pytest.raises(ValueError, match="baseline_tpm"):
        catalog.merge_genes([good, bad])
    assert "FOXP3" not in catalog


def test_default_catalog_is_fresh() -> None:
    first = default_catalog()
    first.merge_genes([Gene("X1", "X1", "", 1.0, 1.0, 1.0, 0.5)])
    assert "X1" not in default_catalog()


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"symbol": ""}, "symbol"),
        ({"baseline_protein": 0.0}, "baseline_protein"),
        ({"vmax": -1.0}, "vmax"),
        ({"default_eta": -0.1}, "default_eta"),
        ({"baseline_tpm": float("nan")}, "finite"),
    ],
)
def test_gene_validation(kwargs, message) -> None:
    fields = dict(symbol="G", name="G", description="", baseline_tpm=1.0, vmax=1.0, baseline_protein=1.0, default_eta=0.5)
    fields.update(kwargs)
    with pytest.raises(ValueError, match=message):
        Gene(**fields).validate()


def test_disease_weights_are_read_only() -> None:
    first = default_catalog()
    second = default_catalog()
    with pytest.raises(TypeError):
        first.get_disease("Breast Cancer").gene_weights["TP53"] = 99.0
    assert second.get_disease("Breast Cancer").weight_for("TP53") == 0.8


def test_disease_copies_source_weights() -> None:
    weights = {"TP53": 0.5}
    disease = Disease("Copied", "", gene_weights=weights)
    weights["TP53"] = 2.0
    assert disease.weight_for("TP53") == 0.5
    assert disease == Disease("Copied", "", gene_weights={"TP53": 0.5})


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"name": ""}, "name"),
        ({"bias": float("inf")}, "bias"),
        ({"gene_weights": {"TP53": float("nan")}}, "TP53"),
    ],
)
def test_disease_validation(kwargs, message) -> None:
    fields = dict(name="D", description="", gene_weights={"TP53": 0.5}, bias=-1.0)
    fields.update(kwargs)
    with pytest.raises(ValueError, match=message):
        EntityCatalog([], [Disease(**fields)])
