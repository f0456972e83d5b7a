"""Built-in gene and disease catalog.

Baseline values are illustrative human-gene figures (TPM for expression,
arbitrary abundance units for protein). Disease weights are signed: negative
weights mark protective genes (e.g. BRCA1 for breast cancer, INS for type 2
diabetes).
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from OmicsSimulation.gene import Disease, Gene

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Built-in records
# -----------------------------------------------------------------------------

GENES: tuple[Gene, ...] = (
    Gene(
        symbol="TP53",
        name="Tumor Protein P53",
        description="Tumor suppressor gene; guardian of the genome. Regulates cell cycle and apoptosis.",
        baseline_tpm=45.2,
        vmax=100.0,
        baseline_protein=320.5,
        default_eta=0.7,
    ),
    Gene(
        symbol="BRCA1",
        name="Breast Cancer 1",
        description="DNA repair protein critical for homologous recombination.",
        baseline_tpm=12.8,
        vmax=80.0,
        baseline_protein=95.3,
        default_eta=0.75,
    ),
    Gene(
        symbol="EGFR",
        name="Epidermal Growth Factor Receptor",
        description="Receptor tyrosine kinase; frequently amplified in cancers.",
        baseline_tpm=67.4,
        vmax=150.0,
        baseline_protein=485.7,
        default_eta=0.72,
    ),
    Gene(
        symbol="APOE",
        name="Apolipoprotein E",
        description="Lipid transport protein; APOE4 is a major Alzheimer's risk factor.",
        baseline_tpm=234.6,
        vmax=300.0,
        baseline_protein=1850.2,
        default_eta=0.79,
    ),
    Gene(
        symbol="INS",
        name="Insulin",
        description="Peptide hormone regulating glucose metabolism.",
        baseline_tpm=8900.5,
        vmax=10000.0,
        baseline_protein=65000.0,
        default_eta=0.73,
    ),
    Gene(
        symbol="IL6",
        name="Interleukin 6",
        description="Pro-inflammatory cytokine elevated in chronic inflammation.",
        baseline_tpm=28.3,
        vmax=120.0,
        baseline_protein=215.8,
        default_eta=0.76,
    ),
    Gene(
        symbol="TNF",
        name="Tumor Necrosis Factor Alpha",
        description="Key inflammatory cytokine mediating immune response.",
        baseline_tpm=42.7,
        vmax=130.0,
        baseline_protein=298.4,
        default_eta=0.70,
    ),
    Gene(
        symbol="GAPDH",
        name="Glyceraldehyde-3-Phosphate Dehydrogenase",
        description="Housekeeping glycolysis enzyme; common reference gene.",
        baseline_tpm=1245.8,
        vmax=1500.0,
        baseline_protein=9850.3,
        default_eta=0.79,
    ),
    Gene(
        symbol="VEGFA",
        name="Vascular Endothelial Growth Factor A",
        description="Angiogenesis regulator overexpressed in tumors.",
        baseline_tpm=87.2,
        vmax=180.0,
        baseline_protein=625.9,
        default_eta=0.72,
    ),
    Gene(
        symbol="MYC",
        name="MYC Proto-Oncogene",
        description="Transcription factor controlling cell proliferation.",
        baseline_tpm=56.3,
        vmax=140.0,
        baseline_protein=412.7,
        default_eta=0.73,
    ),
)


def _weights(*values: float) -> Dict[str, float]:
    symbols = ("TP53", "BRCA1", "EGFR", "APOE", "INS", "IL6", "TNF", "GAPDH", "VEGFA", "MYC")
    return dict(zip(symbols, values))


DISEASES: tuple[Disease, ...] = (
    Disease(
        name="Breast Cancer",
        description="Malignant tumor of breast tissue; associated with BRCA1/2 mutations.",
        gene_weights=_weights(0.8, -0.9, 0.7, 0.1, 0.2, 0.5, 0.4, 0.0, 0.6, 0.8),
        bias=-1.5,
    ),
    Disease(
        name="Alzheimer's Disease",
        description="Progressive neurodegenerative disorder.",
        gene_weights=_weights(0.3, 0.1, 0.2, 0.9, -0.4, 0.6, 0.5, 0.0, 0.3, 0.1),
        bias=-1.8,
    ),
    Disease(
        name="Type 2 Diabetes",
        description="Metabolic disorder characterized by insulin resistance.",
        gene_weights=_weights(0.2, 0.0, 0.3, 0.4, -0.9, 0.7, 0.7, 0.0, 0.4, 0.2),
        bias=-1.6,
    ),
    Disease(
        name="Chronic Inflammation",
        description="Persistent inflammatory state.",
        gene_weights=_weights(0.4, 0.1, 0.5, 0.3, 0.2, 0.9, 0.9, 0.0, 0.5, 0.4),
        bias=-1.2,
    ),
    Disease(
        name="Cardiovascular Disease",
        description="Heart and blood vessel disorders.",
        gene_weights=_weights(0.3, 0.1, 0.4, 0.7, 0.5, 0.6, 0.6, 0.0, 0.8, 0.3),
        bias=-1.4,
    ),
    Disease(
        name="Lung Cancer",
        description="Malignant lung tumor; often associated with EGFR mutations.",
        gene_weights=_weights(0.9, 0.3, 0.9, 0.2, 0.2, 0.5, 0.4, 0.0, 0.7, 0.8),
        bias=-1.3,
    ),
)


# -----------------------------------------------------------------------------
# Catalog
# -----------------------------------------------------------------------------

class EntityCatalog:
    """Read-mostly registry of genes and diseases keyed by symbol/name."""

    def __init__(self, genes: Iterable[Gene], diseases: Iterable[Disease]) -> None:
        self._genes: Dict[str, Gene] = {}
        self._diseases: Dict[str, Disease] = {}
        for gene in genes:
            gene.validate()
            self._genes[gene.symbol] = gene
        for disease in diseases:
            disease.validate()
            self._diseases[disease.name] = disease

    def list_genes(self) -> List[Gene]:
        return list(self._genes.values())

    def list_diseases(self) -> List[Disease]:
        return list(self._diseases.values())

    def get_gene(self, symbol: str) -> Gene:
        try:
            return self._genes[symbol]
        except KeyError:
            raise KeyError(f"Unknown gene symbol: {symbol}") from None

    def get_disease(self, name: str) -> Disease:
        try:
            return self._diseases[name]
        except KeyError:
            raise KeyError(f"Unknown disease: {name}") from None

    def search_genes(self, term: str) -> List[Gene]:
        """Case-insensitive match on gene symbol or name."""
        needle = term.strip().lower()
        return [
            gene
            for gene in self._genes.values()
            if needle in gene.symbol.lower() or needle in gene.name.lower()
        ]

    def merge_genes(self, genes: Iterable[Gene]) -> int:
        """Validate imported genes, then add or replace them by symbol.

        Nothing is merged if any record fails validation.
        """
        incoming = list(genes)
        for gene in incoming:
            gene.validate()
        for gene in incoming:
            if gene.symbol in self._genes:
                logger.info("Replacing catalog gene %s with imported record", gene.symbol)
            self._genes[gene.symbol] = gene
        return len(incoming)

    def __contains__(self, key: object) -> bool:
        return key in self._genes or key in self._diseases


def default_catalog() -> EntityCatalog:
    """Return a fresh catalog holding the built-in genes and diseases."""
    return EntityCatalog(GENES, DISEASES)
