"""Multi-omics gene-regulation simulation package.

This package models a simplified genomics -> transcriptomics -> proteomics
pipeline (Hill-equation expression, Gaussian mRNA noise, first-order protein
turnover) and maps the resulting state onto logistic disease-risk scores.

Main entry points:
- run_simulation.py: Command-line interface for running simulations
- OmicsSimulation.simulator: SimulationSession for programmatic use
- OmicsSimulation.io: I/O utilities for loading configs and saving results
- OmicsSimulation.catalog: Built-in gene and disease catalog
- OmicsSimulation.risk: Disease risk model
- OmicsSimulation.impact: Parameter change classification
"""

from OmicsSimulation.catalog import EntityCatalog, default_catalog
from OmicsSimulation.config import SimulationConfig, SimulationParameters
from OmicsSimulation.expression import hill_expression
from OmicsSimulation.gene import Disease, Gene
from OmicsSimulation.impact import ParameterChange, classify_parameter_changes
from OmicsSimulation.io import (
    load_gene_table,
    load_simulation_config,
    save_risk_json,
    save_timeseries_csv,
)
from OmicsSimulation.presets import get_preset, randomize_parameters
from OmicsSimulation.protein import update_protein_level
from OmicsSimulation.risk import (
    DiseaseRiskResult,
    LayerValues,
    compute_disease_risk,
    gene_contributions,
    normalize_weights,
)
from OmicsSimulation.simulator import (
    GeneTimeSeries,
    SimulationSession,
    SimulationState,
)
from OmicsSimulation.stochastic import add_expression_noise, make_rng

__all__ = [
    # Core classes
    "Gene",
    "Disease",
    "EntityCatalog",
    "SimulationConfig",
    "SimulationParameters",
    "SimulationSession",
    "SimulationState",
    "GeneTimeSeries",
    "LayerValues",
    "DiseaseRiskResult",
    "ParameterChange",
    # Functions
    "default_catalog",
    "hill_expression",
    "add_expression_noise",
    "make_rng",
    "update_protein_level",
    "compute_disease_risk",
    "gene_contributions",
    "normalize_weights",
    "classify_parameter_changes",
    "get_preset",
    "randomize_parameters",
    "load_simulation_config",
    "load_gene_table",
    "save_timeseries_csv",
    "save_risk_json",
]
