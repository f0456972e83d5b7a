import numpy as np
import pytest

from OmicsSimulation.catalog import default_catalog
from OmicsSimulation.config import SimulationConfig, SimulationParameters
from OmicsSimulation.gene import Disease, Gene


@pytest.fixture()
def catalog():
    return default_catalog()


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture()
def params() -> SimulationParameters:
    return SimulationParameters()


@pytest.fixture()
def short_config() -> SimulationConfig:
    return SimulationConfig(dt=0.1, max_time=1.0, random_seed=7)


@pytest.fixture()
def toy_genes() -> list[Gene]:
    return [
        Gene("A", "Gene A", "", baseline_tpm=10.0, vmax=20.0, baseline_protein=100.0, default_eta=0.7),
        Gene("B", "Gene B", "", baseline_tpm=10.0, vmax=20.0, baseline_protein=100.0, default_eta=0.7),
    ]


@pytest.fixture()
def toy_disease() -> Disease:
    return Disease("Toy Disease", "", gene_weights={"A": 1.0}, bias=0.0)
