"""Simulation driver for the genomics -> transcriptomics -> proteomics pipeline.

Each step, for every selected gene:
    E = Hill(TF, Kd, n, Vmax) * (1 - methylation) * (1 - mutation)
    T = E * (1 + eps),  eps ~ N(0, sigma)
    P <- P + (eta * T - delta * P) * dt
followed by a disease-risk update over the selected diseases.

The session is a small state machine (idle -> running <-> paused ->
completed, reset back to idle). It owns no timer: the host calls tick() at
whatever cadence it likes, and run() is a plain loop for batch use.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from OmicsSimulation.catalog import EntityCatalog
from OmicsSimulation.config import SimulationConfig, SimulationParameters, compute_max_steps
from OmicsSimulation.expression import hill_expression
from OmicsSimulation.gene import Disease, Gene
from OmicsSimulation.impact import ParameterChange, classify_parameter_changes
from OmicsSimulation.protein import update_protein_level
from OmicsSimulation.risk import (
    DiseaseRiskResult,
    FlowSummary,
    LayerValues,
    compute_flows,
    compute_risks,
    gene_contributions,
)
from OmicsSimulation.stochastic import add_expression_noise, make_rng

logger = logging.getLogger(__name__)


class SimulationState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass
class SimulationClock:
    """Fixed-step clock. Time is step_count * dt, so it never drifts."""
    dt: float
    max_time: float
    step_count: int = 0

    @property
    def current_time(self) -> float:
        return self.step_count * self.dt

    @property
    def max_steps(self) -> int:
        return compute_max_steps(self.max_time, self.dt)

    @property
    def is_terminal(self) -> bool:
        return self.step_count >= self.max_steps

    def advance(self) -> float:
        self.step_count += 1
        return self.current_time

    def reset(self) -> None:
        self.step_count = 0


@dataclass
class GeneTimeSeries:
    """mRNA and protein samples for one gene.

    The protein series starts with the gene's baseline, so after k steps it
    holds k + 1 samples while the mRNA series holds k.
    """
    symbol: str
    mrna: List[float] = field(default_factory=list)
    protein: List[float] = field(default_factory=list)

    @classmethod
    def seeded(cls, gene: Gene) -> "GeneTimeSeries":
        return cls(symbol=gene.symbol, mrna=[], protein=[gene.baseline_protein])

    def last_protein(self, default: float) -> float:
        return self.protein[-1] if self.protein else default

    def append(self, mrna: float, protein: float) -> None:
        self.mrna.append(mrna)
        self.protein.append(protein)

    def as_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        return (
            np.asarray(self.mrna, dtype=np.float64),
            np.asarray(self.protein, dtype=np.float64),
        )


@dataclass(frozen=True)
class StepResult:
    """Outputs of one tick, handed to whatever displays them."""
    time: float
    values: Dict[str, LayerValues]
    flows: FlowSummary
    risks: List[DiseaseRiskResult]
    completed: bool = False


CompletionListener = Callable[["SimulationSession", List[ParameterChange]], None]


class SimulationSession:
    """One simulation run over a gene selection, driven by tick()."""

    def __init__(
        self,
        catalog: EntityCatalog,
        parameters: SimulationParameters | None = None,
        config: SimulationConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.catalog = catalog
        self.config = config or SimulationConfig()
        params = parameters if parameters is not None else self.config.parameters
        params.validate()
        self.parameters = params.copy()
        self.previous_parameters: SimulationParameters | None = None
        self.rng = rng if rng is not None else make_rng(self.config.random_seed)
        self.clock = SimulationClock(dt=self.config.dt, max_time=self.config.max_time)
        self.state = SimulationState.IDLE
        self.selected_genes: List[Gene] = []
        self.selected_diseases: List[Disease] = []
        self.series: Dict[str, GeneTimeSeries] = {}
        self.time_points: List[float] = []
        self._last_values: Dict[str, LayerValues] = {}
        self._listeners: List[CompletionListener] = []

        if self.config.selected_genes:
            self.select_genes(self.config.selected_genes)
        if self.config.selected_diseases:
            self.select_diseases(self.config.selected_diseases)

    # ------------------------------------------------------------------
    # Selection and parameters
    # ------------------------------------------------------------------

    @property
    def current_time(self) -> float:
        return self.clock.current_time

    def select_genes(self, symbols: Sequence[str]) -> None:
        """Replace the gene selection; the current run is reset."""
        genes = [self.catalog.get_gene(s) for s in symbols]
        if len({g.symbol for g in genes}) != len(genes):
            raise ValueError("Gene selection must not contain duplicates")
        self.selected_genes = genes
        self.reset()

    def select_diseases(self, names: Sequence[str]) -> None:
        """Replace the disease selection. Risk only, so the run is kept."""
        diseases = [self.catalog.get_disease(n) for n in names]
        if len({d.name for d in diseases}) != len(diseases):
            raise ValueError("Disease selection must not contain duplicates")
        self.selected_diseases = diseases

    def update_parameters(self, **changes: float) -> SimulationParameters:
        """Adjust individual parameters in place; the run continues."""
        updated = SimulationParameters.from_mapping(changes, base=self.parameters)
        self.previous_parameters = self.parameters.copy()
        self.parameters = updated
        logger.debug("Parameters updated: %s", sorted(changes))
        return updated

    def apply_parameters(self, params: SimulationParameters) -> None:
        """Swap in a whole parameter set (preset, randomise) and reset the run."""
        params.validate()
        self.previous_parameters = self.parameters.copy()
        self.parameters = params.copy()
        self.reset()

    def impact_analysis(self) -> List[ParameterChange]:
        """Changes relative to the parameters in use before the last update."""
        if self.previous_parameters is None:
            return []
        return classify_parameter_changes(self.previous_parameters, self.parameters)

    def add_completion_listener(self, listener: CompletionListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """Begin (from idle) or resume (from paused) stepping.

        Returns False without changing state when no gene is selected or the
        session is already running or completed.
        """
        if not self.selected_genes:
            logger.warning("Select at least one gene before running the simulation.")
            return False
        if self.state is SimulationState.IDLE:
            self._init_series()
            logger.info(
                "Starting simulation: %d genes, %d diseases, dt=%s, max_time=%s",
                len(self.selected_genes),
                len(self.selected_diseases),
                self.clock.dt,
                self.clock.max_time,
            )
        elif self.state is SimulationState.PAUSED:
            logger.info("Resuming simulation at t=%.2f", self.current_time)
        else:
            logger.warning("Cannot start simulation in state %s", self.state.value)
            return False
        self.state = SimulationState.RUNNING
        return True

    def pause(self) -> bool:
        if self.state is not SimulationState.RUNNING:
            logger.warning("Cannot pause simulation in state %s", self.state.value)
            return False
        self.state = SimulationState.PAUSED
        logger.info("Paused simulation at t=%.2f", self.current_time)
        return True

    def reset(self) -> None:
        """Stop stepping and clear all series; safe to call from any state."""
        if self.state is not SimulationState.IDLE or self.time_points:
            logger.info("Reset simulation")
        self.state = SimulationState.IDLE
        self.clock.reset()
        self.series = {}
        self.time_points = []
        self._last_values = {}

    def _init_series(self) -> None:
        self.clock.reset()
        self.time_points = []
        self._last_values = {}
        self.series = {gene.symbol: GeneTimeSeries.seeded(gene) for gene in self.selected_genes}

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def _step_gene(self, gene: Gene, series: GeneTimeSeries) -> LayerValues:
        params = self.parameters
        current_protein = series.last_protein(gene.baseline_protein)
        expression = hill_expression(
            params.tf_concentration,
            params.binding_affinity,
            params.hill_coefficient,
            gene.vmax,
            params.methylation_factor,
            params.mutation_severity,
        )
        mrna = add_expression_noise(expression, params.expression_noise, self.rng)
        protein = update_protein_level(
            current_protein,
            mrna,
            params.translation_efficiency,
            params.protein_degradation,
            self.clock.dt,
        )
        series.append(mrna, protein)
        return LayerValues(genomic=expression, transcriptomic=mrna, proteomic=protein)

    def tick(self) -> Optional[StepResult]:
        """Advance one time step if running; returns None otherwise."""
        if self.state is not SimulationState.RUNNING:
            return None

        values: Dict[str, LayerValues] = {}
        for gene in self.selected_genes:
            values[gene.symbol] = self._step_gene(gene, self.series[gene.symbol])

        now = self.clock.advance()
        self.time_points.append(now)
        self._last_values = values

        flows = compute_flows(values, self.selected_genes, self.selected_diseases, self.parameters)
        risks = compute_risks(values, self.selected_diseases, self.parameters, self.selected_genes)
        logger.debug("t=%.2f mean mRNA=%.4f mean protein=%.4f", now, flows.transcriptomic, flows.proteomic)

        completed = self.clock.is_terminal
        if completed:
            self._complete()
        return StepResult(time=now, values=values, flows=flows, risks=risks, completed=completed)

    def _complete(self) -> None:
        self.state = SimulationState.COMPLETED
        logger.info(
            "Simulation complete: t=%.2f, %d steps, %d genes",
            self.current_time,
            self.clock.step_count,
            len(self.selected_genes),
        )
        changes = self.impact_analysis()
        for listener in self._listeners:
            listener(self, changes)

    def run(self) -> List[StepResult]:
        """Start (or resume) and tick until the run completes."""
        if self.state is not SimulationState.RUNNING and not self.start():
            return []
        results: List[StepResult] = []
        while self.state is SimulationState.RUNNING:
            result = self.tick()
            if result is not None:
                results.append(result)
        return results

    # ------------------------------------------------------------------
    # Current state views
    # ------------------------------------------------------------------

    def current_values(self) -> Dict[str, LayerValues]:
        """Layer values from the most recent step (empty before the first)."""
        return dict(self._last_values)

    def flows(self) -> FlowSummary:
        return compute_flows(self._last_values, self.selected_genes, self.selected_diseases, self.parameters)

    def risks(self) -> List[DiseaseRiskResult]:
        return compute_risks(self._last_values, self.selected_diseases, self.parameters, self.selected_genes)

    def gene_contributions(self) -> Dict[str, Dict[str, float]]:
        """Per-disease, per-gene contribution scores for the latest step."""
        return gene_contributions(
            self._last_values, self.selected_diseases, self.selected_genes, self.parameters
        )
