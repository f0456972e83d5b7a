from __future__ import annotations

import argparse
import logging
from typing import Sequence

from OmicsSimulation.catalog import default_catalog
from OmicsSimulation.config import SimulationParameters
from OmicsSimulation.io import (
    load_gene_table,
    load_simulation_config,
    save_risk_json,
    save_timeseries_csv,
)
from OmicsSimulation.simulator import SimulationSession, SimulationState
from OmicsSimulation.stochastic import make_rng

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run multi-omics gene-regulation simulation.")
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to simulation YAML config (default: config.yaml)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override random_seed from the config",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sim_config = load_simulation_config(args.config)

    catalog = default_catalog()
    if sim_config.genes_path is not None:
        imported = catalog.merge_genes(load_gene_table(sim_config.genes_path))
        logger.info("Imported %d gene records from %s", imported, sim_config.genes_path)

    seed = args.seed if args.seed is not None else sim_config.random_seed
    session = SimulationSession(catalog, config=sim_config, rng=make_rng(seed))
    # Impact summary compares the configured parameters with the defaults.
    session.previous_parameters = SimulationParameters()

    session.run()
    if session.state is not SimulationState.COMPLETED:
        raise ValueError("Simulation did not run; select at least one gene in selected_genes")

    if sim_config.out_path is not None:
        save_timeseries_csv(session, sim_config.out_path)
        print(f"Wrote {len(session.time_points)} time points to {sim_config.out_path}")

    risks = session.risks()
    if sim_config.risk_out_path is not None:
        save_risk_json(risks, sim_config.risk_out_path)
        print(f"Wrote disease risks to {sim_config.risk_out_path}")

    print(f"Simulated {session.current_time:.1f} h for {len(session.selected_genes)} genes")
    for result in risks:
        c = result.contributions
        print(
            f"  {result.name:<24s} {result.risk:6.1f}%  ({result.risk_class})  "
            f"G={c.genomic:+.3f} T={c.transcriptomic:+.3f} P={c.proteomic:+.3f}"
        )

    changes = session.impact_analysis()
    if changes:
        print("Parameter changes vs. defaults:")
        for change in changes[:5]:
            print(f"  {change.label:<24s} {change.percent_change:8.1f}%  {change.impact}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
