"""I/O utilities for simulation input/output.

Handles loading the YAML run configuration, importing custom gene tables,
and writing time series and disease-risk results.
"""

from __future__ import annotations

import csv
import json
import os
import pathlib
from typing import TYPE_CHECKING, Any, List, Mapping, Sequence

import yaml

from OmicsSimulation.config import SimulationConfig, SimulationParameters
from OmicsSimulation.gene import Gene
from OmicsSimulation.presets import get_preset
from OmicsSimulation.risk import DiseaseRiskResult

if TYPE_CHECKING:
    from OmicsSimulation.simulator import SimulationSession


# -----------------------------------------------------------------------------
# Configuration loading
# -----------------------------------------------------------------------------

def _resolve_path(value: str, base_dir: pathlib.Path) -> pathlib.Path:
    path = pathlib.Path(value)
    if not path.is_absolute():
        path = base_dir / path
    return path.resolve()


def _check_readable(path: pathlib.Path, label: str) -> None:
    if not path.exists():
        raise ValueError(f"{label} not found: {path}")
    if not path.is_file():
        raise ValueError(f"{label} is not a file: {path}")
    if not os.access(path, os.R_OK):
        raise ValueError(f"{label} is not readable: {path}")


def _string_list(raw: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value = raw.get(key) or []
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValueError(f"{key} must be a list")
    return tuple(str(v) for v in value)


def load_simulation_config(path: str | pathlib.Path) -> SimulationConfig:
    """Load and validate simulation configuration from YAML.

    A `preset` is applied first, then any `parameters` mapping overrides
    individual values.
    """
    path = pathlib.Path(path)
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must contain a YAML mapping: {path}")

    base_dir = path.resolve().parent

    preset = raw.get("preset")
    base_params = get_preset(str(preset)) if preset is not None else SimulationParameters()
    raw_params = raw.get("parameters") or {}
    if not isinstance(raw_params, dict):
        raise ValueError("parameters must be a mapping")
    params = SimulationParameters.from_mapping(raw_params, base=base_params)

    genes_path = raw.get("genes_path")
    if genes_path is not None:
        genes_path = _resolve_path(str(genes_path), base_dir)
        _check_readable(genes_path, "genes_path")
    out_path = raw.get("out_path")
    if out_path is not None:
        out_path = _resolve_path(str(out_path), base_dir)
    risk_out_path = raw.get("risk_out_path")
    if risk_out_path is not None:
        risk_out_path = _resolve_path(str(risk_out_path), base_dir)

    random_seed = raw.get("random_seed")

    cfg = SimulationConfig(
        dt=float(raw.get("dt", 0.1)),
        max_time=float(raw.get("max_time", 50.0)),
        random_seed=int(random_seed) if random_seed is not None else None,
        selected_genes=_string_list(raw, "selected_genes"),
        selected_diseases=_string_list(raw, "selected_diseases"),
        parameters=params,
        preset=str(preset) if preset is not None else None,
        genes_path=str(genes_path) if genes_path is not None else None,
        out_path=str(out_path) if out_path is not None else None,
        risk_out_path=str(risk_out_path) if risk_out_path is not None else None,
    )
    return cfg


# -----------------------------------------------------------------------------
# Gene table import
# -----------------------------------------------------------------------------

_GENE_FIELDS = {
    "symbol": "symbol",
    "name": "name",
    "description": "description",
    "baseline_tpm": "baselineTPM",
    "vmax": "Vmax",
    "baseline_protein": "baselineProtein",
    "default_eta": "defaultEta",
}
_REQUIRED_GENE_FIELDS = ("symbol", "baseline_tpm", "vmax", "baseline_protein")
DEFAULT_ETA = 0.7


def _gene_value(record: Mapping[str, Any], key: str) -> Any:
    """Look up a gene field by snake_case name or its camelCase alias."""
    if key in record and record[key] not in (None, ""):
        return record[key]
    alias = _GENE_FIELDS[key]
    if alias in record and record[alias] not in (None, ""):
        return record[alias]
    return None


def _gene_from_record(record: Mapping[str, Any], where: str) -> Gene:
    missing = [k for k in _REQUIRED_GENE_FIELDS if _gene_value(record, k) is None]
    if missing:
        raise ValueError(f"Missing gene fields {missing} in {where}")
    symbol = str(_gene_value(record, "symbol")).strip()
    eta = _gene_value(record, "default_eta")
    try:
        gene = Gene(
            symbol=symbol,
            name=str(_gene_value(record, "name") or symbol),
            description=str(_gene_value(record, "description") or ""),
            baseline_tpm=float(_gene_value(record, "baseline_tpm")),
            vmax=float(_gene_value(record, "vmax")),
            baseline_protein=float(_gene_value(record, "baseline_protein")),
            default_eta=float(eta) if eta is not None else DEFAULT_ETA,
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid numeric gene value in {where}: {exc}") from exc
    gene.validate()
    return gene


def load_gene_table(path: str | pathlib.Path) -> List[Gene]:
    """Read custom gene records from CSV or JSON (a list of objects).

    Columns may use snake_case (baseline_tpm) or the camelCase names of the
    browser export (baselineTPM, Vmax, baselineProtein, defaultEta).
    """
    path = pathlib.Path(path)
    genes: List[Gene] = []
    if path.suffix.lower() == ".json":
        with open(path, "r", encoding="utf-8") as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Error parsing gene JSON {path}: {exc}") from exc
        if not isinstance(payload, list):
            raise ValueError(f"Gene JSON must contain a list of records: {path}")
        for idx, record in enumerate(payload):
            if not isinstance(record, dict):
                raise ValueError(f"Gene record {idx} in {path} is not an object")
            genes.append(_gene_from_record(record, f"{path} record {idx}"))
    elif path.suffix.lower() == ".csv":
        with open(path, "r", newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            fieldnames = [name.strip() for name in (reader.fieldnames or [])]
            reader.fieldnames = fieldnames
            for line_no, row in enumerate(reader, start=2):
                if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
                    continue
                record = {k: (v.strip() if isinstance(v, str) else v) for k, v in row.items()}
                genes.append(_gene_from_record(record, f"{path} line {line_no}"))
    else:
        raise ValueError(f"Unsupported gene table format (use .csv or .json): {path}")

    if not genes:
        raise ValueError(f"No gene records found in {path}")
    symbols = [g.symbol for g in genes]
    if len(set(symbols)) != len(symbols):
        raise ValueError(f"Duplicate gene symbols in {path}")
    return genes


# -----------------------------------------------------------------------------
# Time series export
# -----------------------------------------------------------------------------

def timeseries_rows(session: "SimulationSession") -> List[List[str]]:
    """Rows of the time series table, header first.

    Row i pairs the time after step i + 1 with mrna[i] and protein[i]; the
    protein series starts with the seeded baseline, so protein[i] is the
    level entering that step. Missing samples are written as 0.
    """
    if not session.time_points:
        raise ValueError("No simulation data to export")
    header = ["Time"]
    for gene in session.selected_genes:
        header.extend([f"{gene.symbol}_mRNA", f"{gene.symbol}_Protein"])
    rows = [header]
    for i, t in enumerate(session.time_points):
        row = [f"{t:.2f}"]
        for gene in session.selected_genes:
            series = session.series[gene.symbol]
            mrna = series.mrna[i] if i < len(series.mrna) else 0.0
            protein = series.protein[i] if i < len(series.protein) else 0.0
            row.extend([f"{mrna:.4f}", f"{protein:.4f}"])
        rows.append(row)
    return rows


def save_timeseries_csv(session: "SimulationSession", path: str | pathlib.Path) -> None:
    """Save per-gene mRNA/protein time series to CSV."""
    rows = timeseries_rows(session)
    path_obj = pathlib.Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    with open(path_obj, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerows(rows)


# -----------------------------------------------------------------------------
# Risk export
# -----------------------------------------------------------------------------

def risk_records(results: Sequence[DiseaseRiskResult]) -> List[dict]:
    return [
        {
            "name": r.name,
            "risk": r.risk,
            "riskClass": r.risk_class,
            "contributions": r.contributions.as_dict(),
        }
        for r in results
    ]


def save_risk_json(results: Sequence[DiseaseRiskResult], path: str | pathlib.Path) -> None:
    """Save per-disease risk results to JSON."""
    path_obj = pathlib.Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    with open(path_obj, "w", encoding="utf-8") as f:
        json.dump(risk_records(results), f, indent=2)
