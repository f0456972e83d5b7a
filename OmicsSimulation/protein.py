"""Protein abundance dynamics.

    dP/dt = eta * T - delta * P

integrated with one explicit Euler step per simulator tick. The result is
floored at zero; large delta * dt can overshoot below zero before the floor
is applied, which is accepted rather than corrected.
"""

from __future__ import annotations


def update_protein_level(
    protein: float,
    mrna: float,
    eta: float,
    degradation: float,
    dt: float,
) -> float:
    """Advance protein abundance by one time step of length dt."""
    d_protein = (eta * mrna - degradation * protein) * dt
    return max(0.0, protein + d_protein)
