"""Stochastic simulation utilities.

Gaussian noise for the transcriptomic layer. All draws come from an
explicitly owned numpy Generator so a seeded session reproduces the same
mRNA trajectories.
"""

from __future__ import annotations

import math

import numpy as np


# -----------------------------------------------------------------------------
# Random source
# -----------------------------------------------------------------------------

def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create the generator owned by one simulation session."""
    return np.random.default_rng(seed)


# -----------------------------------------------------------------------------
# Gaussian sampling
# -----------------------------------------------------------------------------

def gaussian(rng: np.random.Generator, mean: float = 0.0, stdev: float = 1.0) -> float:
    """Draw one normal sample with the Box-Muller transform.

    z = sqrt(-2 ln u1) * cos(2 pi u2) with u1 in (0, 1] and u2 in [0, 1).
    """
    u1 = 1.0 - float(rng.random())
    u2 = float(rng.random())
    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return mean + z0 * stdev


def add_expression_noise(expression: float, sigma: float, rng: np.random.Generator) -> float:
    """Perturb an expression level multiplicatively to get an mRNA estimate.

    T = E * (1 + eps), eps ~ N(0, sigma), floored at zero. With sigma == 0
    no draws are made and E is returned unchanged.
    """
    if sigma == 0:
        return max(0.0, expression)
    eps = gaussian(rng, 0.0, sigma)
    return max(0.0, expression * (1.0 + eps))
