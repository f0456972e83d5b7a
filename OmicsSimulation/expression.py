"""Transcription-factor driven gene activation (Hill equation).

    E = Vmax * TF^n / (Kd^n + TF^n) * (1 - methylation) * (1 - mutation)

TF is in nanomolar and Kd is given in micromolar, so Kd is scaled by 1000
before use. Methylation and mutation act as independent multiplicative
suppressors.
"""

from __future__ import annotations

import math

KD_UM_TO_NM = 1000.0

# exp(-_LOG_RATIO_CUTOFF) is far below double precision relative to 1.
_LOG_RATIO_CUTOFF = 700.0


def hill_fraction(tf: float, kd_nm: float, n: float) -> float:
    """Fractional activation TF^n / (Kd^n + TF^n) in [0, 1].

    Evaluated as 1 / (1 + (Kd/TF)^n) in log space so that extreme
    concentrations saturate instead of overflowing.
    """
    if tf <= 0:
        return 0.0
    if kd_nm <= 0:
        return 1.0
    log_ratio = n * (math.log(kd_nm) - math.log(tf))
    if log_ratio > _LOG_RATIO_CUTOFF:
        return 0.0
    if log_ratio < -_LOG_RATIO_CUTOFF:
        return 1.0
    return 1.0 / (1.0 + math.exp(log_ratio))


def hill_expression(
    tf: float,
    kd: float,
    n: float,
    vmax: float,
    methylation: float,
    mutation: float,
) -> float:
    """Gene expression level for one gene; never negative.

    A zero TF concentration gives zero expression for any Kd, including the
    0/0 case Kd = TF = 0.
    """
    kd_nm = kd * KD_UM_TO_NM
    expression = vmax * hill_fraction(tf, kd_nm, n)
    expression *= (1.0 - methylation) * (1.0 - mutation)
    return max(0.0, expression)
