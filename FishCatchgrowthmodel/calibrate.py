# -*- coding: utf-8 -*-
from __future__ import annotations
import math
import warnings
from typing import Optional, Dict, Any
import pandas as pd
from .solvers import fit_line
from .constants import EXP_PHASE_YEARS, MIN_SEED_R2, T_OFFSET, LOG_WILD, WILD

# ---- seeds from the early, approximately exponential segment ----
def exponential_phase(df: pd.DataFrame, n_years: int = EXP_PHASE_YEARS) -> pd.DataFrame:
    if n_years < 2:
        raise ValueError("exponential_phase: n_years must be >= 2.")
    t0 = df[T_OFFSET].min()
    return df.loc[df[T_OFFSET] < t0 + n_years]

def seeds_from_exponential_phase(df: pd.DataFrame, n_years: int = EXP_PHASE_YEARS,
                                 K_seed: Optional[float] = None, min_r2: float = MIN_SEED_R2) -> Dict[str, Any]:
    """
    Starting values for the logistic fit from a log-linear regression on the
    first `n_years` years:
        ln P(t) ≈ ln P0 + k t   (valid while P << K)
    so k_seed = slope, P0_seed = exp(intercept), and with K_seed defaulting to
    the largest observed catch, A_seed = K_seed / P0_seed - 1.
    """
    early = exponential_phase(df, n_years)
    if len(early) < 2:
        raise ValueError(f"seeds_from_exponential_phase: only {len(early)} row(s) inside the "
                         f"{n_years}-year window; need at least 2.")
    line = fit_line(early[T_OFFSET].to_numpy(), early[LOG_WILD].to_numpy())
    k_seed = line['slope']
    if not k_seed > 0:
        raise ValueError(f"seeds_from_exponential_phase: early-phase slope {k_seed:.4g} is not positive; "
                         "the window does not look like exponential growth. Try another cutoff.")
    P0_seed = math.exp(line['intercept'])
    if K_seed is None:
        K_seed = float(df[WILD].max())
    if K_seed <= P0_seed:
        raise ValueError(f"seeds_from_exponential_phase: K_seed={K_seed:.4g} must exceed the "
                         f"extrapolated initial value P0={P0_seed:.4g}.")
    A_seed = K_seed / P0_seed - 1.0
    seed_warnings = []
    if line['r2'] == line['r2'] and line['r2'] < min_r2:
        msg = (f"Early-phase log-linear fit is weak (R²={line['r2']:.3f} < {min_r2}); "
               "seeds may be poor.")
        seed_warnings.append(msg); warnings.warn(msg)
    return {
        'K': float(K_seed), 'A': float(A_seed), 'k': float(k_seed),
        'P0': P0_seed, 'n_years': int(n_years), 'n_points': line['n'],
        'slope': line['slope'], 'intercept': line['intercept'], 'r2': line['r2'],
        'se_slope': line['se_slope'], 'warnings': seed_warnings,
    }
