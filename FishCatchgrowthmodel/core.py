# -*- coding: utf-8 -*-
from __future__ import annotations
import math, warnings
from typing import Optional, Dict, Any, List, Iterable
from pathlib import Path
import numpy as np
import pandas as pd
from scipy import stats

from .models import logistic_curve, logistic_rate, logistic_initial_value, logistic_inflection
from .calibrate import seeds_from_exponential_phase
from .solvers import fit_curve
from .dataset import assert_required_columns
from .constants import (
    EXP_PHASE_YEARS, MAXFEV, MIN_SEED_R2, FAR_FROM_SEED_RATIO, YEAR, WILD, T_OFFSET, LOG_WILD,
)

PARAM_NAMES = ('K', 'A', 'k')

def _info(msg: str): print(f"[INFO] {msg}")
def _warn(msg: str): warnings.warn(msg)
def _err(msg: str):  raise ValueError(msg)

def goodness_of_fit(observed, fitted, n_params: int = 3) -> Dict[str, float]:
    obs = np.asarray(observed, dtype=float); fit = np.asarray(fitted, dtype=float)
    if obs.shape != fit.shape or obs.size == 0:
        _err("goodness_of_fit: observed and fitted must be non-empty and the same length.")
    resid = obs - fit
    ss_res = float(np.sum(resid ** 2))
    ss_tot = float(np.sum((obs - obs.mean()) ** 2))
    dof = obs.size - n_params
    return {
        'RSE': math.sqrt(ss_res / dof) if dof > 0 else float('nan'),
        'R2': 1.0 - ss_res / ss_tot if ss_tot > 0 else float('nan'),
        'RMSE': math.sqrt(ss_res / obs.size),
        'SS_res': ss_res,
        'dof': dof,
    }

def _coefficients_table(popt: np.ndarray, pcov: np.ndarray, dof: int) -> pd.DataFrame:
    with np.errstate(invalid='ignore'):
        se = np.sqrt(np.diag(pcov))
    rows = []
    for name, est, err in zip(PARAM_NAMES, popt, se):
        t_val = est / err if (err == err and err > 0 and math.isfinite(err)) else float('nan')
        p_val = 2.0 * stats.t.sf(abs(t_val), dof) if (t_val == t_val and dof > 0) else float('nan')
        rows.append({'Parameter': name, 'Estimate': float(est), 'Std_Error': float(err),
                     't_value': float(t_val), 'p_value': float(p_val)})
    return pd.DataFrame(rows)

def _far_from_seed(est: float, seed: float, ratio: float) -> bool:
    if seed == 0:
        return est != 0
    r = est / seed
    return r <= 0 or r > ratio or r < 1.0 / ratio

def predict(params: Dict[str, Any], years: Iterable[int]) -> pd.DataFrame:
    """Fitted curve and annual growth for arbitrary calendar years."""
    K, A, k = params['K'], params['A'], params['k']
    years = np.asarray(list(years), dtype=int)
    t = years - int(params['base_year'])
    return pd.DataFrame({
        YEAR: years, T_OFFSET: t,
        'Fitted_Mt': logistic_curve(t, K, A, k),
        'Growth_Mt_per_yr': logistic_rate(t, K, A, k),
    })

def fit_logistic(df: pd.DataFrame, seeds: Optional[Dict[str, float]] = None,
                 n_years: int = EXP_PHASE_YEARS, K_seed: Optional[float] = None,
                 maxfev: int = MAXFEV, min_seed_r2: float = MIN_SEED_R2,
                 far_ratio: float = FAR_FROM_SEED_RATIO) -> Dict[str, Any]:
    """
    Fit P(t) = K / (1 + A e^{-kt}) to the full wild-catch series.

    `seeds` (keys K, A, k) skips the log-linear seeding step; otherwise seeds
    come from the first `n_years` years. Estimates whose ratio to the seed
    falls outside [1/far_ratio, far_ratio] are flagged in `warnings`.
    Returns a dict with params, seeds, coefficients, summary, yearly, warnings.
    """
    assert_required_columns(df, (YEAR, WILD, T_OFFSET, LOG_WILD))
    if len(df) <= len(PARAM_NAMES):
        _err(f"fit_logistic: need more than {len(PARAM_NAMES)} observations, got {len(df)}.")
    warnings_list: List[str] = []

    if seeds is None:
        seeds = seeds_from_exponential_phase(df, n_years=n_years, K_seed=K_seed, min_r2=min_seed_r2)
        warnings_list.extend(seeds['warnings'])
        _info(f"Seeds from first {n_years} years: K={seeds['K']:.4g}, A={seeds['A']:.4g}, k={seeds['k']:.4g}.")
    else:
        missing = [p for p in PARAM_NAMES if p not in seeds]
        if missing:
            _err(f"fit_logistic: seeds missing {missing}.")
        seeds = {p: float(seeds[p]) for p in PARAM_NAMES}
        _info(f"Using supplied seeds: K={seeds['K']:.4g}, A={seeds['A']:.4g}, k={seeds['k']:.4g}.")

    t = df[T_OFFSET].to_numpy(dtype=float)
    y = df[WILD].to_numpy(dtype=float)
    p0 = [seeds[p] for p in PARAM_NAMES]
    popt, pcov, solver_warnings = fit_curve(logistic_curve, t, y, p0, maxfev=maxfev)
    for msg in solver_warnings:
        msg = f"Covariance of the fit could not be estimated ({msg})."
        warnings_list.append(msg); _warn(msg)
    K, A, k = (float(v) for v in popt)
    if not (K > 0 and A > -1.0):
        _err(f"fit_logistic: solver converged to an invalid curve (K={K:.4g}, A={A:.4g}). "
             "Try different seed values.")
    if k <= 0:
        msg = f"Fitted growth rate k={k:.4g} is not positive; the curve is not logistic growth."
        warnings_list.append(msg); _warn(msg)
    far = [f"{name}: seed {seeds[name]:.4g} -> {est:.4g}" for name, est in zip(PARAM_NAMES, (K, A, k))
           if _far_from_seed(est, seeds[name], far_ratio)]
    if far:
        msg = f"Fit ended far from its seeds ({'; '.join(far)}); check the seeding window."
        warnings_list.append(msg); _warn(msg)

    base_year = int(df[YEAR].iloc[0] - df[T_OFFSET].iloc[0])
    fitted = logistic_curve(t, K, A, k)
    gof = goodness_of_fit(y, fitted, n_params=len(PARAM_NAMES))
    coefficients = _coefficients_table(popt, pcov, gof['dof'])
    _info(f"Fit converged: K={K:.4g}, A={A:.4g}, k={k:.4g}, RSE={gof['RSE']:.4g}.")

    yearly = pd.DataFrame({
        YEAR: df[YEAR].to_numpy(), T_OFFSET: df[T_OFFSET].to_numpy(),
        'Observed_Mt': y, 'Fitted_Mt': fitted, 'Residual_Mt': y - fitted,
        'Growth_Mt_per_yr': logistic_rate(t, K, A, k),
    })

    if A > 0 and k > 0:
        t_star, P_star = logistic_inflection(K, A, k)
        infl_year = base_year + t_star
    else:
        t_star = P_star = infl_year = float('nan')

    params = {
        'K': K, 'A': A, 'k': k, 'base_year': base_year,
        'first_year': int(df[YEAR].min()), 'last_year': int(df[YEAR].max()), 'n_obs': int(len(df)),
    }
    summary = pd.DataFrame([{
        'Model': 'Logistic',
        'K_Mt': K, 'A': A, 'k_per_year': k,
        'P0_Mt': logistic_initial_value(K, A),
        'Observed_first_Mt': float(y[0]),
        'Inflection_year': infl_year,
        'Inflection_Mt': P_star,
        'Max_growth_Mt_per_yr': k * K / 4.0,
        'Fitted_last_Mt': float(fitted[-1]),
        'Share_of_K_last_%': float(fitted[-1]) / K * 100.0,
        'RSE': gof['RSE'], 'R2': gof['R2'], 'RMSE': gof['RMSE'], 'n': int(len(df)), 'dof': gof['dof'],
        'K_seed': seeds['K'], 'A_seed': seeds['A'], 'k_seed': seeds['k'],
    }])
    return {'params': params, 'seeds': seeds, 'coefficients': coefficients, 'summary': summary,
            'yearly': yearly, 'warnings': warnings_list}

def export_csvs_single(result: Dict[str, Any], outdir: str) -> Dict[str, str]:
    out = Path(outdir); out.mkdir(parents=True, exist_ok=True)
    fitted_csv = str(out / 'fitted_by_year.csv')
    coef_csv = str(out / 'coefficients.csv')
    summary_csv = str(out / 'summary_table.csv')
    result['yearly'].to_csv(fitted_csv, index=False)
    result['coefficients'].to_csv(coef_csv, index=False)
    result['summary'].to_csv(summary_csv, index=False)
    return {'fitted_csv': fitted_csv, 'coefficients_csv': coef_csv, 'summary_csv': summary_csv}
