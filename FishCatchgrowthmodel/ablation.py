# -*- coding: utf-8 -*-
"""
Sensitivity of the fit to the exponential-phase cutoff.

The number of early years treated as exponential when seeding the solver is a
judgment call. For each cutoff n:
    1. regress ln(catch) on t over the first n years -> k_seed, A_seed
    2. fit the logistic curve to the full series from those seeds
and collect seeds, estimates and residual error in one table. A cutoff whose
seeds are invalid or whose fit fails to converge is kept as a row with
converged=False and the error message, so one bad cutoff does not abort the sweep.
"""
from __future__ import annotations
from typing import Dict, Any, Iterable, Optional
from pathlib import Path
import pandas as pd

from .core import fit_logistic, export_csvs_single
from .constants import MAXFEV

def _info(msg: str): print(f"[INFO] {msg}")

def ablation_seed_cutoff(
    df: pd.DataFrame,
    cutoffs: Iterable[int] = (20, 30, 40, 50),
    K_seed: Optional[float] = None,
    maxfev: int = MAXFEV,
    export_to: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Returns:
      {'results': {label: result_dict, ...},   # converged cutoffs only
       'global_summary': DataFrame,            # one row per cutoff
       'global_summary_csv': '.../sensitivity_cutoffs.csv'  # only when export_to
      }
    """
    results = {}
    rows = []
    for n in cutoffs:
        n = int(n)
        label = f"cutoff_{n}y"
        row = {'Label': label, 'Cutoff_years': n}
        try:
            res = fit_logistic(df, n_years=n, K_seed=K_seed, maxfev=maxfev)
        except ValueError as exc:
            _info(f"Cutoff {n}: no fit ({exc}).")
            row.update({'converged': False, 'error': str(exc)})
            rows.append(row)
            continue
        seeds, params, s = res['seeds'], res['params'], res['summary'].iloc[0]
        row.update({
            'k_seed': seeds['k'], 'A_seed': seeds['A'], 'K_seed': seeds['K'], 'seed_r2': seeds['r2'],
            'K': params['K'], 'A': params['A'], 'k': params['k'],
            'RSE': s['RSE'], 'R2': s['R2'], 'converged': True, 'error': '',
        })
        res['label'] = label
        results[label] = res
        rows.append(row)

    global_summary = pd.DataFrame(rows)

    if export_to is not None:
        base = Path(export_to); base.mkdir(parents=True, exist_ok=True)
        written = {}
        for label, res in results.items():
            written[label] = export_csvs_single(res, str(base / label))
        global_path = base / 'sensitivity_cutoffs.csv'
        global_summary.to_csv(global_path, index=False)
        return {'results': results, 'written': written, 'global_summary_csv': str(global_path),
                'global_summary': global_summary}
    return {'results': results, 'global_summary': global_summary}
