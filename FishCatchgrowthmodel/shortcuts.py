# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Optional, Dict, Any, Iterable, Union
from pathlib import Path
from .api import build_report
from .ablation import ablation_seed_cutoff
from .dataset import load_catch_csv
from .constants import EXP_PHASE_YEARS, TONNES_PER_MT

def fishcatchgrowth(
    csv_path: Union[str, Path],
    n_years: int = EXP_PHASE_YEARS,
    K_seed: Optional[float] = None,
    seeds: Optional[Dict[str, float]] = None,
    unit_divisor: float = TONNES_PER_MT,
    projection_end_year: Optional[int] = None,
    span: Optional[tuple] = None,
    export_to: Optional[str] = None,
    sensitivity_cutoffs: Optional[Iterable[int]] = None,
):
    sensitivity_df = None
    if sensitivity_cutoffs is not None:
        data = load_catch_csv(csv_path, unit_divisor=unit_divisor,
                              start_year=span[0] if span else None, end_year=span[1] if span else None)
        sensitivity_df = ablation_seed_cutoff(data, cutoffs=sensitivity_cutoffs, K_seed=K_seed)['global_summary']
    result = build_report(csv_path, outdir=export_to, n_years=n_years, K_seed=K_seed, seeds=seeds,
                          unit_divisor=unit_divisor, span=span, projection_end_year=projection_end_year,
                          sensitivity_df=sensitivity_df)
    result['sensitivity'] = sensitivity_df
    return result
