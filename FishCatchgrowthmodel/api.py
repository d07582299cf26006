# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Optional, Dict, Any, Iterable, Union
from pathlib import Path

def check_requirements(raise_on_missing: bool = False) -> Dict[str, Optional[str]]:
    info = {}
    for name, why in (('pandas', 'data tables'), ('numpy', 'arrays'),
                      ('scipy', 'nonlinear least squares'), ('matplotlib', 'figures')):
        try:
            mod = __import__(name)
            info[name] = getattr(mod, '__version__', 'present')
        except ImportError:
            info[name] = None
            print(f"[ERROR] {name} is required ({why}). Install via: pip install {name}")
            if raise_on_missing: raise
    return info

from .constants import EXP_PHASE_YEARS, TONNES_PER_MT, MAXFEV
from .dataset import load_catch_csv
from .core import fit_logistic, export_csvs_single
from .report import render_report

def _info(msg: str): print(f"[INFO] {msg}")

def build_report(
    csv_path: Union[str, Path],
    outdir: Optional[str] = None,
    n_years: int = EXP_PHASE_YEARS,
    K_seed: Optional[float] = None,
    seeds: Optional[Dict[str, float]] = None,
    unit_divisor: float = TONNES_PER_MT,
    base_year: Optional[int] = None,
    span: Optional[tuple] = None,
    projection_end_year: Optional[int] = None,
    maxfev: int = MAXFEV,
    sensitivity_df=None,
) -> Dict[str, Any]:
    """
    load -> clean -> plot (raw, log) -> seed -> fit -> tabulate -> plot fit.
    Without `outdir` nothing is written and the result carries the data,
    fit and rendered report text. With `outdir`, figures, CSV tables and
    report.md are saved there and their paths returned under 'written'.
    """
    check_requirements(raise_on_missing=True)
    from .plotting import plot_raw_series, plot_log_series, plot_fit, save_figure
    import matplotlib.pyplot as plt

    start_year, end_year = span if span is not None else (None, None)
    data = load_catch_csv(csv_path, unit_divisor=unit_divisor, base_year=base_year,
                          start_year=start_year, end_year=end_year)
    result = fit_logistic(data, seeds=seeds, n_years=n_years, K_seed=K_seed, maxfev=maxfev)
    result['data'] = data

    figs = {
        'Raw series': ('raw_series.png', plot_raw_series(data)),
        'Log wild catch': ('log_wild_catch.png', plot_log_series(data, result['seeds'])),
        'Logistic fit': ('logistic_fit.png', plot_fit(data, result, end_year=projection_end_year)),
    }
    written: Dict[str, str] = {}
    fig_paths: Dict[str, str] = {}
    try:
        if outdir is not None:
            out = Path(outdir); out.mkdir(parents=True, exist_ok=True)
            for title, (name, fig) in figs.items():
                save_figure(fig, out / name)
                fig_paths[title] = str(out / name)
            written.update(export_csv_results(result, str(out), include=('fitted', 'coefficients', 'summary', 'sensitivity'),
                                              sensitivity_df=sensitivity_df))
    finally:
        for _, fig in figs.values():
            plt.close(fig)

    result['report'] = render_report(result, figures=fig_paths or None, sensitivity=sensitivity_df)
    if outdir is not None:
        report_path = Path(outdir) / 'report.md'
        report_path.write_text(result['report'], encoding='utf-8')
        written['report_md'] = str(report_path)
        written.update({f'figure_{Path(p).stem}': p for p in fig_paths.values()})
        _info(f"Report written to {report_path}.")
    result['written'] = written
    return result

def export_csv_results(
    result: Dict[str, Any],
    outdir: str,
    include: Iterable[str] = ('fitted', 'coefficients', 'summary', 'sensitivity'),
    sensitivity_df=None,
    sensitivity_filename: str = 'sensitivity_cutoffs.csv',
) -> Dict[str, str]:
    out = Path(outdir); out.mkdir(parents=True, exist_ok=True)
    written: Dict[str, str] = {}
    if any(k in include for k in ('fitted', 'coefficients', 'summary')):
        paths = export_csvs_single(result, str(out))
        for key, name in (('fitted', 'fitted_csv'), ('coefficients', 'coefficients_csv'), ('summary', 'summary_csv')):
            if key not in include:
                Path(paths[name]).unlink(missing_ok=True)
                paths.pop(name, None)
        written.update(paths)

    if 'sensitivity' in include:
        if sensitivity_df is None:
            _info("No sensitivity table provided. Skipping sensitivity export.")
        else:
            path = out / sensitivity_filename
            sensitivity_df.to_csv(path, index=False)
            written['sensitivity_csv'] = str(path)
    return written
