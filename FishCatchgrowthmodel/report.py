# -*- coding: utf-8 -*-
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import pandas as pd


def format_coefficients_table(result: Dict[str, Any], digits: int = 4) -> str:
    coef = result['coefficients'].copy()
    fmt = lambda v: f"{v:.{digits}g}" if v == v else "NA"
    for col in ('Estimate', 'Std_Error', 't_value'):
        coef[col] = coef[col].map(fmt)
    coef['p_value'] = coef['p_value'].map(lambda v: "NA" if v != v else ("<2e-16" if v < 2e-16 else f"{v:.3g}"))
    coef.columns = ['Parameter', 'Estimate', 'Std. Error', 't value', 'Pr(>|t|)']
    return coef.to_string(index=False)


def _markdown_table(df: pd.DataFrame) -> str:
    header = "| " + " | ".join(map(str, df.columns)) + " |"
    rule = "|" + "|".join("---" for _ in df.columns) + "|"
    rows = ["| " + " | ".join(str(v) for v in row) + " |" for row in df.itertuples(index=False)]
    return "\n".join([header, rule, *rows])


def render_report(result: Dict[str, Any], figures: Optional[Mapping[str, str]] = None,
                  sensitivity: Optional[pd.DataFrame] = None) -> str:
    params, seeds = result['params'], result['seeds']
    s = result['summary'].iloc[0]
    lines = [
        "# Wild fish catch: logistic growth fit",
        "",
        f"Data: {params['n_obs']} annual observations, {params['first_year']}–{params['last_year']} "
        f"(t = year − {params['base_year']}). Units: million tonnes.",
        "",
        "Model: P(t) = K / (1 + A·exp(−k·t)), fitted by nonlinear least squares.",
        "",
        "## Starting values",
        "",
    ]
    if 'n_years' in seeds:
        lines += [
            f"Linear regression of ln(catch) on t over the first {seeds['n_years']} years "
            f"(R² = {seeds['r2']:.4f}): slope {seeds['slope']:.4f}, intercept {seeds['intercept']:.4f}.",
            "",
        ]
    lines += [
        f"K₀ = {seeds['K']:.4g}, A₀ = {seeds['A']:.4g}, k₀ = {seeds['k']:.4g}",
        "",
        "## Coefficients",
        "",
        "```",
        format_coefficients_table(result),
        "```",
        "",
        f"Residual standard error: {s['RSE']:.4g} on {int(s['dof'])} degrees of freedom; "
        f"R² = {s['R2']:.4f}.",
        "",
        f"Fitted P(0) = {s['P0_Mt']:.4g} (observed {s['Observed_first_Mt']:.4g}); "
        f"inflection in {s['Inflection_year']:.1f} at {s['Inflection_Mt']:.4g}; "
        f"{params['last_year']} fit is {s['Share_of_K_last_%']:.1f}% of K.",
        "",
    ]
    if result['warnings']:
        lines += ["## Warnings", ""] + [f"- {w}" for w in result['warnings']] + [""]
    if sensitivity is not None and not sensitivity.empty:
        cols = [c for c in ('Cutoff_years', 'k_seed', 'A_seed', 'K', 'A', 'k', 'RSE', 'converged')
                if c in sensitivity.columns]
        lines += ["## Sensitivity to the exponential-phase cutoff", "",
                  _markdown_table(sensitivity[cols].round(4)), ""]
    if figures:
        lines += ["## Figures", ""]
        for title, path in figures.items():
            lines += [f"![{title}]({Path(path).name})", ""]
    return "\n".join(lines)
