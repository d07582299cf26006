# -*- coding: utf-8 -*-
"""
FishCatchgrowthmodel
====================
Logistic growth fit of the world wild fish catch series (1950–2012):
P(t) = K / (1 + A·exp(−k·t)), seeded from a log-linear regression on the
early, approximately exponential years.

Public API
----------
Core:
- load_catch_csv(...): Read and clean the annual production table (one row per year, million tonnes).
- seeds_from_exponential_phase(...): Starting values (K, A, k) from ln(catch) ~ t on the first n years.
- fit_logistic(...): Nonlinear least-squares fit; returns coefficients, summary and yearly series.
- predict(...): Fitted curve for arbitrary years (projection).

Reporting:
- build_report(...): Whole pipeline; figures, CSV tables and report.md.
- export_csv_results(...): CSV exporter (choose which tables to save and where).
- format_coefficients_table(...): Fixed-width parameter table.

Shortcuts:
- fishcatchgrowth(...): Convenience wrapper (+ optional cutoff sensitivity and export).

Sensitivity:
- ablation_seed_cutoff(...): Refit for several exponential-phase cutoffs.

Utilities:
- check_requirements(): Print versions and guidance for required packages.
"""
from .api import build_report, export_csv_results, check_requirements
from .dataset import load_catch_csv, clean_catch_table, validate_catch_table
from .calibrate import seeds_from_exponential_phase
from .core import fit_logistic, predict, goodness_of_fit
from .report import format_coefficients_table, render_report
from .shortcuts import fishcatchgrowth
from .ablation import ablation_seed_cutoff
