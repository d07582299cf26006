# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import sys

from .constants import EXP_PHASE_YEARS, TONNES_PER_MT, FIRST_YEAR, LAST_YEAR
from .report import format_coefficients_table
from .shortcuts import fishcatchgrowth


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="FishCatchgrowthmodel",
        description="Fit a logistic growth curve to an annual wild fish catch table.",
    )
    parser.add_argument("csv", help="Table with year, wild catch, fish farming and total production columns.")
    parser.add_argument("--outdir", default=None, help="Write figures, CSV tables and report.md here.")
    parser.add_argument("--cutoff", type=int, default=EXP_PHASE_YEARS,
                        help="Early years treated as exponential when seeding (default: %(default)s).")
    parser.add_argument("--k-seed", dest="K_seed", type=float, default=None,
                        help="Carrying-capacity seed in million tonnes (default: largest observed catch).")
    parser.add_argument("--unit-divisor", type=float, default=TONNES_PER_MT,
                        help="Divide raw volumes by this (default: %(default)s, tonnes -> million tonnes).")
    parser.add_argument("--project-to", type=int, default=None, help="Extend the fitted curve to this year.")
    parser.add_argument("--strict-span", action="store_true",
                        help=f"Require exactly one row per year {FIRST_YEAR}-{LAST_YEAR}.")
    parser.add_argument("--sensitivity", type=int, nargs="+", default=None,
                        help="Also refit for these exponential-phase cutoffs.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        result = fishcatchgrowth(
            args.csv,
            n_years=args.cutoff,
            K_seed=args.K_seed,
            unit_divisor=args.unit_divisor,
            projection_end_year=args.project_to,
            export_to=args.outdir,
            sensitivity_cutoffs=args.sensitivity,
            span=(FIRST_YEAR, LAST_YEAR) if args.strict_span else None,
        )
    except (ValueError, FileNotFoundError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    print(format_coefficients_table(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
