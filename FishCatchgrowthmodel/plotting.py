# -*- coding: utf-8 -*-
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .models import exponential_curve
from .calibrate import exponential_phase
from .core import predict
from .constants import YEAR, WILD, FARMED, TOTAL, T_OFFSET, LOG_WILD


def save_figure(fig, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=300, bbox_inches="tight")


def plot_raw_series(df: pd.DataFrame):
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(df[YEAR], df[WILD], marker="o", markersize=3, label="Wild catch")
    ax.plot(df[YEAR], df[FARMED], marker="s", markersize=3, label="Fish farming")
    ax.plot(df[YEAR], df[TOTAL], linestyle="--", label="Total production")
    ax.set_xlabel("Year")
    ax.set_ylabel("Million tonnes")
    ax.set_title("World fish production")
    ax.legend()
    ax.grid(alpha=0.3)
    return fig


def plot_log_series(df: pd.DataFrame, seeds: Optional[Dict[str, Any]] = None):
    """Log wild catch against t; overlays the seeding regression when seeds carry one."""
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.scatter(df[T_OFFSET], df[LOG_WILD], s=12, label="ln(wild catch)")
    if seeds is not None and "intercept" in seeds:
        early = exponential_phase(df, seeds["n_years"])
        t = early[T_OFFSET].to_numpy(dtype=float)
        ax.plot(t, seeds["intercept"] + seeds["slope"] * t, color="C3",
                label=f"linear fit, first {seeds['n_years']} years (slope {seeds['slope']:.4f})")
        ax.axvline(t.max(), color="grey", linestyle=":", linewidth=1)
    ax.set_xlabel(f"Years since {int(df[YEAR].iloc[0] - df[T_OFFSET].iloc[0])}")
    ax.set_ylabel("ln(million tonnes)")
    ax.set_title("Wild catch, log scale")
    ax.legend()
    ax.grid(alpha=0.3)
    return fig


def plot_fit(df: pd.DataFrame, result: Dict[str, Any], end_year: Optional[int] = None,
             show_seed_curve: bool = False):
    params = result["params"]
    last = max(int(df[YEAR].max()), int(end_year) if end_year is not None else 0)
    years = np.arange(int(df[YEAR].min()), last + 1)
    curve = predict(params, years)

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.scatter(df[YEAR], df[WILD], s=14, color="C0", label="Observed wild catch")
    ax.plot(curve[YEAR], curve["Fitted_Mt"], color="C3",
            label=f"Logistic fit (K={params['K']:.1f}, A={params['A']:.2f}, k={params['k']:.3f})")
    ax.axhline(params["K"], color="grey", linestyle="--", linewidth=1, label="Carrying capacity K")
    if show_seed_curve and "P0" in result["seeds"]:
        seeds = result["seeds"]
        t = years - params["base_year"]
        ax.plot(years, exponential_curve(t, seeds["P0"], seeds["k"]), color="C2", linestyle=":",
                label="Exponential seed curve")
        ax.set_ylim(0, params["K"] * 1.15)
    if end_year is not None and end_year > int(df[YEAR].max()):
        ax.axvspan(int(df[YEAR].max()), end_year, color="grey", alpha=0.08, label="Projection")
    ax.set_xlabel("Year")
    ax.set_ylabel("Million tonnes")
    ax.set_title("Wild catch: logistic growth fit")
    ax.legend()
    ax.grid(alpha=0.3)
    return fig
