# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Callable, Dict, Sequence, Tuple
import warnings
import numpy as np
from scipy import stats
from scipy.optimize import curve_fit, OptimizeWarning

def is_finite(x: float) -> bool:
    return x == x and abs(x) != float('inf')

def fit_line(x: Sequence[float], y: Sequence[float]) -> Dict[str, float]:
    """
    Ordinary least-squares line y = slope * x + intercept (scipy.stats.linregress).
    Returns slope, intercept, r2, and the standard errors of slope/intercept
    (nan when n == 2).
    """
    xs = np.asarray(x, dtype=float); ys = np.asarray(y, dtype=float)
    if xs.shape != ys.shape:
        raise ValueError("fit_line: x and y must have the same length.")
    n = xs.size
    if n < 2:
        raise ValueError("fit_line: need at least 2 points.")
    if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
        raise ValueError("fit_line: x and y must be finite.")
    if np.ptp(xs) == 0.0:
        raise ValueError("fit_line: degenerate series (constant x).")
    res = stats.linregress(xs, ys)
    r2 = float(res.rvalue) ** 2 if np.ptp(ys) > 0 else float('nan')
    if n > 2:
        se_slope, se_intercept = float(res.stderr), float(res.intercept_stderr)
    else:
        se_slope = se_intercept = float('nan')
    return {'slope': float(res.slope), 'intercept': float(res.intercept), 'r2': r2, 'n': int(n),
            'se_slope': se_slope, 'se_intercept': se_intercept}

def fit_curve(f: Callable, x: Sequence[float], y: Sequence[float], p0: Sequence[float],
              maxfev: int = 10000) -> Tuple[np.ndarray, np.ndarray, list]:
    """
    Nonlinear least squares via scipy.optimize.curve_fit.
    Returns (popt, pcov, warnings_list). A solver that fails to converge raises
    ValueError; an inestimable covariance is reported in warnings_list. Other
    warnings raised while solving (e.g. overflow in exp) are passed on.
    """
    xs = np.asarray(x, dtype=float); ys = np.asarray(y, dtype=float)
    if not all(is_finite(float(p)) for p in p0):
        raise ValueError(f"fit_curve: starting values must be finite, got {list(p0)}.")
    with warnings.catch_warnings(record=True) as recorded:
        warnings.simplefilter('always', OptimizeWarning)
        try:
            popt, pcov = curve_fit(f, xs, ys, p0=list(p0), maxfev=maxfev)
        except RuntimeError as exc:
            raise ValueError(f"fit_curve: solver did not converge from p0={list(p0)} ({exc}). "
                             "Try different seed values.") from exc
    # re-emit outside the recording block
    caught = []
    for item in recorded:
        if issubclass(item.category, OptimizeWarning):
            caught.append(str(item.message))
        else:
            warnings.warn_explicit(item.message, item.category, item.filename, item.lineno)
    if not np.all(np.isfinite(popt)):
        raise ValueError(f"fit_curve: solver returned non-finite estimates {popt.tolist()}. "
                         "Try different seed values.")
    return popt, pcov, caught
