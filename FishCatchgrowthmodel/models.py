# -*- coding: utf-8 -*-
from __future__ import annotations
import math
from typing import Tuple
import numpy as np

# ---------- Logistic ----------
def _check_params(K: float, A: float) -> None:
    if not (math.isfinite(K) and math.isfinite(A)):
        raise ValueError("Invalid params for logistic curve: K and A must be finite.")
    if K <= 0 or A <= -1.0:
        raise ValueError("Invalid params for logistic curve: require K>0 and A>-1.")

def logistic_curve(t, K: float, A: float, k: float):
    """
    Logistic growth P(t) = K / (1 + A * exp(-k * t)).
    Accepts scalars or numpy arrays for t; this is the form handed to curve_fit,
    so it must not raise on intermediate solver iterates.
    """
    return K / (1.0 + A * np.exp(-k * np.asarray(t, dtype=float)))

def logistic_rate(t, K: float, A: float, k: float):
    """
    Annual growth dP/dt = k * P * (1 - P/K).
    """
    _check_params(K, A)
    P = logistic_curve(t, K, A, k)
    return k * P * (1.0 - P / K)

def logistic_initial_value(K: float, A: float) -> float:
    _check_params(K, A)
    return K / (1.0 + A)

def logistic_inflection(K: float, A: float, k: float) -> Tuple[float, float]:
    """
    Inflection of the logistic curve (maximum growth):
        t* = ln(A)/k,  P(t*) = K/2.
    """
    _check_params(K, A)
    if A <= 0 or k <= 0:
        raise ValueError("logistic_inflection: require A>0 and k>0.")
    return math.log(A) / k, K / 2.0

# ---------- Exponential (early phase) ----------
def exponential_curve(t, P0: float, k: float):
    return P0 * np.exp(k * np.asarray(t, dtype=float))
