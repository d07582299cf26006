# -*- coding: utf-8 -*-
"""
Load and clean the annual fish production table.

Input: a delimited text table with one header row and columns for year, wild
catch, farmed fish, and total production (metric tons). Output: one row per
year, volumes in million tonnes, plus the zero-based year offset `t` and the
natural log of the wild catch.
"""
from __future__ import annotations
import re
from pathlib import Path
from typing import Dict, Iterable, Optional, Union
import numpy as np
import pandas as pd

from .constants import (
    YEAR, WILD, T_OFFSET, LOG_WILD, VOLUME_COLUMNS,
    HEADER_ALIASES, TONNES_PER_MT,
)

_NORMALIZE_RE = re.compile(r"[^0-9a-zA-Z]+")
_THOUSANDS_RE = re.compile(r"^[-+]?\d{1,3}(,\d{3})+(\.\d*)?$")
_NUMERIC_RE = re.compile(r"^[-+]?[\d.,]+$")

def _info(msg: str): print(f"[INFO] {msg}")
def _err(msg: str):  raise ValueError(msg)

def _normalize_name(name: str) -> str:
    return _NORMALIZE_RE.sub("_", str(name)).strip("_").lower()

def canonical_columns(columns: Iterable[str]) -> Dict[str, str]:
    """Return a raw-header -> canonical-name mapping for recognised headers."""
    mapping: Dict[str, str] = {}
    for col in columns:
        canon = HEADER_ALIASES.get(_normalize_name(col))
        if canon is None:
            continue
        if canon in mapping.values():
            _err(f"Ambiguous headers: more than one column maps to '{canon}'.")
        mapping[col] = canon
    return mapping

def assert_required_columns(df: pd.DataFrame, required: Iterable[str]) -> None:
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

def _to_number(series: pd.Series) -> pd.Series:
    """Commas are accepted only as thousands separators (1,234,567); "18,7" is rejected."""
    s = series.astype(str).str.replace(r"\s", "", regex=True)
    numeric_with_comma = s.str.contains(",", regex=False) & s.str.match(_NUMERIC_RE)
    bad = s[numeric_with_comma & ~s.str.match(_THOUSANDS_RE)]
    if not bad.empty:
        _err(f"Column '{series.name}' has values with a decimal comma or misplaced separator: "
             f"{bad.head(3).tolist()}. Use '.' for decimals.")
    return pd.to_numeric(s.str.replace(",", "", regex=False), errors='coerce')

def validate_catch_table(df: pd.DataFrame, start_year: Optional[int] = None,
                         end_year: Optional[int] = None) -> None:
    """
    One row per year, contiguous, no missing values, positive wild catch.
    When start_year/end_year are given the span must match exactly.
    """
    assert_required_columns(df, (YEAR,) + VOLUME_COLUMNS)
    if df.empty:
        _err("Catch table is empty after cleaning.")
    if df[[YEAR, *VOLUME_COLUMNS]].isna().any().any():
        _err("Catch table has missing values.")
    years = df[YEAR].astype(int)
    dupes = sorted(years[years.duplicated()].unique().tolist())
    if dupes:
        _err(f"Catch table has more than one row for year(s): {dupes}.")
    expected = set(range(int(years.min()), int(years.max()) + 1))
    gaps = sorted(expected - set(years.tolist()))
    if gaps:
        _err(f"Catch table is missing year(s): {gaps}.")
    if (df[WILD] <= 0).any():
        bad = df.loc[df[WILD] <= 0, YEAR].astype(int).tolist()
        _err(f"Wild catch must be > 0 for the log transform; offending year(s): {bad}.")
    if start_year is not None and int(years.min()) != start_year:
        _err(f"Catch table starts in {int(years.min())}, expected {start_year}.")
    if end_year is not None and int(years.max()) != end_year:
        _err(f"Catch table ends in {int(years.max())}, expected {end_year}.")

def clean_catch_table(raw: pd.DataFrame, unit_divisor: float = TONNES_PER_MT,
                      base_year: Optional[int] = None) -> pd.DataFrame:
    if unit_divisor <= 0:
        _err("unit_divisor must be > 0.")
    mapping = canonical_columns(raw.columns)
    df = raw[list(mapping)].rename(columns=mapping)
    assert_required_columns(df, (YEAR,) + VOLUME_COLUMNS)
    df = df[[YEAR, *VOLUME_COLUMNS]].apply(_to_number)

    n_before = len(df)
    df = df.dropna(how='any').copy()
    if len(df) < n_before:
        _info(f"Dropped {n_before - len(df)} incomplete row(s) from the catch table.")
    if not (df[YEAR] == df[YEAR].round()).all():
        _err("Year column must hold whole years.")
    df[YEAR] = df[YEAR].astype(int)
    df = df.sort_values(YEAR, kind='mergesort').reset_index(drop=True)
    validate_catch_table(df)

    for col in VOLUME_COLUMNS:
        df[col] = df[col] / unit_divisor
    base = int(df[YEAR].iloc[0]) if base_year is None else int(base_year)
    if base > int(df[YEAR].iloc[0]):
        _err(f"base_year {base} is after the first observed year {int(df[YEAR].iloc[0])}.")
    df[T_OFFSET] = df[YEAR] - base
    df[LOG_WILD] = np.log(df[WILD])
    return df

def load_catch_csv(path: Union[str, Path], unit_divisor: float = TONNES_PER_MT,
                   base_year: Optional[int] = None, start_year: Optional[int] = None,
                   end_year: Optional[int] = None) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"CSV not found: {path}")
    raw = pd.read_csv(path, sep=None, engine='python', dtype=str, skipinitialspace=True)
    df = clean_catch_table(raw, unit_divisor=unit_divisor, base_year=base_year)
    validate_catch_table(df, start_year=start_year, end_year=end_year)
    _info(f"Loaded {len(df)} years ({int(df[YEAR].min())}-{int(df[YEAR].max())}) from {path.name}.")
    return df
