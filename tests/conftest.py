from pathlib import Path

import numpy as np
import pandas as pd
import pytest

K_TRUE, A_TRUE, k_TRUE = 100.3, 4.32, 0.07
YEARS = np.arange(1950, 2013)


def synthetic_table(noise_sd: float = 0.0, seed: int = 2012) -> pd.DataFrame:
    """Raw table in metric tons whose wild catch follows the reference logistic curve."""
    t = YEARS - 1950
    wild = K_TRUE / (1.0 + A_TRUE * np.exp(-k_TRUE * t))
    if noise_sd:
        wild = wild + np.random.default_rng(seed).normal(0.0, noise_sd, size=t.size)
    farmed = 0.6 * np.exp(0.075 * t)
    return pd.DataFrame({
        "Year": YEARS,
        "Wild Catch": np.round(wild * 1e6),
        "Fish Farming": np.round(farmed * 1e6),
        "Total Production": np.round((wild + farmed) * 1e6),
    })


@pytest.fixture
def exact_csv(tmp_path: Path) -> Path:
    path = tmp_path / "fish_exact.csv"
    synthetic_table().to_csv(path, index=False)
    return path


@pytest.fixture
def noisy_csv(tmp_path: Path) -> Path:
    path = tmp_path / "fish_noisy.csv"
    synthetic_table(noise_sd=0.4).to_csv(path, index=False)
    return path
