"""Test configuration for the LWR/LLR toolbox."""

from pathlib import Path
import sys

import matplotlib
import numpy as np
import pandas as pd
import pytest


matplotlib.use("Agg")

# Ensure the local package is importable when the repo isn't installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def isometric_lwr_df() -> pd.DataFrame:
    """50 fish with W = L**3 on log scale and symmetric noise, all sex 1.

    Each length appears twice with log10 noise of +0.01 and -0.01, so the noise is
    orthogonal to the design and the OLS slope is exactly 3.
    """
    lengths = np.repeat(np.linspace(5.0, 30.0, 25), 2)
    noise = np.tile([0.01, -0.01], 25)
    weight = 10 ** (3.0 * np.log10(lengths) + noise)
    return pd.DataFrame({"Weight": weight, "S_Length": lengths, "Sex": 1})


@pytest.fixture
def noisy_lwr_df() -> pd.DataFrame:
    """120 fish with allometric growth (b = 3.2) and random noise, sexes 1, 2 and 9."""
    rng = np.random.default_rng(7)
    lengths = rng.uniform(4.0, 35.0, size=120)
    log_w = -2.0 + 3.2 * np.log10(lengths) + rng.normal(0.0, 0.03, size=120)
    sex = np.resize([1, 2, 9], 120)
    return pd.DataFrame({"Weight": 10**log_w, "S_Length": lengths, "Sex": sex})


@pytest.fixture
def llr_df() -> pd.DataFrame:
    """100 valid fish (T = 0.5 + 1.2 * S) plus one with zero total length."""
    rng = np.random.default_rng(0)
    s_length = np.linspace(10.0, 40.0, 100)
    t_length = 0.5 + 1.2 * s_length + rng.normal(0.0, 0.3, size=100)
    valid = pd.DataFrame({"T_Length": t_length, "S_Length": s_length, "Sex": np.resize([1, 2], 100)})
    zero = pd.DataFrame({"T_Length": [0.0], "S_Length": [25.0], "Sex": [1]})
    return pd.concat([valid, zero], ignore_index=True)


@pytest.fixture
def dimorphic_llr_df() -> pd.DataFrame:
    """Two sexes with clearly different intercepts plus a few undefined-sex fish."""
    rng = np.random.default_rng(1)
    s_length = np.linspace(10.0, 40.0, 60)
    male = pd.DataFrame(
        {"T_Length": 0.5 + 1.2 * s_length + rng.normal(0, 0.3, 60), "S_Length": s_length, "Sex": 1},
    )
    female = pd.DataFrame(
        {"T_Length": 5.0 + 1.2 * s_length + rng.normal(0, 0.3, 60), "S_Length": s_length, "Sex": 2},
    )
    s_undef = np.array([15.0, 25.0, 35.0])
    undefined = pd.DataFrame({"T_Length": 2.75 + 1.2 * s_undef, "S_Length": s_undef, "Sex": 9})
    return pd.concat([male, female, undefined], ignore_index=True)


@pytest.fixture
def write_xlsx(tmp_path: Path):
    """Write a frame to an .xlsx file below ``tmp_path`` and return its path."""

    def _write(df: pd.DataFrame, name: str = "measurements.xlsx") -> Path:
        path = tmp_path / name
        df.to_excel(path, index=False)
        return path

    return _write
