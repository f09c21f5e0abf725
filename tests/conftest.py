# tests/conftest.py
from __future__ import annotations

import os
import random
from pathlib import Path

import matplotlib
import numpy as np
import pytest

# Charts are written to disk only; never open a window during tests.
matplotlib.use("Agg", force=True)


# -----------------------------
# Global, deterministic seeding
# -----------------------------
@pytest.fixture(autouse=True, scope="session")
def _seed_everything() -> None:
    """
    Make tests deterministic across runs. The solver itself never draws random
    numbers; seeding covers the synthetic roster generator.
    """
    seed = int(os.environ.get("PYTEST_SEED", "1234"))
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)


@pytest.fixture(autouse=True)
def _no_debug_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's SCHEDULE_DEBUG=1 from leaking trace lines into output checks."""
    monkeypatch.delenv("SCHEDULE_DEBUG", raising=False)


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    import matplotlib.pyplot as plt

    plt.close("all")


# -----------------------------
# Path helpers
# -----------------------------
@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root (where pyproject.toml lives)."""
    return Path(__file__).resolve().parents[1]
