from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from capture import CaptureEngine, CaptureSpec


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


@pytest.fixture
def make_engine():
    def _make(regex: str, reset_regex=None, capture: str = "1") -> CaptureEngine:
        return CaptureEngine(CaptureSpec.parse(regex, reset_regex, capture))

    return _make
