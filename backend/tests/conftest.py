"""
Pytest fixtures for the Squeeze Alert tests.
"""

import sys
from pathlib import Path

import pytest

# Add backend directory to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))


@pytest.fixture
def linear_series():
    """Close 1..10 with high/low one point either side."""
    closes = [float(c) for c in range(1, 11)]
    highs = [c + 1 for c in closes]
    lows = [c - 1 for c in closes]
    return closes, highs, lows


@pytest.fixture
def constant_series():
    """Flat price: close == high == low == 5."""
    prices = [5.0] * 5
    return list(prices), list(prices), list(prices)


@pytest.fixture
def demo_series():
    """The dashboard demo series."""
    from squeeze_alert.services.data_ingestion import get_demo_series

    return get_demo_series()
