"""
Squeeze Indicator Service

CONTRACT:
    Input:  close / high / low price series + SqueezeConfig
    Output: (values, squeeze_on) per bar

RESPONSIBILITIES:
    - Rolling statistics (SMA, standard deviation, True Range, ATR)
    - Bollinger Bands and Keltner Channel
    - Linear regression momentum oscillator
    - Squeeze detection (Bollinger inside Keltner, ATR volatility gate)

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from squeeze_alert.services.indicators.interface import SqueezeServiceInterface
from squeeze_alert.services.indicators.squeeze import (
    SqueezeConfig,
    SqueezeIndicator,
    SqueezeResult,
)
from squeeze_alert.services.indicators.service import SqueezeService, get_squeeze_service

__all__ = [
    "SqueezeConfig",
    "SqueezeIndicator",
    "SqueezeResult",
    "SqueezeServiceInterface",
    "SqueezeService",
    "get_squeeze_service",
]
