"""
Squeeze Indicator Calculations

Pure Python/NumPy building blocks for the squeeze indicator.
All math is deterministic. Every series function returns an array of the
same length as its input, with 0.0 in the warm-up region where the window
does not yet have enough history.
"""

from typing import Sequence

import numpy as np

from squeeze_alert.services.base import InvalidInputError

# Decimal digits kept before band comparisons and around the regression
DEFAULT_PRECISION = 12


def is_integer(value) -> bool:
    """True for Python and numpy integers, False for bools."""
    return not isinstance(value, (bool, np.bool_)) and isinstance(value, (int, np.integer))


def _check_period(period: int, name: str = "period") -> None:
    if not is_integer(period) or period <= 0:
        raise InvalidInputError(
            "calculations",
            f"{name} must be a positive integer, got {period!r}",
            {name: period},
        )


# =============================================================================
# ROUNDING
# =============================================================================


def round_to(value: float, digits: int = DEFAULT_PRECISION) -> float:
    """
    Round a scalar to a fixed number of decimal digits.

    Uses Python's correctly rounded ``round``, so rounding an already rounded
    value is a no-op.
    """
    return round(float(value), digits)


def round_array(data: np.ndarray, digits: int = DEFAULT_PRECISION) -> np.ndarray:
    """Elementwise ``round_to`` over an array."""
    return np.array([round_to(v, digits) for v in data], dtype=np.float64)


# =============================================================================
# ROLLING STATISTICS
# =============================================================================


def sma(data: np.ndarray, period: int) -> np.ndarray:
    """Simple Moving Average (running sum)."""
    _check_period(period)

    result = np.zeros(len(data))
    total = 0.0
    for i in range(len(data)):
        total += data[i]
        if i >= period:
            total -= data[i - period]
        if i >= period - 1:
            result[i] = total / period
    return result


def stdev(data: np.ndarray, period: int) -> np.ndarray:
    """Rolling population standard deviation."""
    _check_period(period)

    result = np.zeros(len(data))
    for i in range(period - 1, len(data)):
        window = data[i - period + 1 : i + 1]
        mean = np.mean(window)
        result[i] = np.sqrt(np.sum((window - mean) ** 2) / period)
    return result


def true_range(high: np.ndarray, low: np.ndarray, close: np.ndarray) -> np.ndarray:
    """True Range, including gaps against the previous close."""
    result = np.zeros(len(high))
    if len(high) == 0:
        return result

    result[0] = high[0] - low[0]
    for i in range(1, len(high)):
        result[i] = max(
            high[i] - low[i],
            abs(high[i] - close[i - 1]),
            abs(low[i] - close[i - 1]),
        )
    return result


def atr(
    high: np.ndarray, low: np.ndarray, close: np.ndarray, period: int
) -> np.ndarray:
    """Average True Range: SMA of True Range."""
    return sma(true_range(high, low, close), period)


def rolling_max(data: np.ndarray, period: int) -> np.ndarray:
    """Highest value over the trailing window, clamped at the series start."""
    _check_period(period)

    result = np.zeros(len(data))
    for i in range(len(data)):
        result[i] = np.max(data[max(0, i - period + 1) : i + 1])
    return result


def rolling_min(data: np.ndarray, period: int) -> np.ndarray:
    """Lowest value over the trailing window, clamped at the series start."""
    _check_period(period)

    result = np.zeros(len(data))
    for i in range(len(data)):
        result[i] = np.min(data[max(0, i - period + 1) : i + 1])
    return result


def clamped_mean(data: np.ndarray, period: int) -> np.ndarray:
    """Mean over the trailing window, clamped at the series start."""
    _check_period(period)

    result = np.zeros(len(data))
    for i in range(len(data)):
        result[i] = np.mean(data[max(0, i - period + 1) : i + 1])
    return result


# =============================================================================
# BANDS
# =============================================================================


def bollinger_bands(
    closes: np.ndarray, period: int = 20, mult: float = 2.0
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Bollinger Bands.

    Returns: (upper, basis, lower)
    """
    basis = sma(closes, period)
    dev = stdev(closes, period) * mult
    return basis + dev, basis, basis - dev


def keltner_channel(
    closes: np.ndarray,
    highs: np.ndarray,
    lows: np.ndarray,
    period: int = 20,
    mult: float = 1.5,
    use_true_range: bool = True,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Keltner Channel around the close SMA.

    The channel width is the SMA of either True Range or the plain
    high-low spread.

    Returns: (upper, ma, lower, range_ma)
    """
    ma = sma(closes, period)
    if use_true_range:
        range_series = true_range(highs, lows, closes)
    else:
        range_series = highs - lows
    range_ma = sma(range_series, period)
    return ma + range_ma * mult, ma, ma - range_ma * mult, range_ma


# =============================================================================
# REGRESSION
# =============================================================================


def linear_regression_value(data: Sequence[float]) -> float:
    """
    Least-squares line over ``data`` evaluated at its last point.

    x runs 0..len(data)-1. Windows shorter than two points have no defined
    slope and yield 0.0.
    """
    n = len(data)
    if n < 2:
        return 0.0

    sum_x = sum_y = sum_xy = sum_x2 = 0.0
    for i in range(n):
        x = float(i)
        y = float(data[i])
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_x2 += x * x

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return 0.0

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return intercept + slope * (n - 1)
