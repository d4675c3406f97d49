"""
Squeeze Indicator

Bollinger Bands inside a Keltner Channel ("squeeze") plus a linear
regression momentum oscillator, computed over full close/high/low series.

The indicator object only holds its frozen configuration; every call to
``calculate`` recomputes all series from scratch, so one instance can be
shared freely between callers and threads.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from squeeze_alert.services.base import InvalidInputError
from squeeze_alert.services.indicators.calculations import (
    DEFAULT_PRECISION,
    atr,
    bollinger_bands,
    clamped_mean,
    is_integer,
    keltner_channel,
    linear_regression_value,
    rolling_max,
    rolling_min,
    round_array,
    round_to,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SqueezeConfig:
    """
    Squeeze indicator parameters.

    atr_length: window of the ATR volatility gate, None means kc_length.
    strict_containment: compare bands with < / > instead of <= / >=.
    """

    bb_length: int = 20
    bb_mult: float = 2.0
    kc_length: int = 20
    kc_mult: float = 1.5
    use_true_range: bool = True
    min_volatility: float = 0.0
    atr_length: Optional[int] = None
    strict_containment: bool = False
    precision: int = DEFAULT_PRECISION

    def __post_init__(self) -> None:
        for field_name in ("bb_length", "kc_length", "atr_length"):
            value = getattr(self, field_name)
            if value is None and field_name == "atr_length":
                continue
            if not is_integer(value) or value <= 0:
                raise InvalidInputError(
                    "SqueezeIndicator",
                    f"{field_name} must be a positive integer, got {value!r}",
                    {field_name: value},
                )
            # numpy integers are stored as plain ints
            object.__setattr__(self, field_name, int(value))
        for field_name in ("bb_mult", "kc_mult"):
            value = getattr(self, field_name)
            if not np.isfinite(value) or value <= 0:
                raise InvalidInputError(
                    "SqueezeIndicator",
                    f"{field_name} must be a positive number, got {value!r}",
                    {field_name: value},
                )
        if not np.isfinite(self.min_volatility) or self.min_volatility < 0:
            raise InvalidInputError(
                "SqueezeIndicator",
                f"min_volatility must be >= 0, got {self.min_volatility!r}",
                {"min_volatility": self.min_volatility},
            )
        if not is_integer(self.precision) or self.precision < 0:
            raise InvalidInputError(
                "SqueezeIndicator",
                f"precision must be a non-negative integer, got {self.precision!r}",
                {"precision": self.precision},
            )
        object.__setattr__(self, "precision", int(self.precision))

    @property
    def volatility_length(self) -> int:
        return self.atr_length if self.atr_length is not None else self.kc_length


@dataclass
class SqueezeResult:
    """All series produced by one squeeze calculation (length n each)."""

    values: np.ndarray
    squeeze_on: np.ndarray
    basis: np.ndarray
    upper_bb: np.ndarray
    lower_bb: np.ndarray
    ma: np.ndarray
    upper_kc: np.ndarray
    lower_kc: np.ndarray
    range_ma: np.ndarray
    atr: np.ndarray
    highest_high: np.ndarray
    lowest_low: np.ndarray
    regression_input: np.ndarray

    def __len__(self) -> int:
        return len(self.values)


def _to_series(data: Sequence[float], name: str) -> np.ndarray:
    try:
        arr = np.asarray(data, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            "SqueezeIndicator", f"{name} is not a numeric series: {e}"
        ) from e
    if arr.ndim != 1:
        raise InvalidInputError(
            "SqueezeIndicator",
            f"{name} must be one-dimensional, got shape {arr.shape}",
            {"series": name},
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(
            "SqueezeIndicator",
            f"{name} contains NaN or infinite values",
            {"series": name},
        )
    return arr


class SqueezeIndicator:
    """
    Squeeze momentum indicator.

    Usage:
        indicator = SqueezeIndicator(SqueezeConfig(bb_length=20, kc_length=20))
        values, squeeze_on = indicator.calculate(closes, highs, lows)
    """

    def __init__(self, config: Optional[SqueezeConfig] = None):
        self.config = config or SqueezeConfig()

    @classmethod
    def from_params(
        cls,
        bb_length: int,
        kc_length: int,
        bb_mult: float,
        kc_mult: float,
        use_true_range: bool,
        min_volatility: float,
        **options,
    ) -> "SqueezeIndicator":
        """Build an indicator from the six core parameters."""
        return cls(
            SqueezeConfig(
                bb_length=bb_length,
                bb_mult=bb_mult,
                kc_length=kc_length,
                kc_mult=kc_mult,
                use_true_range=use_true_range,
                min_volatility=min_volatility,
                **options,
            )
        )

    def calculate(
        self,
        close: Sequence[float],
        high: Sequence[float],
        low: Sequence[float],
    ) -> tuple[np.ndarray, np.ndarray]:
        """
        Compute oscillator values and squeeze flags.

        Returns: (values, squeeze_on), both of length len(close)

        Raises:
            InvalidInputError: unequal lengths or non-finite prices
        """
        result = self.calculate_detailed(close, high, low)
        return result.values, result.squeeze_on

    def calculate_detailed(
        self,
        close: Sequence[float],
        high: Sequence[float],
        low: Sequence[float],
    ) -> SqueezeResult:
        """Compute the oscillator, the flags and every intermediate series."""
        closes = _to_series(close, "close")
        highs = _to_series(high, "high")
        lows = _to_series(low, "low")

        if not len(closes) == len(highs) == len(lows):
            raise InvalidInputError(
                "SqueezeIndicator",
                "close, high and low must have equal length",
                {"close": len(closes), "high": len(highs), "low": len(lows)},
            )

        cfg = self.config
        n = len(closes)
        if n == 0:
            empty = np.zeros(0)
            return SqueezeResult(
                values=empty,
                squeeze_on=np.zeros(0, dtype=bool),
                basis=empty,
                upper_bb=empty,
                lower_bb=empty,
                ma=empty,
                upper_kc=empty,
                lower_kc=empty,
                range_ma=empty,
                atr=empty,
                highest_high=empty,
                lowest_low=empty,
                regression_input=empty,
            )

        upper_bb, basis, lower_bb = bollinger_bands(closes, cfg.bb_length, cfg.bb_mult)
        upper_kc, ma, lower_kc, range_ma = keltner_channel(
            closes, highs, lows, cfg.kc_length, cfg.kc_mult, cfg.use_true_range
        )
        atr_values = atr(highs, lows, closes, cfg.volatility_length)

        highest_high = rolling_max(highs, cfg.kc_length)
        lowest_low = rolling_min(lows, cfg.kc_length)
        regression_input = self._regression_input(closes, ma, highest_high, lowest_low)
        values = self._oscillator(regression_input)

        squeeze_on = self._squeeze_flags(
            lower_bb, upper_bb, lower_kc, upper_kc, atr_values
        )

        logger.debug(
            "Squeeze calculated: bars=%d squeeze_bars=%d config=%s",
            n,
            int(np.count_nonzero(squeeze_on)),
            cfg,
        )

        return SqueezeResult(
            values=values,
            squeeze_on=squeeze_on,
            basis=basis,
            upper_bb=upper_bb,
            lower_bb=lower_bb,
            ma=ma,
            upper_kc=upper_kc,
            lower_kc=lower_kc,
            range_ma=range_ma,
            atr=atr_values,
            highest_high=highest_high,
            lowest_low=lowest_low,
            regression_input=regression_input,
        )

    def _regression_input(
        self,
        closes: np.ndarray,
        ma: np.ndarray,
        highest_high: np.ndarray,
        lowest_low: np.ndarray,
    ) -> np.ndarray:
        """Close minus the midpoint of the Donchian midline and the close mean."""
        length = self.config.kc_length
        # ma is undefined during warm-up, fall back to the clamped mean there
        mean = clamped_mean(closes, length)
        mean[length - 1 :] = ma[length - 1 :]

        avg_hl = (highest_high + lowest_low) / 2
        detrend = (avg_hl + mean) / 2

        return round_array(closes - detrend, self.config.precision)

    def _oscillator(self, regression_input: np.ndarray) -> np.ndarray:
        """Linear regression value of the trailing kc_length window."""
        length = self.config.kc_length
        values = np.zeros(len(regression_input))
        for i in range(length - 1, len(regression_input)):
            window = regression_input[i - length + 1 : i + 1]
            values[i] = round_to(linear_regression_value(window), self.config.precision)
        return values

    def _squeeze_flags(
        self,
        lower_bb: np.ndarray,
        upper_bb: np.ndarray,
        lower_kc: np.ndarray,
        upper_kc: np.ndarray,
        atr_values: np.ndarray,
    ) -> np.ndarray:
        """Bollinger Band inside Keltner Channel with enough volatility."""
        cfg = self.config
        digits = cfg.precision
        squeeze_on = np.zeros(len(lower_bb), dtype=bool)

        # Both bands must be out of their warm-up region
        start = max(cfg.bb_length, cfg.kc_length) - 1
        for i in range(start, len(lower_bb)):
            volatile = atr_values[i] > cfg.min_volatility
            if not volatile:
                continue

            lbb = round_to(lower_bb[i], digits)
            ubb = round_to(upper_bb[i], digits)
            lkc = round_to(lower_kc[i], digits)
            ukc = round_to(upper_kc[i], digits)

            if cfg.strict_containment:
                squeeze_on[i] = lbb > lkc and ubb < ukc
            else:
                squeeze_on[i] = lbb >= lkc and ubb <= ukc
        return squeeze_on
