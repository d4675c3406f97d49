"""
Unit tests for services/indicators/squeeze.py
"""

import numpy as np
import pytest

from squeeze_alert.services.base import InvalidInputError
from squeeze_alert.services.indicators.calculations import round_to
from squeeze_alert.services.indicators.squeeze import (
    SqueezeConfig,
    SqueezeIndicator,
    SqueezeResult,
)


def _indicator(**overrides) -> SqueezeIndicator:
    params = dict(
        bb_length=3,
        kc_length=3,
        bb_mult=2.0,
        kc_mult=1.5,
        use_true_range=True,
        min_volatility=0.0,
    )
    params.update(overrides)
    return SqueezeIndicator.from_params(**params)


class TestSqueezeConfig:
    """Tests for parameter validation."""

    def test_defaults(self):
        config = SqueezeConfig()
        assert config.bb_length == 20
        assert config.kc_length == 20
        assert config.volatility_length == 20
        assert config.strict_containment is False

    def test_atr_length_override(self):
        assert SqueezeConfig(kc_length=10, atr_length=14).volatility_length == 14

    @pytest.mark.parametrize(
        "overrides",
        [
            {"bb_length": 0},
            {"kc_length": -1},
            {"kc_length": 2.5},
            {"atr_length": 0},
            {"bb_mult": 0.0},
            {"kc_mult": -1.5},
            {"min_volatility": -0.1},
            {"min_volatility": float("nan")},
            {"precision": 2.5},
            {"precision": -1},
            {"bb_length": True},
        ],
    )
    def test_invalid_parameters(self, overrides):
        with pytest.raises(InvalidInputError):
            SqueezeConfig(**overrides)

    def test_numpy_integer_windows(self, linear_series):
        config = SqueezeConfig(bb_length=np.int64(3), kc_length=np.int32(3), atr_length=np.int64(3))
        assert config.bb_length == 3 and type(config.bb_length) is int
        assert config.volatility_length == 3

        closes, highs, lows = linear_series
        indicator = SqueezeIndicator.from_params(np.int64(3), np.int64(3), 2.0, 1.5, True, 0.0)
        values, squeeze_on = indicator.calculate(closes, highs, lows)
        expected_values, expected_squeeze = _indicator().calculate(closes, highs, lows)

        assert np.array_equal(values, expected_values)
        assert np.array_equal(squeeze_on, expected_squeeze)

    def test_float_precision_fails_before_calculation(self):
        with pytest.raises(InvalidInputError) as exc_info:
            SqueezeConfig(precision=2.5)
        assert exc_info.value.details == {"precision": 2.5}

    def test_frozen(self):
        config = SqueezeConfig()
        with pytest.raises(AttributeError):
            config.bb_length = 5


class TestSqueezeIndicatorScenarios:
    """Known-answer scenarios."""

    def test_linear_series(self, linear_series):
        closes, highs, lows = linear_series
        values, squeeze_on = _indicator().calculate(closes, highs, lows)

        assert len(values) == len(squeeze_on) == 10
        # Warm-up bars
        assert values[0] == 0.0 and values[1] == 0.0
        assert not squeeze_on[0] and not squeeze_on[1]
        # Detrended close over bars 0-2 is [0, 0.5, 1]: line value 1.0
        assert values[2] == pytest.approx(1.0)
        # Window [0.5, 1, 1]
        assert values[3] == pytest.approx(13 / 12)
        # Detrended close settles at 1.0
        assert np.allclose(values[4:], 1.0)
        # BB half-width 1.63 sits inside the KC half-width 3.0
        assert squeeze_on[2:].all()

    def test_linear_series_regression_input(self, linear_series):
        closes, highs, lows = linear_series
        result = _indicator().calculate_detailed(closes, highs, lows)

        assert list(result.regression_input[:3]) == [0.0, 0.5, 1.0]
        assert list(result.highest_high[:3]) == [2.0, 3.0, 4.0]
        assert list(result.lowest_low[:3]) == [0.0, 0.0, 0.0]

    def test_constant_series_never_squeezes(self, constant_series):
        closes, highs, lows = constant_series
        result = _indicator().calculate_detailed(closes, highs, lows)

        assert np.all(result.atr == 0.0)
        assert np.all(result.upper_bb[2:] == result.basis[2:])
        assert not result.squeeze_on.any()
        assert np.all(result.values == 0.0)

    def test_empty_input(self):
        values, squeeze_on = _indicator().calculate([], [], [])
        assert len(values) == 0
        assert len(squeeze_on) == 0
        assert squeeze_on.dtype == bool

    def test_shorter_than_window(self):
        values, squeeze_on = _indicator(bb_length=5, kc_length=5).calculate(
            [1.0, 2.0, 3.0], [2.0, 3.0, 4.0], [0.0, 1.0, 2.0]
        )
        assert np.all(values == 0.0)
        assert not squeeze_on.any()

    def test_single_point_window(self, linear_series):
        closes, highs, lows = linear_series
        values, _ = _indicator(kc_length=1).calculate(closes, highs, lows)
        assert np.all(values == 0.0)


class TestSqueezePolicies:
    """Tests for the volatility gate and containment options."""

    def test_min_volatility_is_strict(self, linear_series):
        closes, highs, lows = linear_series
        # ATR is exactly 2.0 on this series
        _, at_threshold = _indicator(min_volatility=2.0).calculate(closes, highs, lows)
        _, below_threshold = _indicator(min_volatility=1.99).calculate(closes, highs, lows)

        assert not at_threshold.any()
        assert below_threshold[2:].all()

    def test_atr_length_delays_gate(self, linear_series):
        closes, highs, lows = linear_series
        _, squeeze_on = _indicator(atr_length=8).calculate(closes, highs, lows)

        assert not squeeze_on[:7].any()
        assert squeeze_on[7:].all()

    def test_short_bollinger_window_waits_for_keltner(self, linear_series):
        closes, highs, lows = linear_series
        kc_length = 4
        _, squeeze_on = _indicator(bb_length=2, kc_length=kc_length).calculate(
            closes, highs, lows
        )

        assert not squeeze_on[: kc_length - 1].any()
        assert squeeze_on[kc_length - 1 :].all()

    def test_bollinger_warm_up_blocks_squeeze(self, linear_series):
        closes, highs, lows = linear_series
        _, squeeze_on = _indicator(bb_length=6, bb_mult=1.0, kc_mult=2.0).calculate(
            closes, highs, lows
        )

        assert not squeeze_on[:5].any()
        assert squeeze_on[5:].all()

    def test_touching_bands(self):
        # Window of 2 consecutive integers: stdev 0.5, BB half-width 1.0;
        # spread 2 * kc_mult 0.5 makes the KC half-width 1.0 too.
        closes = [float(c) for c in range(1, 8)]
        highs = [c + 1 for c in closes]
        lows = [c - 1 for c in closes]
        params = dict(bb_length=2, kc_length=2, kc_mult=0.5, use_true_range=False)

        _, inclusive = _indicator(**params).calculate(closes, highs, lows)
        _, strict = _indicator(strict_containment=True, **params).calculate(
            closes, highs, lows
        )

        assert inclusive[1:].all()
        assert not strict.any()


class TestSqueezeInvariants:
    """Properties that hold for any valid input."""

    def test_lengths_match(self, demo_series):
        closes, highs, lows = demo_series
        for length in (2, 5, 20, 30):
            values, squeeze_on = _indicator(bb_length=length, kc_length=length).calculate(
                closes, highs, lows
            )
            assert len(values) == len(squeeze_on) == len(closes)

    def test_squeeze_implies_containment(self, demo_series):
        closes, highs, lows = demo_series
        indicator = _indicator(bb_length=5, kc_length=5, kc_mult=2.0)
        result = indicator.calculate_detailed(closes, highs, lows)

        assert isinstance(result, SqueezeResult)
        assert result.squeeze_on.any()
        for i in np.flatnonzero(result.squeeze_on):
            assert i >= indicator.config.kc_length - 1
            assert round_to(result.lower_bb[i]) >= round_to(result.lower_kc[i])
            assert round_to(result.upper_bb[i]) <= round_to(result.upper_kc[i])
            assert result.atr[i] > indicator.config.min_volatility

    def test_deterministic(self, demo_series):
        closes, highs, lows = demo_series
        indicator = _indicator(bb_length=4, kc_length=6)

        first = indicator.calculate(closes, highs, lows)
        second = indicator.calculate(closes, highs, lows)

        assert np.array_equal(first[0], second[0])
        assert np.array_equal(first[1], second[1])

    def test_input_not_modified(self, demo_series):
        closes, highs, lows = demo_series
        before = list(closes)
        _indicator().calculate(np.array(closes), highs, lows)
        assert closes == before

    def test_outputs_are_rounded(self, demo_series):
        closes, highs, lows = demo_series
        values, _ = _indicator(bb_length=7, kc_length=7).calculate(closes, highs, lows)
        assert all(round_to(v) == v for v in values)


class TestSqueezeInputValidation:
    """Tests for rejected price series."""

    def test_unequal_lengths(self):
        with pytest.raises(InvalidInputError) as exc_info:
            _indicator().calculate([1.0, 2.0, 3.0], [2.0, 3.0], [0.0, 1.0, 2.0])
        assert exc_info.value.details == {"close": 3, "high": 2, "low": 3}

    def test_non_finite_price(self):
        with pytest.raises(InvalidInputError):
            _indicator().calculate([1.0, float("nan")], [2.0, 3.0], [0.0, 1.0])

    def test_two_dimensional_input(self):
        with pytest.raises(InvalidInputError):
            _indicator().calculate([[1.0, 2.0]], [[2.0, 3.0]], [[0.0, 1.0]])

    def test_non_numeric_input(self):
        with pytest.raises(InvalidInputError):
            _indicator().calculate(["a", "b"], [2.0, 3.0], [0.0, 1.0])
