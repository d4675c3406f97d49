"""
Squeeze Indicator Service Implementation

Runs the squeeze indicator for API requests.
Pure Python/NumPy calculations, no I/O.
"""

import logging
from typing import Optional

import numpy as np

from squeeze_alert.core.config import settings
from squeeze_alert.schemas.squeeze import (
    SqueezeParameters,
    SqueezePoint,
    SqueezeRequest,
    SqueezeResponse,
)
from squeeze_alert.services.base import InvalidInputError
from squeeze_alert.services.data_ingestion.demo_data import get_demo_series
from squeeze_alert.services.indicators.interface import SqueezeServiceInterface
from squeeze_alert.services.indicators.squeeze import SqueezeConfig, SqueezeIndicator

logger = logging.getLogger(__name__)


def demo_parameters() -> SqueezeParameters:
    """Parameters used by the demo endpoint, taken from settings."""
    return SqueezeParameters(
        bb_length=settings.demo_bb_length,
        bb_mult=settings.demo_bb_mult,
        kc_length=settings.demo_kc_length,
        kc_mult=settings.demo_kc_mult,
        use_true_range=settings.demo_use_true_range,
        min_volatility=settings.demo_min_volatility,
    )


def build_points(
    closes: np.ndarray, values: np.ndarray, squeeze_on: np.ndarray
) -> list[SqueezePoint]:
    """Zip the indicator output into per-bar points."""
    return [
        SqueezePoint(
            time=i,
            close=float(closes[i]),
            value=float(values[i]),
            sqzOn=bool(squeeze_on[i]),
        )
        for i in range(len(values))
    ]


class SqueezeService(SqueezeServiceInterface):
    """
    Squeeze Indicator Service.

    Builds one SqueezeIndicator per parameter set and serializes the result.
    All calculations are deterministic and reproducible.
    """

    @property
    def name(self) -> str:
        return "SqueezeService"

    async def execute(self, input_data: SqueezeRequest) -> SqueezeResponse:
        """Calculate the squeeze indicator for the request series."""
        input_data = await self.validate_input(input_data)
        params = input_data.parameters or SqueezeParameters()
        return self.calculate(input_data.close, input_data.high, input_data.low, params)

    async def validate_input(self, input_data: SqueezeRequest) -> SqueezeRequest:
        """Reject requests whose price series differ in length."""
        lengths = {
            "close": len(input_data.close),
            "high": len(input_data.high),
            "low": len(input_data.low),
        }
        if len(set(lengths.values())) > 1:
            logger.warning(f"Rejected squeeze request with series lengths {lengths}")
            raise InvalidInputError(
                self.name, "close, high and low must have equal length", lengths
            )
        return input_data

    async def calculate_demo(self) -> SqueezeResponse:
        """Calculate the squeeze indicator for the built-in demo series."""
        closes, highs, lows = get_demo_series()
        return self.calculate(closes, highs, lows, demo_parameters())

    def calculate(
        self,
        closes: list[float],
        highs: list[float],
        lows: list[float],
        params: SqueezeParameters,
    ) -> SqueezeResponse:
        """Run the indicator synchronously and build the response."""
        try:
            indicator = SqueezeIndicator(SqueezeConfig(**params.model_dump()))
            values, squeeze_on = indicator.calculate(closes, highs, lows)
        except InvalidInputError as e:
            logger.warning(f"Rejected squeeze input: {e.message}")
            raise

        points = build_points(np.asarray(closes, dtype=np.float64), values, squeeze_on)
        squeeze_count = int(np.count_nonzero(squeeze_on))
        logger.debug(f"Squeeze computed for {len(points)} bars, {squeeze_count} in squeeze")

        return SqueezeResponse(
            bars=len(points),
            squeeze_count=squeeze_count,
            parameters=params,
            points=points,
        )

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[SqueezeService] = None


def get_squeeze_service() -> SqueezeService:
    """Get or create squeeze service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SqueezeService()
    return _service_instance
