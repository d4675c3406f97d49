"""
Squeeze Indicator Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod

from squeeze_alert.services.base import BaseService
from squeeze_alert.schemas.squeeze import SqueezeRequest, SqueezeResponse


class SqueezeServiceInterface(BaseService[SqueezeRequest, SqueezeResponse]):
    """
    Squeeze Indicator Service Contract.

    INPUT: SqueezeRequest
        - close, high, low: equal-length price series
        - parameters: indicator parameters (optional, defaults apply)

    OUTPUT: SqueezeResponse
        - points: time/close/value/sqzOn per bar
        - squeeze_count: number of bars with the squeeze on
    """

    @property
    def name(self) -> str:
        return "SqueezeService"

    @abstractmethod
    async def execute(self, input_data: SqueezeRequest) -> SqueezeResponse:
        """Calculate the squeeze indicator for the request series."""
        pass

    @abstractmethod
    async def calculate_demo(self) -> SqueezeResponse:
        """Calculate the squeeze indicator for the built-in demo series."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
