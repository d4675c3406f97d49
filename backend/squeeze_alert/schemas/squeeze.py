"""
CONTRACT: Squeeze Indicator

Input: SqueezeRequest (close/high/low series + optional parameters)
Output: SqueezeResponse (one SqueezePoint per bar)

Pure Python/NumPy underneath - these models only describe the wire format.
"""

from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# INPUT: SqueezeRequest
# =============================================================================


class SqueezeParameters(BaseModel):
    """Indicator parameters accepted over the API."""

    bb_length: int = Field(default=20, gt=0, description="Bollinger window")
    bb_mult: float = Field(default=2.0, gt=0, description="Bollinger band multiplier")
    kc_length: int = Field(default=20, gt=0, description="Keltner / regression window")
    kc_mult: float = Field(default=1.5, gt=0, description="Keltner channel multiplier")
    use_true_range: bool = Field(default=True, description="True Range vs high-low spread")
    min_volatility: float = Field(default=0.0, ge=0, description="ATR gate threshold")
    atr_length: Optional[int] = Field(
        default=None, gt=0, description="ATR window for the gate (defaults to kc_length)"
    )
    strict_containment: bool = Field(
        default=False, description="Use strict band comparisons"
    )


class SqueezeRequest(BaseModel):
    """
    Request for a squeeze calculation.
    Sent by: API
    Received by: Squeeze Service
    """

    close: list[float]
    high: list[float]
    low: list[float]
    parameters: Optional[SqueezeParameters] = None


# =============================================================================
# OUTPUT: SqueezeResponse
# =============================================================================


class SqueezePoint(BaseModel):
    """One bar of the indicator, as plotted by the dashboard."""

    time: int = Field(..., ge=0, description="Bar index")
    close: float
    value: float = Field(..., description="Regression momentum value")
    sqzOn: bool = Field(..., description="Squeeze active on this bar")


class SqueezeResponse(BaseModel):
    """
    Complete squeeze output for a series.
    Returned by: Squeeze Service
    Consumed by: Dashboard / API clients
    """

    bars: int = Field(..., ge=0)
    squeeze_count: int = Field(..., ge=0, description="Bars with squeeze on")
    parameters: SqueezeParameters
    points: list[SqueezePoint]

    class Config:
        json_schema_extra = {
            "example": {
                "bars": 3,
                "squeeze_count": 1,
                "parameters": {
                    "bb_length": 2,
                    "bb_mult": 2.0,
                    "kc_length": 2,
                    "kc_mult": 1.5,
                    "use_true_range": True,
                    "min_volatility": 0.0,
                },
                "points": [
                    {"time": 0, "close": 10.0, "value": 0.0, "sqzOn": False},
                    {"time": 1, "close": 12.0, "value": 0.5, "sqzOn": False},
                    {"time": 2, "close": 11.0, "value": -0.25, "sqzOn": True},
                ],
            }
        }
