"""
Squeeze Alert Schema Contracts

This module defines the JSON contracts between the API and the indicator service.
"""

from squeeze_alert.schemas.squeeze import (
    SqueezeParameters,
    SqueezeRequest,
    SqueezePoint,
    SqueezeResponse,
)

__all__ = [
    "SqueezeParameters",
    "SqueezeRequest",
    "SqueezePoint",
    "SqueezeResponse",
]
