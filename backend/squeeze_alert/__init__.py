"""
Squeeze Alert

Bollinger/Keltner squeeze indicator with a linear regression momentum oscillator.
"""

__version__ = "0.1.0"
