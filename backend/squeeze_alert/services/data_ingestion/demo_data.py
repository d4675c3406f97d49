"""
Demo Price Data

Fixed close/high/low series served by the dashboard endpoint.
"""

DEMO_CLOSES = [
    10, 12, 15, 14, 13, 11, 10, 9, 10, 11, 13, 14, 15,
    16, 15, 14, 13, 12, 11, 10, 9, 8, 7, 8, 9,
]

# High/low are one point either side of the close
DEMO_HIGHS = [c + 1 for c in DEMO_CLOSES]
DEMO_LOWS = [c - 1 for c in DEMO_CLOSES]


def get_demo_series() -> tuple[list[float], list[float], list[float]]:
    """
    Get the demo series.

    Returns: (closes, highs, lows) as fresh lists
    """
    return (
        [float(c) for c in DEMO_CLOSES],
        [float(h) for h in DEMO_HIGHS],
        [float(lo) for lo in DEMO_LOWS],
    )
