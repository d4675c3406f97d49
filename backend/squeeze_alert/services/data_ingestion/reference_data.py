"""
Reference Data Loader

Reads chart-platform CSV exports holding prices together with the indicator
output the platform plotted for them. Used to check our calculations
against known values.

Expected columns (header row is skipped):
    time, open, high, low, close, line, squeeze
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np

from squeeze_alert.services.base import ReferenceDataError

logger = logging.getLogger(__name__)

HIGH_COL = 2
LOW_COL = 3
CLOSE_COL = 4
LINE_COL = 5
SQUEEZE_COL = 6


@dataclass
class ReferenceData:
    """Prices and expected indicator output from a reference export."""

    close: np.ndarray
    high: np.ndarray
    low: np.ndarray
    expected_values: np.ndarray
    expected_squeeze: np.ndarray

    def __len__(self) -> int:
        return len(self.close)

    def defined_mask(self) -> np.ndarray:
        """Bars where the export holds a usable oscillator value (not NaN, not 0)."""
        return ~np.isnan(self.expected_values) & (self.expected_values != 0)


def load_reference_csv(path: Union[str, Path]) -> ReferenceData:
    """
    Load a reference CSV export.

    Args:
        path: CSV file path

    Returns:
        ReferenceData with numpy arrays for every column

    Raises:
        ReferenceDataError: file missing or rows malformed
    """
    path = Path(path)
    if not path.is_file():
        raise ReferenceDataError("ReferenceData", f"File not found: {path}")

    try:
        table = np.genfromtxt(
            path,
            delimiter=",",
            skip_header=1,
            usecols=(HIGH_COL, LOW_COL, CLOSE_COL, LINE_COL, SQUEEZE_COL),
            dtype=np.float64,
            ndmin=2,
        )
    except ValueError as e:
        raise ReferenceDataError(
            "ReferenceData", f"Malformed reference file {path.name}: {e}"
        ) from e

    if table.size == 0:
        table = np.zeros((0, 5))

    highs, lows, closes, lines, squeeze = table.T
    if np.isnan(closes).any() or np.isnan(highs).any() or np.isnan(lows).any():
        raise ReferenceDataError(
            "ReferenceData", f"Missing price values in {path.name}"
        )

    logger.debug(f"Loaded {len(closes)} reference bars from {path.name}")

    return ReferenceData(
        close=closes,
        high=highs,
        low=lows,
        expected_values=lines,
        expected_squeeze=np.nan_to_num(squeeze, nan=0.0) == 1,
    )
