"""
Price Data Sources

CONTRACT:
    Output: close / high / low series for the squeeze indicator

RESPONSIBILITIES:
    - Provide the fixed demo series used by the dashboard endpoint
    - Load reference CSV exports (prices + expected indicator output)

NO NETWORK ACCESS - Static data and local files only.
"""

from squeeze_alert.services.data_ingestion.demo_data import get_demo_series
from squeeze_alert.services.data_ingestion.reference_data import (
    ReferenceData,
    load_reference_csv,
)

__all__ = [
    "get_demo_series",
    "ReferenceData",
    "load_reference_csv",
]
