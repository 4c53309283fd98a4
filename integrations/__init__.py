"""
Upstream data fetchers for terrain analysis.

Each fetcher performs one HTTP call and raises UpstreamError when the
service is unavailable; callers decide the fallback.
"""

from .errors import UpstreamError
from .terrain_adapter import get_elevation, get_elevation_grid, compute_mean_slope_deg
from .landuse_adapter import get_landuse_and_road, dedupe_landuse
from .rainfall_adapter import get_rainfall_3day, get_next_day_forecast

__all__ = [
    "UpstreamError",
    "get_elevation",
    "get_elevation_grid",
    "compute_mean_slope_deg",
    "get_landuse_and_road",
    "dedupe_landuse",
    "get_rainfall_3day",
    "get_next_day_forecast",
]
