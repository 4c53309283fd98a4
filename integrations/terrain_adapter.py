import logging
from typing import List, Optional

import numpy as np
import requests

from config import HTTP_TIMEOUT, OPENTOPODATA_URL
from .errors import MALFORMED_RESPONSE, UpstreamError

logger = logging.getLogger(__name__)

GRID_OFFSETS = (-0.01, 0.0, 0.01)
# Approximate ground distance of one grid step (111 km per degree * 0.01 deg).
# Longitude convergence at higher latitudes is deliberately not corrected.
CELL_DIST_M = 111000 * 0.01
CENTER_INDEX = 4


def _lookup(locations: str) -> list:
    try:
        r = requests.get(
            OPENTOPODATA_URL,
            params={"locations": locations},
            timeout=HTTP_TIMEOUT
        )
        r.raise_for_status()
        results = r.json().get("results") or []
    except requests.RequestException as e:
        raise UpstreamError("opentopodata", str(e)) from e
    except MALFORMED_RESPONSE as e:
        raise UpstreamError("opentopodata", f"unexpected response: {e}") from e
    if not isinstance(results, list):
        raise UpstreamError("opentopodata", "results is not a list")
    return results


def get_elevation(lat: float, lon: float) -> Optional[float]:
    """Single point SRTM elevation in meters, or None if the service has no value."""
    results = _lookup(f"{lat},{lon}")
    if not results:
        return None
    try:
        value = results[0].get("elevation")
        return None if value is None else float(value)
    except MALFORMED_RESPONSE as e:
        raise UpstreamError("opentopodata", f"unexpected result: {e}") from e


def grid_points(lat: float, lon: float) -> List[tuple]:
    """3x3 points around (lat, lon), lat offset outer, lon offset inner.

    Index 4 is always the center point.
    """
    return [(lat + dy, lon + dx) for dy in GRID_OFFSETS for dx in GRID_OFFSETS]


def get_elevation_grid(lat: float, lon: float) -> List[float]:
    """One batched lookup for the 9 grid points. Missing values become 0."""
    locations = "|".join(f"{p_lat},{p_lon}" for p_lat, p_lon in grid_points(lat, lon))
    results = _lookup(locations)
    if len(results) < 9:
        logger.debug(f"Elevation grid for ({lat}, {lon}) returned {len(results)} of 9 points")
    try:
        return [
            float(it.get("elevation")) if it.get("elevation") is not None else 0
            for it in results
        ]
    except MALFORMED_RESPONSE as e:
        raise UpstreamError("opentopodata", f"unexpected grid result: {e}") from e


def compute_mean_slope_deg(grid: Optional[List[float]]) -> float:
    """
    Mean slope in degrees between the grid center and its 8 neighbours.
    Returns 0 when fewer than 9 samples are available.
    """
    if not grid or len(grid) < 9:
        return 0.0

    center = grid[CENTER_INDEX] or 0
    values = np.asarray([center if v is None else v for v in grid[:9]], dtype=float)
    neighbors = np.delete(values, CENTER_INDEX)

    slopes = np.degrees(np.arctan2(np.abs(neighbors - center), CELL_DIST_M))
    return float(slopes.mean())
