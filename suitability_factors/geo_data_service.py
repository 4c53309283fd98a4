# suitability_factors/geo_data_service.py
import logging

from integrations import (
    UpstreamError,
    compute_mean_slope_deg,
    get_elevation,
    get_elevation_grid,
    get_landuse_and_road,
    get_rainfall_3day,
)
from .models import LandUseAndRoad, TerrainSignals

logger = logging.getLogger(__name__)


class GeoDataService:
    @staticmethod
    def get_terrain_signals(lat: float, lon: float) -> TerrainSignals:
        """
        Runs the four upstream fetches one after another. A failed fetch
        is logged and replaced by its default; it never aborts the others.
        """
        try:
            elevation = get_elevation(lat, lon)
        except UpstreamError as e:
            logger.warning(f"Elevation unavailable for ({lat}, {lon}): {e}")
            elevation = None

        try:
            grid = get_elevation_grid(lat, lon)
        except UpstreamError as e:
            logger.warning(f"Elevation grid unavailable for ({lat}, {lon}): {e}")
            grid = None
        slope_deg = compute_mean_slope_deg(grid) if grid else 0.0

        try:
            lu = get_landuse_and_road(lat, lon)
        except UpstreamError as e:
            logger.warning(f"Landuse/road unavailable for ({lat}, {lon}): {e}")
            lu = LandUseAndRoad()

        try:
            rainfall = get_rainfall_3day(lat, lon)
        except UpstreamError as e:
            logger.warning(f"Rainfall unavailable for ({lat}, {lon}): {e}")
            rainfall = 0.0

        return TerrainSignals(
            elevation=elevation,
            slope_deg=slope_deg,
            landuse=lu.landuse,
            nearest_road_m=lu.nearest_road_m,
            rainfall_mm=rainfall,
        )
