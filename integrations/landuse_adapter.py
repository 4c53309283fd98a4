import logging
from typing import List

import requests

from config import HTTP_TIMEOUT, LANDUSE_RADIUS_M, OVERPASS_URL
from suitability_factors.models import LandUseAndRoad, LandUseFeature
from utils.geo_math import haversine_meters
from .errors import MALFORMED_RESPONSE, UpstreamError

logger = logging.getLogger(__name__)


def build_query(lat: float, lon: float, radius: int = LANDUSE_RADIUS_M) -> str:
    return f"""
[out:json][timeout:25];
(
  way(around:{radius},{lat},{lon})["landuse"];
  relation(around:{radius},{lat},{lon})["landuse"];
  way(around:{radius},{lat},{lon})["natural"~"wood|water|wetland"];
  way(around:{radius},{lat},{lon})["highway"];
);
out center;"""


def _parse_elements(lat: float, lon: float, elements: list) -> LandUseAndRoad:
    result = LandUseAndRoad()

    for el in elements:
        tags = el.get("tags") or {}

        if tags.get("landuse"):
            result.landuse.append(LandUseFeature(value=tags["landuse"], tags=tags))

        if tags.get("highway"):
            center = el.get("center") or {}
            el_lat = center.get("lat", el.get("lat"))
            el_lon = center.get("lon", el.get("lon"))
            if el_lat is None or el_lon is None:
                continue
            d = haversine_meters(lat, lon, float(el_lat), float(el_lon))
            if result.nearest_road_m is None or d < result.nearest_road_m:
                result.nearest_road_m = d

    return result


def get_landuse_and_road(lat: float, lon: float, radius: int = LANDUSE_RADIUS_M) -> LandUseAndRoad:
    """
    Land-use features and nearest highway distance (meters) around a point.

    The land-use list is returned as OSM reports it, duplicates included.
    nearest_road_m stays None when no highway element has coordinates.
    """
    try:
        resp = requests.post(
            OVERPASS_URL,
            data=build_query(lat, lon, radius),
            timeout=HTTP_TIMEOUT
        )
        resp.raise_for_status()
        js = resp.json()
    except (requests.RequestException, ValueError) as e:
        raise UpstreamError("overpass", str(e)) from e

    try:
        result = _parse_elements(lat, lon, js.get("elements") or [])
    except MALFORMED_RESPONSE as e:
        raise UpstreamError("overpass", f"unexpected response: {e}") from e

    logger.debug(f"Overpass ({lat}, {lon}): {len(result.landuse)} landuse, road={result.nearest_road_m}")
    return result


def dedupe_landuse(features: List[LandUseFeature]) -> List[LandUseFeature]:
    """Keep the first feature for each land-use value."""
    seen = set()
    unique = []
    for f in features:
        if f.value in seen:
            continue
        seen.add(f.value)
        unique.append(f)
    return unique
