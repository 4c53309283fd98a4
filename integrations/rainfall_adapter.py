import logging
from typing import Dict, Optional

import requests

from config import HTTP_TIMEOUT, OPEN_METEO_URL
from .errors import MALFORMED_RESPONSE, UpstreamError

logger = logging.getLogger(__name__)

RAINFALL_WINDOW_DAYS = 3


def _fetch_daily(lat: float, lon: float, variables: str) -> Dict:
    params = {
        "latitude": lat,
        "longitude": lon,
        "daily": variables,
        "timezone": "auto",
    }
    try:
        resp = requests.get(OPEN_METEO_URL, params=params, timeout=HTTP_TIMEOUT)
        resp.raise_for_status()
        data = resp.json() or {}
    except (requests.RequestException, ValueError) as e:
        raise UpstreamError("open-meteo", str(e)) from e

    if not isinstance(data, dict):
        raise UpstreamError("open-meteo", "response is not an object")
    daily = data.get("daily")
    if daily is not None and not isinstance(daily, dict):
        raise UpstreamError("open-meteo", "daily block is not an object")
    return daily or {}


def get_rainfall_3day(lat: float, lon: float) -> float:
    """Sum of the first three daily precipitation values (mm). Missing days count as 0."""
    values = _fetch_daily(lat, lon, "precipitation_sum").get("precipitation_sum") or []
    if not values:
        logger.debug(f"No precipitation series for ({lat}, {lon})")
    try:
        return float(sum(float(v or 0) for v in values[:RAINFALL_WINDOW_DAYS]))
    except MALFORMED_RESPONSE as e:
        raise UpstreamError("open-meteo", f"unexpected precipitation series: {e}") from e


def get_next_day_forecast(lat: float, lon: float) -> Dict[str, Optional[float]]:
    """
    Next-day precipitation sum (mm) and maximum temperature (C).
    Returns {"rainfall": ..., "maxTemp": ...}
    """
    daily = _fetch_daily(lat, lon, "precipitation_sum,temperature_2m_max")
    rain = daily.get("precipitation_sum") or []
    temp = daily.get("temperature_2m_max") or []
    if not rain or not temp:
        raise UpstreamError("open-meteo", "daily forecast missing precipitation or temperature")
    try:
        return {
            "rainfall": None if rain[0] is None else float(rain[0]),
            "maxTemp": None if temp[0] is None else float(temp[0]),
        }
    except MALFORMED_RESPONSE as e:
        raise UpstreamError("open-meteo", f"unexpected forecast values: {e}") from e
