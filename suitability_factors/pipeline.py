# suitability_factors/pipeline.py
"""
Request orchestration for both feature flows.

Terrain analysis: locations are processed strictly one after another.
Every fetch has its own fallback and a failed insert only drops that
location, so a batch always completes with whatever could be stored.
"""

import logging
from typing import Any, Dict, List, Optional

from integrations import dedupe_landuse, get_next_day_forecast
from storage import ResultStore, StorageError
from .aggregator import Aggregator
from .geo_data_service import GeoDataService
from .models import Location
from .rainfall_risk import classify_risk

logger = logging.getLogger(__name__)


def resolve_locations(store: ResultStore, body: Dict[str, Any]) -> List[Location]:
    """Explicit locations win, then site ids, then every stored site."""
    locations = body.get("locations")
    if isinstance(locations, list) and locations:
        return [Location.from_dict(loc) for loc in locations]

    site_ids = body.get("site_ids")
    if isinstance(site_ids, list) and site_ids:
        return store.get_sites(site_ids)

    return store.get_sites()


def analyze_location(loc: Location) -> Dict[str, Any]:
    """Fetch, score and recommend for one location. No persistence."""
    signals = GeoDataService.get_terrain_signals(loc.lat, loc.lon)
    score = Aggregator.compute_suitability_score(signals)
    recs = Aggregator.recommend(
        score,
        slope_deg=signals.slope_deg,
        nearest_road_m=signals.nearest_road_m,
        elevation=signals.elevation,
    )

    return {
        "site_id": loc.id,
        "site_name": loc.display_name if loc.display_name is not None else loc.id,
        "lat": loc.lat,
        "lon": loc.lon,
        "elevation_m": signals.elevation,
        "slope_deg": signals.slope_deg,
        "landuse": [f.to_dict() for f in dedupe_landuse(signals.landuse)],
        "nearest_road_m": signals.nearest_road_m,
        "rainfall_3d_mm": signals.rainfall_mm,
        "suitability_score": score,
        "recommended_actions": recs,
    }


def run_terrain_analysis(store: ResultStore, body: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Analyze and persist a batch; returns stored rows, best score first."""
    locations = resolve_locations(store, body)
    logger.info(f"Terrain analysis for {len(locations)} location(s)")

    results = []
    for loc in locations:
        record = analyze_location(loc)
        try:
            results.append(store.save_analysis(record))
        except StorageError as e:
            logger.warning(f"Skipping {record['site_name']}: result not stored ({e})")

    results.sort(key=lambda r: r["suitability_score"], reverse=True)
    return results


def run_rainfall_prediction(store: ResultStore, body: Dict[str, Any],
                            regions: Optional[List[Dict[str, Any]]] = None,
                            model_id: str = "open-meteo",
                            default_requested_by: Optional[str] = None) -> Dict[str, Any]:
    """One forecast call, one risk label, one stored prediction."""
    region_id = body.get("region_id")
    lat = body.get("latitude")
    lon = body.get("longitude")

    if lat is None or lon is None:
        region = next((r for r in regions or [] if r["id"] == region_id), None)
        if region is None:
            raise ValueError(f"Unknown region '{region_id}' and no coordinates given")
        lat, lon = region["lat"], region["lon"]

    forecast = get_next_day_forecast(float(lat), float(lon))
    output = {
        "rainfall": forecast["rainfall"],
        "maxTemp": forecast["maxTemp"],
        "risk": classify_risk(forecast["rainfall"], forecast["maxTemp"]),
    }

    return store.save_prediction(
        region_id=region_id,
        model_id=model_id,
        requested_by=body.get("requested_by") or default_requested_by,
        output=output,
    )
