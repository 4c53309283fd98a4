# suitability_factors/aggregator.py
from typing import Iterable, List, Optional

from .models import LandUseFeature, TerrainSignals

BASELINE = 0.5
LOW_BAND = 0.35
HIGH_BAND = 0.65
# An unknown road distance counts as very far when recommending access works.
FAR_ROAD_M = 9999


def _elevation_adjustment(elevation: Optional[float]) -> float:
    if elevation is None:
        return 0.0
    if elevation < 5:
        return -0.25
    if elevation < 20:
        return -0.05
    return 0.05


def _slope_adjustment(slope_deg: float) -> float:
    if slope_deg < 3:
        return 0.1
    if slope_deg >= 8:
        return -0.15
    return 0.0


def _road_adjustment(nearest_road_m: Optional[float]) -> float:
    if nearest_road_m is None:
        return 0.0
    if nearest_road_m < 100:
        return 0.12
    if nearest_road_m < 500:
        return 0.04
    return -0.08


def _landuse_adjustment(landuse: Iterable[LandUseFeature]) -> float:
    values = {str(f.value or "").lower() for f in landuse}
    adj = 0.0
    if "farmland" in values:
        adj += 0.12
    if "forest" in values or "wood" in values:
        adj -= 0.04
    return adj


def _rainfall_adjustment(rainfall_mm: float) -> float:
    if rainfall_mm > 200:
        return -0.10
    if rainfall_mm > 50:
        return 0.04
    return 0.0


class Aggregator:
    """Hand-tuned linear heuristic; a pure function of the fetched signals."""

    @staticmethod
    def compute_suitability_score(signals: TerrainSignals) -> float:
        score = (
            BASELINE
            + _elevation_adjustment(signals.elevation)
            + _slope_adjustment(signals.slope_deg)
            + _road_adjustment(signals.nearest_road_m)
            + _landuse_adjustment(signals.landuse)
            + _rainfall_adjustment(signals.rainfall_mm)
        )
        score = max(0.0, min(1.0, score))
        return round(score, 3)

    @staticmethod
    def recommend(score: float, slope_deg: Optional[float] = None,
                  nearest_road_m: Optional[float] = None,
                  elevation: Optional[float] = None) -> List[str]:
        """Ordered action list for a score band."""
        slope = slope_deg if slope_deg is not None else 0
        road = nearest_road_m if nearest_road_m is not None else FAR_ROAD_M
        recs = []

        if score < LOW_BAND:
            recs.append("Flood mitigation & drainage works")
            if slope > 8:
                recs.append("Terracing & soil conservation")
            if road > 500:
                recs.append("Access road construction")
        elif score < HIGH_BAND:
            recs.append("Targeted irrigation & drainage upgrades")
            recs.append("Pilot livelihood & agri-support programs")
        else:
            recs.append("Investment candidate: irrigation, value-chain infra, agri-extension")
            if slope < 5:
                recs.append("Consider solar farm pilot (if land available)")

        return recs
