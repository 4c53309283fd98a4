# suitability_factors/models.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Location:
    """A point submitted for analysis (user input or a stored site)."""
    id: Optional[Any]
    display_name: Optional[str]
    lat: float
    lon: float

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Location":
        if not isinstance(raw, dict):
            raise ValueError("Each location must be an object with lat and lon")
        if raw.get("lat") is None or raw.get("lon") is None:
            raise ValueError("Location is missing lat/lon")
        return cls(
            id=raw.get("id"),
            display_name=raw.get("display_name"),
            lat=float(raw["lat"]),
            lon=float(raw["lon"]),
        )


@dataclass
class LandUseFeature:
    value: str
    tags: Dict[str, Any] = field(default_factory=dict)
    type: str = "landuse"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "value": self.value, "tags": self.tags}


@dataclass
class LandUseAndRoad:
    landuse: List[LandUseFeature] = field(default_factory=list)
    nearest_road_m: Optional[float] = None


@dataclass
class TerrainSignals:
    """
    Everything fetched for one location. A None elevation or road distance
    means the signal was unavailable; slope and rainfall fall back to 0.
    """
    elevation: Optional[float]
    slope_deg: float
    landuse: List[LandUseFeature]
    nearest_road_m: Optional[float]
    rainfall_mm: float
