import pytest

from suitability_factors.aggregator import Aggregator
from suitability_factors.models import LandUseFeature, TerrainSignals
from suitability_factors.rainfall_risk import classify_risk


def _signals(elevation=50.0, slope_deg=5.0, landuse=(), nearest_road_m=None, rainfall_mm=0.0):
    return TerrainSignals(
        elevation=elevation,
        slope_deg=slope_deg,
        landuse=[LandUseFeature(value=v) for v in landuse],
        nearest_road_m=nearest_road_m,
        rainfall_mm=rainfall_mm,
    )


def test_reference_low_lying_farmland():
    signals = _signals(elevation=2, slope_deg=1, nearest_road_m=50, landuse=["farmland"], rainfall_mm=10)
    assert Aggregator.compute_suitability_score(signals) == 0.59


def test_neutral_inputs_stay_near_baseline():
    # elevation +0.05, slope in [3, 8) and no road/landuse/rain adjustments
    assert Aggregator.compute_suitability_score(_signals()) == 0.55


def test_unknown_elevation_and_road_are_not_adjusted():
    signals = _signals(elevation=None, nearest_road_m=None)
    assert Aggregator.compute_suitability_score(signals) == 0.5


@pytest.mark.parametrize("elevation,expected", [(4.9, 0.25), (5, 0.45), (19.9, 0.45), (20, 0.55)])
def test_elevation_bands(elevation, expected):
    assert Aggregator.compute_suitability_score(_signals(elevation=elevation)) == expected


@pytest.mark.parametrize("road,expected", [(99, 0.67), (100, 0.59), (499, 0.59), (500, 0.47), (9999, 0.47)])
def test_road_bands(road, expected):
    assert Aggregator.compute_suitability_score(_signals(nearest_road_m=road)) == expected


def test_landuse_adjustments_are_independent_and_case_insensitive():
    both = _signals(landuse=["Farmland", "forest"])
    assert Aggregator.compute_suitability_score(both) == 0.63

    wood = _signals(landuse=["wood"])
    assert Aggregator.compute_suitability_score(wood) == 0.51


def test_rainfall_bands():
    assert Aggregator.compute_suitability_score(_signals(rainfall_mm=50)) == 0.55
    assert Aggregator.compute_suitability_score(_signals(rainfall_mm=51)) == 0.59
    assert Aggregator.compute_suitability_score(_signals(rainfall_mm=201)) == 0.45


@pytest.mark.parametrize("signals", [
    _signals(elevation=-500, slope_deg=80, nearest_road_m=1e9, landuse=["forest"], rainfall_mm=1e6),
    _signals(elevation=1e6, slope_deg=0, nearest_road_m=0, landuse=["farmland"], rainfall_mm=60),
    _signals(elevation=float("-inf"), slope_deg=float("inf"), rainfall_mm=float("inf")),
])
def test_score_always_clamped(signals):
    score = Aggregator.compute_suitability_score(signals)
    assert 0.0 <= score <= 1.0
    assert score == round(score, 3)


def test_low_band_recommendations():
    recs = Aggregator.recommend(0.2, slope_deg=9, nearest_road_m=800)
    assert recs == [
        "Flood mitigation & drainage works",
        "Terracing & soil conservation",
        "Access road construction",
    ]


def test_low_band_unknown_road_counts_as_far():
    recs = Aggregator.recommend(0.3, slope_deg=2, nearest_road_m=None)
    assert recs == ["Flood mitigation & drainage works", "Access road construction"]


def test_low_band_close_road_and_gentle_slope():
    recs = Aggregator.recommend(0.34, slope_deg=8, nearest_road_m=500)
    assert recs == ["Flood mitigation & drainage works"]


def test_mid_band_recommendations():
    for score in (0.35, 0.5, 0.649):
        assert Aggregator.recommend(score, slope_deg=1, nearest_road_m=10) == [
            "Targeted irrigation & drainage upgrades",
            "Pilot livelihood & agri-support programs",
        ]


def test_high_band_solar_only_on_gentle_slope():
    flat = Aggregator.recommend(0.65, slope_deg=4.9)
    assert flat[0].startswith("Investment candidate")
    assert "Consider solar farm pilot (if land available)" in flat

    steep = Aggregator.recommend(0.8, slope_deg=5)
    assert len(steep) == 1


@pytest.mark.parametrize("rain,temp,label", [
    (150, 20, "High"),
    (10, 41, "High"),
    (60, 20, "Moderate"),
    (10, 36, "Moderate"),
    (10, 20, "Low"),
    (50, 35, "Low"),
    (100, 40, "Moderate"),
    (None, None, "Low"),
])
def test_risk_label(rain, temp, label):
    assert classify_risk(rain, temp) == label
