import pytest
from unittest.mock import patch

from conftest import make_response
from integrations import UpstreamError
from integrations.landuse_adapter import build_query, dedupe_landuse, get_landuse_and_road
from suitability_factors.models import LandUseFeature
from utils.geo_math import haversine_meters


def test_haversine_zero_and_known_distance():
    assert haversine_meters(10.0, 20.0, 10.0, 20.0) == 0.0
    # One degree of latitude is ~111.2 km on a 6371 km sphere.
    assert haversine_meters(0.0, 0.0, 1.0, 0.0) == pytest.approx(111195, rel=1e-3)


def test_query_requests_landuse_natural_and_highway():
    q = build_query(12.5, 77.5, 1000)
    assert 'way(around:1000,12.5,77.5)["landuse"]' in q
    assert 'relation(around:1000,12.5,77.5)["landuse"]' in q
    assert '["natural"~"wood|water|wetland"]' in q
    assert '["highway"]' in q
    assert "out center;" in q


@patch("integrations.landuse_adapter.requests.post")
def test_landuse_and_nearest_road(mock_post):
    mock_post.return_value = make_response({"elements": [
        {"type": "way", "tags": {"landuse": "farmland"}, "center": {"lat": 12.0, "lon": 77.0}},
        {"type": "way", "tags": {"landuse": "farmland", "crop": "rice"}},
        {"type": "way", "tags": {"highway": "primary"}, "center": {"lat": 12.009, "lon": 77.0}},
        {"type": "way", "tags": {"highway": "track"}, "center": {"lat": 12.001, "lon": 77.0}},
        {"type": "node", "tags": {"highway": "bus_stop"}, "lat": 12.005, "lon": 77.0},
        {"type": "way", "tags": {"natural": "wood"}},
    ]})

    res = get_landuse_and_road(12.0, 77.0)

    assert [f.value for f in res.landuse] == ["farmland", "farmland"]
    assert res.nearest_road_m == pytest.approx(haversine_meters(12.0, 77.0, 12.001, 77.0))


@patch("integrations.landuse_adapter.requests.post")
def test_point_coordinates_used_without_center(mock_post):
    mock_post.return_value = make_response({"elements": [
        {"type": "node", "tags": {"highway": "crossing"}, "lat": 12.002, "lon": 77.0},
    ]})
    res = get_landuse_and_road(12.0, 77.0)
    assert res.nearest_road_m == pytest.approx(222, rel=0.01)


@patch("integrations.landuse_adapter.requests.post")
def test_no_highway_means_no_distance(mock_post):
    mock_post.return_value = make_response({"elements": [
        {"type": "way", "tags": {"landuse": "forest"}},
        {"type": "way", "tags": {"highway": "path"}},
    ]})
    res = get_landuse_and_road(12.0, 77.0)
    assert res.nearest_road_m is None
    assert res.landuse[0].value == "forest"


@patch("integrations.landuse_adapter.requests.post")
def test_overpass_failure_raises(mock_post):
    mock_post.return_value = make_response(None, status=429)
    with pytest.raises(UpstreamError):
        get_landuse_and_road(12.0, 77.0)


def test_dedupe_keeps_first_occurrence():
    first = LandUseFeature(value="farmland", tags={"landuse": "farmland", "name": "A"})
    second = LandUseFeature(value="farmland", tags={"landuse": "farmland", "name": "B"})
    meadow = LandUseFeature(value="meadow")

    unique = dedupe_landuse([first, meadow, second])
    assert unique == [first, meadow]
    assert unique[0].tags["name"] == "A"


@pytest.mark.parametrize("payload", [
    [{"tags": {"landuse": "farmland"}}],
    None,
    {"elements": [None]},
    {"elements": [{"tags": "highway"}]},
    {"elements": [{"tags": {"highway": "primary"}, "center": [12.0, 77.0]}]},
    {"elements": [{"tags": {"highway": "primary"}, "lat": "north", "lon": 77.0}]},
])
@patch("integrations.landuse_adapter.requests.post")
def test_unexpected_overpass_payload_is_upstream_error(mock_post, payload):
    mock_post.return_value = make_response(payload)
    with pytest.raises(UpstreamError):
        get_landuse_and_road(12.0, 77.0)
