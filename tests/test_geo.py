import math

import pytest

from routing.geo import UNSET, Coordinates, bearing_degrees, distance_km, haversine_km, progress_percentage

SALVADOR = Coordinates(-12.9777, -38.5016)
SAO_PAULO = Coordinates(-23.5505, -46.6333)
RIO = Coordinates(-22.9068, -43.1729)


def test_haversine_sao_paulo_to_rio():
    km = distance_km(SAO_PAULO, RIO)
    # ~360 km as the crow flies
    assert 357 <= km <= 361


def test_haversine_is_symmetric_and_zero_on_identity():
    assert distance_km(SALVADOR, SAO_PAULO) == pytest.approx(distance_km(SAO_PAULO, SALVADOR))
    assert haversine_km(-12.9777, -38.5016, -12.9777, -38.5016) == 0


def test_haversine_one_degree_along_meridian():
    # 2 * pi * 6371 / 360
    assert haversine_km(10, 10, 11, 10) == pytest.approx(111.195, abs=0.01)


def test_unset_sentinel():
    assert UNSET.is_unset()
    assert Coordinates(0, 0).is_unset()
    assert not Coordinates(0, 1).is_unset()
    assert Coordinates.from_dict(None) == UNSET
    assert Coordinates.from_dict({"lat": "-12.5", "lng": 0}) == Coordinates(-12.5, 0)


@pytest.mark.parametrize(
    "start, destination, expected",
    [
        (Coordinates(10, 10), Coordinates(11, 10), 0.0),
        (Coordinates(0, 10), Coordinates(0, 11), 90.0),
        (Coordinates(10, 10), Coordinates(9, 10), 180.0),
        (Coordinates(0, 10), Coordinates(0, 9), 270.0),
    ],
)
def test_bearing_cardinal_directions(start, destination, expected):
    assert bearing_degrees(start, destination) == pytest.approx(expected)


def test_bearing_is_within_range():
    for start, destination in [(SALVADOR, SAO_PAULO), (SAO_PAULO, SALVADOR), (RIO, SAO_PAULO)]:
        heading = bearing_degrees(start, destination)
        assert 0 <= heading < 360

    # Salvador -> São Paulo is roughly south-west
    assert 180 < bearing_degrees(SALVADOR, SAO_PAULO) < 270


def test_bearing_same_point_has_no_direction():
    assert bearing_degrees(RIO, RIO) is None


def test_progress_at_endpoints():
    assert progress_percentage(SALVADOR, SAO_PAULO, SALVADOR) == 0
    assert progress_percentage(SALVADOR, SAO_PAULO, SAO_PAULO) == 100


def test_progress_midway():
    midway = Coordinates((SALVADOR.lat + SAO_PAULO.lat) / 2, (SALVADOR.lng + SAO_PAULO.lng) / 2)
    assert 45 <= progress_percentage(SALVADOR, SAO_PAULO, midway) <= 55


def test_progress_is_clamped_when_moving_away():
    # further from São Paulo than Salvador itself is
    recife = Coordinates(-8.0476, -34.8770)
    assert progress_percentage(SALVADOR, SAO_PAULO, recife) == 0


def test_progress_with_unset_endpoints_is_zero():
    assert progress_percentage(UNSET, SAO_PAULO, RIO) == 0
    assert progress_percentage(SALVADOR, UNSET, RIO) == 0


def test_progress_for_coincident_trip_is_complete():
    nearby = Coordinates(SALVADOR.lat + 0.0005, SALVADOR.lng)
    assert progress_percentage(SALVADOR, nearby, UNSET) == 100


def test_progress_with_unset_current_position():
    # (0, 0) is just far away from both ends here
    assert progress_percentage(SALVADOR, SAO_PAULO, UNSET) == 0


def test_progress_returns_int():
    assert isinstance(progress_percentage(SALVADOR, SAO_PAULO, RIO), int)


def test_haversine_antipodes_is_half_the_circumference():
    half = math.pi * 6371
    assert haversine_km(10, 20, -10, -160) == pytest.approx(half, rel=1e-6)
    # rounding makes the intermediate term land just above 1 for this pair
    km = haversine_km(-79.89449764171447, 41.52625988648887, 79.89449764171447, -138.47374011351113)
    assert km == pytest.approx(half, rel=1e-6)


def test_progress_with_antipodal_current_position():
    antipode = Coordinates(-SAO_PAULO.lat, SAO_PAULO.lng + 180)
    assert progress_percentage(SALVADOR, SAO_PAULO, antipode) == 0
