import pytest

from app.core.exceptions import NoDistanceBandFound
from app.data.reference import DISTANCE_BANDS, build_distance_bands
from app.schemas.pricing import Coordinates
from app.services.distance_bands import band_contains, resolve_distance_band, table_max_distance
from app.services.geo import haversine_km, distance_between


class TestGeoDistance:

    def test_same_point_is_zero(self):
        assert haversine_km(-33.9249, 18.4241, -33.9249, 18.4241) == 0.0

    def test_cape_town_to_johannesburg(self):
        d = haversine_km(-33.9249, 18.4241, -26.2041, 28.0473)
        assert 1260 < d < 1300

    def test_symmetric(self):
        there = haversine_km(-33.9249, 18.4241, -26.2041, 28.0473)
        back = haversine_km(-26.2041, 28.0473, -33.9249, 18.4241)
        assert there == pytest.approx(back)

    def test_one_degree_of_latitude(self):
        # 2 * pi * 6371 / 360
        assert haversine_km(0, 0, 1, 0) == pytest.approx(111.195, abs=0.01)

    def test_distance_between_coordinates(self):
        origin = Coordinates(latitude=-33.9249, longitude=18.4241, city="Cape Town")
        destination = Coordinates(latitude=-26.2041, longitude=28.0473, city="Johannesburg")
        assert distance_between(origin, destination) == haversine_km(-33.9249, 18.4241, -26.2041, 28.0473)


class TestDistanceBandResolver:

    @pytest.mark.parametrize("distance,band_id", [
        (0, "band-0-5"),
        (3, "band-0-5"),
        (5, "band-0-5"),        # shared boundary goes to the lower band
        (5.01, "band-5-10"),
        (8, "band-5-10"),
        (100, "band-90-100"),
        (112.5, "band-100-125"),
        (999, "band-800-1000"),
        (1000, "band-800-1000"),
        (1000.01, "band-1000-plus"),
        (25000, "band-1000-plus"),
    ])
    def test_resolves_band(self, distance, band_id):
        assert resolve_distance_band(distance, DISTANCE_BANDS).id == band_id

    def test_every_distance_in_table_has_one_band(self):
        boundaries = {b.min_km for b in DISTANCE_BANDS} | {b.max_km for b in DISTANCE_BANDS if b.max_km}
        steps = [i * 0.25 for i in range(0, 4001)]

        for d in steps:
            matches = [b for b in DISTANCE_BANDS if band_contains(b, d)]
            if d in boundaries and d > 0:
                assert len(matches) == 2
            else:
                assert len(matches) == 1
            band = resolve_distance_band(d, DISTANCE_BANDS)
            assert band.min_km <= d <= band.max_km

    def test_unordered_bands(self):
        bands = list(reversed(DISTANCE_BANDS))
        assert resolve_distance_band(10, bands).id == "band-5-10"

    def test_negative_distance(self):
        with pytest.raises(NoDistanceBandFound) as exc_info:
            resolve_distance_band(-0.5, DISTANCE_BANDS)
        assert exc_info.value.distance == -0.5

    def test_below_lowest_band(self):
        bands = build_distance_bands([(2, 10), (10, None)])
        with pytest.raises(NoDistanceBandFound):
            resolve_distance_band(1.5, bands)

    def test_empty_band_set(self):
        with pytest.raises(NoDistanceBandFound):
            resolve_distance_band(10, [])

    def test_table_max_distance(self):
        assert table_max_distance(DISTANCE_BANDS) == 1000
        assert table_max_distance(build_distance_bands([(0, None)])) is None

    @pytest.mark.parametrize("distance", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_distance(self, distance):
        # NaN would otherwise slip past every bound of the open band
        with pytest.raises(NoDistanceBandFound):
            resolve_distance_band(distance, DISTANCE_BANDS)
