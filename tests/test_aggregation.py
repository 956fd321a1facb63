"""
Unit tests for dashboard statistics and heatmap bucketing.
"""

import pytest

from billboard_reports.schemas.report import ReportStatus
from billboard_reports.services.aggregation import (
    bucket_key,
    compute_heatmap,
    compute_report_stats,
)


class TestReportStats:
    """Tests for compute_report_stats"""

    def test_empty(self):
        stats = compute_report_stats([])

        assert stats.total_reports == 0
        assert stats.pending_reports == 0
        assert stats.resolved_reports == 0
        assert stats.unique_locations == 0

    def test_under_review_counts_as_pending(self, store, make_report_data):
        a = store.create_report(make_report_data())
        b = store.create_report(make_report_data())
        store.create_report(make_report_data())
        store.update_report_status(a.id, ReportStatus.UNDER_REVIEW)
        store.update_report_status(b.id, ReportStatus.RESOLVED)

        stats = compute_report_stats(store.all_reports())

        assert stats.total_reports == 3
        assert stats.pending_reports == 2
        assert stats.resolved_reports == 1
        assert stats.pending_reports + stats.resolved_reports == stats.total_reports

    def test_total_matches_report_list(self, store, make_report_data):
        for _ in range(4):
            store.create_report(make_report_data())

        stats = compute_report_stats(store.all_reports())

        assert stats.total_reports == len(store.get_reports())

    def test_unique_locations_use_exact_coordinates(self, store, make_report_data):
        store.create_report(make_report_data(latitude=37.7749, longitude=-122.4194))
        store.create_report(make_report_data(latitude=37.7749, longitude=-122.4194))
        store.create_report(make_report_data(latitude=37.774901, longitude=-122.419401))

        stats = compute_report_stats(store.all_reports())

        assert stats.unique_locations == 2


class TestHeatmap:
    """Tests for compute_heatmap"""

    def test_empty_store_has_no_points(self):
        assert compute_heatmap([]) == []

    def test_nearby_reports_share_a_bucket(self, store, make_report_data):
        store.create_report(make_report_data(latitude=37.77490, longitude=-122.41940))
        store.create_report(make_report_data(latitude=37.774901, longitude=-122.419401))

        points = compute_heatmap(store.all_reports())

        assert len(points) == 1
        assert points[0].lat == 37.7749
        assert points[0].lng == -122.4194
        assert points[0].intensity == 1.0
        assert points[0].count == 2

    def test_intensity_is_relative_to_densest_bucket(self, store, make_report_data):
        for _ in range(4):
            store.create_report(make_report_data(latitude=10.0, longitude=20.0))
        store.create_report(make_report_data(latitude=-33.8688, longitude=151.2093))
        store.create_report(make_report_data(latitude=-33.8688, longitude=151.2093))

        points = {(p.lat, p.lng): p for p in compute_heatmap(store.all_reports())}

        assert points[(10.0, 20.0)].intensity == 1.0
        assert points[(-33.8688, 151.2093)].intensity == pytest.approx(0.5)

    def test_counts_sum_to_total(self, store, make_report_data):
        coords = [(1.0, 1.0), (1.0, 1.0), (1.0, 1.0), (2.5, -3.25), (45.12341, 7.0), (45.12342, 7.0)]
        for lat, lng in coords:
            store.create_report(make_report_data(latitude=lat, longitude=lng))

        points = compute_heatmap(store.all_reports())

        assert sum(p.count for p in points) == len(coords)
        assert all(0 < p.intensity <= 1 for p in points)
        assert [p.intensity for p in points].count(1.0) == 1

    def test_precision_is_configurable(self, store, make_report_data):
        store.create_report(make_report_data(latitude=37.71, longitude=-122.41))
        store.create_report(make_report_data(latitude=37.74, longitude=-122.44))

        assert len(compute_heatmap(store.all_reports(), precision=2)) == 2
        assert len(compute_heatmap(store.all_reports(), precision=1)) == 1

    def test_bucket_key_format(self):
        assert bucket_key(37.77490, -122.41940) == "37.7749,-122.4194"
        assert bucket_key(0.0, 0.0, precision=2) == "0.00,0.00"

    def test_exact_ties_round_away_from_zero(self):
        assert bucket_key(37.03125, -0.03125) == "37.0313,-0.0313"
        assert bucket_key(1.25, -1.25, precision=1) == "1.3,-1.3"

    def test_tie_shares_bucket_with_rounded_neighbour(self, store, make_report_data):
        store.create_report(make_report_data(latitude=37.03125, longitude=10.0))
        store.create_report(make_report_data(latitude=37.0313, longitude=10.0))

        points = compute_heatmap(store.all_reports())

        assert len(points) == 1
        assert points[0].lat == 37.0313
        assert points[0].count == 2

    def test_values_below_a_tie_round_down(self):
        assert bucket_key(37.03124, -122.41944) == "37.0312,-122.4194"

    def test_rounded_zero_has_no_sign(self, store, make_report_data):
        store.create_report(make_report_data(latitude=-0.00001, longitude=-0.00004))
        store.create_report(make_report_data(latitude=0.00001, longitude=0.00002))

        points = compute_heatmap(store.all_reports())

        assert bucket_key(-0.00001, -0.00004) == "0.0000,0.0000"
        assert len(points) == 1
        assert points[0].count == 2
        assert points[0].model_dump_json() == '{"lat":0.0,"lng":0.0,"intensity":1.0,"count":2}'
