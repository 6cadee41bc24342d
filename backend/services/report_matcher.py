"""
Associates user reports with candidate routes by proximity
"""

from typing import Iterable, List, Sequence

from models import Report
from services.geometry import NEAR_ROUTE_THRESHOLD_KM, Point, is_point_near_polyline


def report_matches_route(report: Report, route_points: Sequence[Point],
                         threshold_km: float = NEAR_ROUTE_THRESHOLD_KM) -> bool:
    """True if the report lies within threshold_km of any segment of the route"""
    return is_point_near_polyline(report.as_point(), route_points, threshold_km)


def match_reports(route_points: Sequence[Point], reports: Iterable[Report],
                  threshold_km: float = NEAR_ROUTE_THRESHOLD_KM) -> List[Report]:
    """
    Collect every report lying on the route.

    A report may match any number of routes; overlapping reports are all kept.
    """
    return [report for report in reports if report_matches_route(report, route_points, threshold_km)]
