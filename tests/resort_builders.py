"""Builders for a small synthetic resort used across the test suite.

COORDINATE SYSTEM:
    Positions are given in meters east/north of the origin (lat=0, lon=0)
    and converted with 1 degree ≈ 111,320 meters, which holds in both
    directions near the equator. This avoids needing GeoCalculator to build
    fixtures (which would test with tested code).

Layout (meters, x east / y north):

    T  = (0, 1000)   top station of lift-a
    B0 = (0, 0)      base, bottom station of lift-a
    B1 = (1000, 0)   second base, bottom station of lift-e
    T2 = (2000, 1000) top station of lift-e

    lift-a      B0 -> T                   5.0 min  +300m
    piste-b     T(+30m E) -> B1           blue   1000m  -300m
    piste-c     T(20m W) -> B0(10m W)     green  1200m  -300m
    piste-d     T(+10m N) -> B1(+10m E)   black   800m  -300m
    piste-g     T(40m S) -> B1(25m N)     green  3000m  -300m
    lift-e      B1(20m S) -> T2           4.0 min  +300m
    piste-f     T2(+30m N) -> B1(+40m E)  red    1500m  -300m
    piste-h     (600, 300) -> T(+15m N)   blue    900m   drawn uphill: end near T
    piste-x     (5000, 5000) -> (5000, 4000) blue 1000m  isolated
"""

from typing import Any, Iterable, Optional

from skiroute_planner.model.difficulty import Difficulty
from skiroute_planner.model.path_point import PathPoint
from skiroute_planner.model.segment import Lift, Slope
from skiroute_planner.model.segment_catalog import SegmentCatalog

METERS_PER_DEGREE = 111_320.0


def point_m(x_m: float, y_m: float, elevation: Optional[float] = None) -> PathPoint:
    """PathPoint at x meters east, y meters north of the origin."""
    return PathPoint(lon=x_m / METERS_PER_DEGREE, lat=y_m / METERS_PER_DEGREE, elevation=elevation)


def make_lift(
    segment_id: str,
    start_m: tuple[float, float],
    end_m: tuple[float, float],
    duration_min: float = 5.0,
    vertical_rise_m: float = 300.0,
    connects_to: Optional[Iterable[str]] = None,
) -> Lift:
    return Lift(
        id=segment_id,
        name=segment_id.replace("-", " ").title(),
        points=(point_m(*start_m), point_m(*end_m)),
        connects_to=None if connects_to is None else frozenset(connects_to),
        lift_type="chairlift",
        vertical_rise_m=vertical_rise_m,
        duration_min=duration_min,
    )


def make_slope(
    segment_id: str,
    start_m: tuple[float, float],
    end_m: tuple[float, float],
    difficulty: Difficulty = Difficulty.BLUE,
    length_m: float = 1000.0,
    vertical_drop_m: float = 300.0,
    bidirectional: bool = False,
    connects_to: Optional[Iterable[str]] = None,
    elevations: Optional[tuple[float, float]] = None,
) -> Slope:
    start_elev, end_elev = elevations if elevations else (None, None)
    return Slope(
        id=segment_id,
        name=segment_id.replace("-", " ").title(),
        points=(point_m(*start_m, elevation=start_elev), point_m(*end_m, elevation=end_elev)),
        connects_to=None if connects_to is None else frozenset(connects_to),
        bidirectional=bidirectional,
        difficulty=difficulty,
        vertical_drop_m=vertical_drop_m,
        length_m=length_m,
    )


def build_test_resort() -> SegmentCatalog:
    """The resort drawn in the module docstring (geometric connectivity only)."""
    lifts = [
        make_lift("lift-a", start_m=(0, 0), end_m=(0, 1000), duration_min=5.0),
        make_lift("lift-e", start_m=(1000, -20), end_m=(2000, 1000), duration_min=4.0),
    ]
    slopes = [
        make_slope("piste-b", start_m=(30, 1000), end_m=(1000, 0), difficulty=Difficulty.BLUE, length_m=1000),
        make_slope("piste-c", start_m=(-20, 1000), end_m=(-10, 0), difficulty=Difficulty.GREEN, length_m=1200),
        make_slope("piste-d", start_m=(0, 1010), end_m=(1010, 0), difficulty=Difficulty.BLACK, length_m=800),
        make_slope("piste-g", start_m=(0, 960), end_m=(1000, 25), difficulty=Difficulty.GREEN, length_m=3000),
        make_slope("piste-f", start_m=(2000, 1030), end_m=(1040, 0), difficulty=Difficulty.RED, length_m=1500),
        make_slope("piste-h", start_m=(600, 300), end_m=(0, 1015), difficulty=Difficulty.BLUE, length_m=900),
        make_slope("piste-x", start_m=(5000, 5000), end_m=(5000, 4000), difficulty=Difficulty.BLUE, length_m=1000),
    ]
    return SegmentCatalog(lifts=lifts, slopes=slopes)


def build_two_segment_resort() -> SegmentCatalog:
    """Lift A whose exit lies 40m from the entry of blue slope B (1000m)."""
    return SegmentCatalog(
        lifts=[make_lift("lift-a", start_m=(0, 0), end_m=(0, 1000), duration_min=6.0)],
        slopes=[make_slope("piste-b", start_m=(40, 1000), end_m=(900, 100), difficulty=Difficulty.BLUE, length_m=1000)],
    )


def feature(
    properties: dict[str, Any],
    coordinates: list[list[float]],
) -> dict[str, Any]:
    """GeoJSON LineString feature as written by the data pipeline."""
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": {"type": "LineString", "coordinates": coordinates},
    }


def feature_collection(features: list[dict[str, Any]]) -> dict[str, Any]:
    return {"type": "FeatureCollection", "features": features}
