"""Configuration constants for Ski Route Planner.

All configurable parameters are centralized here for easy tuning.

Classes:
    CatalogConfig: Location of the static segment catalog
    EntityPrefixes: Namespaced ID prefixes for lifts and slopes
    SlopeConfig: Difficulty ladder
    LiftConfig: Known lift types
    ConnectionConfig: Distance thresholds for segment connectivity
    SpeedConfig: Average speeds for time estimation
    SearchConfig: A* route search limits
"""

from pathlib import Path

# Package root directory (where skiroute_planner/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of skiroute_planner/)
PROJECT_ROOT = PACKAGE_DIR.parent

# Data directory outside package (produced by the offline pipeline, not shipped with package)
DATA_DIR = PROJECT_ROOT / "data"


class CatalogConfig:
    """Static catalog file locations."""

    DATA_DIR = DATA_DIR
    LIFTS_FILENAME = "lifts.json"
    SLOPES_FILENAME = "slopes.json"


class EntityPrefixes:
    """ID prefixes for catalog entities."""

    LIFT = "lift-"
    SLOPE = "piste-"


class SlopeConfig:
    """Slope difficulty ladder, easiest first."""

    DIFFICULTIES = ["green", "blue", "red", "black"]


class LiftConfig:
    """Lift types found in the catalog."""

    TYPES = [
        "cable_car",
        "gondola",
        "chairlift",
        "funicular",
        "railway",
        "t_bar",
        "drag_lift",
    ]


class ConnectionConfig:
    """Connectivity thresholds between segment endpoints.

    The offline pipeline uses several radii for the same "is this segment
    reachable from that one" test. Run time uses THRESHOLD_M everywhere.
    """

    # Canonical run-time threshold (meters)
    THRESHOLD_M = 50.0

    # Values used by the individual pipeline stages, for reference only
    PIPELINE_THRESHOLDS_M = {
        "segmentation": 30.0,
        "runtime": 50.0,
        "elevation_linking": 75.0,
        "station_snapping": 100.0,
        "connection_rebuild": 150.0,
    }
    assert PIPELINE_THRESHOLDS_M["runtime"] == THRESHOLD_M

    # Slope-to-slope links may climb this much (elevation data noise)
    UPHILL_TOLERANCE_M = 100.0


class SpeedConfig:
    """Average skiing speeds used for time estimation (km/h)."""

    AVERAGE_SPEEDS_KMH = {
        "green": 25.0,
        "blue": 30.0,
        "red": 35.0,
        "black": 40.0,
    }
    assert list(AVERAGE_SPEEDS_KMH.keys()) == SlopeConfig.DIFFICULTIES


# Speed table must be monotone along the difficulty ladder
assert all(
    SpeedConfig.AVERAGE_SPEEDS_KMH[easier] <= SpeedConfig.AVERAGE_SPEEDS_KMH[harder]
    for easier, harder in zip(SlopeConfig.DIFFICULTIES, SlopeConfig.DIFFICULTIES[1:])
), "Average speeds must not decrease with difficulty"


class SearchConfig:
    """A* route search limits."""

    # Maximum number of node expansions before giving up
    MAX_ITERATIONS = 50_000
