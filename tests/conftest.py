"""Shared pytest fixtures for skiroute_planner tests.

Provides the synthetic test resort and the routing components wired to it.
Resort layout and coordinate system are documented in resort_builders.py.
"""

import pytest

from resort_builders import build_test_resort, build_two_segment_resort
from skiroute_planner.model.segment_catalog import SegmentCatalog
from skiroute_planner.routing.connectivity import ConnectivityResolver
from skiroute_planner.routing.path_finder import PathFinder
from skiroute_planner.routing.route_stats import RouteStatsCalculator
from skiroute_planner.routing.validator import RouteValidator


# =============================================================================
# CATALOG FIXTURES
# =============================================================================


@pytest.fixture
def resort() -> SegmentCatalog:
    """Nine-segment resort: two lifts, seven slopes of every difficulty, one isolated slope."""
    return build_test_resort()


@pytest.fixture
def two_segment_resort() -> SegmentCatalog:
    """Lift A (6 min) with blue slope B (1000m) starting 40m from its top."""
    return build_two_segment_resort()


# =============================================================================
# ROUTING COMPONENT FIXTURES
# =============================================================================


@pytest.fixture
def resolver(resort: SegmentCatalog) -> ConnectivityResolver:
    """Resolver with the default 50m threshold."""
    return ConnectivityResolver(catalog=resort)


@pytest.fixture
def validator(resort: SegmentCatalog, resolver: ConnectivityResolver) -> RouteValidator:
    return RouteValidator(catalog=resort, resolver=resolver)


@pytest.fixture
def finder(resort: SegmentCatalog, resolver: ConnectivityResolver) -> PathFinder:
    return PathFinder(catalog=resort, resolver=resolver)


@pytest.fixture
def stats_calculator(resort: SegmentCatalog) -> RouteStatsCalculator:
    return RouteStatsCalculator(catalog=resort)
