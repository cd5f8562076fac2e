"""SegmentCatalog - Read-only index of every lift and slope in the resort.

Built once at start-up from the static catalog produced by the offline
pipeline, then passed by reference to the resolver, validator and path
finder. There are no mutators: a new catalog means a new object.
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Optional, Union

from skiroute_planner.constants import CatalogConfig, EntityPrefixes
from skiroute_planner.model.message import SegmentNotFoundMessage
from skiroute_planner.model.segment import Lift, Segment, SegmentKind, Slope

logger = logging.getLogger(__name__)


class SegmentCatalog:
    """Immutable lookup of segments by id and by kind.

    Example:
        catalog = SegmentCatalog.from_data_dir()
        lift = catalog.get("lift-sunnegga")
        slopes = catalog.all_of_kind(SegmentKind.SLOPE)
    """

    def __init__(self, lifts: Iterable[Lift], slopes: Iterable[Slope]) -> None:
        """Index lifts and slopes.

        Raises:
            ValueError: If two segments share an id.
        """
        segments: dict[str, Segment] = {}
        for segment in [*lifts, *slopes]:
            if segment.id in segments:
                raise ValueError(f"Duplicate segment id in catalog: {segment.id}")
            expected_prefix = EntityPrefixes.LIFT if segment.kind is SegmentKind.LIFT else EntityPrefixes.SLOPE
            if not segment.id.startswith(expected_prefix):
                logger.warning(f"{segment.kind.value} id {segment.id} lacks prefix {expected_prefix!r}")
            segments[segment.id] = segment

        self._segments = MappingProxyType(segments)
        self._lifts: tuple[Segment, ...] = tuple(s for s in segments.values() if s.kind is SegmentKind.LIFT)
        self._slopes: tuple[Segment, ...] = tuple(s for s in segments.values() if s.kind is SegmentKind.SLOPE)

        logger.info(f"Segment catalog built: {len(self._lifts)} lifts, {len(self._slopes)} slopes")

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_feature_collections(
        cls,
        lifts_data: Union[dict[str, Any], list[dict[str, Any]]],
        slopes_data: Union[dict[str, Any], list[dict[str, Any]]],
    ) -> "SegmentCatalog":
        """Create catalog from two GeoJSON FeatureCollections (or lists of records)."""
        return cls(
            lifts=[Lift.from_feature(data=f) for f in _features(data=lifts_data)],
            slopes=[Slope.from_feature(data=f) for f in _features(data=slopes_data)],
        )

    @classmethod
    def from_json_files(cls, lifts_path: Path, slopes_path: Path) -> "SegmentCatalog":
        """Load catalog from lifts/slopes JSON files."""
        with open(lifts_path, "r", encoding="utf-8") as f:
            lifts_data = json.load(f)
        with open(slopes_path, "r", encoding="utf-8") as f:
            slopes_data = json.load(f)
        logger.info(f"Loading catalog from {Path(lifts_path).name} and {Path(slopes_path).name}")
        return cls.from_feature_collections(lifts_data=lifts_data, slopes_data=slopes_data)

    @classmethod
    def from_data_dir(cls, data_dir: Path = CatalogConfig.DATA_DIR) -> "SegmentCatalog":
        """Load catalog from the standard file names inside a data directory."""
        data_dir = Path(data_dir)
        return cls.from_json_files(
            lifts_path=data_dir / CatalogConfig.LIFTS_FILENAME,
            slopes_path=data_dir / CatalogConfig.SLOPES_FILENAME,
        )

    # =========================================================================
    # Queries
    # =========================================================================

    def get(self, segment_id: str) -> Optional[Segment]:
        """Segment by id, or None if unknown."""
        return self._segments.get(segment_id)

    def lookup(self, segment_id: str) -> Union[Segment, SegmentNotFoundMessage]:
        """Segment by id, or a SegmentNotFoundMessage describing the miss."""
        segment = self._segments.get(segment_id)
        if segment is None:
            return SegmentNotFoundMessage(segment_id=segment_id)
        return segment

    def all_of_kind(self, kind: SegmentKind) -> tuple[Segment, ...]:
        """All segments of one kind, in catalog order."""
        return self._lifts if kind is SegmentKind.LIFT else self._slopes

    @property
    def lifts(self) -> tuple[Segment, ...]:
        return self._lifts

    @property
    def slopes(self) -> tuple[Segment, ...]:
        return self._slopes

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._segments.keys())

    def __contains__(self, segment_id: object) -> bool:
        return segment_id in self._segments

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments.values())

    def __len__(self) -> int:
        return len(self._segments)

    def __repr__(self) -> str:
        return f"SegmentCatalog({len(self._lifts)} lifts, {len(self._slopes)} slopes)"


def _features(data: Union[dict[str, Any], list[dict[str, Any]]]) -> list[dict[str, Any]]:
    """Feature list of a FeatureCollection, or the list itself."""
    if isinstance(data, list):
        return data
    return data["features"]
