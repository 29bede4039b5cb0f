"""Group maneuver records into per-lane direction aggregates."""

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

import numpy as np

from src.lane_guidance.directions import DirectionCategory, classify

logger = logging.getLogger(__name__)

# Precedence used to pick a lane's display colour (not the ordering priority)
_DISPLAY_PRECEDENCE = (
    DirectionCategory.UTURN,
    DirectionCategory.LEFT_TURN,
    DirectionCategory.RIGHT_TURN,
    DirectionCategory.STRAIGHT,
)


@dataclass(frozen=True)
class ManeuverRecord:
    """One raw input row: which lanes allow the maneuver given by angle_code."""

    lane_occupancy: tuple[int, ...]  # slot i -> lane i + 1
    angle_code: int
    external_link_id: Optional[int] = None

    def __post_init__(self) -> None:
        occupancy = tuple(self.lane_occupancy)
        for index, flag in enumerate(occupancy):
            if isinstance(flag, bool) or flag not in (0, 1):
                raise ValueError(
                    f"Lane occupancy flag at slot {index} must be 0 or 1, got {flag!r}"
                )
        object.__setattr__(self, "lane_occupancy", occupancy)

    def occupied_lanes(self) -> list[int]:
        """Return the 1-based lane numbers whose occupancy flag is set."""
        return [index + 1 for index, flag in enumerate(self.lane_occupancy) if flag == 1]


@dataclass(frozen=True)
class LaneAggregate:
    """Everything the input records say about a single lane."""

    lane_number: int
    angles: tuple[int, ...]
    directions: tuple[DirectionCategory, ...]
    link_ids: tuple[int, ...] = ()

    @property
    def min_priority(self) -> Optional[int]:
        if not self.directions:
            return None
        return min(direction.priority for direction in self.directions)

    @property
    def max_priority(self) -> Optional[int]:
        if not self.directions:
            return None
        return max(direction.priority for direction in self.directions)

    @property
    def display_color(self) -> str:
        """Colour of the most significant direction in this lane."""
        for direction in _DISPLAY_PRECEDENCE:
            if direction in self.directions:
                return direction.color
        return DirectionCategory.STRAIGHT.color


class _LaneBuilder:
    """Mutable accumulator; dict keys keep first-occurrence order."""

    def __init__(self, lane_number: int):
        self.lane_number = lane_number
        self.angles: list[int] = []
        self.directions: dict[DirectionCategory, None] = {}
        self.link_ids: dict[int, None] = {}

    def add(self, angle_code: int, direction: DirectionCategory, link_id: Optional[int]) -> None:
        self.angles.append(angle_code)
        self.directions.setdefault(direction, None)
        if link_id is not None:
            self.link_ids.setdefault(link_id, None)

    def freeze(self) -> LaneAggregate:
        return LaneAggregate(
            lane_number=self.lane_number,
            angles=tuple(self.angles),
            directions=tuple(self.directions),
            link_ids=tuple(self.link_ids),
        )


def aggregate(records: Iterable[ManeuverRecord]) -> dict[int, LaneAggregate]:
    """
    Build per-lane aggregates from maneuver records.

    Records are processed in input order, so angles keep input order and
    directions/link ids keep first-occurrence order. Only lanes referenced
    by at least one record appear in the result.

    Args:
        records: Maneuver records in input order

    Returns:
        Dict mapping lane number to LaneAggregate, ordered by lane number

    Raises:
        InvalidAngleCode: If any record carries an out-of-range angle code.
            No partial result is returned.
    """
    builders: dict[int, _LaneBuilder] = {}
    record_count = 0

    for record in records:
        record_count += 1
        # Classified even when no lane is occupied so bad codes always surface
        direction = classify(record.angle_code)
        for lane_number in record.occupied_lanes():
            if lane_number not in builders:
                builders[lane_number] = _LaneBuilder(lane_number)
            builders[lane_number].add(record.angle_code, direction, record.external_link_id)

    result = {lane_number: builders[lane_number].freeze() for lane_number in sorted(builders)}
    logger.debug(f"Aggregated {record_count} records into {len(result)} lanes")
    return result


def lanes_for_link(aggregates: Mapping[int, LaneAggregate], link_id: int) -> list[int]:
    """Return the lane numbers (ascending) that lead to the given external link."""
    return sorted(
        lane_number
        for lane_number, lane in aggregates.items()
        if link_id in lane.link_ids
    )


def occupancy_matrix(records: Iterable[ManeuverRecord]) -> np.ndarray:
    """
    Stack record occupancy flags into a records x lanes matrix.

    Shorter records are right-padded with zeros.

    Returns:
        Integer array of shape (num_records, max_slots); (0, 0) when empty
    """
    rows = [record.lane_occupancy for record in records]
    if not rows:
        return np.zeros((0, 0), dtype=np.int8)

    width = max(len(row) for row in rows)
    matrix = np.zeros((len(rows), width), dtype=np.int8)
    for i, row in enumerate(rows):
        matrix[i, : len(row)] = row
    return matrix
