"""Lane Guidance - per-lane direction aggregation and validation."""

from src.lane_guidance.aggregator import (
    LaneAggregate,
    ManeuverRecord,
    aggregate,
    lanes_for_link,
    occupancy_matrix,
)
from src.lane_guidance.directions import DirectionCategory, InvalidAngleCode, classify
from src.lane_guidance.validator import ValidationResult, validate

__all__ = [
    "DirectionCategory",
    "InvalidAngleCode",
    "LaneAggregate",
    "ManeuverRecord",
    "ValidationResult",
    "aggregate",
    "classify",
    "lanes_for_link",
    "occupancy_matrix",
    "validate",
]
