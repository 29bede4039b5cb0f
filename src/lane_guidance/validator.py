"""Rule checks for aggregated lane directions."""

import logging
from dataclasses import dataclass
from typing import Mapping

from src.lane_guidance.aggregator import LaneAggregate

logger = logging.getLogger(__name__)

REQUIRED_ORDER_TEXT = "U-turn > left turn > straight > right turn"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate(); errors are listed in detection order."""

    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "errors": list(self.errors)}


def validate(aggregates: Mapping[int, LaneAggregate]) -> ValidationResult:
    """
    Check aggregated lanes against the lane rules.

    Checks run in a fixed order and each contributes independently:
    1. Lane numbering starts at 1
    2. No gaps between lane numbers
    3. Directions ordered by priority from the leftmost lane

    Rule violations are reported in the result, never raised.

    Args:
        aggregates: Mapping of lane number to LaneAggregate

    Returns:
        ValidationResult with every violation found
    """
    lane_numbers = sorted(aggregates)
    errors: list[str] = []

    errors.extend(_check_starts_at_one(lane_numbers))
    errors.extend(_check_no_gaps(lane_numbers))
    errors.extend(_check_direction_order(lane_numbers, aggregates))

    result = ValidationResult(errors=tuple(errors))
    if result.is_valid:
        logger.debug(f"Validated {len(lane_numbers)} lanes: no violations")
    else:
        logger.info(f"Validated {len(lane_numbers)} lanes: {len(errors)} violation(s)")
    return result


def _check_starts_at_one(lane_numbers: list[int]) -> list[str]:
    if lane_numbers and lane_numbers[0] != 1:
        return [f"Lanes must start at lane 1 (currently starting at lane {lane_numbers[0]})."]
    return []


def _check_no_gaps(lane_numbers: list[int]) -> list[str]:
    errors = []
    for left, right in zip(lane_numbers, lane_numbers[1:]):
        if right - left > 1:
            errors.append(
                f"Lane numbers are not contiguous: empty lane between "
                f"lane {left} and lane {right}."
            )
    return errors


def _check_direction_order(
    lane_numbers: list[int],
    aggregates: Mapping[int, LaneAggregate],
) -> list[str]:
    """
    Walk lanes left to right tracking the highest priority seen in the previous lane.

    A lane fails when its lowest priority is below the previous lane's highest.
    The running value always takes the lane's actual maximum, even after a failure.
    """
    errors = []
    previous_max_priority = 0

    for lane_number in lane_numbers:
        lane = aggregates[lane_number]
        if not lane.directions:
            continue

        if lane.min_priority < previous_max_priority:
            errors.append(
                f"Lane {lane_number}: invalid direction order "
                f"(required order is {REQUIRED_ORDER_TEXT})."
            )
        previous_max_priority = lane.max_priority

    return errors
