"""Classify clock-position angle codes into lane direction categories."""

from enum import Enum

# Angle codes are clock positions: 1 is due north (0 degrees), each step adds 30 degrees
MIN_ANGLE_CODE = 1
MAX_ANGLE_CODE = 12
DEGREES_PER_STEP = 30


class InvalidAngleCode(ValueError):
    """Raised when an angle code falls outside the 1..12 clock range."""

    def __init__(self, angle_code: object):
        self.angle_code = angle_code
        super().__init__(
            f"Invalid angle code {angle_code!r}: expected an integer "
            f"between {MIN_ANGLE_CODE} and {MAX_ANGLE_CODE}"
        )


class DirectionCategory(Enum):
    """
    Maneuver category of a lane.

    The value is the ordering priority: lanes must carry directions in
    non-decreasing priority from left (lane 1) to right.
    """

    UTURN = 1
    LEFT_TURN = 2
    STRAIGHT = 3
    RIGHT_TURN = 4

    @property
    def priority(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @property
    def color(self) -> str:
        return _COLORS[self]


_LABELS = {
    DirectionCategory.UTURN: "U-turn",
    DirectionCategory.LEFT_TURN: "Left turn",
    DirectionCategory.STRAIGHT: "Straight",
    DirectionCategory.RIGHT_TURN: "Right turn",
}

_ICONS = {
    DirectionCategory.UTURN: "↶",
    DirectionCategory.LEFT_TURN: "←",
    DirectionCategory.STRAIGHT: "↑",
    DirectionCategory.RIGHT_TURN: "→",
}

_COLORS = {
    DirectionCategory.UTURN: "rgb(147, 51, 234)",  # Purple
    DirectionCategory.LEFT_TURN: "rgb(59, 130, 246)",  # Blue
    DirectionCategory.STRAIGHT: "rgb(34, 197, 94)",  # Green
    DirectionCategory.RIGHT_TURN: "rgb(249, 115, 22)",  # Orange
}

_ANGLE_TO_DIRECTION = {
    12: DirectionCategory.STRAIGHT,
    1: DirectionCategory.STRAIGHT,
    2: DirectionCategory.STRAIGHT,
    3: DirectionCategory.RIGHT_TURN,
    4: DirectionCategory.RIGHT_TURN,
    5: DirectionCategory.RIGHT_TURN,
    6: DirectionCategory.UTURN,
    7: DirectionCategory.UTURN,
    8: DirectionCategory.UTURN,
    9: DirectionCategory.LEFT_TURN,
    10: DirectionCategory.LEFT_TURN,
    11: DirectionCategory.LEFT_TURN,
}


def _check_angle_code(angle_code: int) -> None:
    # bool is an int subclass; True/False are never meaningful angle codes
    if isinstance(angle_code, bool) or not isinstance(angle_code, int):
        raise InvalidAngleCode(angle_code)
    if not MIN_ANGLE_CODE <= angle_code <= MAX_ANGLE_CODE:
        raise InvalidAngleCode(angle_code)


def classify(angle_code: int) -> DirectionCategory:
    """
    Map a clock-position angle code to its direction category.

    Args:
        angle_code: Integer in 1..12 (1 = due north, +30 degrees per step)

    Returns:
        The DirectionCategory for the code

    Raises:
        InvalidAngleCode: If the code is not an integer in 1..12

    Example:
        >>> classify(10)
        <DirectionCategory.LEFT_TURN: 2>
    """
    _check_angle_code(angle_code)
    return _ANGLE_TO_DIRECTION[angle_code]


def angle_to_degrees(angle_code: int) -> int:
    """Convert an angle code to its compass bearing in degrees (1 -> 0, 12 -> 330)."""
    _check_angle_code(angle_code)
    return (angle_code - MIN_ANGLE_CODE) * DEGREES_PER_STEP
