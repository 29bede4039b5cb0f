"""
Shared pytest fixtures for lane guidance tests.

This module provides reusable fixtures that are automatically discovered
by pytest. Fixtures here are available to all test files.

Notes for new developers:
- Record fixtures mirror the example intersections used while designing
  the lane rules, so expected lane layouts can be read off by hand
- Each fixture returns a fresh list; tests may mutate it freely
"""

import json
import logging

import pytest

from src.lane_guidance.aggregator import ManeuverRecord


@pytest.fixture
def five_lane_records() -> list[ManeuverRecord]:
    """
    Five-lane intersection: left turn, left+straight, straight, straight, straight+right.

    Expected lanes:
        1: Left turn
        2: Left turn + Straight
        3: Straight
        4: Straight
        5: Straight + Right turn
    """
    return [
        ManeuverRecord((1, 1, 0, 0, 0), angle_code=10, external_link_id=2001),
        ManeuverRecord((0, 1, 1, 1, 1), angle_code=1, external_link_id=2002),
        ManeuverRecord((0, 0, 0, 0, 1), angle_code=4, external_link_id=2003),
    ]


@pytest.fixture
def misordered_records() -> list[ManeuverRecord]:
    """Right turn in lane 1 and left turn in lane 2 (breaks the direction order)."""
    return [
        ManeuverRecord((1, 0), angle_code=4),
        ManeuverRecord((0, 1), angle_code=10),
    ]


@pytest.fixture
def write_records(tmp_path):
    """
    Write a JSON document to a temporary file and return its path.

    Example:
        def test_load(write_records):
            path = write_records([{"bits": [1], "angle": 1}])
    """

    def _write(document, name: str = "records.json") -> str:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def restore_logging():
    """Restore root logger handlers after a test that calls setup_logging()."""
    root_logger = logging.getLogger()
    lane_logger = logging.getLogger("src.lane_guidance")
    saved_root = list(root_logger.handlers)
    saved_lane = list(lane_logger.handlers)
    saved_level = root_logger.level

    yield

    for handler in root_logger.handlers + lane_logger.handlers:
        if handler not in saved_root and handler not in saved_lane:
            handler.close()
    root_logger.handlers[:] = saved_root
    lane_logger.handlers[:] = saved_lane
    root_logger.setLevel(saved_level)
