"""Load maneuver records from JSON files."""

import json
import logging
import os
from typing import Any

from src.lane_guidance.aggregator import ManeuverRecord

logger = logging.getLogger(__name__)


def parse_record(data: Any, index: int = 0) -> ManeuverRecord:
    """
    Convert one JSON record object into a ManeuverRecord.

    Expected shape: {"bits": [0, 1, ...], "angle": 10, "link_id": 123}
    where "link_id" is optional.

    Args:
        data: Decoded JSON object
        index: Position of the record in its file (used in error messages)

    Raises:
        ValueError: If the object is missing fields or has wrong types
    """
    if not isinstance(data, dict):
        raise ValueError(f"Record {index}: expected an object, got {type(data).__name__}")

    for key in ("bits", "angle"):
        if key not in data:
            raise ValueError(f"Record {index}: missing required field '{key}'")

    bits = data["bits"]
    if not isinstance(bits, list):
        raise ValueError(f"Record {index}: 'bits' must be a list")

    angle = data["angle"]
    if isinstance(angle, bool) or not isinstance(angle, int):
        raise ValueError(f"Record {index}: 'angle' must be an integer, got {angle!r}")

    link_id = data.get("link_id")
    if link_id is not None and (isinstance(link_id, bool) or not isinstance(link_id, int)):
        raise ValueError(f"Record {index}: 'link_id' must be an integer, got {link_id!r}")

    try:
        return ManeuverRecord(
            lane_occupancy=tuple(bits),
            angle_code=angle,
            external_link_id=link_id,
        )
    except ValueError as e:
        raise ValueError(f"Record {index}: {e}") from e


def load_records(path: str) -> list[ManeuverRecord]:
    """
    Load maneuver records from a JSON file.

    The file holds either a list of record objects or an object with a
    "records" list.

    Args:
        path: Path to the JSON file

    Returns:
        Records in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file cannot be parsed or a record is malformed
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Record file not found: {path}")

    with open(path, "r", encoding="utf-8") as record_file:
        try:
            document = json.load(record_file)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse record file: {e}") from e

    if isinstance(document, dict):
        if "records" not in document:
            raise ValueError("Record file object has no 'records' list")
        document = document["records"]

    if not isinstance(document, list):
        raise ValueError("Record file must contain a list of records")

    records = [parse_record(item, index) for index, item in enumerate(document)]

    if not records:
        logger.warning(f"Record file is empty: {path}")
    logger.info(f"Loaded {len(records)} maneuver records from {path}")
    return records
