"""
Loaders for the road and attraction tables.

roads.csv rows are ``CityA,CityB,Distance``; attractions.csv rows are
``Attraction,Location``. Both files start with a header row. Cities are
written "Name ST".
"""

import csv
from pathlib import Path
from typing import Dict, List, Union

from .exceptions import DataFileError, GraphBuildError, handle_data_file_error
from .graph import Road, RoadGraph
from .logging_config import get_logger
from .types import CityId

logger = get_logger(__name__)

PathLike = Union[str, Path]


def _read_rows(filepath: PathLike) -> List[List[str]]:
    try:
        with open(filepath, newline="", encoding="utf-8") as handle:
            rows = list(csv.reader(handle))
    except (OSError, csv.Error, UnicodeDecodeError) as e:
        handle_data_file_error(str(filepath), e)
    return rows[1:]  # Skip header line


def _parse_city(filepath: PathLike, line_number: int, text: str) -> CityId:
    try:
        return CityId.parse(text)
    except ValueError as e:
        raise DataFileError(str(filepath), f"line {line_number}: {e}") from e


def load_road_graph(filepath: PathLike) -> RoadGraph:
    """Load the road table into an undirected RoadGraph.

    Rows without exactly three fields are skipped with a warning.

    Raises:
        DataFileError: If the file cannot be read or a row is malformed
    """
    roads: List[Road] = []
    skipped = 0

    for offset, row in enumerate(_read_rows(filepath)):
        line_number = offset + 2
        fields = [value.strip() for value in row]
        if not any(fields):
            continue
        if len(fields) != 3:
            logger.warning(f"{filepath}:{line_number}: expected 3 fields, got {len(fields)}")
            skipped += 1
            continue

        city_a = _parse_city(filepath, line_number, fields[0])
        city_b = _parse_city(filepath, line_number, fields[1])
        try:
            distance = int(fields[2])
        except ValueError as e:
            raise DataFileError(
                str(filepath), f"line {line_number}: invalid distance {fields[2]!r}"
            ) from e
        roads.append((city_a, city_b, distance))

    try:
        graph = RoadGraph.from_edges(roads)
    except GraphBuildError as e:
        raise DataFileError(str(filepath), e.reason) from e

    logger.info(f"Loaded {graph.num_roads} roads between {len(graph)} cities from {filepath}")
    if skipped:
        logger.warning(f"Skipped {skipped} malformed road rows")
    return graph


def load_attractions(filepath: PathLike) -> Dict[str, CityId]:
    """Load the attraction table as a name -> city mapping.

    Rows without exactly two fields are skipped with a warning.

    Raises:
        DataFileError: If the file cannot be read or a location is malformed
    """
    attractions: Dict[str, CityId] = {}

    for offset, row in enumerate(_read_rows(filepath)):
        line_number = offset + 2
        fields = [value.strip() for value in row]
        if not any(fields):
            continue
        if len(fields) != 2:
            logger.warning(f"{filepath}:{line_number}: expected 2 fields, got {len(fields)}")
            continue

        name, location = fields
        attractions[name] = _parse_city(filepath, line_number, location)

    logger.info(f"Loaded {len(attractions)} attractions from {filepath}")
    return attractions
