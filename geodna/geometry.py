"""Distance, projection and neighbourhood operations on GeoDNA codes."""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

from .codec import (
    DEFAULT_RADIUS_PRECISION,
    RADIUS_OF_EARTH_M,
    as_finite,
    bounding_box,
    decode,
    encode,
    normalise,
    resolve_options,
    wrap,
)
from .errors import InvalidInputError

logger = logging.getLogger(__name__)

# (d_row, d_col) in row-major order around the centre cell.
NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (d_row, d_col) for d_row in (-1, 0, 1) for d_col in (-1, 0, 1) if d_row or d_col
)


def add_vector(code: str, d_lat: float, d_lon: float) -> Tuple[float, float]:
    """Offset the centre of ``code`` by degrees, wrapping into canonical ranges."""
    lat, lon = decode(code)
    d_lat = as_finite("d_lat", d_lat)
    d_lon = as_finite("d_lon", d_lon)
    return wrap(lat + 90.0 + d_lat, lon + 180.0 + d_lon)


def distance_in_km(code_a: str, code_b: str) -> float:
    """Approximate distance between the centres of two codes.

    Uses an equirectangular projection rather than a great-circle formula.
    Points either side of the antimeridian are shifted half a turn east first
    so the short way round is measured.
    """
    a = decode(code_a)
    b = decode(code_b)

    if a[1] * b[1] < 0.0 and abs(a[1] - b[1]) > 180.0:
        a = add_vector(code_a, 0.0, 180.0)
        b = add_vector(code_b, 0.0, 180.0)

    x = (math.radians(b[1]) - math.radians(a[1])) * math.cos(
        (math.radians(a[0]) + math.radians(b[0])) / 2
    )
    y = math.radians(b[0]) - math.radians(a[0])
    return math.sqrt(x * x + y * y) * RADIUS_OF_EARTH_M / 1000


def point_from_point_bearing_and_distance(
    code: str, bearing: float, distance_km: float, precision: Optional[int] = None
) -> str:
    """Encode the point ``distance_km`` away from ``code`` along ``bearing``.

    ``bearing`` is in radians clockwise from north. The result has the same
    precision as ``code`` unless ``precision`` is given.
    """
    lat1, lon1 = decode(code, radians=True)
    options = resolve_options(precision, True, len(code))
    bearing = as_finite("bearing", bearing)
    distance_m = as_finite("distance", as_finite("distance", distance_km) * 1000)
    if distance_m < 0:
        raise InvalidInputError(f"distance must not be negative, got {distance_km}")

    angular = distance_m / RADIUS_OF_EARTH_M
    lat2 = math.asin(
        math.sin(lat1) * math.cos(angular)
        + math.cos(lat1) * math.sin(angular) * math.cos(bearing)
    )
    lon2 = lon1 + math.atan2(
        math.sin(bearing) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * math.sin(lat2),
    )
    return encode(lat2, lon2, precision=options.precision, radians=options.radians)


def neighbours(code: str) -> List[str]:
    """The eight codes of equal precision surrounding ``code``."""
    box = bounding_box(code)
    result = []
    for d_row, d_col in NEIGHBOUR_OFFSETS:
        lat, lon = add_vector(code, box.height * d_row, box.width * d_col)
        result.append(encode(lat, lon, precision=len(code)))
    return result


def neighbours_within_radius(
    code: str, radius_km: float, precision: Optional[int] = DEFAULT_RADIUS_PRECISION
) -> List[str]:
    """Codes at ``precision`` whose centres lie within ``radius_km`` of ``code``.

    Experimental and unoptimised: every cell of a square window enclosing the
    circle is visited and its distance checked, so cost grows with
    ``(radius / cell size) ** 2``.
    """
    options = resolve_options(precision, False, DEFAULT_RADIUS_PRECISION)
    radius_km = as_finite("radius", radius_km)
    if radius_km < 0:
        raise InvalidInputError(f"radius must not be negative, got {radius_km}")

    half_diagonal = radius_km * math.sqrt(2)
    start = point_from_point_bearing_and_distance(
        code, -(math.pi / 4), half_diagonal, precision=options.precision
    )
    end = point_from_point_bearing_and_distance(
        code, math.pi / 4, half_diagonal, precision=options.precision
    )

    cell = bounding_box(start)
    cell_height = cell.height
    cell_width = cell.width
    start_lon = decode(start)[1]
    end_lon = decode(end)[1]
    delta = abs(normalise(0.0, abs(end_lon - start_lon))[1])
    logger.debug(
        "Scanning %.6f degree window around %s in %.6f x %.6f cells",
        delta,
        code,
        cell_height,
        cell_width,
    )

    found = []
    row_offset = 0.0
    current = start
    while row_offset <= delta:
        col_offset = 0.0
        while col_offset <= delta:
            lat, lon = add_vector(current, 0.0, cell_width)
            current = encode(lat, lon, precision=options.precision)
            if distance_in_km(current, code) <= radius_km:
                found.append(current)
            col_offset += cell_width

        row_offset += cell_height
        lat, lon = add_vector(start, -row_offset, 0.0)
        current = encode(lat, lon, precision=options.precision)

    logger.debug("Found %d codes within %s km of %s", len(found), radius_km, code)
    return found
