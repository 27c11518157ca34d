"""Conversion between latitude/longitude pairs and GeoDNA codes.

A code starts with a hemisphere marker (``e`` or ``w``) selecting the eastern
or western half of the globe. Every following character halves the current
rectangle in both dimensions and records which quarter the point fell in,
using the alphabet ``g``, ``a``, ``t``, ``c`` for the values 0 to 3 (bit 2 set
for the upper longitude half, bit 1 for the upper latitude half).

Codes sharing a prefix share the rectangle described by that prefix, so a
plain text prefix match finds nearby points.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

from .errors import InvalidCodeError, InvalidInputError, InvalidPrecisionError

ALPHABET: Tuple[str, ...] = ("g", "a", "t", "c")
DECODE_MAP: Mapping[str, int] = MappingProxyType({ch: i for i, ch in enumerate(ALPHABET)})
HEMISPHERES: Mapping[str, Tuple[float, float]] = MappingProxyType(
    {"w": (-180.0, 0.0), "e": (0.0, 180.0)}
)

RADIUS_OF_EARTH_M = 6378100.0
DEFAULT_PRECISION = 22
DEFAULT_RADIUS_PRECISION = 12

Range = Tuple[float, float]


@dataclass(frozen=True)
class EncodeOptions:
    precision: int = DEFAULT_PRECISION
    radians: bool = False

    def validate(self) -> None:
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise InvalidPrecisionError(
                f"Precision must be an integer, got {self.precision!r}"
            )
        if self.precision < 1:
            raise InvalidPrecisionError(f"Precision must be at least 1, got {self.precision}")


def resolve_options(precision: Optional[int], radians: bool, default: int) -> EncodeOptions:
    options = EncodeOptions(default if precision is None else precision, bool(radians))
    options.validate()
    return options


def _mod(value: float, modulus: float) -> float:
    """Remainder with the sign of the modulus, built from a truncating remainder."""
    return math.fmod(math.fmod(value, modulus) + modulus, modulus)


def wrap(latitude: float, longitude: float) -> Tuple[float, float]:
    return _mod(latitude, 180.0) - 90.0, _mod(longitude, 360.0) - 180.0


def normalise(latitude: float, longitude: float) -> Tuple[float, float]:
    """Wrap a coordinate into lat [-90, 90) and lon [-180, 180)."""
    return wrap(latitude + 90.0, longitude + 180.0)


def as_finite(name: str, value: object) -> float:
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be finite, got {number}")
    return number


def encode(
    latitude: float,
    longitude: float,
    precision: Optional[int] = DEFAULT_PRECISION,
    radians: bool = False,
) -> str:
    """Encode a point as a GeoDNA code of ``precision`` characters.

    The hemisphere marker counts as the first character, so ``precision=1``
    yields just ``e`` or ``w``. With ``radians=True`` the inputs are taken to
    be radians instead of degrees.
    """
    options = resolve_options(precision, radians, DEFAULT_PRECISION)
    latitude = as_finite("latitude", latitude)
    longitude = as_finite("longitude", longitude)

    if options.radians:
        latitude = as_finite("latitude", math.degrees(latitude))
        longitude = as_finite("longitude", math.degrees(longitude))

    latitude, longitude = normalise(latitude, longitude)

    hemisphere = "w" if longitude < 0 else "e"
    lon_range = HEMISPHERES[hemisphere]
    lat_range = (-90.0, 90.0)

    chars = [hemisphere]
    while len(chars) < options.precision:
        value = 0

        mid = (lon_range[0] + lon_range[1]) / 2.0
        if longitude > mid:
            value |= 2
            lon_range = (mid, lon_range[1])
        else:
            lon_range = (lon_range[0], mid)

        mid = (lat_range[0] + lat_range[1]) / 2.0
        if latitude > mid:
            value |= 1
            lat_range = (mid, lat_range[1])
        else:
            lat_range = (lat_range[0], mid)

        chars.append(ALPHABET[value])
    return "".join(chars)


@dataclass(frozen=True)
class BoundingBox:
    """The rectangle of latitude/longitude degrees covered by a code."""

    lat_range: Range
    lon_range: Range

    def __iter__(self) -> Iterator[Range]:
        return iter((self.lat_range, self.lon_range))

    def as_tuple(self) -> Tuple[Range, Range]:
        return (self.lat_range, self.lon_range)

    @property
    def width(self) -> float:
        return abs(self.lon_range[1] - self.lon_range[0])

    @property
    def height(self) -> float:
        return abs(self.lat_range[1] - self.lat_range[0])

    @property
    def center(self) -> Tuple[float, float]:
        return (
            (self.lat_range[0] + self.lat_range[1]) / 2.0,
            (self.lon_range[0] + self.lon_range[1]) / 2.0,
        )

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.lat_range[0] <= latitude <= self.lat_range[1]
            and self.lon_range[0] <= longitude <= self.lon_range[1]
        )


def bounding_box(code: str) -> BoundingBox:
    """Decode ``code`` into the rectangle it represents.

    Raises:
        InvalidCodeError: if the code is empty, does not start with ``e`` or
            ``w``, or contains a character outside ``g``, ``a``, ``t``, ``c``.
    """
    if not isinstance(code, str) or not code:
        raise InvalidCodeError(f"Code must be a non-empty string, got {code!r}")

    lon_range = HEMISPHERES.get(code[0])
    if lon_range is None:
        raise InvalidCodeError(f"Code must start with 'e' or 'w', got {code!r}")
    lat_range = (-90.0, 90.0)

    for position, ch in enumerate(code[1:], start=1):
        value = DECODE_MAP.get(ch)
        if value is None:
            raise InvalidCodeError(
                f"Invalid character {ch!r} at position {position} in code {code!r}"
            )
        mid = (lon_range[0] + lon_range[1]) / 2.0
        lon_range = (mid, lon_range[1]) if value & 2 else (lon_range[0], mid)
        mid = (lat_range[0] + lat_range[1]) / 2.0
        lat_range = (mid, lat_range[1]) if value & 1 else (lat_range[0], mid)

    return BoundingBox(lat_range=lat_range, lon_range=lon_range)


def decode(code: str, radians: bool = False) -> Tuple[float, float]:
    """Return the centre ``(lat, lon)`` of the rectangle ``code`` covers."""
    lat, lon = bounding_box(code).center
    if radians:
        return math.radians(lat), math.radians(lon)
    return lat, lon
