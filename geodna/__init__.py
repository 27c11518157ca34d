"""GeoDNA: prefix-preserving text codes for latitude/longitude points."""

from .codec import (  # noqa: F401
    ALPHABET,
    DECODE_MAP,
    DEFAULT_PRECISION,
    DEFAULT_RADIUS_PRECISION,
    RADIUS_OF_EARTH_M,
    BoundingBox,
    EncodeOptions,
    bounding_box,
    decode,
    encode,
    normalise,
)
from .errors import (  # noqa: F401
    GeoDNAError,
    InvalidCodeError,
    InvalidInputError,
    InvalidPrecisionError,
)
from .geometry import (  # noqa: F401
    add_vector,
    distance_in_km,
    neighbours,
    neighbours_within_radius,
    point_from_point_bearing_and_distance,
)
from .reduction import reduce  # noqa: F401

__version__ = "0.4.0"
