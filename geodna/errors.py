"""Exceptions raised by the GeoDNA codec."""


class GeoDNAError(ValueError):
    """Base class for every error raised by this package."""


class InvalidCodeError(GeoDNAError):
    """A code is empty, lacks a hemisphere marker or contains foreign characters."""


class InvalidPrecisionError(GeoDNAError):
    pass


class InvalidInputError(GeoDNAError):
    """A coordinate, bearing, distance or radius is not a usable number."""
