"""Coalescing sets of GeoDNA codes into their minimal covering set."""

from __future__ import annotations

import logging
from typing import Iterable, List

from .codec import ALPHABET

logger = logging.getLogger(__name__)


def _unique(codes: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(codes))


def _coalesce_once(codes: List[str]) -> List[str]:
    present = set(codes)
    reduced: List[str] = []
    for code in codes:
        if code not in present:
            continue
        parent = code[:-1]
        siblings = [parent + ch for ch in ALPHABET]
        if all(sibling in present for sibling in siblings):
            present.difference_update(siblings)
            reduced.append(parent)
        else:
            reduced.append(code)
    return _unique(reduced)


def reduce(codes: Iterable[str]) -> List[str]:
    """Replace every complete group of four sibling codes with their parent.

    Passes repeat until one leaves the set unchanged, so a full set of
    grandchildren collapses all the way to the grandparent. Duplicates are
    dropped and the result keeps the order in which codes (or the parents
    replacing them) were first met.

    Raises:
        TypeError: if ``codes`` is a single string rather than a collection.
    """
    if isinstance(codes, str):
        raise TypeError("reduce() expects a collection of codes, not a single string")
    working = _unique(codes)
    passes = 0
    while True:
        passes += 1
        reduced = _coalesce_once(working)
        if len(reduced) == len(working):
            logger.debug("Reduced to %d codes after %d passes", len(reduced), passes)
            return reduced
        working = reduced
