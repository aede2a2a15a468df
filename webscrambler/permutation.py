"""Unbiased shuffling of text units and structural references."""

from __future__ import annotations

import copy
import random
from dataclasses import replace
from typing import List, Optional, Protocol, Sequence, TypeVar

from bs4 import BeautifulSoup

from .extractor import iter_reference_elements, locator_attribute
from .structures import ReferenceKind, Segment, StructuralReference

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything able to draw a uniform integer in ``[0, stop)``."""

    def randrange(self, stop: int) -> int:
        ...


_SYSTEM_RANDOM = random.SystemRandom()


def default_random_source() -> RandomSource:
    return _SYSTEM_RANDOM


def shuffle(items: Sequence[T], rng: Optional[RandomSource] = None) -> List[T]:
    """Return a Fisher-Yates shuffled copy of ``items``.

    Sequences of zero or one element are returned unchanged without
    consulting the random source.
    """

    result = list(items)
    if len(result) <= 1:
        return result

    source = rng or default_random_source()
    for i in range(len(result) - 1, 0, -1):
        j = source.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def shuffle_units(units: Sequence[str], rng: Optional[RandomSource] = None) -> List[str]:
    return shuffle(units, rng)


def reassemble(segments: Sequence[Segment], shuffled_units: Sequence[str]) -> str:
    """Rebuild text, filling unit slots in order from ``shuffled_units``.

    Separators are emitted verbatim. A unit slot left over once the shuffled
    values run out keeps its original text.
    """

    parts: List[str] = []
    cursor = 0
    for seg in segments:
        if seg.is_unit and cursor < len(shuffled_units):
            parts.append(shuffled_units[cursor])
            cursor += 1
        else:
            parts.append(seg.text)
    return "".join(parts)


def shuffle_references(
    references: Sequence[StructuralReference],
    rng: Optional[RandomSource] = None,
) -> List[StructuralReference]:
    """Shuffle locators across references; labels stay in place."""

    locators = shuffle([ref.locator for ref in references], rng)
    return [replace(ref, locator=locator) for ref, locator in zip(references, locators)]


def rewrite_tree(
    soup: BeautifulSoup,
    kind: ReferenceKind,
    shuffled_locators: Sequence[str],
) -> str:
    """Assign shuffled locators to a copy of ``soup`` and return its markup.

    Matching elements beyond the end of ``shuffled_locators`` keep their own
    locator. The tree passed in is never modified.
    """

    clone = copy.copy(soup)
    attribute = locator_attribute(kind)
    for element, locator in zip(iter_reference_elements(clone, kind), shuffled_locators):
        element[attribute] = locator
    return str(clone)
