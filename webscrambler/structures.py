"""Core data structures for the Web Scrambler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List


class Granularity(Enum):
    """Unit size used when segmenting plain text."""

    LETTER = "letter"
    WORD = "word"
    SENTENCE = "sentence"


class ReferenceKind(Enum):
    """Kinds of structural references that can be scrambled."""

    HYPERLINK = "hyperlink"
    IMAGE = "image"


class ScrambleType(Enum):
    """Scrambling methods understood by the coordinator."""

    LETTERS = "letters"
    WORDS = "words"
    SENTENCES = "sentences"
    LINKS = "links"
    IMAGES = "images"
    PASSTHROUGH = "none"

    @classmethod
    def public_values(cls) -> List[str]:
        """Values accepted from callers at the request boundary."""

        return [member.value for member in cls if member is not cls.PASSTHROUGH]


@dataclass(frozen=True)
class Segment:
    """A span of source text, either a reorderable unit or a separator."""

    text: str
    is_unit: bool


@dataclass(frozen=True)
class StructuralReference:
    """A hyperlink or image target extracted from markup."""

    kind: ReferenceKind
    locator: str
    label: str

    def render(self) -> str:
        return f"{self.label}: {self.locator}"


@dataclass(frozen=True)
class ScrambleResult:
    """Original and scrambled renderings produced for one request."""

    original_text: str
    scrambled_text: str
