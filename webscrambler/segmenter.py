"""Text segmentation into reorderable units and verbatim separators."""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Sequence

from .structures import Granularity, Segment

LETTER_PATTERN = re.compile(r"[a-zA-Z]")
WHITESPACE_SPLIT_PATTERN = re.compile(r"(\s+)")
SENTENCE_SPLIT_PATTERN = re.compile(r"([.!?]+\s*)")
SENTENCE_NOISE_PATTERN = re.compile(r"[.!?\s]+")


def _segment_letters(text: str) -> List[Segment]:
    return [Segment(text=char, is_unit=bool(LETTER_PATTERN.fullmatch(char))) for char in text]


def _is_word(piece: str) -> bool:
    return bool(piece.strip()) and LETTER_PATTERN.search(piece) is not None


def _segment_words(text: str) -> List[Segment]:
    pieces = WHITESPACE_SPLIT_PATTERN.split(text)
    return [Segment(text=piece, is_unit=_is_word(piece)) for piece in pieces if piece]


def _is_sentence(piece: str) -> bool:
    return bool(piece.strip()) and not SENTENCE_NOISE_PATTERN.fullmatch(piece)


def _segment_sentences(text: str) -> List[Segment]:
    pieces = SENTENCE_SPLIT_PATTERN.split(text)
    return [Segment(text=piece, is_unit=_is_sentence(piece)) for piece in pieces if piece]


_SEGMENTERS: Dict[Granularity, Callable[[str], List[Segment]]] = {
    Granularity.LETTER: _segment_letters,
    Granularity.WORD: _segment_words,
    Granularity.SENTENCE: _segment_sentences,
}


def segment(text: str, granularity: Granularity) -> List[Segment]:
    """Split text into unit and separator segments.

    Concatenating the text of the returned segments always reproduces the
    input exactly, whatever the granularity.
    """

    if not isinstance(text, str):
        raise TypeError(f"Expected text to be a string, got {type(text).__name__}.")
    if not text:
        return []
    return _SEGMENTERS[granularity](text)


def unit_texts(segments: Sequence[Segment]) -> List[str]:
    """Return the unit values in document order."""

    return [seg.text for seg in segments if seg.is_unit]


def join_segments(segments: Sequence[Segment]) -> str:
    return "".join(seg.text for seg in segments)
