"""High-level orchestration of extraction and scrambling."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Sequence

from .errors import EmptyContentError, InputValidationError
from .extractor import extract_references, parse_markup
from .permutation import (
    RandomSource,
    reassemble,
    rewrite_tree,
    shuffle_references,
    shuffle_units,
)
from .segmenter import segment, unit_texts
from .structures import (
    Granularity,
    ReferenceKind,
    ScrambleResult,
    ScrambleType,
    StructuralReference,
)

logger = logging.getLogger(__name__)

EMPTY_CONTENT_MESSAGE = "No content found for the selected scrambling method"

NO_REFERENCES_FOUND: Dict[ReferenceKind, str] = {
    ReferenceKind.HYPERLINK: "No external links found",
    ReferenceKind.IMAGE: "No images found",
}

TEXT_GRANULARITY: Dict[ScrambleType, Granularity] = {
    ScrambleType.LETTERS: Granularity.LETTER,
    ScrambleType.WORDS: Granularity.WORD,
    ScrambleType.SENTENCES: Granularity.SENTENCE,
}

REFERENCE_KIND: Dict[ScrambleType, ReferenceKind] = {
    ScrambleType.LINKS: ReferenceKind.HYPERLINK,
    ScrambleType.IMAGES: ReferenceKind.IMAGE,
}


def render_references(references: Sequence[StructuralReference], kind: ReferenceKind) -> str:
    """Render references one per line, or the sentinel when there are none."""

    if not references:
        return NO_REFERENCES_FOUND[kind]
    return "\n".join(ref.render() for ref in references)


class Scrambler:
    """Selects the extraction and permutation strategy for a scramble type."""

    def __init__(self, rng: Optional[RandomSource] = None) -> None:
        self.rng = rng
        self._strategies: Dict[ScrambleType, Callable[[str, str, ScrambleType], ScrambleResult]] = {
            ScrambleType.PASSTHROUGH: self._passthrough,
        }
        for scramble_type in TEXT_GRANULARITY:
            self._strategies[scramble_type] = self._scramble_text
        for scramble_type in REFERENCE_KIND:
            self._strategies[scramble_type] = self._scramble_references

    def scramble(self, markup: str, plain_text: str, scramble_type: ScrambleType) -> ScrambleResult:
        if not isinstance(scramble_type, ScrambleType):
            raise InputValidationError(f"Invalid scramble type: {scramble_type!r}")

        result = self._strategies[scramble_type](markup, plain_text, scramble_type)
        logger.debug("Content scrambled using method: %s", scramble_type.value)
        return result

    def _passthrough(self, markup: str, plain_text: str, scramble_type: ScrambleType) -> ScrambleResult:
        return ScrambleResult(original_text=plain_text, scrambled_text=plain_text)

    def _scramble_text(self, markup: str, plain_text: str, scramble_type: ScrambleType) -> ScrambleResult:
        segments = segment(plain_text, TEXT_GRANULARITY[scramble_type])
        units = unit_texts(segments)
        if not units:
            raise EmptyContentError(EMPTY_CONTENT_MESSAGE)

        scrambled = reassemble(segments, shuffle_units(units, self.rng))
        return ScrambleResult(original_text=plain_text, scrambled_text=scrambled)

    def _scramble_references(self, markup: str, plain_text: str, scramble_type: ScrambleType) -> ScrambleResult:
        kind = REFERENCE_KIND[scramble_type]
        references = extract_references(markup, kind)
        if not references and not plain_text.strip():
            raise EmptyContentError(EMPTY_CONTENT_MESSAGE)

        shuffled = shuffle_references(references, self.rng)
        scrambled_markup = rewrite_tree(
            parse_markup(markup), kind, [ref.locator for ref in shuffled]
        )
        return ScrambleResult(
            original_text=render_references(references, kind),
            scrambled_text=render_references(extract_references(scrambled_markup, kind), kind),
        )


def scramble(
    markup: str,
    plain_text: str,
    scramble_type: ScrambleType,
    *,
    rng: Optional[RandomSource] = None,
) -> ScrambleResult:
    """Return the original and scrambled renderings for one request."""

    return Scrambler(rng=rng).scramble(markup, plain_text, scramble_type)
