import pytest

from webscrambler.segmenter import join_segments, segment, unit_texts
from webscrambler.structures import Granularity, Segment

SAMPLES = [
    "",
    "Hello, world! Bye.",
    "  leading and trailing  ",
    "Wait... what?! Really.   Yes",
    "tabs\tand\nnewlines\r\nmixed",
    "123 456 -- !!!",
    "Ünïcode wörds, café.",
]


@pytest.mark.parametrize("granularity", list(Granularity))
@pytest.mark.parametrize("text", SAMPLES)
def test_segments_join_back_to_source(text, granularity):
    assert join_segments(segment(text, granularity)) == text


def test_letter_units_are_ascii_letters_only():
    segments = segment("ab1 é", Granularity.LETTER)
    assert [s.text for s in segments] == ["a", "b", "1", " ", "é"]
    assert unit_texts(segments) == ["a", "b"]


def test_words_keep_whitespace_runs_as_separators():
    segments = segment("Hello,  world!\nBye.", Granularity.WORD)
    assert segments == [
        Segment("Hello,", True),
        Segment("  ", False),
        Segment("world!", True),
        Segment("\n", False),
        Segment("Bye.", True),
    ]


def test_punctuation_only_tokens_are_not_words():
    segments = segment("--- foo 42", Granularity.WORD)
    assert unit_texts(segments) == ["foo"]


def test_sentences_split_on_terminal_punctuation():
    segments = segment("One. Two! Three", Granularity.SENTENCE)
    assert [s.text for s in segments] == ["One", ". ", "Two", "! ", "Three"]
    assert unit_texts(segments) == ["One", "Two", "Three"]


def test_sentence_punctuation_runs_stay_together():
    segments = segment("Wait... what?", Granularity.SENTENCE)
    assert [s.text for s in segments] == ["Wait", "... ", "what", "?"]
    assert unit_texts(segments) == ["Wait", "what"]


def test_leading_whitespace_stays_with_its_sentence():
    segments = segment("  Hi. ", Granularity.SENTENCE)
    assert unit_texts(segments) == ["  Hi"]


def test_empty_text_has_no_segments():
    assert segment("", Granularity.WORD) == []


def test_non_string_text_is_rejected():
    with pytest.raises(TypeError):
        segment(None, Granularity.WORD)
