import pytest


class FirstIndexRandom:
    """Always draws index 0, so every Fisher-Yates step swaps with the head."""

    def __init__(self):
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return 0


class LastIndexRandom:
    """Always draws the current index, leaving the order untouched."""

    def randrange(self, stop):
        return stop - 1


class ExplodingRandom:
    def randrange(self, stop):
        raise AssertionError("random source should not be consulted")


@pytest.fixture
def first_index_rng():
    return FirstIndexRandom()


@pytest.fixture
def last_index_rng():
    return LastIndexRandom()


@pytest.fixture
def exploding_rng():
    return ExplodingRandom()
