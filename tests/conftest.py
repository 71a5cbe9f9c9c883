import pytest

WORDS = ["abacus", "abdomen", "abide", "recopy", "zoom"]

class FixedRandom:
    """Stand-in for random.SystemRandom returning preset values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randrange(self, n):
        self.calls.append(n)
        value = self.values.pop(0)
        assert 0 <= value < n
        return value

class StubResolver:
    """Resolver returning preset values per identifier, recording each call."""

    def __init__(self, **values):
        self.values = {k: list(v) for k, v in values.items()}
        self.calls = []

    def resolve(self, identifier):
        self.calls.append(identifier)
        return self.values[identifier].pop(0)

@pytest.fixture
def wordlist(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("".join("{}\t{}\n".format(11111 + i, w) for i, w in enumerate(WORDS)))
    return str(path)
