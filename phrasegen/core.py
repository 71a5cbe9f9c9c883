import os.path
from typing import *

DELIMITER = "/"

DEFAULT_FORMAT = "({}w )*6".format(DELIMITER)
DEFAULT_SYMBOLS = "!@#$%^&*-_=+;:'\",./<>?~"
DEFAULT_COUNT = 1
DEFAULT_WORDLIST = os.path.join(os.path.dirname(os.path.abspath(__file__)), "eff_large_wordlist.txt")
WORDLIST_ENV = "PHRASEGEN_WORDLIST"

class PhrasegenError(Exception):
    pass

class InvalidDomain(PhrasegenError, ValueError):
    pass

class EmptyDomain(PhrasegenError, ValueError):
    pass

class EmptyAlphabet(EmptyDomain):
    pass

class CorpusUnavailable(PhrasegenError):
    pass

class CorpusEmpty(PhrasegenError):
    pass

class MalformedEntry(PhrasegenError):
    pass

class UnknownToken(PhrasegenError, ValueError):
    pass

class InvalidMultiplier(PhrasegenError, ValueError):
    pass

def default_wordlist():
    """Return the word list path from $PHRASEGEN_WORDLIST, or the bundled one."""
    path = os.environ.get(WORDLIST_ENV)
    return os.path.expanduser(path) if path else DEFAULT_WORDLIST

class Config(NamedTuple):
    format: str = DEFAULT_FORMAT
    wordlist: Optional[str] = None
    symbols: str = DEFAULT_SYMBOLS
    excluded: str = ""
    count: int = DEFAULT_COUNT
