import random
import string
from enum import Enum
from typing import *

from .core import DELIMITER, Config, default_wordlist, InvalidDomain, EmptyDomain, EmptyAlphabet, UnknownToken
from .template import compile_template
from .wordlist import pick_word

class Sampler:
    """Uniform choices backed by the operating system's entropy source."""

    def __init__(self, rng=None):
        self.rng = rng or random.SystemRandom()

    def uniform_int(self, n):
        """Return an integer in [0, N) with uniform probability."""
        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            raise InvalidDomain("Cannot pick a number in an empty range (n={!r})".format(n))
        return self.rng.randrange(n)

    def uniform_choice(self, seq):
        if len(seq) == 0:
            raise EmptyDomain("Cannot pick an element of an empty sequence")
        return seq[self.uniform_int(len(seq))]

SAMPLER = Sampler()

def build_symbols(symbols, excluded):
    """Remove all characters of EXCLUDED from SYMBOLS, keeping the order."""
    excluded = set(excluded)
    return "".join(c for c in symbols if c not in excluded)

class Token(Enum):
    WORD = "w"
    DIGIT = "d"
    SYMBOL = "s"
    SYMBOL_OR_DIGIT = "S"
    ANY = "a"

TOKEN_HELP = (
    (Token.WORD, "a word from the wordlist"),
    (Token.DIGIT, "a digit [0-9]"),
    (Token.SYMBOL, "a symbol from the string SYMBOLS"),
    (Token.SYMBOL_OR_DIGIT, "a symbol or a digit"),
    (Token.ANY, "a random character (letter, digit or symbol)"),
)

class TokenContext(NamedTuple):
    symbols: str
    wordlist: str
    sampler: Sampler = SAMPLER

def resolve(token, context):
    sampler = context.sampler
    if token is Token.WORD:
        return pick_word(context.wordlist, sampler)
    elif token is Token.DIGIT:
        return str(sampler.uniform_int(10))
    elif token is Token.SYMBOL:
        if not context.symbols:
            raise EmptyAlphabet("No symbols to pick from (all of them were excluded?)")
        return sampler.uniform_choice(context.symbols)
    elif token is Token.SYMBOL_OR_DIGIT:
        return sampler.uniform_choice(string.digits + context.symbols)
    elif token is Token.ANY:
        pool = string.digits + string.ascii_lowercase + string.ascii_uppercase + context.symbols
        return sampler.uniform_choice(pool)
    raise UnknownToken("Unknown token {!r}".format(token))

class TokenResolver:
    def __init__(self, context):
        self.context = context

    def resolve(self, identifier):
        if not isinstance(identifier, Token):
            try:
                identifier = Token(identifier)
            except ValueError:
                raise UnknownToken("Unknown token identifier {!r}".format(identifier)) from None
        return resolve(identifier, self.context)

IDENTIFIERS = frozenset(token.value for token in Token)

def expand(compiled, resolver, delimiter=DELIMITER):
    """Replace each token marker in COMPILED by a value from RESOLVER.

    Markers are resolved left to right, one call per occurrence; a delimiter
    followed by an unknown identifier is kept as is."""
    out, pos = [], 0
    while pos < len(compiled):
        c = compiled[pos]
        if c == delimiter and compiled[pos + 1:pos + 2] in IDENTIFIERS:
            out.append(resolver.resolve(compiled[pos + 1]))
            pos += 2
        else:
            out.append(c)
            pos += 1
    return "".join(out)

def generate(fmt, symbols, wordlist, count, sampler=SAMPLER, delimiter=DELIMITER):
    """Generate COUNT passphrases following FMT.

    SYMBOLS is the symbol alphabet (see `build_symbols`) and WORDLIST the
    path of a ``rank<TAB>word`` word list.  Either all COUNT passphrases are
    returned, or an exception is raised."""
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValueError("Count must be a positive integer, not {!r}".format(count))
    compiled = compile_template(fmt, delimiter)
    resolver = TokenResolver(TokenContext(symbols, wordlist, sampler))
    return [expand(compiled, resolver, delimiter) for _ in range(count)]

def generate_from_config(config: Config, sampler=SAMPLER):
    """Generate passphrases from CONFIG; a missing word list means `default_wordlist()`."""
    symbols = build_symbols(config.symbols, config.excluded)
    wordlist = config.wordlist or default_wordlist()
    return generate(config.format, symbols, wordlist, config.count, sampler)
