import string

import pytest

from phrasegen.core import Config, EmptyAlphabet, UnknownToken, CorpusUnavailable, WORDLIST_ENV
from phrasegen.generator import (Sampler, Token, TokenContext, TokenResolver, resolve,
                                 expand, generate, generate_from_config)
from phrasegen.template import compile_template

from conftest import FixedRandom, StubResolver, WORDS

def context(values, symbols="!@#", wordlist="unused"):
    return TokenContext(symbols, wordlist, Sampler(FixedRandom(values)))

def test_expand_resolves_each_marker_in_order():
    resolver = StubResolver(w=["one", "two"], d=["7"], s=["!"])
    assert expand("/w-/d-/s-/w", resolver) == "one-7-!-two"
    assert resolver.calls == ["w", "d", "s", "w"]

def test_expand_keeps_unknown_markers_and_literals():
    resolver = StubResolver(d=["4"])
    assert expand("/x//d/", resolver) == "/x/4/"
    assert resolver.calls == ["d"]

def test_expand_without_markers():
    resolver = StubResolver()
    assert expand("plain text", resolver) == "plain text"
    assert resolver.calls == []

def test_pass107_recopy():
    resolver = StubResolver(d=["1", "0", "7"], w=["recopy"])
    assert expand(compile_template("pass/d/d/d_/w"), resolver) == "pass107_recopy"

def test_repeated_group_expansion():
    resolver = StubResolver(w=["A", "B", "C"], d=["1", "2", "3"])
    assert expand(compile_template("(/w/d)*3"), resolver) == "A1B2C3"
    assert resolver.calls == ["w", "d"] * 3

def test_resolve_digit():
    assert resolve(Token.DIGIT, context([7])) == "7"

def test_resolve_symbol():
    assert resolve(Token.SYMBOL, context([1])) == "@"

def test_resolve_symbol_needs_alphabet():
    with pytest.raises(EmptyAlphabet):
        resolve(Token.SYMBOL, context([0], symbols=""))

def test_resolve_symbol_or_digit():
    ctx = context([3, 11], symbols="!@")
    assert resolve(Token.SYMBOL_OR_DIGIT, ctx) == "3"
    assert resolve(Token.SYMBOL_OR_DIGIT, ctx) == "@"
    assert ctx.sampler.rng.calls == [12, 12]

def test_resolve_symbol_or_digit_without_symbols():
    ctx = context([9], symbols="")
    assert resolve(Token.SYMBOL_OR_DIGIT, ctx) == "9"
    assert ctx.sampler.rng.calls == [10]

def test_resolve_any_character_pool_order():
    ctx = context([0, 10, 36, 62], symbols="!")
    assert [resolve(Token.ANY, ctx) for _ in range(4)] == ["0", "a", "A", "!"]
    assert ctx.sampler.rng.calls == [63] * 4

def test_resolve_any_character_is_in_pool():
    pool = set(string.ascii_letters + string.digits + "#")
    ctx = TokenContext("#", "unused")
    assert all(resolve(Token.ANY, ctx) in pool for _ in range(200))

def test_resolve_word(wordlist):
    assert resolve(Token.WORD, context([3], wordlist=wordlist)) == "recopy"

def test_resolve_word_missing_file(tmp_path):
    with pytest.raises(CorpusUnavailable):
        resolve(Token.WORD, context([0], wordlist=str(tmp_path / "missing.txt")))

def test_resolver_accepts_identifiers():
    resolver = TokenResolver(context([5, 2]))
    assert resolver.resolve("d") == "5"
    assert resolver.resolve(Token.SYMBOL) == "#"

@pytest.mark.parametrize("identifier", ["x", "", "ww", None])
def test_resolver_rejects_unknown_identifier(identifier):
    with pytest.raises(UnknownToken):
        TokenResolver(context([])).resolve(identifier)

def test_generate_count(wordlist):
    passphrases = generate("(/w )*4/d/s", "!@#", wordlist, 5)
    assert len(passphrases) == 5
    for passphrase in passphrases:
        words = passphrase.split(" ")
        assert len(words) == 5
        assert all(word in WORDS for word in words[:4])
        assert words[4][0] in string.digits and words[4][1] in "!@#"

def test_generate_draws_independently_per_passphrase():
    rng = FixedRandom([1, 2, 3, 4, 5, 6])
    assert generate("/d/d", "", "unused", 3, Sampler(rng)) == ["12", "34", "56"]
    assert rng.calls == [10] * 6

def test_generate_group_with_words(wordlist):
    rng = FixedRandom([0, 1, 4, 2, 3, 3])
    assert generate("(/w/d)*3", "", wordlist, 1, Sampler(rng)) == ["abacus1zoom2recopy3"]

@pytest.mark.parametrize("count", [0, -2, 1.0, None])
def test_generate_rejects_bad_count(count):
    with pytest.raises(ValueError):
        generate("/d", "", "unused", count)

def test_generate_fails_without_partial_result():
    with pytest.raises(EmptyAlphabet):
        generate("/d/s", "", "unused", 3)

def test_generate_from_config_excludes_symbols(wordlist):
    config = Config(format="/s*50", wordlist=wordlist, symbols="!@#", excluded="!#", count=2)
    assert generate_from_config(config) == ["@" * 50] * 2

def test_generate_from_config_default_format(wordlist):
    [passphrase] = generate_from_config(Config(wordlist=wordlist))
    words = passphrase.split(" ")
    assert len(words) == 7 and words[-1] == ""
    assert all(word in WORDS for word in words[:6])

def test_config_without_wordlist_uses_environment(wordlist, monkeypatch):
    monkeypatch.setenv(WORDLIST_ENV, wordlist)
    [passphrase] = generate_from_config(Config(format="/w"))
    assert passphrase in WORDS

def test_explicit_wordlist_overrides_environment(wordlist, monkeypatch, tmp_path):
    monkeypatch.setenv(WORDLIST_ENV, str(tmp_path / "missing.txt"))
    [passphrase] = generate_from_config(Config(format="/w", wordlist=wordlist))
    assert passphrase in WORDS
