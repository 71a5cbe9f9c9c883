from contextlib import closing
from itertools import islice

from .core import CorpusUnavailable, CorpusEmpty, MalformedEntry

def read_lines(path):
    try:
        with open(path, encoding="utf-8") as f:
            yield from f
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusUnavailable("Cannot read word list {}: {}".format(path, e)) from e

def count_lines(path):
    """Count lines in PATH without keeping them in memory."""
    return sum(1 for _ in read_lines(path))

def pick_word(path, sampler):
    """Pick a uniformly random word from the word list at PATH.

    Each line is ``rank<TAB>word``.  The file is read twice: once to count
    its lines, then again up to the selected line, so memory use does not
    depend on the size of the list."""

    nb_lines = count_lines(path)
    if nb_lines == 0:
        raise CorpusEmpty("Word list {} is empty".format(path))
    index = sampler.uniform_int(nb_lines)
    with closing(read_lines(path)) as lines:
        line = next(islice(lines, index, None), None)
    if line is None:
        raise CorpusUnavailable("Word list {} changed while reading it".format(path))
    fields = line.split("\t")
    if len(fields) < 2:
        raise MalformedEntry("Line {} of {} has no word field: {!r}".format(index + 1, path, line.rstrip("\n")))
    return fields[1].strip()
