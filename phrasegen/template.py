"""Compile passphrase formats.

A format mixes literal text with token markers (the delimiter followed by
one identifier character, e.g. ``/w``).  A marker or a parenthesized span
followed by ``*N`` is repeated N times: ``(/w/d)*3`` compiles to
``/w/d/w/d/w/d``.  Parenthesized spans may nest.  Anything that does not
form a complete group (a ``(`` that is never closed, a ``)`` without a
``*N`` suffix, a stray ``*``) is kept as literal text.

Compilation happens in two passes: `parse` builds a list of `Literal`,
`Marker` and `Repeat` nodes, and `flatten` renders it back to a string with
all repetitions unrolled.
"""

import re
import string

from .core import DELIMITER, InvalidMultiplier

MULTIPLIER = re.compile(r"\*([0-9]+)")
IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "_")

class Node(object):
    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __repr__(self):
        fields = ", ".join("{}={!r}".format(k, v) for k, v in vars(self).items())
        return "{}({})".format(type(self).__name__, fields)

class Literal(Node):
    def __init__(self, text):
        self.text = text

    def render(self):
        return self.text

class Marker(Node):
    def __init__(self, identifier, delimiter=DELIMITER):
        self.identifier = identifier
        self.delimiter = delimiter

    def render(self):
        return self.delimiter + self.identifier

class Repeat(Node):
    def __init__(self, body, count):
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise InvalidMultiplier("Repetition count must be a non-negative integer, not {!r}".format(count))
        self.body = list(body)
        self.count = count

    def render(self):
        return flatten([self])

def _add_literal(nodes, text):
    if nodes and isinstance(nodes[-1], Literal):
        nodes[-1] = Literal(nodes[-1].text + text)
    else:
        nodes.append(Literal(text))

def _add_nodes(nodes, body):
    for node in body:
        if isinstance(node, Literal):
            _add_literal(nodes, node.text)
        else:
            nodes.append(node)

def _multiplier(fmt, pos):
    """Return (count, end) if FMT has a ``*N`` suffix at POS, else None."""
    m = MULTIPLIER.match(fmt, pos)
    if not m:
        return None
    try:
        return int(m.group(1)), m.end()
    except ValueError as e:
        raise InvalidMultiplier("Cannot read repetition count at position {}: {}".format(pos + 1, e)) from e

def parse(fmt, delimiter=DELIMITER):
    """Parse FMT into a list of nodes.

    Open groups are kept on an explicit stack: each ``(`` saves the nodes
    read so far, and the matching ``)`` turns the nodes read since then
    into a `Repeat` or puts them back between literal parentheses."""
    nodes, stack, pos = [], [], 0
    while pos < len(fmt):
        c = fmt[pos]
        if c == "(":
            stack.append(nodes)
            nodes = []
            pos += 1
        elif c == ")" and stack:
            body, nodes = nodes, stack.pop()
            suffix = _multiplier(fmt, pos + 1)
            if suffix:
                count, pos = suffix
                nodes.append(Repeat(body, count))
            else:
                _add_literal(nodes, "(")
                _add_nodes(nodes, body)
                _add_literal(nodes, ")")
                pos += 1
        elif c == delimiter and pos + 1 < len(fmt) and fmt[pos + 1] in IDENTIFIER_CHARS:
            marker = Marker(fmt[pos + 1], delimiter)
            suffix = _multiplier(fmt, pos + 2)
            if suffix:
                count, pos = suffix
                nodes.append(Repeat([marker], count))
            else:
                nodes.append(marker)
                pos += 2
        else:
            _add_literal(nodes, c)
            pos += 1
    # Groups never closed are literal text
    while stack:
        body, nodes = nodes, stack.pop()
        _add_literal(nodes, "(")
        _add_nodes(nodes, body)
    return nodes

def flatten(nodes):
    """Render NODES to a string, unrolling nested `Repeat` nodes."""
    stack = [(iter(nodes), [], 1)]
    while True:
        children, parts, count = stack[-1]
        node = next(children, None)
        if node is None:
            stack.pop()
            text = "".join(parts) * count
            if not stack:
                return text
            stack[-1][1].append(text)
        elif isinstance(node, Repeat):
            stack.append((iter(node.body), [], node.count))
        else:
            parts.append(node.render())

def compile_template(fmt, delimiter=DELIMITER):
    """Unroll all repetition groups in FMT.

    >>> compile_template("(/w/d)*3")
    '/w/d/w/d/w/d'
    """
    return flatten(parse(fmt, delimiter))
