# Copyright © 2009/2023 Andrey Vlasovskikh
#
# Permission is hereby granted, free of charge, to any person obtaining a copy of this
# software and associated documentation files (the "Software"), to deal in the Software
# without restriction, including without limitation the rights to use, copy, modify,
# merge, publish, distribute, sublicense, and/or sell copies of the Software, and to
# permit persons to whom the Software is furnished to do so, subject to the following
# conditions:
#
# The above copyright notice and this permission notice shall be included in all copies
# or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED,
# INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A
# PARTICULAR PURPOSE AND NON-INFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT
# HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF
# CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE
# OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.

"""Functional parsing combinators over character streams.

A parser is a function from an `InputStream` to a parse result. Parsers are
wrapped into `Parser` objects so that they can be named for debugging and
combined with operators:

* Class `Parser`
    * All the primitives and combinators return `Parser` objects
    * `Parser.parse(text)` parses the whole text
    * `p1 + p2` is `and_then`, `p1 | p2` is `or_else`, `p >> f` is `map_result`
* Primitive parsers
    * `satisfy(pred)`, `result_parser(value)`, `finished`, `forward_decl()`
* Parser combinators
    * `map_result`, `and_then`, `or_else`, `add_label`, `choice`, `chain`,
      `and_then_left`, `and_then_right`, `between`, `many`, `some`, `opt`,
      `sep_by1`, `sep_by`, `to_string`, `value_result`
* Character-level helpers
    * `char_parser(c)`, `any_of(chars)`, `string_parser(s)`

Failures are returned as `ParseError` values, not raised. Alternation always
backtracks to the position where the alternative started; there is no cut.
"""

__all__ = [
    "Parser",
    "satisfy",
    "result_parser",
    "finished",
    "forward_decl",
    "map_result",
    "and_then",
    "or_else",
    "add_label",
    "choice",
    "chain",
    "and_then_left",
    "and_then_right",
    "between",
    "many",
    "some",
    "opt",
    "sep_by1",
    "sep_by",
    "to_string",
    "value_result",
    "char_parser",
    "any_of",
    "string_parser",
    "NoParseError",
    "GrammarError",
]

import logging
from functools import reduce
from typing import (
    Any,
    Callable,
    Generic,
    List,
    Sequence,
    Tuple,
    TypeVar,
    Union,
)

from funcjson.stream import (
    EOF,
    InputStream,
    ParseError,
    ParseResult,
    ParseSuccess,
    on_error,
    on_success,
    to_input_stream,
)

log = logging.getLogger("funcjson")

debug = False

_A = TypeVar("_A")
_B = TypeVar("_B")


class Parser(Generic[_A]):
    """A parser object that can parse a stream of characters or can be combined
    with other parsers using `+`, `|`, `>>` and the combinator functions.

    Type: `Parser[A]`, where `A` is the type of the parsed value.

    !!! Note

        The constructor `Parser.__init__()` is considered **internal**. Use
        primitive parsers and parsing combinators to construct new parsers.
    """

    def __init__(
        self,
        p: Union["Parser[_A]", Callable[[InputStream], ParseResult]],
    ) -> None:
        """Wrap the parser function `p` into a `Parser` object."""
        self.name = ""
        self.define(p)

    def named(self, name: str) -> "Parser[_A]":
        """Specify the name of the parser for easier debugging.

        Type: `(str) -> Parser[A]`

        This name is used in the debug-level parsing log.

        Examples:

        ```pycon
        >>> expr = (char_parser("x") + char_parser("y")).named("expr")
        >>> expr.name
        'expr'

        ```

        !!! Note

            You can enable the parsing log this way:

            ```python
            import logging
            logging.basicConfig(level=logging.DEBUG)
            import funcjson.parser
            funcjson.parser.debug = True
            ```

            Only the parsers created after setting the flag are logged.
        """
        self.name = name
        return self

    def define(
        self,
        p: Union["Parser[_A]", Callable[[InputStream], ParseResult]],
    ) -> None:
        """Define the parser created earlier as a forward declaration.

        Type: `(Parser[A]) -> None`

        Use `p = forward_decl()` in combination with `p.define(...)` to define
        recursive parsers.
        """
        f = getattr(p, "run", p)
        if debug:
            setattr(self, "_run", f)
        else:
            setattr(self, "run", f)
        if not self.name:
            name = getattr(p, "name", p.__doc__)
            if name is not None:
                self.named(name)

    def run(self, stream: InputStream) -> ParseResult:
        """Run the parser against the input stream.

        Type: `(InputStream) -> ParseResult`

        !!! Warning

            This method is **internal**. Use `Parser.parse(text)` for parsing
            whole texts.
        """
        if debug:
            log.debug("trying %s" % self.name)
        return self._run(stream)

    def _run(self, stream: InputStream) -> ParseResult:
        raise NotImplementedError("you must define() a parser")

    def __call__(self, stream: InputStream) -> ParseResult:
        return self.run(stream)

    def parse(self, text: str) -> Union[_A, ParseError]:
        """Parse the whole text and return the parsed value.

        Type: `(str) -> Union[A, ParseError]`

        The parser must consume all the characters of `text`, otherwise the
        result is a `ParseError` that reports the first leftover character.
        Parsing errors are returned, not raised.

        Examples:

        ```pycon
        >>> expr = char_parser("x") + char_parser("y")
        >>> expr.parse("xy")
        ('x', 'y')
        >>> print(expr.parse("xz"))
        Expected 'y', got 'z'
        >>> print(expr.parse("xyz"))
        Unexpected 'z', expected EOF

        ```
        """
        result = and_then_left(self, finished).run(to_input_stream(text))
        if isinstance(result, ParseError):
            return result
        return result.value

    def __add__(self, other: "Parser[_B]") -> "Parser[Tuple[_A, _B]]":
        """Sequential combination of parsers, an alias for `and_then(self, other)`.

        Examples:

        ```pycon
        >>> expr = char_parser("x") + char_parser("y")
        >>> expr.parse("xy")
        ('x', 'y')

        ```
        """
        return and_then(self, other)

    def __or__(self, other: "Parser[_B]") -> "Parser[Union[_A, _B]]":
        """Choice combination of parsers, an alias for `or_else(self, other)`.

        Examples:

        ```pycon
        >>> expr = char_parser("x") | char_parser("y")
        >>> expr.parse("y")
        'y'

        ```
        """
        return or_else(self, other)

    def __rshift__(self, f: Callable[[_A], _B]) -> "Parser[_B]":
        """Transform the parsing result, an alias for `map_result(f, self)`.

        Examples:

        ```pycon
        >>> expr = any_of("0123456789") >> int
        >>> expr.parse("7")
        7

        ```
        """
        return map_result(f, self)


class NoParseError(Exception):
    """Raised by the entry points that report failures as exceptions."""

    def __init__(self, error: ParseError) -> None:
        self.error = error
        self.msg = error.message

    def __str__(self) -> str:
        return self.msg


class GrammarError(Exception):
    """Raised when the grammar definition itself contains errors."""

    pass


def satisfy(pred: Callable[[str], bool]) -> Parser[str]:
    """Return a parser that consumes one character if it satisfies `pred`.

    Type: `(Callable[[str], bool]) -> Parser[str]`

    This is the only primitive that looks at the input.

    Examples:

    ```pycon
    >>> expr = satisfy(lambda c: c.isalpha())
    >>> expr.parse("x")
    'x'
    >>> print(expr.parse("1"))
    Unexpected '1'
    >>> print(expr.parse(""))
    Unexpected EOF

    ```
    """

    @Parser
    def _satisfy(stream: InputStream) -> ParseResult:
        c = stream.head()
        if c is None:
            return ParseError("Unexpected EOF", EOF, stream)
        if pred(c):
            if debug:
                log.debug("*matched* %r, new position = %d" % (c, stream.pos + 1))
            return ParseSuccess(c, stream.tail())
        return ParseError("Unexpected '%s'" % c, c, stream)

    _satisfy.name = "satisfy(...)"
    return _satisfy


def result_parser(value: _A) -> Parser[_A]:
    """Return a parser that succeeds with `value` without consuming any input.

    Type: `(A) -> Parser[A]`

    Also known as `pure` or `return`.
    """

    @Parser
    def _result(stream: InputStream) -> ParseResult:
        return ParseSuccess(value, stream)

    _result.name = "(pure %r)" % (value,)
    return _result


@Parser
def finished(stream: InputStream) -> ParseResult:
    if stream.at_end():
        return ParseSuccess(None, stream)
    c = stream.remaining[0]
    return ParseError("Unexpected '%s', expected EOF" % c, c, stream)


finished.name = "end of input"


def forward_decl() -> Parser[Any]:
    """Return an undefined parser that can be used as a forward declaration.

    Type: `Parser[Any]`

    Use `p = forward_decl()` in combination with `p.define(...)` to define
    recursive parsers. The reference is resolved when the parser runs, so the
    rules that use `p` may be built before `p` is defined.

    Examples:

    ```pycon
    >>> expr = forward_decl()
    >>> expr.define(char_parser("x") + opt(expr) + char_parser("y"))
    >>> expr.parse("xxyy")
    (('x', (('x', ''), 'y')), 'y')

    ```
    """

    @Parser
    def f(_stream: InputStream) -> ParseResult:
        raise NotImplementedError("you must define() a forward_decl somewhere")

    f.name = "forward_decl()"
    return f


def map_result(transform: Callable[[_A], _B], parser: Parser[_A]) -> Parser[_B]:
    """Return a parser that replaces the parsed value with `transform(value)`.

    Type: `(Callable[[A], B], Parser[A]) -> Parser[B]`

    Errors pass through unchanged.
    """

    def transformed(result: ParseSuccess) -> ParseResult:
        return ParseSuccess(transform(result.value), result.rest)

    @Parser
    def _map(stream: InputStream) -> ParseResult:
        return on_success(parser.run(stream), transformed)

    return _map.named(parser.name)


def and_then(a: Parser[_A], b: Parser[_B]) -> Parser[Tuple[_A, _B]]:
    """Return a parser that runs `a`, then `b` on the rest of the input.

    Type: `(Parser[A], Parser[B]) -> Parser[Tuple[A, B]]`

    The parsed value is the pair of both values. The first error stops the
    sequence.

    Examples:

    ```pycon
    >>> expr = and_then(char_parser("x"), char_parser("y"))
    >>> expr.parse("xy")
    ('x', 'y')
    >>> print(expr.parse("yy"))
    Expected 'x', got 'y'

    ```
    """

    @Parser
    def _and_then(stream: InputStream) -> ParseResult:
        first = a.run(stream)
        if isinstance(first, ParseError):
            return first
        second = b.run(first.rest)
        if isinstance(second, ParseError):
            return second
        return ParseSuccess((first.value, second.value), second.rest)

    _and_then.name = "(%s, %s)" % (a.name, b.name)
    return _and_then


def or_else(a: Parser[_A], b: Parser[_B]) -> Parser[Union[_A, _B]]:
    """Return a parser that runs `a` and, if it fails, runs `b` from the same
    position.

    Type: `(Parser[A], Parser[B]) -> Parser[Union[A, B]]`

    If both alternatives fail, the error that got further into the input is
    returned. On a tie, the error of `b` wins.

    Examples:

    ```pycon
    >>> expr = or_else(string_parser("try"), string_parser("true"))
    >>> expr.parse("true")
    'true'

    ```
    """

    @Parser
    def _or_else(stream: InputStream) -> ParseResult:
        first = a.run(stream)
        if not isinstance(first, ParseError):
            return first
        second = b.run(stream)
        if isinstance(second, ParseError) and first.rest.pos > second.rest.pos:
            return first
        return second

    _or_else.name = "%s or %s" % (a.name, b.name)
    return _or_else


def add_label(label: str, parser: Parser[_A]) -> Parser[_A]:
    """Return a parser that reports its errors in terms of `label`.

    Type: `(str, Parser[A]) -> Parser[A]`

    The encountered character and the failure position of the error are kept.

    Examples:

    ```pycon
    >>> expr = add_label("digit", any_of("0123456789"))
    >>> print(expr.parse("x"))
    Expected 'digit', got 'x'

    ```
    """

    def relabel(error: ParseError) -> ParseResult:
        return ParseError(
            "Expected '%s', got '%s'" % (label, error.encountered),
            error.encountered,
            error.rest,
        )

    @Parser
    def _label(stream: InputStream) -> ParseResult:
        return on_error(parser.run(stream), relabel)

    return _label.named(label)


def choice(parsers: Sequence[Parser[Any]]) -> Parser[Any]:
    """Return a parser that tries `parsers` in order, the first success wins.

    Type: `(Sequence[Parser[Any]]) -> Parser[Any]`
    """
    if not parsers:
        raise GrammarError("choice() requires at least one parser")
    return reduce(or_else, parsers)


def chain(parsers: Sequence[Parser[Any]]) -> Parser[List[Any]]:
    """Return a parser that runs all of `parsers` in order.

    Type: `(Sequence[Parser[Any]]) -> Parser[List[Any]]`

    The parsed value is the list of the values of each parser.

    Examples:

    ```pycon
    >>> expr = chain([char_parser("a"), opt(char_parser("b")), char_parser("c")])
    >>> expr.parse("abc")
    ['a', 'b', 'c']
    >>> expr.parse("ac")
    ['a', '', 'c']

    ```
    """
    if not parsers:
        raise GrammarError("chain() requires at least one parser")

    def append(values: Tuple[List[Any], Any]) -> List[Any]:
        xs, x = values
        return xs + [x]

    def step(acc: Parser[List[Any]], p: Parser[Any]) -> Parser[List[Any]]:
        return map_result(append, and_then(acc, p))

    return reduce(step, parsers[1:], map_result(lambda v: [v], parsers[0]))


def and_then_left(a: Parser[_A], b: Parser[Any]) -> Parser[_A]:
    """Run `a`, then `b`, and keep only the value of `a`.

    Type: `(Parser[A], Parser[Any]) -> Parser[A]`
    """

    @Parser
    def _left(stream: InputStream) -> ParseResult:
        first = a.run(stream)
        if isinstance(first, ParseError):
            return first
        second = b.run(first.rest)
        if isinstance(second, ParseError):
            return second
        return ParseSuccess(first.value, second.rest)

    _left.name = "(%s, -%s)" % (a.name, b.name)
    return _left


def and_then_right(a: Parser[Any], b: Parser[_B]) -> Parser[_B]:
    """Run `a`, then `b`, and keep only the value of `b`.

    Type: `(Parser[Any], Parser[B]) -> Parser[B]`
    """

    @Parser
    def _right(stream: InputStream) -> ParseResult:
        first = a.run(stream)
        if isinstance(first, ParseError):
            return first
        return b.run(first.rest)

    _right.name = "(-%s, %s)" % (a.name, b.name)
    return _right


def between(open: Parser[Any], close: Parser[Any], inner: Parser[_A]) -> Parser[_A]:
    """Run `open`, `inner` and `close`, and keep only the value of `inner`.

    Type: `(Parser[Any], Parser[Any], Parser[A]) -> Parser[A]`

    Examples:

    ```pycon
    >>> expr = between(char_parser("("), char_parser(")"), many(char_parser("x")))
    >>> expr.parse("(xx)")
    ['x', 'x']

    ```
    """
    return and_then_left(and_then_right(open, inner), close)


def many(p: Parser[_A]) -> Parser[List[_A]]:
    """Return a parser that applies `p` as many times as it succeeds.

    Type: `(Parser[A]) -> Parser[List[A]]`

    The parsed value is the list of the parsed values. The parser stops before
    the first failed attempt and never fails itself. A `p` that succeeds without
    consuming input raises `GrammarError`.

    Examples:

    ```pycon
    >>> expr = many(char_parser("x"))
    >>> expr.parse("xx")
    ['x', 'x']
    >>> expr.parse("")
    []
    >>> expr.run(to_input_stream("xxy"))
    ParseSuccess(value=['x', 'x'], rest=InputStream('y'))

    ```
    """

    @Parser
    def _many(stream: InputStream) -> ParseResult:
        values = []
        while True:
            result = p.run(stream)
            if isinstance(result, ParseError):
                break
            if result.rest.pos == stream.pos:
                raise GrammarError("%s succeeds without consuming input" % _many.name)
            values.append(result.value)
            stream = result.rest
        if debug:
            log.debug(
                "*matched* %d instances of %s, new position = %d"
                % (len(values), _many.name, stream.pos)
            )
        return ParseSuccess(values, stream)

    _many.name = "{ %s }" % p.name
    return _many


def _cons(values: Tuple[_A, List[_A]]) -> List[_A]:
    x, xs = values
    return [x] + xs


def some(p: Parser[_A]) -> Parser[List[_A]]:
    """Return a parser that applies `p` one or more times.

    Type: `(Parser[A]) -> Parser[List[A]]`

    Examples:

    ```pycon
    >>> expr = some(char_parser("x"))
    >>> expr.parse("xx")
    ['x', 'x']
    >>> print(expr.parse("y"))
    Expected 'x', got 'y'

    ```
    """
    name = "(%s, { %s })" % (p.name, p.name)
    return map_result(_cons, and_then(p, many(p))).named(name)


def opt(p: Parser[_A], empty: Any = "") -> Parser[Any]:
    """Return a parser that returns `empty` without consuming input if `p` fails.

    Type: `(Parser[A], Any) -> Parser[Any]`

    The empty string is the default neutral value, as `opt()` is mostly used
    in character-level parsers whose results are joined into strings.
    """
    return or_else(p, result_parser(empty)).named("[ %s ]" % (p.name,))


def sep_by1(sep: Parser[Any], p: Parser[_A]) -> Parser[List[_A]]:
    """Return a parser of one or more `p` separated by `sep`.

    Type: `(Parser[Any], Parser[A]) -> Parser[List[A]]`

    Only the values of `p` are kept. A trailing `sep` that is not followed by
    `p` is not consumed.

    Examples:

    ```pycon
    >>> expr = sep_by1(char_parser(","), any_of("abc"))
    >>> expr.parse("a,b,c")
    ['a', 'b', 'c']
    >>> expr.run(to_input_stream("a,b,"))
    ParseSuccess(value=['a', 'b'], rest=InputStream(','))

    ```
    """
    return map_result(_cons, and_then(p, many(and_then_right(sep, p))))


def sep_by(sep: Parser[Any], p: Parser[_A]) -> Parser[List[_A]]:
    """Return a parser of zero or more `p` separated by `sep`.

    Type: `(Parser[Any], Parser[A]) -> Parser[List[A]]`
    """
    return or_else(sep_by1(sep, p), result_parser(()) >> list)


def to_string(p: Parser[Sequence[str]]) -> Parser[str]:
    """Return a parser that joins the parsed sequence of strings into one string.

    Type: `(Parser[Sequence[str]]) -> Parser[str]`

    Examples:

    ```pycon
    >>> expr = to_string(many(any_of("ab")))
    >>> expr.parse("abba")
    'abba'

    ```
    """
    return map_result("".join, p)


def value_result(value: _B, p: Parser[Any]) -> Parser[_B]:
    """Return a parser that replaces the value of `p` with the constant `value`.

    Type: `(B, Parser[Any]) -> Parser[B]`
    """
    return map_result(lambda _: value, p)


def char_parser(c: str) -> Parser[str]:
    """Return a parser of the character `c`.

    Type: `(str) -> Parser[str]`

    Examples:

    ```pycon
    >>> expr = char_parser("x")
    >>> expr.parse("x")
    'x'
    >>> print(expr.parse("y"))
    Expected 'x', got 'y'

    ```
    """
    return add_label(c, satisfy(lambda t: t == c)).named(repr(c))


def any_of(chars: Sequence[str]) -> Parser[str]:
    """Return a parser of any of the characters in `chars`.

    Type: `(Sequence[str]) -> Parser[str]`
    """
    return choice([char_parser(c) for c in chars])


def string_parser(s: str) -> Parser[str]:
    """Return a parser of the exact sequence of characters `s`.

    Type: `(str) -> Parser[str]`

    Examples:

    ```pycon
    >>> expr = string_parser("null")
    >>> expr.parse("null")
    'null'
    >>> print(expr.parse("nil"))
    Expected 'null', got 'i'

    ```
    """
    return add_label(s, to_string(chain([char_parser(c) for c in s])))


if __name__ == "__main__":
    import doctest

    doctest.testmod()
