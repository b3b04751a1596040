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

"""Input streams and parse results.

An input stream is an immutable view of the characters that are left to parse.
Every parser takes a stream and returns a parse result: either a `ParseSuccess`
with the parsed value and the rest of the stream, or a `ParseError` that
describes the first failure.

Results are plain values. Nothing in this module raises.
"""

__all__ = [
    "InputStream",
    "ParseSuccess",
    "ParseError",
    "ParseResult",
    "to_input_stream",
    "head",
    "tail",
    "is_parse_error",
    "on_success",
    "on_error",
    "EOF",
]

from typing import Any, Callable, NamedTuple, Optional, Union

EOF = "EOF"


class InputStream(NamedTuple):
    """The characters of `text` starting from the position `pos`.

    Advancing the stream never changes it, `tail()` returns a new stream that
    shares the same text.

    Examples:

    ```pycon
    >>> s = to_input_stream("ab")
    >>> s.head()
    'a'
    >>> s.tail().head()
    'b'
    >>> s.tail().tail().head() is None
    True

    ```
    """

    text: str
    pos: int = 0

    def head(self) -> Optional[str]:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def tail(self) -> "InputStream":
        if self.pos < len(self.text):
            return InputStream(self.text, self.pos + 1)
        return self

    @property
    def remaining(self) -> str:
        return self.text[self.pos :]

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def __repr__(self) -> str:
        return "InputStream(%r)" % self.remaining


class ParseSuccess(NamedTuple):
    value: Any
    rest: InputStream


class ParseError(NamedTuple):
    """A parsing failure.

    Attributes:
        message (str): Human-readable description of the failure
        encountered (str): The offending character, or `"EOF"`
        rest (InputStream): The stream at the point of failure
    """

    message: str
    encountered: str
    rest: InputStream

    def __str__(self) -> str:
        return self.message


ParseResult = Union[ParseSuccess, ParseError]


def to_input_stream(text: str) -> InputStream:
    return InputStream(text, 0)


def head(stream: InputStream) -> Optional[str]:
    """Return the next character of the stream or `None` if it is exhausted."""
    return stream.head()


def tail(stream: InputStream) -> InputStream:
    """Return the stream without its first character.

    The tail of an empty stream is the empty stream.
    """
    return stream.tail()


def is_parse_error(result: object) -> bool:
    return isinstance(result, ParseError)


def on_success(
    result: ParseResult,
    next: Callable[[ParseSuccess], ParseResult],
) -> ParseResult:
    """Continue with `next` if `result` is a success, pass an error through.

    Examples:

    ```pycon
    >>> ok = ParseSuccess("x", to_input_stream("y"))
    >>> on_success(ok, lambda r: ParseSuccess(r.value * 2, r.rest)).value
    'xx'

    ```
    """
    if isinstance(result, ParseError):
        return result
    return next(result)


def on_error(
    result: ParseResult,
    next: Callable[[ParseError], ParseResult],
) -> ParseResult:
    """Continue with `next` if `result` is an error, pass a success through."""
    if isinstance(result, ParseError):
        return next(result)
    return result
