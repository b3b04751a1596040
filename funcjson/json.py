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

"""A JSON parser built from funcjson parsing combinators.

The parser is based on [the JSON grammar][1] and works directly on characters,
without a separate tokenizer. `\\uXXXX` escapes are not supported.

  [1]: https://tools.ietf.org/html/rfc8259
"""

__all__ = [
    "JsonValue",
    "MAX_DEPTH",
    "NestingError",
    "json_parser",
    "parse_json",
    "loads",
]

import sys
from functools import lru_cache
from pprint import pformat
from typing import Any, Dict, List, Sequence, Tuple, Union

from funcjson.parser import (
    NoParseError,
    Parser,
    add_label,
    and_then,
    and_then_left,
    any_of,
    between,
    chain,
    char_parser,
    choice,
    forward_decl,
    many,
    opt,
    satisfy,
    sep_by,
    some,
    string_parser,
    to_string,
    value_result,
)
from funcjson.path import ABSENT, get
from funcjson.stream import (
    EOF,
    InputStream,
    ParseError,
    ParseResult,
    ParseSuccess,
    to_input_stream,
)
from funcjson.util import pretty_tree

# Containers deeper than this are reported as errors instead of exhausting the
# Python stack
MAX_DEPTH = 32

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
JsonMember = Tuple[str, JsonValue]


class NestingError(Exception):
    """Raised when arrays and objects are nested deeper than allowed."""

    def __init__(self, max_depth: int, stream: InputStream) -> None:
        c = stream.head()
        self.error = ParseError(
            "Maximum nesting depth of %d exceeded" % max_depth,
            EOF if c is None else c,
            stream,
        )

    def __str__(self) -> str:
        return self.error.message


def make_number(s: str) -> Union[int, float]:
    try:
        return int(s)
    except ValueError:
        return float(s)


def make_object(members: Sequence[JsonMember]) -> Dict[str, JsonValue]:
    d = {}
    for k, v in members:
        d[k] = v
    return d


def lexeme(p: Parser[Any]) -> Parser[Any]:
    return and_then_left(p, whitespace)


def op(c: str) -> Parser[str]:
    return lexeme(char_parser(c))


whitespace = many(any_of(" \n\t\r")).named("whitespace")

null = value_result(None, string_parser("null")).named("null")
true = value_result(True, string_parser("true")).named("true")
false = value_result(False, string_parser("false")).named("false")
boolean = add_label("boolean", true | false)

escapes = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
raw_char = satisfy(lambda c: c != '"' and c != "\\").named("unescaped")
escaped_char = choice(
    [value_result(v, string_parser("\\" + k)) for k, v in escapes.items()]
).named("escaped")
quote = char_parser('"')
string = add_label(
    "string", to_string(between(quote, quote, many(raw_char | escaped_char)))
)

zero = char_parser("0")
digit_1_9 = any_of("123456789")
digit = zero | digit_1_9
int_part = to_string(chain([digit_1_9, to_string(many(digit))])) | zero
fraction = to_string(chain([char_parser("."), to_string(some(digit))]))
exponent = to_string(chain([any_of("eE"), opt(any_of("+-")), to_string(some(digit))]))
number = add_label(
    "number",
    to_string(chain([opt(char_parser("-")), int_part, opt(fraction), opt(exponent)]))
    >> make_number,
)

key = lexeme(string)


def json_array(value: Parser[JsonValue]) -> Parser[List[JsonValue]]:
    elements = sep_by(op(","), lexeme(value))
    return add_label("array", between(op("["), op("]"), elements))


def json_object(value: Parser[JsonValue]) -> Parser[Dict[str, JsonValue]]:
    member = and_then(and_then_left(key, op(":")), lexeme(value))
    members = sep_by(op(","), member)
    return add_label("object", between(op("{"), op("}"), members) >> make_object)


def nesting_guard(max_depth: int) -> Parser[JsonValue]:
    opening = any_of("[{")

    @Parser
    def _guard(stream: InputStream) -> ParseResult:
        result = opening.run(stream)
        if isinstance(result, ParseError):
            return result
        raise NestingError(max_depth, stream)

    _guard.name = "nesting_guard"
    return _guard


@lru_cache(maxsize=None)
def json_parser(max_depth: int = MAX_DEPTH) -> Parser[JsonValue]:
    """Return a parser of a JSON text surrounded by optional whitespace.

    Type: `(int) -> Parser[JsonValue]`

    There is one value rule per nesting level. Arrays and objects refer to the
    rule of the next level through a forward declaration, so the levels are
    linked only when the parser runs. Opening a container on the last level
    raises `NestingError`.

    The grammar is built once per `max_depth`.
    """
    levels = [forward_decl().named("json_value") for _ in range(max_depth + 1)]
    for depth, value in enumerate(levels):
        if depth < max_depth:
            inner = levels[depth + 1]
            containers = [json_array(inner), json_object(inner)]
        else:
            containers = [nesting_guard(max_depth)]
        value.define(choice([null, boolean, string, number] + containers))
    return between(whitespace, whitespace, levels[0])


def parse_json(text: str, max_depth: int = MAX_DEPTH) -> Union[JsonValue, ParseError]:
    """Parse a JSON document and return its value or a `ParseError`.

    Type: `(str, int) -> Union[JsonValue, ParseError]`

    The whole text must be consumed. Errors are returned, never raised. If
    `max_depth` is too large for the Python stack, too deep nesting is reported
    at the start of the top-level value.

    Examples:

    ```pycon
    >>> parse_json('[null, true, false, -0.12]')
    [None, True, False, -0.12]
    >>> print(parse_json('true x'))
    Unexpected 'x', expected EOF

    ```
    """
    try:
        return json_parser(max_depth).parse(text)
    except NestingError as e:
        return e.error
    except RecursionError:
        start = whitespace.run(to_input_stream(text))
        assert isinstance(start, ParseSuccess)
        return NestingError(max_depth, start.rest).error


def loads(s: str, max_depth: int = MAX_DEPTH) -> JsonValue:
    """Parse a JSON document and return its value.

    Type: `(str, int) -> JsonValue`

    Raises `NoParseError` if the document cannot be parsed.
    """
    result = parse_json(s, max_depth)
    if isinstance(result, ParseError):
        raise NoParseError(result)
    return result


def main() -> None:
    try:
        text = sys.stdin.read()
        tree = loads(text)
    except NoParseError as e:
        print("syntax error: %s" % e, file=sys.stderr)
        sys.exit(1)
    if len(sys.argv) > 1:
        path = sys.argv[1]
        value = get(tree)(path)
        if value is ABSENT:
            print("no value at %s" % path, file=sys.stderr)
            sys.exit(2)
        print(pformat(value))
    else:
        print(pretty_tree(tree))


if __name__ == "__main__":
    main()
