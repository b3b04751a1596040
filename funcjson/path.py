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

"""Dot-separated paths into parsed JSON values.

A path such as `"using.disallowed.0"` is split into segments by a small grammar
of its own. Digit segments index arrays, other segments are object keys. There
is no way to escape a literal dot inside a key.
"""

__all__ = ["ABSENT", "parse_path", "split_path", "get"]

from functools import reduce
from typing import Any, Callable, List, Union

from funcjson.parser import any_of, char_parser, satisfy, sep_by, some, to_string
from funcjson.stream import ParseError


class _Absent:
    """The value of a path that cannot be resolved."""

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()

segment = to_string(some(satisfy(lambda c: c != "."))).named("segment")
path = sep_by(char_parser("."), segment).named("path")
index = to_string(some(any_of("0123456789"))).named("index")


def parse_path(s: str) -> Union[List[str], ParseError]:
    """Split the path `s` into its segments.

    Type: `(str) -> Union[List[str], ParseError]`

    Empty segments are errors.

    Examples:

    ```pycon
    >>> parse_path("using.disallowed.0")
    ['using', 'disallowed', '0']
    >>> parse_path("")
    []
    >>> print(parse_path("a..b"))
    Unexpected '.', expected EOF

    ```
    """
    return path.parse(s)


def split_path(s: str) -> List[str]:
    """Split the path `s` into its segments, or return `[]` if it is malformed."""
    result = parse_path(s)
    if isinstance(result, ParseError):
        return []
    return result


def _step(current: Any, name: str) -> Any:
    if isinstance(current, dict):
        return current.get(name, ABSENT)
    if isinstance(current, list):
        i = index.parse(name)
        if isinstance(i, ParseError) or int(i) >= len(current):
            return ABSENT
        return current[int(i)]
    return ABSENT


def get(value: Any) -> Callable[[str], Any]:
    """Return a function that looks up paths in the JSON value `value`.

    Type: `(JsonValue) -> (str) -> Union[JsonValue, ABSENT]`

    Lookups that cannot be resolved return `ABSENT` instead of raising. The
    empty path refers to `value` itself, a malformed path to nothing.

    Examples:

    ```pycon
    >>> doc = {"using": {"disallowed": ["No dependencies"]}}
    >>> get(doc)("using.disallowed.0")
    'No dependencies'
    >>> get(doc)("using.missing.0")
    ABSENT

    ```
    """

    def _get(s: str) -> Any:
        segments = parse_path(s)
        if isinstance(segments, ParseError):
            return ABSENT
        return reduce(_step, segments, value)

    return _get
