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

from typing import Any, List, Optional, Tuple

(MID, END, CONT, LAST) = ("|-- ", "`-- ", "|   ", "    ")


def _kids(x: Any) -> List[Tuple[str, Any]]:
    if isinstance(x, dict):
        return [(k, v) for k, v in x.items()]
    elif isinstance(x, list):
        return [(str(i), v) for i, v in enumerate(x)]
    else:
        return []


def _show(x: Any) -> str:
    if isinstance(x, dict):
        return "{}"
    elif isinstance(x, list):
        return "[]"
    elif x is None:
        return "null"
    elif isinstance(x, bool):
        return "true" if x else "false"
    else:
        return repr(x)


def pretty_tree(value: Any) -> str:
    """(JsonValue) -> str

    Returns a pseudographic tree representation of a JSON value similar to the
    tree command in Unix. Containers are shown as `{}` or `[]`, their members
    are prefixed with their keys or indices.

    ```pycon
    >>> print(pretty_tree({"a": [1, "x"], "b": None}))
    {}
    |-- a: []
    |   |-- 0: 1
    |   `-- 1: 'x'
    `-- b: null

    ```
    """

    def rec(name: Optional[str], x: Any, indent: str, sym: str) -> List[str]:
        if name is None:
            line = indent + sym + _show(x)
        else:
            line = "%s%s%s: %s" % (indent, sym, name, _show(x))
        if sym == MID:
            next_indent = indent + CONT
        elif sym == END:
            next_indent = indent + LAST
        else:
            next_indent = indent
        xs = _kids(x)
        syms = [MID] * (len(xs) - 1) + [END]
        lines = [line]
        for (k, v), s in zip(xs, syms):
            lines.extend(rec(k, v, next_indent, s))
        return lines

    return "\n".join(rec(None, value, "", ""))
