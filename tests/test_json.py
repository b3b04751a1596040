# -*- coding: utf-8 -*-

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from typing import Optional
from unittest import mock

from funcjson.json import MAX_DEPTH, json_parser, loads, main, parse_json
from funcjson.parser import NoParseError
from funcjson.stream import ParseError


class JsonTest(unittest.TestCase):
    def t(self, data: str, expected: Optional[object] = None) -> None:
        self.assertEqual(parse_json(data), expected)

    def error(self, data: str, max_depth: int = MAX_DEPTH) -> ParseError:
        result = parse_json(data, max_depth)
        assert isinstance(result, ParseError), "parsed %r" % (result,)
        return result

    def test_1_array(self) -> None:
        self.t("[1]", [1])

    def test_1_object(self) -> None:
        self.t('{"foo": "bar"}', {"foo": "bar"})

    def test_bool_and_null(self) -> None:
        self.t("[null, true, false]", [None, True, False])

    def test_literals(self) -> None:
        self.t("null", None)
        self.t("true", True)
        self.t("false", False)

    def test_empty_array(self) -> None:
        self.t("[]", [])

    def test_empty_object(self) -> None:
        self.t("{}", {})

    def test_many_array(self) -> None:
        self.t("[1, 2, [3, 4, 5], 6]", [1, 2, [3, 4, 5], 6])

    def test_array_order(self) -> None:
        self.t("[null, true, false, -0.12]", [None, True, False, -0.12])

    def test_many_object(self) -> None:
        # noinspection SpellCheckingInspection
        self.t(
            """
            {
                "foo": 1,
                "bar":
                {
                    "baz": 2,
                    "quux": [true, false],
                    "{}": {}
                },
                "spam": "eggs"
            }
        """,
            {
                "foo": 1,
                "bar": {
                    "baz": 2,
                    "quux": [True, False],
                    "{}": {},
                },
                "spam": "eggs",
            },
        )

    def test_duplicate_keys(self) -> None:
        self.t('{"a":1,"a":2}', {"a": 2})
        self.t('{"a": 1, "b": 2, "a": 3}', {"a": 3, "b": 2})

    def test_whitespace(self) -> None:
        self.assertEqual(parse_json(' { "a" : 1 } '), parse_json('{"a":1}'))
        self.t('\t[ 1 ,\n 2 ]\n', [1, 2])
        self.t('{\r\n  "a": [\r\n    true\r\n  ]\r\n}\r\n', {"a": [True]})

    def test_empty_text(self) -> None:
        self.assertEqual(self.error("").encountered, "EOF")
        self.assertEqual(self.error("   ").encountered, "EOF")

    def test_numbers(self) -> None:
        self.t(
            """\
            [
                0, 1, -1, 14, -14, 65536,
                0.0, 3.14, -3.14, -123.456,
                6.67428e-11, -1.602176e-19, 6.67428E-11, 1e+2, 1E-2
            ]
        """,
            [
                0,
                1,
                -1,
                14,
                -14,
                65536,
                0.0,
                3.14,
                -3.14,
                -123.456,
                6.67428e-11,
                -1.602176e-19,
                6.67428e-11,
                100.0,
                0.01,
            ],
        )

    def test_number_types(self) -> None:
        self.assertIsInstance(parse_json("65536"), int)
        self.assertIsInstance(parse_json("1.5"), float)
        self.t("-0.12", -0.12)
        self.t("1e3", 1000)
        self.assertIsInstance(parse_json("1e3"), float)

    def test_leading_zero(self) -> None:
        e = self.error("01")
        self.assertEqual(e.message, "Unexpected '1', expected EOF")
        self.assertEqual(e.rest.pos, 1)
        self.error("[01]")
        self.error("-01")

    def test_malformed_numbers(self) -> None:
        self.assertEqual(self.error("-").message, "Expected 'number', got 'EOF'")
        self.assertEqual(self.error("1.").message, "Unexpected '.', expected EOF")
        self.assertEqual(self.error("1e").message, "Unexpected 'e', expected EOF")
        self.error("+1")
        self.error(".5")

    def test_strings(self) -> None:
        # noinspection SpellCheckingInspection
        self.t(
            r"""
            [
                ["", "hello", "hello world!"],
                ["привет, мир!", "λx.x"],
                ["\"", "\\", "\/", "\b", "\f", "\n", "\r", "\t"],
                ["вот функция идентичности:\nλx.x"]
            ]
        """,
            [
                ["", "hello", "hello world!"],
                ["привет, мир!", "λx.x"],
                ['"', "\\", "/", "\x08", "\x0c", "\n", "\r", "\t"],
                ["вот функция идентичности:\nλx.x"],
            ],
        )

    def test_escape_in_string(self) -> None:
        self.t('"a\\nb"', "a\nb")

    def test_unknown_escape(self) -> None:
        e = self.error('"\\q"')
        self.assertEqual(e.message, "Expected 'string', got '\\'")
        self.assertEqual(e.encountered, "\\")

    def test_unicode_escape_not_supported(self) -> None:
        self.error('"\\u03bb"')

    def test_unterminated_string(self) -> None:
        self.assertEqual(self.error('"abc').message, "Expected 'string', got 'EOF'")

    def test_toplevel_string(self) -> None:
        self.assertEqual(self.error("неправильно").encountered, "н")

    def test_trailing_garbage(self) -> None:
        e = self.error("true x")
        self.assertEqual(e.message, "Unexpected 'x', expected EOF")
        self.assertEqual(e.encountered, "x")
        self.assertEqual(e.rest.remaining, "x")

    def test_labeled_errors(self) -> None:
        self.assertEqual(self.error("tru").message, "Expected 'boolean', got 'EOF'")
        self.assertEqual(self.error("nul").message, "Expected 'null', got 'EOF'")
        self.assertEqual(self.error("[1, 2").message, "Expected 'array', got 'EOF'")
        self.assertEqual(self.error('{"a" 1}').message, "Expected 'object', got '\"'")
        self.assertEqual(self.error("[1,]").message, "Expected 'array', got ','")

    def test_nesting(self) -> None:
        nested: list = []
        for _ in range(MAX_DEPTH - 1):
            nested = [nested]
        self.t("[" * MAX_DEPTH + "]" * MAX_DEPTH, nested)
        self.assertIsInstance(parse_json("[" * MAX_DEPTH + "1" + "]" * MAX_DEPTH), list)

    def test_too_deeply_nested(self) -> None:
        depth = MAX_DEPTH + 1
        e = self.error("[" * depth + "]" * depth)
        message = "Maximum nesting depth of %d exceeded" % MAX_DEPTH
        self.assertEqual(e.message, message)
        self.assertEqual(e.encountered, "[")
        self.assertEqual(e.rest.pos, MAX_DEPTH)

    def test_very_deeply_nested(self) -> None:
        e = self.error("[" * 100000)
        self.assertEqual(e.encountered, "[")

    def test_max_depth_beyond_stack(self) -> None:
        e = self.error("  " + "[" * 300 + "]" * 300, max_depth=1000)
        self.assertEqual(e.message, "Maximum nesting depth of 1000 exceeded")
        self.assertEqual(e.encountered, "[")
        self.assertEqual(e.rest.pos, 2)

    def test_grammar_is_built_once(self) -> None:
        self.assertIs(json_parser(4), json_parser(4))
        self.assertIsNot(json_parser(4), json_parser(5))

    def test_max_depth(self) -> None:
        self.assertEqual(parse_json("[1]", max_depth=1), [1])
        self.error("[[1]]", max_depth=1)
        self.error('{"a": {"b": 1}}', max_depth=1)
        self.assertEqual(parse_json("1", max_depth=0), 1)
        self.error("[]", max_depth=0)

    def test_loads(self) -> None:
        self.assertEqual(loads('{"a": [1]}'), {"a": [1]})
        with self.assertRaises(NoParseError) as ctx:
            loads("true x")
        self.assertEqual(ctx.exception.msg, "Unexpected 'x', expected EOF")
        self.assertEqual(ctx.exception.error.encountered, "x")

    def test_loads_too_deeply_nested(self) -> None:
        with self.assertRaises(NoParseError):
            loads("[[[]]]", max_depth=2)


class MainTest(unittest.TestCase):
    def run_main(self, text: str, *args: str) -> str:
        stdout = io.StringIO()
        with mock.patch("sys.stdin", io.StringIO(text)), mock.patch(
            "sys.argv", ["funcjson.json"] + list(args)
        ), redirect_stdout(stdout):
            main()
        return stdout.getvalue()

    def test_tree(self) -> None:
        self.assertEqual(
            self.run_main('{"a": [1, null]}'),
            "{}\n`-- a: []\n    |-- 0: 1\n    `-- 1: null\n",
        )

    def test_path(self) -> None:
        self.assertEqual(self.run_main('{"a": ["x"]}', "a.0"), "'x'\n")

    def test_absent_path(self) -> None:
        stderr = io.StringIO()
        with self.assertRaises(SystemExit) as ctx, redirect_stderr(stderr):
            self.run_main('{"a": []}', "a.0")
        self.assertEqual(ctx.exception.code, 2)
        self.assertEqual(stderr.getvalue(), "no value at a.0\n")

    def test_syntax_error(self) -> None:
        stderr = io.StringIO()
        with self.assertRaises(SystemExit) as ctx, redirect_stderr(stderr):
            self.run_main("[1,")
        self.assertEqual(ctx.exception.code, 1)
        self.assertTrue(stderr.getvalue().startswith("syntax error: "))
