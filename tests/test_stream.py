# -*- coding: utf-8 -*-

import unittest
from typing import List

from funcjson.parser import result_parser, satisfy
from funcjson.stream import (
    InputStream,
    ParseError,
    ParseResult,
    ParseSuccess,
    head,
    is_parse_error,
    on_error,
    on_success,
    tail,
    to_input_stream,
)


class InputStreamTest(unittest.TestCase):
    def test_head(self) -> None:
        self.assertEqual(head(to_input_stream("hello")), "h")

    def test_head_of_empty(self) -> None:
        self.assertIsNone(head(to_input_stream("")))

    def test_tail(self) -> None:
        self.assertEqual(head(tail(to_input_stream("hello"))), "e")

    def test_tail_after_last_char(self) -> None:
        s = tail(to_input_stream("h"))
        self.assertIsNone(head(s))
        self.assertTrue(s.at_end())

    def test_tail_of_empty_is_empty(self) -> None:
        s = to_input_stream("")
        self.assertEqual(tail(s), s)
        self.assertEqual(tail(tail(s)).remaining, "")

    def test_tail_does_not_change_stream(self) -> None:
        s = to_input_stream("ab")
        s.tail()
        self.assertEqual(s.head(), "a")
        self.assertEqual(s.remaining, "ab")

    def test_non_ascii_characters(self) -> None:
        s = to_input_stream("λx.x")
        self.assertEqual(s.head(), "λ")
        self.assertEqual(s.tail().head(), "x")

    def test_remaining(self) -> None:
        s = InputStream("hello", 3)
        self.assertEqual(s.remaining, "lo")
        self.assertEqual(repr(s), "InputStream('lo')")


class SatisfyTest(unittest.TestCase):
    def test_success(self) -> None:
        result = satisfy(lambda c: c == "c").run(to_input_stream("ca"))
        self.assertFalse(is_parse_error(result))
        assert isinstance(result, ParseSuccess)
        self.assertEqual(result.value, "c")
        self.assertEqual(result.rest.head(), "a")

    def test_unexpected_char(self) -> None:
        result = satisfy(lambda c: c == "c").run(to_input_stream("ba"))
        self.assertTrue(is_parse_error(result))
        assert isinstance(result, ParseError)
        self.assertEqual(result.encountered, "b")
        self.assertEqual(result.message, "Unexpected 'b'")
        self.assertEqual(result.rest.head(), "b")

    def test_unexpected_eof(self) -> None:
        result = satisfy(lambda c: c == "c").run(to_input_stream(""))
        assert isinstance(result, ParseError)
        self.assertEqual(result.encountered, "EOF")
        self.assertEqual(result.message, "Unexpected EOF")
        self.assertIsNone(result.rest.head())

    def test_result_parser_consumes_nothing(self) -> None:
        s = to_input_stream("abc")
        self.assertEqual(result_parser(42).run(s), ParseSuccess(42, s))


class ResultChainingTest(unittest.TestCase):
    def test_on_success_with_success(self) -> None:
        success = ParseSuccess("result", to_input_stream("rest"))

        def next(r: ParseSuccess) -> ParseResult:
            return ParseSuccess("updated", r.rest)

        result = on_success(success, next)
        self.assertEqual(result, ParseSuccess("updated", to_input_stream("rest")))

    def test_on_success_with_error(self) -> None:
        error = ParseError("Error", "Error", to_input_stream("rest"))
        calls: List[ParseResult] = []

        def next(r: ParseSuccess) -> ParseResult:
            calls.append(r)
            return r

        self.assertIs(on_success(error, next), error)
        self.assertEqual(calls, [])

    def test_on_error_with_error(self) -> None:
        error = ParseError("Error", "Error", to_input_stream("rest"))

        def next(e: ParseError) -> ParseResult:
            return ParseSuccess("recovered", e.rest)

        result = on_error(error, next)
        self.assertEqual(result, ParseSuccess("recovered", to_input_stream("rest")))

    def test_on_error_with_success(self) -> None:
        success = ParseSuccess("result", to_input_stream("rest"))
        calls: List[ParseResult] = []

        def next(e: ParseError) -> ParseResult:
            calls.append(e)
            return e

        self.assertIs(on_error(success, next), success)
        self.assertEqual(calls, [])
