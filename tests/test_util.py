# -*- coding: utf-8 -*-

import unittest

from funcjson.util import pretty_tree


class PrettyTreeTest(unittest.TestCase):
    def test_scalars(self) -> None:
        self.assertEqual(pretty_tree(None), "null")
        self.assertEqual(pretty_tree(True), "true")
        self.assertEqual(pretty_tree(1.5), "1.5")
        self.assertEqual(pretty_tree("x"), "'x'")

    def test_empty_containers(self) -> None:
        self.assertEqual(pretty_tree([]), "[]")
        self.assertEqual(pretty_tree({}), "{}")

    def test_nested(self) -> None:
        value = {"a": [1, {"b": False}], "c": "d"}
        self.assertEqual(
            pretty_tree(value),
            "\n".join(
                [
                    "{}",
                    "|-- a: []",
                    "|   |-- 0: 1",
                    "|   `-- 1: {}",
                    "|       `-- b: false",
                    "`-- c: 'd'",
                ]
            ),
        )
