# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from workoutworks.exercise.models import MUSCLE_GROUPS
from workoutworks.inference.parsing import (
    UnusableOutputError,
    parse_is_food,
    parse_muscle_group,
    parse_protein,
    parse_volume,
)


class TestParseVolume(unittest.TestCase):
    def test_equation_and_result(self) -> None:
        reply = (
            "Equation: 22 * 2(each) * 12 + 22 * 2 * 12 + 22 * 2 * 15 = 1716kg\n"
            "Result: 1716"
        )
        equation, volume = parse_volume(reply)
        self.assertEqual(volume, 1716)
        self.assertEqual(equation, "22 * 2(each) * 12 + 22 * 2 * 12 + 22 * 2 * 15 = 1716kg")

    def test_multiline_equation_is_joined(self) -> None:
        reply = (
            "Equation: 23 * 1 * 15 +\n"
            "  27 * 1 * 15 + 27 * 1 * 15 +\n"
            "\n"
            "14 * 1 * 20 = 1145kg\n"
            "Result: 1145kg"
        )
        equation, volume = parse_volume(reply)
        self.assertEqual(volume, 1145)
        self.assertEqual(equation, "23 * 1 * 15 + 27 * 1 * 15 + 27 * 1 * 15 + 14 * 1 * 20 = 1145kg")

    def test_compact_reply(self) -> None:
        self.assertEqual(parse_volume("Equation: 22*2*12=528kg\nResult: 528"), ("22*2*12=528kg", 528))
        self.assertEqual(parse_volume("total was 945"), ("", 945))

    def test_first_result_line_wins(self) -> None:
        reply = "Equation: 20 * 10 = 200kg\nResult: 200\nResult: 250"
        self.assertEqual(parse_volume(reply), ("20 * 10 = 200kg", 200))
        self.assertEqual(parse_volume("Result: n/a\nResult: 300"), ("", 300))

    def test_falls_back_to_first_integer(self) -> None:
        self.assertEqual(parse_volume("The total volume is 945 kg."), ("", 945))

    def test_no_integer_is_unusable(self) -> None:
        with self.assertRaises(UnusableOutputError):
            parse_volume("I cannot work that out.")


class TestParseOther(unittest.TestCase):
    def test_protein(self) -> None:
        self.assertEqual(parse_protein("23"), 23.0)
        self.assertEqual(parse_protein(" 12.5\n"), 12.5)
        for bad in ("about 20g", "-3", "", "nan"):
            with self.subTest(bad=bad), self.assertRaises(UnusableOutputError):
                parse_protein(bad)

    def test_protein_ignores_trailing_units(self) -> None:
        self.assertEqual(parse_protein("23g"), 23.0)
        self.assertEqual(parse_protein("23 grams"), 23.0)
        self.assertEqual(parse_protein("46.5 g\n"), 46.5)
        with self.assertRaises(UnusableOutputError):
            parse_protein("-3g")

    def test_is_food(self) -> None:
        self.assertTrue(parse_is_food(" True\n"))
        self.assertFalse(parse_is_food("false"))
        self.assertFalse(parse_is_food("yes, it is"))

    def test_muscle_group_must_be_in_vocabulary(self) -> None:
        self.assertEqual(parse_muscle_group("Chest\n", MUSCLE_GROUPS), "chest")
        self.assertIsNone(parse_muscle_group("shoulders", ["chest", "back"]))
        self.assertIsNone(parse_muscle_group("", MUSCLE_GROUPS))


if __name__ == "__main__":
    unittest.main()
