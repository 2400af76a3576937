# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from unittest import mock

import httpx

from workoutworks.inference import client, estimation
from workoutworks.inference.client import InferenceError


class TestEstimation(unittest.TestCase):
    def test_protein_validates_food_first(self) -> None:
        with mock.patch.object(client, "complete", side_effect=["true", "46.5"]) as fake:
            protein = estimation.estimate_protein("chicken breast", 150)
        self.assertEqual(protein, 46.5)
        self.assertEqual(fake.call_count, 2)
        self.assertIn("150g of chicken breast", fake.call_args_list[1].args[1])

    def test_not_a_food_stops_before_estimating(self) -> None:
        with mock.patch.object(client, "complete", side_effect=["false"]) as fake:
            with self.assertRaises(estimation.NotAFoodError):
                estimation.estimate_protein("bicycle", 100)
        self.assertEqual(fake.call_count, 1)

    def test_large_weight_stays_in_plain_notation(self) -> None:
        with mock.patch.object(client, "complete", side_effect=["true", "2800g"]) as fake:
            self.assertEqual(estimation.estimate_protein("beef", 1234567), 2800.0)
        self.assertIn("1234567g of beef", fake.call_args_list[1].args[1])

    def test_volume_uses_low_temperature(self) -> None:
        reply = "Equation: 22 * 2 * 12 = 528kg\nResult: 528"
        with mock.patch.object(client, "complete", return_value=reply) as fake:
            estimate = estimation.estimate_volume("22k each: 12", instruction="Round down")
        self.assertEqual(estimate.volume, 528)
        self.assertEqual(estimate.equation, "22 * 2 * 12 = 528kg")
        self.assertEqual(fake.call_args.kwargs["temperature"], 0.1)
        self.assertTrue(fake.call_args.args[1].endswith("Round down"))

    def test_invalid_muscle_group_is_logged_and_dropped(self) -> None:
        with mock.patch.object(client, "complete", return_value="elbows"):
            with self.assertLogs("workoutworks.inference.estimation", level="WARNING"):
                label = estimation.predict_muscle_group("Bench press", ["chest", "back"])
        self.assertIsNone(label)

        with mock.patch.object(client, "complete", return_value="Legs") as fake:
            self.assertEqual(estimation.predict_muscle_group("Squat", ["Legs", "back"]), "legs")
        self.assertIn("legs, back", fake.call_args.args[0])


class TestClient(unittest.TestCase):
    def test_missing_key_is_an_inference_error(self) -> None:
        with mock.patch.object(client.settings, "llm_api_key", None):
            with self.assertRaises(InferenceError):
                client.complete("system", "user")

    def test_completions_url(self) -> None:
        self.assertEqual(client._completions_url("https://llm.local/v1/"), "https://llm.local/v1/chat/completions")
        self.assertEqual(
            client._completions_url("https://llm.local/v1/chat/completions"),
            "https://llm.local/v1/chat/completions",
        )

    def _patched_http(self, handler):
        real_client = httpx.Client

        def factory(**kwargs):
            return real_client(transport=httpx.MockTransport(handler), **kwargs)

        return mock.patch.object(client.httpx, "Client", side_effect=factory)

    def test_complete_returns_trimmed_first_choice(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("authorization")
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"choices": [{"message": {"content": "  true \n"}}]})

        with mock.patch.object(client.settings, "llm_api_key", "sk-test"), self._patched_http(handler):
            self.assertEqual(client.complete("system", "user", temperature=0.3), "true")
        self.assertEqual(seen["auth"], "Bearer sk-test")
        self.assertTrue(seen["url"].endswith("/chat/completions"))

    def test_upstream_error_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"error": "overloaded"})

        with mock.patch.object(client.settings, "llm_api_key", "sk-test"), self._patched_http(handler):
            with self.assertRaises(InferenceError):
                client.complete("system", "user")


if __name__ == "__main__":
    unittest.main()
