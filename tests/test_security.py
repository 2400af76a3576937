# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from unittest import mock

from fastapi import HTTPException

from workoutworks.auth import security


class TestPasswords(unittest.TestCase):
    def test_hash_round_trip(self) -> None:
        stored = security.hash_password("password123")
        self.assertTrue(stored.startswith("pbkdf2_sha256$200000$"))
        self.assertTrue(security.verify_password("password123", stored))
        self.assertFalse(security.verify_password("password124", stored))

    def test_malformed_hashes_never_verify(self) -> None:
        for stored in ("", "plain", "md5$1$aa$bb", "pbkdf2_sha256$many$aa$bb", "pbkdf2_nope$10$aa$bb"):
            with self.subTest(stored=stored):
                self.assertFalse(security.verify_password("x", stored))


class TestSessionTokens(unittest.TestCase):
    def test_token_carries_subject(self) -> None:
        token = security.create_access_token(user_id="u-1", email="a@example.com")
        claims = security.decode_token(token)
        self.assertEqual(claims["sub"], "u-1")
        self.assertGreater(claims["exp"], claims["iat"])

    def test_tampered_or_foreign_tokens_are_rejected(self) -> None:
        token = security.create_access_token(user_id="u-1", email="a@example.com")
        head, body, sig = token.split(".")
        forged = security.create_access_token(user_id="u-2", email="b@example.com").split(".")[1]
        for bad in (f"{head}.{forged}.{sig}", "not-a-token", f"{token}.extra", f"{head}.{body}.!!"):
            with self.subTest(token=bad), self.assertRaises(HTTPException) as ctx:
                security.decode_token(bad)
            self.assertEqual(ctx.exception.status_code, 401)

        with mock.patch.object(security.settings, "jwt_secret", "another-secret"):
            with self.assertRaises(HTTPException):
                security.decode_token(token)

    def test_expired_token(self) -> None:
        with mock.patch.object(security.settings, "token_ttl_days", -1):
            token = security.create_access_token(user_id="u-1", email="a@example.com")
        with self.assertRaises(HTTPException) as ctx:
            security.decode_token(token)
        self.assertEqual(ctx.exception.detail, "Token expired")


if __name__ == "__main__":
    unittest.main()
