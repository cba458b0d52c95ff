"""
Unit Tests - Authentication strategies

Module: tests.test_authenticators
Date: 2026-10-19
Version: 0.1.0-alpha

DESCRIPTION:
- PasswordAuthenticator: accept, reject, defer
- StaticTokenAuthenticator: accept, defer
- JWTAuthenticator: accept, reject, defer
- JWTHandler: generation and verification errors
"""

import asyncio
import logging
import time
import unittest
from datetime import timedelta
from unittest.mock import patch

import jwt

from authchain.dispatch.contracts import Identity, Rejection
from authchain.security.authentication import (
    JWTAuthenticator,
    JWTClaimError,
    JWTExpiredError,
    JWTHandler,
    JWTInvalidError,
    PasswordAuthenticator,
    StaticTokenAuthenticator,
)

logging.basicConfig(
    level=logging.WARNING,
    format="%(name)s - %(levelname)s - %(message)s"
)

SECRET_KEY = "test-secret-key-at-least-32-characters-long!!!!"


class NextSpy:
    """Stands in for the rest of the chain"""

    def __init__(self, outcome="deferred"):
        self.outcome = outcome
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        return self.outcome


def run(authenticator, credentials, next_spy):
    return asyncio.run(authenticator.process(credentials, next_spy))


class TestPasswordAuthenticator(unittest.TestCase):
    """Test bcrypt username/password strategy"""

    @classmethod
    def setUpClass(cls):
        cls.users = {
            "alice": PasswordAuthenticator.hash_password("secret123", rounds=4),
        }

    def setUp(self):
        """Setup before each test"""
        self.authenticator = PasswordAuthenticator(
            self.users, roles={"alice": ["admin"]}
        )
        self.next = NextSpy()

    def test_valid_credentials(self):
        """Test correct password yields an Identity"""
        outcome = run(
            self.authenticator,
            {"username": "alice", "password": "secret123"},
            self.next,
        )

        self.assertIsInstance(outcome, Identity)
        self.assertEqual(outcome.subject, "alice")
        self.assertEqual(outcome.strategy, "password")
        self.assertEqual(outcome.roles, ["admin"])
        self.assertEqual(self.next.calls, 0)

    def test_wrong_password(self):
        """Test wrong password is rejected without calling next()"""
        with self.assertLogs("security.password", level="WARNING"):
            outcome = run(
                self.authenticator,
                {"username": "alice", "password": "wrong"},
                self.next,
            )

        self.assertIsInstance(outcome, Rejection)
        self.assertEqual(outcome.strategy, "password")
        self.assertEqual(self.next.calls, 0)

    def test_unknown_user(self):
        """Test unknown user gets the same rejection as a wrong password"""
        outcome = run(
            self.authenticator,
            {"username": "mallory", "password": "secret123"},
            self.next,
        )

        self.assertIsInstance(outcome, Rejection)
        self.assertEqual(outcome.reason, "invalid username or password")

    def test_missing_keys_defer(self):
        """Test credentials without username/password go to next()"""
        outcome = run(self.authenticator, {"token": "abc"}, self.next)

        self.assertEqual(outcome, "deferred")
        self.assertEqual(self.next.calls, 1)

    def test_non_string_username_rejected(self):
        """Test unhashable or non-string usernames are rejected, not raised"""
        for username in (["alice"], {"name": "alice"}, 42):
            outcome = run(
                self.authenticator,
                {"username": username, "password": "secret123"},
                self.next,
            )
            self.assertIsInstance(outcome, Rejection)
        self.assertEqual(self.next.calls, 0)

    def test_hash_check_does_not_block_event_loop(self):
        """Test other tasks keep running while a password is verified"""

        def slow_verify(password, password_hash):
            time.sleep(0.2)
            return True

        async def run_test():
            ticks = []
            stop = asyncio.Event()

            async def ticker():
                while not stop.is_set():
                    ticks.append(1)
                    await asyncio.sleep(0.005)

            task = asyncio.ensure_future(ticker())
            await asyncio.sleep(0)
            before = len(ticks)
            outcome = await self.authenticator.process(
                {"username": "alice", "password": "secret123"}, self.next
            )
            during = len(ticks) - before
            stop.set()
            await task
            return outcome, during

        with patch.object(
            PasswordAuthenticator, "verify_password", staticmethod(slow_verify)
        ):
            outcome, during = asyncio.run(run_test())

        self.assertIsInstance(outcome, Identity)
        self.assertGreaterEqual(during, 5)

    def test_hash_is_bcrypt(self):
        """Test hash_password produces a bcrypt hash"""
        self.assertTrue(self.users["alice"].startswith(("$2a$", "$2b$", "$2y$")))

    def test_verify_password_bad_inputs(self):
        """Test malformed hash or non-string password does not raise"""
        self.assertFalse(PasswordAuthenticator.verify_password("pw", "not-a-hash"))
        self.assertFalse(
            PasswordAuthenticator.verify_password(123, self.users["alice"])
        )

    def test_credentials_not_mutated(self):
        """Test the credentials mapping is left as it was"""
        credentials = {"username": "alice", "password": "secret123"}
        run(self.authenticator, credentials, self.next)

        self.assertEqual(credentials, {"username": "alice", "password": "secret123"})


class TestStaticTokenAuthenticator(unittest.TestCase):
    """Test fixed token table strategy"""

    def setUp(self):
        """Setup before each test"""
        self.authenticator = StaticTokenAuthenticator({"T1": "service-a"})
        self.next = NextSpy()

    def test_known_token(self):
        """Test known token yields an Identity"""
        outcome = run(self.authenticator, {"token": "T1"}, self.next)

        self.assertIsInstance(outcome, Identity)
        self.assertEqual(outcome.subject, "service-a")
        self.assertEqual(self.next.calls, 0)

    def test_unknown_token_defers(self):
        """Test unknown tokens are passed on"""
        outcome = run(self.authenticator, {"token": "T2"}, self.next)

        self.assertEqual(outcome, "deferred")
        self.assertEqual(self.next.calls, 1)

    def test_missing_token_defers(self):
        """Test credentials without a token are passed on"""
        run(self.authenticator, {"username": "a"}, self.next)
        self.assertEqual(self.next.calls, 1)

    def test_unencodable_token_defers(self):
        """Test a token holding a lone surrogate is passed on"""
        outcome = run(self.authenticator, {"token": "T\ud800"}, self.next)

        self.assertEqual(outcome, "deferred")
        self.assertEqual(self.next.calls, 1)

    def test_non_ascii_token(self):
        """Test non-ASCII tokens are compared without error"""
        authenticator = StaticTokenAuthenticator({"clé-é": "svc"})

        self.assertEqual(run(authenticator, {"token": "clé-é"}, self.next).subject, "svc")
        self.assertEqual(run(authenticator, {"token": "clé-è"}, self.next), "deferred")

    def test_custom_token_key(self):
        """Test token key is configurable"""
        authenticator = StaticTokenAuthenticator({"K": "svc"}, token_key="api_key")
        outcome = run(authenticator, {"api_key": "K"}, self.next)

        self.assertEqual(outcome.subject, "svc")


class TestJWTHandler(unittest.TestCase):
    """Test JWT generation and verification"""

    def setUp(self):
        """Setup before each test"""
        self.handler = JWTHandler(SECRET_KEY, access_token_expire_minutes=1)

    def test_short_secret_key_raises(self):
        """Test short secret key rejected"""
        with self.assertRaises(ValueError):
            JWTHandler("short")

    def test_generate_and_verify(self):
        """Test a generated token verifies with its claims"""
        token = self.handler.generate_token("client-123", "bob", roles=["user"])
        claims = self.handler.verify(token)

        self.assertEqual(claims.sub, "client-123")
        self.assertEqual(claims.username, "bob")
        self.assertEqual(claims.roles, ["user"])
        self.assertIsNotNone(claims.jti)

    def test_generate_requires_subject(self):
        """Test subject and username are mandatory"""
        with self.assertRaises(ValueError):
            self.handler.generate_token("", "bob")

    def test_invalid_signature(self):
        """Test tampered token rejected"""
        token = self.handler.generate_token("client-123", "alice")
        other = JWTHandler("another-secret-key-that-is-32-chars-long!!")

        with self.assertRaises(JWTInvalidError):
            other.verify(token)

    def test_malformed_token(self):
        """Test garbage and empty tokens rejected"""
        with self.assertRaises(JWTInvalidError):
            self.handler.verify("not.a.jwt")
        with self.assertRaises(JWTInvalidError):
            self.handler.verify("")

    def test_expired_token(self):
        """Test expired token rejected"""
        token = self.handler.generate_token(
            "client", "alice", expires_in=timedelta(seconds=-10)
        )

        with self.assertRaises(JWTExpiredError):
            self.handler.verify(token)

    def test_missing_claims(self):
        """Test missing required claims rejected"""
        token = jwt.encode({"sub": "test"}, SECRET_KEY, algorithm="HS256")

        with self.assertRaises(JWTClaimError):
            self.handler.verify(token)

    def test_extra_claims_kept(self):
        """Test non-standard claims are exposed as extra"""
        token = jwt.encode(
            {
                "sub": "s", "username": "u", "jti": "j",
                "iat": 1700000000, "exp": 4102444800,
                "tenant": "acme",
            },
            SECRET_KEY,
            algorithm="HS256",
        )

        claims = self.handler.verify(token)
        self.assertEqual(claims.extra, {"tenant": "acme"})


class TestJWTAuthenticator(unittest.TestCase):
    """Test JWT strategy"""

    def setUp(self):
        """Setup before each test"""
        self.handler = JWTHandler(SECRET_KEY)
        self.authenticator = JWTAuthenticator(self.handler)
        self.next = NextSpy()

    def test_valid_token(self):
        """Test valid JWT yields an Identity with roles and claims"""
        token = self.handler.generate_token("client-1", "alice", roles=["admin"])

        outcome = run(self.authenticator, {"token": token}, self.next)

        self.assertIsInstance(outcome, Identity)
        self.assertEqual(outcome.subject, "client-1")
        self.assertEqual(outcome.strategy, "jwt")
        self.assertEqual(outcome.roles, ["admin"])
        self.assertEqual(outcome.claims["username"], "alice")
        self.assertEqual(self.next.calls, 0)

    def test_invalid_token_rejected(self):
        """Test bad JWT is rejected, not passed on"""
        outcome = run(self.authenticator, {"token": "garbage"}, self.next)

        self.assertIsInstance(outcome, Rejection)
        self.assertEqual(self.next.calls, 0)

    def test_expired_token_rejected(self):
        """Test expired JWT rejection carries the reason"""
        token = self.handler.generate_token(
            "client-1", "alice", expires_in=timedelta(seconds=-10)
        )

        outcome = run(self.authenticator, {"token": token}, self.next)

        self.assertIsInstance(outcome, Rejection)
        self.assertIn("expired", outcome.reason.lower())

    def test_missing_token_defers(self):
        """Test credentials without a token are passed on"""
        outcome = run(self.authenticator, {"username": "a"}, self.next)

        self.assertEqual(outcome, "deferred")
        self.assertEqual(self.next.calls, 1)


if __name__ == "__main__":
    unittest.main()
