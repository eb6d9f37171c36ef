"""Unit tests for app.core.security: bcrypt hashing and the session token codec."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt
from pydantic import SecretStr

from app.core.security import (
    InvalidTokenError,
    SessionClaims,
    TokenCodec,
    decode_unverified_claims,
    get_token_codec,
    hash_password,
    verify_password,
)

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"


def _codec(secret: str = SECRET, ttl: timedelta = timedelta(hours=24)) -> TokenCodec:
    return TokenCodec(secret=SecretStr(secret), algorithm="HS256", ttl=ttl)


def _claims() -> SessionClaims:
    return SessionClaims(email="a@x.com", role="user", name="Jo")


class TestPasswordHashing(unittest.TestCase):
    """hash_password / verify_password behave as a salted one-way pair."""

    def test_verify_accepts_original_password(self) -> None:
        hashed = hash_password("correct horse", rounds=4)
        self.assertTrue(verify_password("correct horse", hashed))

    def test_verify_rejects_other_password(self) -> None:
        hashed = hash_password("correct horse", rounds=4)
        self.assertFalse(verify_password("correct horse ", hashed))
        self.assertFalse(verify_password("", hashed))

    def test_hash_is_salted(self) -> None:
        first = hash_password("same", rounds=4)
        second = hash_password("same", rounds=4)
        self.assertNotEqual(first, second)
        self.assertTrue(first.startswith("$2"))
        self.assertNotIn("same", first)

    def test_malformed_hash_is_false_not_error(self) -> None:
        for bad in ("", "not-a-hash", "$2b$04$tooshort", "ééé"):
            with self.subTest(bad=bad):
                self.assertFalse(verify_password("anything", bad))

    def test_long_password_is_accepted(self) -> None:
        long_password = "x" * 100
        hashed = hash_password(long_password, rounds=4)
        self.assertTrue(verify_password(long_password, hashed))

    def test_default_rounds_come_from_settings(self) -> None:
        hashed = hash_password("pw")
        # Test environment sets BCRYPT_ROUNDS=4.
        self.assertEqual(hashed.split("$")[2], "04")


class TestTokenCodec(unittest.TestCase):
    """issue/verify round trip and every failure mode."""

    def test_issue_then_verify_returns_claims(self) -> None:
        codec = _codec()
        token = codec.issue(_claims())
        self.assertEqual(codec.verify(token), _claims())

    def test_payload_shape(self) -> None:
        now = datetime(2026, 1, 1, tzinfo=UTC)
        token = _codec().issue(_claims(), now=now)
        payload = jwt.decode(token, options={"verify_signature": False})
        self.assertEqual(payload["user"], {"email": "a@x.com", "role": "user", "name": "Jo"})
        self.assertEqual(payload["iat"], int(now.timestamp()))
        self.assertEqual(payload["exp"], int((now + timedelta(hours=24)).timestamp()))

    def test_tampered_signature_is_malformed(self) -> None:
        token = _codec().issue(_claims())
        header, payload, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        with self.assertRaises(InvalidTokenError) as ctx:
            _codec().verify(".".join([header, payload, flipped]))
        self.assertEqual(ctx.exception.reason, "malformed")

    def test_tampered_claims_are_rejected(self) -> None:
        token = _codec().issue(_claims())
        forged = jwt.encode(
            {"user": {"email": "a@x.com", "role": "admin", "name": "Jo"}, "iat": 1, "exp": 4102444800},
            "some-other-secret-also-long-enough-for-hs256",
            algorithm="HS256",
        )
        self.assertNotEqual(token, forged)
        with self.assertRaises(InvalidTokenError):
            _codec().verify(forged)

    def test_expired_one_second_past_ttl(self) -> None:
        ttl = timedelta(hours=24)
        issued = datetime.now(UTC) - ttl - timedelta(seconds=1)
        token = _codec(ttl=ttl).issue(_claims(), now=issued)
        with self.assertRaises(InvalidTokenError) as ctx:
            _codec(ttl=ttl).verify(token)
        self.assertEqual(ctx.exception.reason, "expired")

    def test_explicit_ttl_overrides_default(self) -> None:
        codec = _codec(ttl=timedelta(hours=24))
        token = codec.issue(_claims(), ttl=timedelta(seconds=-1))
        with self.assertRaises(InvalidTokenError):
            codec.verify(token)

    def test_garbage_and_unsigned_tokens(self) -> None:
        unsigned = jwt.encode({"user": _claims().model_dump(), "iat": 1, "exp": 4102444800}, None, algorithm="none")
        for token in ("", "abc", "a.b.c", unsigned):
            with self.subTest(token=token):
                with self.assertRaises(InvalidTokenError) as ctx:
                    _codec().verify(token)
                self.assertEqual(ctx.exception.reason, "malformed")

    def test_missing_user_claims(self) -> None:
        token = jwt.encode(
            {"sub": "1", "iat": datetime.now(UTC), "exp": datetime.now(UTC) + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            _codec().verify(token)

    def test_missing_exp_is_rejected(self) -> None:
        token = jwt.encode({"user": _claims().model_dump(), "iat": datetime.now(UTC)}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidTokenError):
            _codec().verify(token)

    def test_repr_hides_secret(self) -> None:
        self.assertNotIn(SECRET, repr(_codec()))

    def test_get_token_codec_is_cached(self) -> None:
        self.assertIs(get_token_codec(), get_token_codec())
        self.assertEqual(get_token_codec().ttl, timedelta(minutes=1440))


class TestDecodeUnverifiedClaims(unittest.TestCase):
    def test_reads_claims_without_secret(self) -> None:
        token = _codec().issue(_claims())
        self.assertEqual(decode_unverified_claims(token).role, "user")

    def test_garbage_raises(self) -> None:
        with self.assertRaises(InvalidTokenError):
            decode_unverified_claims("not-a-token")
