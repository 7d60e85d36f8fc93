"""Unit tests for app.core.security: bcrypt hashing and the JWT token codec."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.config import Settings
from app.core.security import TokenClaims, TokenCodec, hash_password, verify_password

SECRET = "unit-test-secret"


def _claims(role: str = "user") -> TokenClaims:
    return TokenClaims(userId="42", email="ana@x.com", role=role)


class TestPasswordHashing(unittest.TestCase):
    """hash_password produces a bcrypt hash that verify_password accepts."""

    def test_hash_is_not_plain_and_verifies(self) -> None:
        hashed = hash_password("secret123", rounds=4)
        self.assertNotEqual(hashed, "secret123")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(verify_password("secret123", hashed))

    def test_wrong_password_fails(self) -> None:
        hashed = hash_password("secret123", rounds=4)
        self.assertFalse(verify_password("secret124", hashed))

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(hash_password("secret123", rounds=4), hash_password("secret123", rounds=4))

    def test_malformed_hash_returns_false(self) -> None:
        self.assertFalse(verify_password("secret123", "not-a-bcrypt-hash"))


class TestTokenCodec(unittest.TestCase):
    """sign/verify round trip and every rejection path returning None."""

    def setUp(self) -> None:
        self.codec = TokenCodec(SECRET, expire_minutes=5)

    def test_verify_returns_signed_claims(self) -> None:
        token = self.codec.sign(_claims("admin"))
        claims = self.codec.verify(token)
        self.assertEqual(claims, _claims("admin"))

    def test_token_carries_iat_and_exp(self) -> None:
        payload = jwt.decode(self.codec.sign(_claims()), SECRET, algorithms=["HS256"])
        self.assertIn("iat", payload)
        self.assertEqual(payload["exp"] - payload["iat"], 300)

    def test_expired_token_is_rejected(self) -> None:
        token = self.codec.sign(_claims(), expires_in=timedelta(seconds=-1))
        self.assertIsNone(self.codec.verify(token))

    def test_token_from_other_secret_is_rejected(self) -> None:
        token = TokenCodec("another-secret").sign(_claims())
        self.assertIsNone(self.codec.verify(token))

    def test_tampered_token_is_rejected(self) -> None:
        token = self.codec.sign(_claims())
        header, payload, signature = token.split(".")
        forged = jwt.encode({"userId": "1", "email": "x@y.com", "role": "admin"}, "guess", algorithm="HS256")
        self.assertIsNone(self.codec.verify(f"{header}.{forged.split('.')[1]}.{signature}"))

    def test_garbage_and_missing_tokens_return_none(self) -> None:
        self.assertIsNone(self.codec.verify("not.a.jwt"))
        self.assertIsNone(self.codec.verify(""))
        self.assertIsNone(self.codec.verify(None))

    def test_token_without_identity_claims_is_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode({"sub": "1", "iat": now, "exp": now + timedelta(minutes=1)}, SECRET, algorithm="HS256")
        self.assertIsNone(self.codec.verify(token))

    def test_token_without_exp_is_rejected(self) -> None:
        token = jwt.encode({"userId": "1", "email": "a@b.com", "role": "user"}, SECRET, algorithm="HS256")
        self.assertIsNone(self.codec.verify(token))

    def test_empty_secret_not_allowed(self) -> None:
        with self.assertRaises(ValueError):
            TokenCodec("")

    def test_from_settings(self) -> None:
        settings = Settings(JWT_SECRET="from-settings", JWT_EXPIRE_MINUTES=10)
        codec = TokenCodec.from_settings(settings)
        token = codec.sign(_claims())
        self.assertEqual(codec.verify(token), _claims())
        self.assertIsNone(self.codec.verify(token))


class TestDefaultsFollowSettings(unittest.TestCase):
    """Codec and hasher defaults match the Settings defaults."""

    def test_codec_default_lifetime_matches_settings(self) -> None:
        defaults = Settings.model_fields
        codec = TokenCodec(SECRET)
        payload = jwt.decode(codec.sign(_claims()), SECRET, algorithms=[defaults["JWT_ALGORITHM"].default])
        self.assertEqual(payload["exp"] - payload["iat"], defaults["JWT_EXPIRE_MINUTES"].default * 60)

    def test_default_hash_cost_matches_settings(self) -> None:
        hashed = hash_password("secret123")
        cost = int(hashed.split("$")[2])
        self.assertEqual(cost, Settings.model_fields["BCRYPT_ROUNDS"].default)


if __name__ == "__main__":
    unittest.main()
