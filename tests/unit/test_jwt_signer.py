"""Unit tests for JwtTokenSigner."""

from datetime import datetime, timedelta, timezone

from jose import jwt

from bloggers.adapters.security import JwtTokenSigner

USER_ID = "65a1b2c3d4e5f60718293a4b"


def test_sign_then_verify_returns_user_id() -> None:
    signer = JwtTokenSigner("secret")
    assert signer.verify(signer.sign(USER_ID)) == USER_ID


def test_token_carries_user_id_and_expiry() -> None:
    now = datetime.now(timezone.utc).replace(microsecond=0)
    signer = JwtTokenSigner("secret", expires_in=timedelta(minutes=40), clock=lambda: now)

    claims = jwt.get_unverified_claims(signer.sign(USER_ID))

    assert claims["userId"] == USER_ID
    assert claims["exp"] - claims["iat"] == 40 * 60


def test_expired_token_is_rejected() -> None:
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    signer = JwtTokenSigner("secret", clock=lambda: issued)

    assert signer.verify(signer.sign(USER_ID)) is None


def test_token_signed_with_other_secret_is_rejected() -> None:
    token = JwtTokenSigner("other").sign(USER_ID)
    assert JwtTokenSigner("secret").verify(token) is None


def test_garbage_is_rejected() -> None:
    assert JwtTokenSigner("secret").verify("not.a.token") is None


def test_non_string_user_id_is_rejected() -> None:
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode({"userId": 42, "exp": exp}, "secret", algorithm="HS256")

    assert JwtTokenSigner("secret").verify(token) is None
