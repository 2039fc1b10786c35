# tests/unit/infra/test_jwt_token_issuer.py
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from freezegun import freeze_time
from movie_catalog.infra.jwt.jwt_token_issuer import JWTTokenIssuer
from movie_catalog.services._shared.ports import TokenErrorKind, TokenVerificationError

ACCESS = "access-secret"
REFRESH = "refresh-secret"


@pytest.fixture()
def issuer() -> JWTTokenIssuer:
    return JWTTokenIssuer(access_secret=ACCESS, refresh_secret=REFRESH)


def test_rejects_identical_secrets():
    with pytest.raises(ValueError):
        JWTTokenIssuer(access_secret="same", refresh_secret="same")


def test_access_token_round_trip(issuer):
    claims = issuer.verify_token(issuer.generate_access_token(42))
    assert claims.user_id == 42
    assert claims.expires_at - claims.issued_at == timedelta(hours=1)
    assert claims.jti


def test_refresh_token_lives_seven_days(issuer):
    claims = issuer.verify_token(issuer.generate_refresh_token(7), is_refresh=True)
    assert claims.user_id == 7
    assert claims.expires_at - claims.issued_at == timedelta(days=7)


def test_payload_is_signed_with_the_selected_secret(issuer):
    token = issuer.generate_refresh_token(3)
    payload = jwt.decode(token, REFRESH, algorithms=["HS256"])
    assert payload["id"] == 3
    assert {"iat", "exp", "jti"} <= set(payload)


@freeze_time("2026-03-01 12:00:00")
def test_tokens_minted_in_same_second_differ(issuer):
    assert issuer.generate_refresh_token(1) != issuer.generate_refresh_token(1)


def test_access_token_is_not_a_refresh_token(issuer):
    token = issuer.generate_access_token(1)
    with pytest.raises(TokenVerificationError) as excinfo:
        issuer.verify_token(token, is_refresh=True)
    assert excinfo.value.kind is TokenErrorKind.INVALID_SIGNATURE


def test_malformed_token_is_invalid_signature(issuer):
    with pytest.raises(TokenVerificationError) as excinfo:
        issuer.verify_token("definitely.not.a-jwt")
    assert excinfo.value.kind is TokenErrorKind.INVALID_SIGNATURE


def test_expired_token_is_tagged_expired(issuer):
    with freeze_time("2026-03-01 12:00:00"):
        token = issuer.generate_access_token(9)
    with freeze_time("2026-03-01 13:00:01"):
        with pytest.raises(TokenVerificationError) as excinfo:
            issuer.verify_token(token)
    assert excinfo.value.kind is TokenErrorKind.EXPIRED


def test_missing_id_claim_is_tagged_other(issuer):
    now = datetime.now(UTC)
    token = jwt.encode(
        {"iat": int(now.timestamp()), "exp": int((now + timedelta(minutes=5)).timestamp())},
        ACCESS,
        algorithm="HS256",
    )
    with pytest.raises(TokenVerificationError) as excinfo:
        issuer.verify_token(token)
    assert excinfo.value.kind is TokenErrorKind.OTHER


def test_non_numeric_id_is_tagged_other(issuer):
    now = datetime.now(UTC)
    token = jwt.encode(
        {
            "id": "abc",
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=5)).timestamp()),
        },
        ACCESS,
        algorithm="HS256",
    )
    with pytest.raises(TokenVerificationError) as excinfo:
        issuer.verify_token(token)
    assert excinfo.value.kind is TokenErrorKind.OTHER
