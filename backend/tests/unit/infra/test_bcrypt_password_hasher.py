# tests/unit/infra/test_bcrypt_password_hasher.py
from __future__ import annotations

import pytest
from movie_catalog.infra.security.bcrypt_password_hasher import BcryptPasswordHasher


@pytest.fixture()
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.mark.parametrize("password", ["Password123!", "ñandú-çedilla", " spaced out "])
def test_hash_then_compare_round_trips(hasher, password):
    hashed = hasher.hash(password)
    assert hashed != password
    assert hashed.startswith("$2")
    assert hasher.compare(password, hashed) is True


def test_compare_rejects_other_password(hasher):
    hashed = hasher.hash("Password123!")
    assert hasher.compare("password123!", hashed) is False
    assert hasher.compare("", hashed) is False


def test_hash_is_salted(hasher):
    assert hasher.hash("same-input") != hasher.hash("same-input")


def test_cost_factor_is_encoded_in_hash():
    hashed = BcryptPasswordHasher(rounds=5).hash("x")
    assert hashed.split("$")[2] == "05"


def test_long_password_is_truncated_to_72_bytes(hasher):
    base = "a" * 72
    hashed = hasher.hash(base + "tail-one")
    assert hasher.compare(base + "tail-two", hashed) is True
    assert hasher.compare("a" * 71, hashed) is False


def test_compare_with_malformed_hash_is_false(hasher):
    assert hasher.compare("anything", "not-a-bcrypt-hash") is False
