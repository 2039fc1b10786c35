from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for one-way salted password hashing."""

    def hash(self, password: str) -> str: ...

    def compare(self, password: str, hashed: str) -> bool: ...
