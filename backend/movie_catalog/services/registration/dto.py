"""
DTOs for RegistrationService.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input payload for self-registration.

    :param name: Display name.
    :type name: str
    :param email: Login email (unique, compared exactly).
    :type email: str
    :param password: Raw password; hashed before it reaches storage.
    :type password: str
    """

    name: str
    email: str
    password: str
