from __future__ import annotations

from enum import Enum
from typing import Any


class RegistryError(str, Enum):
    """Business-rule violations returned by registry operations.

    These are expected outcomes, not faults: each one is deterministic for a
    given state and input, so retrying the same call never succeeds.

    The numeric ``code`` keeps the values used by the on-chain contract the
    registry models (100-105).
    """

    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    NOT_REGISTERED = "NOT_REGISTERED"
    INVALID_ALLOCATION = "INVALID_ALLOCATION"
    SUSPENDED = "SUSPENDED"
    OVER_LIMIT = "OVER_LIMIT"

    @property
    def code(self) -> int:
        return _CODES[self]

    @classmethod
    def from_any(cls, value: Any) -> "RegistryError":
        if isinstance(value, cls):
            return value

        if isinstance(value, int) and not isinstance(value, bool):
            for member, code in _CODES.items():
                if code == value:
                    return member
            raise ValueError(f"Unknown registry error code: {value}")

        v = str(value).strip().upper().replace("-", "_")
        if v.isdigit():
            return cls.from_any(int(v))
        try:
            return cls(v)
        except ValueError:
            raise ValueError(f"Unknown registry error: {value!r}") from None


_CODES: dict[RegistryError, int] = {
    RegistryError.NOT_AUTHORIZED: 100,
    RegistryError.ALREADY_REGISTERED: 101,
    RegistryError.NOT_REGISTERED: 102,
    RegistryError.INVALID_ALLOCATION: 103,
    RegistryError.SUSPENDED: 104,
    RegistryError.OVER_LIMIT: 105,
}
