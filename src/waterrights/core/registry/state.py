from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Rational, Real
from typing import Any

import numpy as np

from ..settings import DEFAULT_ADMIN

Quantity = int | float


def is_finite_quantity(value: Real) -> bool:
    # Exact rationals (ints of any size, Fractions) cannot be inf/nan.
    if isinstance(value, Rational):
        return True
    return bool(np.isfinite(float(value)))


@dataclass
class RegistryState:
    """Everything a registry owns.

    - ``allocations``: holder -> allocation (> 0 while the record exists)
    - ``usage``: holder -> last reported usage
    - ``suspended``: holder ids that may not report usage

    Suspension is keyed by the same ids but is not tied to registration.
    """

    admin: str = DEFAULT_ADMIN
    allocations: dict[str, Quantity] = field(default_factory=dict)
    usage: dict[str, Quantity] = field(default_factory=dict)
    suspended: set[str] = field(default_factory=set)

    def copy(self) -> "RegistryState":
        return RegistryState(
            admin=self.admin,
            allocations=dict(self.allocations),
            usage=dict(self.usage),
            suspended=set(self.suspended),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "admin": self.admin,
            "allocations": dict(sorted(self.allocations.items())),
            "usage": dict(sorted(self.usage.items())),
            "suspended": sorted(self.suspended),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegistryState":
        admin = str(data.get("admin") or "").strip()
        if not admin:
            raise ValueError("state snapshot is missing an admin")
        allocations = {str(k): v for k, v in dict(data.get("allocations") or {}).items()}
        for holder, allocation in allocations.items():
            if isinstance(allocation, bool) or not isinstance(allocation, Real):
                raise ValueError(f"allocation for {holder!r} must be a number, got {allocation!r}")
            if not (is_finite_quantity(allocation) and allocation > 0):
                raise ValueError(f"allocation for {holder!r} must be finite and > 0, got {allocation}")
        return cls(
            admin=admin,
            allocations=allocations,
            usage={str(k): v for k, v in dict(data.get("usage") or {}).items()},
            suspended={str(h) for h in data.get("suspended") or []},
        )
