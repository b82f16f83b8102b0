from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import RegistryError


@dataclass(frozen=True)
class Result:
    """Outcome of a mutating registry operation.

    Exactly one of ``value`` / ``error`` is set. Serializes to the
    ``{"value": true}`` / ``{"error": ...}`` shape callers already expect.
    """

    value: bool | None = None
    error: RegistryError | None = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("Result needs exactly one of value or error")

    @classmethod
    def success(cls) -> "Result":
        return cls(value=True)

    @classmethod
    def failure(cls, error: RegistryError | str | int) -> "Result":
        return cls(error=RegistryError.from_any(error))

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {"error": self.error.value, "code": self.error.code}
        return {"value": bool(self.value)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Result":
        if data.get("error") is not None:
            return cls.failure(data["error"])
        if "value" in data:
            return cls(value=bool(data["value"]))
        raise ValueError(f"Not a registry result: {data!r}")
