from __future__ import annotations

from .errors import RegistryError
from .registry import HolderStatus, RegistryState, RightsRegistry
from .result import Result
from .settings import DEFAULT_ADMIN, RegistrySettings

__all__ = [
    "RegistryError",
    "Result",
    "RightsRegistry",
    "RegistryState",
    "HolderStatus",
    "RegistrySettings",
    "DEFAULT_ADMIN",
]
