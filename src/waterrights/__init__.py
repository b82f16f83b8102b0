from __future__ import annotations

from .core.errors import RegistryError
from .core.registry import HolderStatus, RegistryState, RightsRegistry
from .core.result import Result
from .core.settings import RegistrySettings
from .runtime.server import RegistryServer, run
from .sdk.client import RegistryClient

__all__ = [
    "run",
    "RightsRegistry",
    "RegistryState",
    "HolderStatus",
    "RegistryError",
    "Result",
    "RegistrySettings",
    "RegistryClient",
    "RegistryServer",
]
