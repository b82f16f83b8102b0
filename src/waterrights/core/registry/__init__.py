from __future__ import annotations

from .service import HolderStatus, RightsRegistry
from .state import RegistryState

__all__ = ["RightsRegistry", "RegistryState", "HolderStatus"]
