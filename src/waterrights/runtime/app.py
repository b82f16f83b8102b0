from __future__ import annotations

from fastapi import FastAPI

from ..api import create_api_app
from ..core.registry import RightsRegistry
from ..core.settings import RegistrySettings


def create_app(registry: RightsRegistry | None = None, *, settings: RegistrySettings | None = None) -> FastAPI:
    """Create the full app served by ``run()`` and ``python -m waterrights``."""

    return create_api_app(registry, settings=settings)
