from __future__ import annotations

from fastapi import FastAPI

from ..core.registry import RightsRegistry
from ..core.settings import RegistrySettings
from .routes import mount_holders_api


def create_api_app(registry: RightsRegistry | None = None, *, settings: RegistrySettings | None = None) -> FastAPI:
    """Build the HTTP surface around one registry instance.

    When no registry is passed a fresh one is created, seeded with the admin
    from ``settings`` (or the environment).
    """

    if registry is None:
        settings = settings or RegistrySettings.from_env()
        registry = RightsRegistry(admin=settings.admin)

    app = FastAPI(title="waterrights", version="0.1.0")
    app.state.registry = registry

    mount_holders_api(app, registry)

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/api/events")
    def events() -> dict[str, int]:
        # Minimal polling endpoint.
        return {"globalRevision": registry.global_revision()}

    @app.get("/api/state")
    def get_state() -> dict:
        return registry.snapshot().to_dict()

    return app
