from __future__ import annotations

from .holders import mount_holders_api

__all__ = ["mount_holders_api"]
