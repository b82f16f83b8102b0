from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_ADMIN = "ST1ADMIN00000000000000000000000000000ADMIN"


@dataclass(frozen=True)
class RegistrySettings:
    """Process-level configuration.

    Notes:
    - ``admin`` only seeds a fresh registry; afterwards the admin changes
      through ``transfer_admin``.
    - ``attach_url`` lets ``run()`` reuse a server that is already up.
    """

    admin: str = DEFAULT_ADMIN
    attach_url: str = ""

    @classmethod
    def from_env(cls) -> "RegistrySettings":
        admin = os.getenv("WATERRIGHTS_ADMIN", "").strip() or DEFAULT_ADMIN
        return cls(
            admin=admin,
            attach_url=os.getenv("WATERRIGHTS_URL", "").strip(),
        )
