from __future__ import annotations

import contextlib
from typing import Any, Iterator
from urllib.parse import quote

import httpx

from ..core.registry import HolderStatus, RegistryState
from ..core.result import Result


def _holder_path(holder: str, suffix: str = "") -> str:
    # Holder ids are arbitrary strings; "/", "?" and "#" must not reach the router raw.
    return f"/api/holders/{quote(holder, safe='')}{suffix}"


class RegistryClient:
    """HTTP client for a running waterrights server.

    Mirrors the in-process ``RightsRegistry`` API: mutations return ``Result``
    values (business-rule failures included), queries return plain values.
    Transport problems and unexpected responses raise ``RuntimeError``.

    Contract (current):
    - caller identity is sent in the ``X-Caller`` header
    - failures come back as ``{"error": NAME, "code": N}`` bodies
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        *,
        timeout_s: float = 10.0,
        http: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = float(timeout_s)
        self._http = http

    @contextlib.contextmanager
    def _client(self) -> Iterator[httpx.Client]:
        if self._http is not None:
            yield self._http
            return
        with httpx.Client(base_url=self.base_url, timeout=self.timeout_s) as client:
            yield client

    def _send(
        self,
        method: str,
        path: str,
        *,
        caller: str | None = None,
        body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        headers = {"X-Caller": caller} if caller is not None else None
        with self._client() as client:
            return client.request(method, path, json=body, headers=headers)

    def _call(self, method: str, path: str, *, caller: str, body: dict[str, Any] | None = None) -> Result:
        res = self._send(method, path, caller=caller, body=body)
        try:
            data = res.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and ("error" in data or (res.status_code < 400 and "value" in data)):
            return Result.from_dict(data)
        raise RuntimeError(f"{method} {path} failed: {res.status_code} {res.text}")

    def _get_json(self, path: str) -> Any:
        res = self._send("GET", path)
        if res.status_code >= 400:
            raise RuntimeError(f"GET {path} failed: {res.status_code} {res.text}")
        return res.json()

    # --- mutations ---

    def transfer_admin(self, caller: str, new_admin: str) -> Result:
        return self._call("POST", "/api/admin/transfer", caller=caller, body={"newAdmin": new_admin})

    def register_rights_holder(self, caller: str, holder: str, allocation: int | float) -> Result:
        return self._call("POST", "/api/holders", caller=caller, body={"holder": holder, "allocation": allocation})

    def revoke_holder(self, caller: str, holder: str) -> Result:
        return self._call("DELETE", _holder_path(holder), caller=caller)

    def suspend_holder(self, caller: str, holder: str) -> Result:
        return self._call("POST", _holder_path(holder, "/suspend"), caller=caller)

    def reactivate_holder(self, caller: str, holder: str) -> Result:
        return self._call("POST", _holder_path(holder, "/reactivate"), caller=caller)

    def report_usage(self, caller: str, amount: int | float) -> Result:
        return self._call("POST", "/api/usage", caller=caller, body={"amount": amount})

    def adjust_allocation(self, caller: str, holder: str, new_allocation: int | float) -> Result:
        return self._call("PATCH", _holder_path(holder), caller=caller, body={"allocation": new_allocation})

    # --- queries ---

    def holder_status(self, holder: str) -> HolderStatus:
        data = self._get_json(_holder_path(holder))
        return HolderStatus(
            holder=str(data["holder"]),
            allocation=data["allocation"],
            usage=data["usage"],
            suspended=bool(data["suspended"]),
            registered=bool(data["registered"]),
        )

    def get_allocation(self, holder: str) -> int | float:
        return self.holder_status(holder).allocation

    def get_usage(self, holder: str) -> int | float:
        return self.holder_status(holder).usage

    def is_suspended(self, holder: str) -> bool:
        return self.holder_status(holder).suspended

    def list_holders(self) -> list[str]:
        return [str(item["holder"]) for item in self._get_json("/api/holders")]

    @property
    def admin(self) -> str:
        return str(self._get_json("/api/admin")["admin"])

    def global_revision(self) -> int:
        return int(self._get_json("/api/events")["globalRevision"])

    def snapshot(self) -> RegistryState:
        return RegistryState.from_dict(self._get_json("/api/state"))
