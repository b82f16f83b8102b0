from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Header, HTTPException
from fastapi.responses import JSONResponse

from ...core.registry import RightsRegistry
from ...core.result import Result
from ..serializers import holder_status_to_dict, result_to_response

logger = logging.getLogger(__name__)


def _require_caller(x_caller: str | None) -> str:
    if not x_caller:
        raise HTTPException(status_code=400, detail="X-Caller header is required")
    return x_caller


def _require_id(body: dict, key: str) -> str:
    # Ids are used exactly as sent; the in-process API does not normalize them either.
    value = body.get(key)
    if value is None or value == "":
        raise HTTPException(status_code=400, detail=f"Missing field: {key}")
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"{key} must be a string")
    return value


def _require_quantity(body: dict, key: str) -> int | float:
    if key not in body:
        raise HTTPException(status_code=400, detail=f"Missing field: {key}")
    value = body[key]
    # JSON booleans decode to bool, which is an int subclass.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise HTTPException(status_code=400, detail=f"{key} must be a number")
    return value


def _respond(op: str, caller: str, result: Result) -> JSONResponse:
    if not result.ok:
        logger.info("%s denied for caller=%s: %s", op, caller, result.error.value)  # type: ignore[union-attr]
    return result_to_response(result)


def mount_holders_api(app: FastAPI, registry: RightsRegistry) -> None:
    """Mount the admin, holder and usage endpoints for ``registry``."""

    @app.get("/api/admin")
    def get_admin() -> dict[str, str]:
        return {"admin": registry.admin}

    @app.post("/api/admin/transfer")
    def transfer_admin(body: dict, x_caller: str | None = Header(default=None)) -> JSONResponse:
        caller = _require_caller(x_caller)
        new_admin = _require_id(body, "newAdmin")
        return _respond("transfer_admin", caller, registry.transfer_admin(caller, new_admin))

    @app.get("/api/holders")
    def list_holders() -> list[dict[str, Any]]:
        return [holder_status_to_dict(registry.holder_status(h)) for h in registry.list_holders()]

    @app.post("/api/holders")
    def register_holder(body: dict, x_caller: str | None = Header(default=None)) -> JSONResponse:
        caller = _require_caller(x_caller)
        holder = _require_id(body, "holder")
        allocation = _require_quantity(body, "allocation")
        return _respond(
            "register_rights_holder",
            caller,
            registry.register_rights_holder(caller, holder, allocation),
        )

    @app.get("/api/holders/{holder:path}")
    def get_holder(holder: str) -> dict[str, Any]:
        # Unknown holders report zeros rather than 404, matching the query accessors.
        return holder_status_to_dict(registry.holder_status(holder))

    @app.patch("/api/holders/{holder:path}")
    def adjust_allocation(holder: str, body: dict, x_caller: str | None = Header(default=None)) -> JSONResponse:
        caller = _require_caller(x_caller)
        allocation = _require_quantity(body, "allocation")
        return _respond("adjust_allocation", caller, registry.adjust_allocation(caller, holder, allocation))

    @app.delete("/api/holders/{holder:path}")
    def revoke_holder(holder: str, x_caller: str | None = Header(default=None)) -> JSONResponse:
        caller = _require_caller(x_caller)
        return _respond("revoke_holder", caller, registry.revoke_holder(caller, holder))

    @app.post("/api/holders/{holder:path}/suspend")
    def suspend_holder(holder: str, x_caller: str | None = Header(default=None)) -> JSONResponse:
        caller = _require_caller(x_caller)
        return _respond("suspend_holder", caller, registry.suspend_holder(caller, holder))

    @app.post("/api/holders/{holder:path}/reactivate")
    def reactivate_holder(holder: str, x_caller: str | None = Header(default=None)) -> JSONResponse:
        caller = _require_caller(x_caller)
        return _respond("reactivate_holder", caller, registry.reactivate_holder(caller, holder))

    @app.post("/api/usage")
    def report_usage(body: dict, x_caller: str | None = Header(default=None)) -> JSONResponse:
        caller = _require_caller(x_caller)
        amount = _require_quantity(body, "amount")
        return _respond("report_usage", caller, registry.report_usage(caller, amount))
