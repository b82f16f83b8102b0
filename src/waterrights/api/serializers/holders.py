from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

from ...core.errors import RegistryError
from ...core.registry import HolderStatus
from ...core.result import Result

ERROR_STATUS: dict[RegistryError, int] = {
    RegistryError.NOT_AUTHORIZED: 403,
    RegistryError.SUSPENDED: 403,
    RegistryError.NOT_REGISTERED: 404,
    RegistryError.ALREADY_REGISTERED: 409,
    RegistryError.INVALID_ALLOCATION: 400,
    RegistryError.OVER_LIMIT: 422,
}


def holder_status_to_dict(s: HolderStatus) -> dict[str, Any]:
    return {
        "holder": s.holder,
        "allocation": s.allocation,
        "usage": s.usage,
        "suspended": bool(s.suspended),
        "registered": bool(s.registered),
    }


def result_to_response(result: Result) -> JSONResponse:
    if result.error is None:
        return JSONResponse(result.to_dict(), status_code=200)
    return JSONResponse(result.to_dict(), status_code=ERROR_STATUS[result.error])
