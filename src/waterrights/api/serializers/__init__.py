from __future__ import annotations

from .holders import ERROR_STATUS, holder_status_to_dict, result_to_response

__all__ = [
    "ERROR_STATUS",
    "holder_status_to_dict",
    "result_to_response",
]
