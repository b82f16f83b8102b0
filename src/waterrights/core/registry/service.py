from __future__ import annotations

import threading
from dataclasses import dataclass
from numbers import Real

from ..errors import RegistryError
from ..result import Result
from ..settings import DEFAULT_ADMIN
from .state import Quantity, RegistryState, is_finite_quantity


@dataclass(frozen=True)
class HolderStatus:
    holder: str
    allocation: Quantity
    usage: Quantity
    suspended: bool
    registered: bool


def _check_quantity(value: object, *, name: str) -> Quantity:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")
    return value  # type: ignore[return-value]


class RightsRegistry:
    """In-memory water rights registry.

    Every operation takes the lock, checks its guards in a fixed order and
    either applies its whole effect or nothing. Guard failures come back as
    ``Result`` values carrying a ``RegistryError``; they are never raised.
    """

    def __init__(self, admin: str = DEFAULT_ADMIN, *, state: RegistryState | None = None) -> None:
        self._lock = threading.RLock()
        self._state = state.copy() if state is not None else RegistryState(admin=str(admin))
        self._global_revision = 0

    def _committed_locked(self) -> Result:
        self._global_revision += 1
        return Result.success()

    def global_revision(self) -> int:
        with self._lock:
            return self._global_revision

    @property
    def admin(self) -> str:
        with self._lock:
            return self._state.admin

    def is_admin(self, caller: str) -> bool:
        with self._lock:
            return caller == self._state.admin

    # --- admin-gated mutations ---

    def transfer_admin(self, caller: str, new_admin: str) -> Result:
        with self._lock:
            if caller != self._state.admin:
                return Result.failure(RegistryError.NOT_AUTHORIZED)
            self._state.admin = new_admin
            return self._committed_locked()

    def register_rights_holder(self, caller: str, holder: str, allocation: Quantity) -> Result:
        allocation = _check_quantity(allocation, name="allocation")
        with self._lock:
            if caller != self._state.admin:
                return Result.failure(RegistryError.NOT_AUTHORIZED)
            if not (is_finite_quantity(allocation) and allocation > 0):
                return Result.failure(RegistryError.INVALID_ALLOCATION)
            if holder in self._state.allocations:
                return Result.failure(RegistryError.ALREADY_REGISTERED)
            self._state.allocations[holder] = allocation
            return self._committed_locked()

    def revoke_holder(self, caller: str, holder: str) -> Result:
        with self._lock:
            if caller != self._state.admin:
                return Result.failure(RegistryError.NOT_AUTHORIZED)
            if holder not in self._state.allocations:
                return Result.failure(RegistryError.NOT_REGISTERED)
            del self._state.allocations[holder]
            # Suspension survives revocation; only usage is cascaded.
            self._state.usage.pop(holder, None)
            return self._committed_locked()

    def suspend_holder(self, caller: str, holder: str) -> Result:
        with self._lock:
            if caller != self._state.admin:
                return Result.failure(RegistryError.NOT_AUTHORIZED)
            self._state.suspended.add(holder)
            return self._committed_locked()

    def reactivate_holder(self, caller: str, holder: str) -> Result:
        with self._lock:
            if caller != self._state.admin:
                return Result.failure(RegistryError.NOT_AUTHORIZED)
            self._state.suspended.discard(holder)
            return self._committed_locked()

    def adjust_allocation(self, caller: str, holder: str, new_allocation: Quantity) -> Result:
        """Overwrite a holder's allocation.

        Usage already on record is not re-checked, so it may end up above the
        new allocation.
        """
        new_allocation = _check_quantity(new_allocation, name="new_allocation")
        with self._lock:
            if caller != self._state.admin:
                return Result.failure(RegistryError.NOT_AUTHORIZED)
            if holder not in self._state.allocations:
                return Result.failure(RegistryError.NOT_REGISTERED)
            if not (is_finite_quantity(new_allocation) and new_allocation > 0):
                return Result.failure(RegistryError.INVALID_ALLOCATION)
            self._state.allocations[holder] = new_allocation
            return self._committed_locked()

    # --- holder-initiated mutation ---

    def report_usage(self, caller: str, amount: Quantity) -> Result:
        """Record ``amount`` as the caller's current usage.

        Suspension is checked before registration, so a suspended id that was
        never registered still gets SUSPENDED.
        """
        amount = _check_quantity(amount, name="amount")
        with self._lock:
            if caller in self._state.suspended:
                return Result.failure(RegistryError.SUSPENDED)
            limit = self._state.allocations.get(caller)
            if limit is None:
                return Result.failure(RegistryError.NOT_REGISTERED)
            if not is_finite_quantity(amount) or amount > limit:
                return Result.failure(RegistryError.OVER_LIMIT)
            self._state.usage[caller] = amount
            return self._committed_locked()

    # --- queries ---

    def get_allocation(self, holder: str) -> Quantity:
        with self._lock:
            return self._state.allocations.get(holder, 0)

    def get_usage(self, holder: str) -> Quantity:
        with self._lock:
            return self._state.usage.get(holder, 0)

    def is_suspended(self, holder: str) -> bool:
        with self._lock:
            return holder in self._state.suspended

    def is_registered(self, holder: str) -> bool:
        with self._lock:
            return holder in self._state.allocations

    def holder_status(self, holder: str) -> HolderStatus:
        with self._lock:
            return HolderStatus(
                holder=holder,
                allocation=self._state.allocations.get(holder, 0),
                usage=self._state.usage.get(holder, 0),
                suspended=holder in self._state.suspended,
                registered=holder in self._state.allocations,
            )

    def list_holders(self) -> list[str]:
        with self._lock:
            return sorted(self._state.allocations)

    # --- whole-state access ---

    def snapshot(self) -> RegistryState:
        with self._lock:
            return self._state.copy()

    def restore(self, state: RegistryState) -> None:
        with self._lock:
            self._state = state.copy()
            self._global_revision += 1

    def reset(self, admin: str | None = None) -> None:
        with self._lock:
            self._state = RegistryState(admin=self._state.admin if admin is None else str(admin))
            self._global_revision += 1
