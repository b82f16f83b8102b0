from __future__ import annotations

import httpx
import pytest

from waterrights.api import create_api_app
from waterrights.core import RegistryError, RightsRegistry
from waterrights.sdk import RegistryClient

ADMIN = 'root'


def _remote(registry: RightsRegistry | None = None) -> tuple[RegistryClient, RightsRegistry]:
    try:
        from fastapi.testclient import TestClient
    except Exception as e:  # pragma: no cover
        pytest.skip(f'TestClient not available ({e!r}); install test extras to run this test')
    reg = registry or RightsRegistry(admin=ADMIN)
    http = TestClient(create_api_app(reg))
    return RegistryClient('http://testserver', http=http), reg


def test_client_mirrors_registry_operations() -> None:
    client, reg = _remote()

    assert client.register_rights_holder(ADMIN, 'alice', 1000).ok
    assert client.register_rights_holder(ADMIN, 'alice', 500).error is RegistryError.ALREADY_REGISTERED
    assert client.get_allocation('alice') == 1000

    assert client.report_usage('alice', 900).ok
    assert client.get_usage('alice') == 900
    assert client.report_usage('alice', 1001).error is RegistryError.OVER_LIMIT

    assert client.adjust_allocation(ADMIN, 'alice', 1200).ok
    assert reg.get_allocation('alice') == 1200

    assert client.suspend_holder(ADMIN, 'alice').ok
    assert client.is_suspended('alice')
    assert client.report_usage('alice', 1).error is RegistryError.SUSPENDED
    assert client.reactivate_holder(ADMIN, 'alice').ok
    assert not client.is_suspended('alice')

    assert client.list_holders() == ['alice']
    assert client.revoke_holder(ADMIN, 'alice').ok
    assert client.get_usage('alice') == 0
    assert client.revoke_holder(ADMIN, 'alice').error is RegistryError.NOT_REGISTERED


def test_client_admin_transfer_and_state() -> None:
    client, _ = _remote()

    assert client.admin == ADMIN
    assert client.transfer_admin('mallory', 'mallory').error is RegistryError.NOT_AUTHORIZED
    assert client.transfer_admin(ADMIN, 'bob').ok
    assert client.admin == 'bob'

    client.register_rights_holder('bob', 'alice', 10)
    snap = client.snapshot()
    assert snap.admin == 'bob'
    assert snap.allocations == {'alice': 10}
    assert client.global_revision() == 2


def test_client_raises_on_non_registry_failures() -> None:
    client, _ = _remote()

    with pytest.raises(RuntimeError):
        client.register_rights_holder(ADMIN, '', 10)


def test_client_raises_on_unreachable_transport() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text='bad gateway')

    http = httpx.Client(base_url='http://registry.invalid', transport=httpx.MockTransport(handler))
    client = RegistryClient('http://registry.invalid', http=http)

    with pytest.raises(RuntimeError):
        client.report_usage('alice', 1)
    with pytest.raises(RuntimeError):
        client.holder_status('alice')


@pytest.mark.parametrize('holder', ['farm/7', 'farm?7', 'farm#7', 'farm/7/suspend', ' alice '])
def test_client_handles_holder_ids_with_reserved_characters(holder: str) -> None:
    client, reg = _remote()

    assert client.register_rights_holder(ADMIN, holder, 10).ok
    assert reg.get_allocation(holder) == 10
    assert client.get_allocation(holder) == 10

    assert client.adjust_allocation(ADMIN, holder, 20).ok
    assert reg.get_allocation(holder) == 20

    assert client.suspend_holder(ADMIN, holder).ok
    assert reg.is_suspended(holder)
    assert client.is_suspended(holder)
    assert client.reactivate_holder(ADMIN, holder).ok
    assert not reg.is_suspended(holder)

    assert client.revoke_holder(ADMIN, holder).ok
    assert not reg.is_registered(holder)
    assert client.list_holders() == []


def test_client_big_integer_allocation() -> None:
    client, reg = _remote()

    assert client.register_rights_holder(ADMIN, 'alice', 2**70).ok
    assert client.get_allocation('alice') == 2**70
    assert reg.get_allocation('alice') == 2**70
