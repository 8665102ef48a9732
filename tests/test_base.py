import pytest

from aztfresolve.base import ResolveError, Resolver
from aztfresolve.resource_id import parse_resource_id

VM = "/subscriptions/sub1/resourceGroups/rg1/providers/Microsoft.Compute/virtualMachines/vm1"


def test_resolver_passes_arguments_through():
    seen = []

    def fn(client, resource_id):
        seen.append((client, resource_id))
        return "azurerm_virtual_machine"

    resolver = Resolver(fn, ("azurerm_virtual_machine",))
    rid = parse_resource_id(VM)
    assert resolver.resolve("client", rid) == "azurerm_virtual_machine"
    assert seen == [("client", rid)]
    assert resolver.resource_types == ("azurerm_virtual_machine",)


def test_resolver_propagates_errors():
    def fn(client, resource_id):
        raise ResolveError(resource_id, "unexpected nil kind in response")

    with pytest.raises(ResolveError, match="unexpected nil kind"):
        Resolver(fn, ()).resolve(None, VM)


def test_resolve_error_message_and_fields():
    rid = parse_resource_id(VM)
    error = ResolveError(rid, "unexpected nil property in response")
    assert str(error) == VM + ": unexpected nil property in response"
    assert error.resource_id == rid
    assert error.message == "unexpected nil property in response"