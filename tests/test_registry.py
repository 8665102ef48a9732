import pytest

from aztfresolve.base import ResolveError, Resolver
from aztfresolve.registry import RESOLVERS, get_resolver, needs_api, resolve
from aztfresolve.resource_id import parse_resource_id

RG = "/subscriptions/sub1/resourceGroups/rg1/providers"


class FakeClient:
    def __init__(self, response):
        self.response = response
        self.calls = 0

    def get(self, resource_id, api_version):
        self.calls += 1
        return self.response


def test_table_entries_are_resolvers_with_types():
    for by_scope in RESOLVERS.values():
        for resolver in by_scope.values():
            assert isinstance(resolver, Resolver)
            assert len(resolver.resource_types) > 0
            assert len(set(resolver.resource_types)) == len(resolver.resource_types)


def test_table_keys_are_upper_case():
    for route, by_scope in RESOLVERS.items():
        assert route == route.upper()
        assert all(scope == scope.upper() for scope in by_scope)


@pytest.mark.parametrize(
    "text",
    [
        f"{RG}/Microsoft.Compute/virtualMachines/vm1",
        f"{RG}/microsoft.hdinsight/CLUSTERS/cl",
        f"{RG}/Microsoft.Logic/workflows/wf/actions/act",
        "/subscriptions/sub1/providers/Microsoft.CostManagement/scheduledActions/sa",
        f"{RG}/Microsoft.OperationalInsights/workspaces/ws/providers/"
        "Microsoft.SecurityInsights/dataConnectors/dc",
    ],
)
def test_needs_api_for_ambiguous_types(text):
    assert needs_api(parse_resource_id(text)) is True


@pytest.mark.parametrize(
    "text",
    [
        f"{RG}/Microsoft.Network/virtualNetworks/vnet",
        f"{RG}/Microsoft.Storage/storageAccounts/sa",
        "/subscriptions/sub1/resourceGroups/rg1",
    ],
)
def test_no_api_needed(text):
    resource_id = parse_resource_id(text)
    assert needs_api(resource_id) is False
    assert get_resolver(resource_id) is None


def test_wrong_parent_scope_has_no_resolver():
    # Data connectors are only resolvable below a Log Analytics workspace.
    resource_id = parse_resource_id(f"{RG}/Microsoft.SecurityInsights/dataConnectors/dc")
    assert get_resolver(resource_id) is None


def test_resolve_through_table():
    resource_id = parse_resource_id(f"{RG}/Microsoft.HDInsight/clusters/cl")
    client = FakeClient({"properties": {"clusterDefinition": {"kind": "Kafka"}}})
    assert resolve(resource_id, client) == "azurerm_hdinsight_kafka_cluster"
    assert client.calls == 1


def test_resolved_type_is_declared_by_resolver():
    resource_id = parse_resource_id(
        f"{RG}/Microsoft.ApiManagement/service/apim/identityProviders/google"
    )
    result = resolve(resource_id, FakeClient(None))
    assert result in get_resolver(resource_id).resource_types
    assert result == "azurerm_api_management_identity_provider_google"


def test_resolve_without_resolver():
    resource_id = parse_resource_id(f"{RG}/Microsoft.Network/virtualNetworks/vnet")
    with pytest.raises(ResolveError, match="no resolver found for") as info:
        resolve(resource_id, FakeClient({}))
    assert info.value.resource_id is resource_id


def test_resolve_wraps_resolver_errors():
    resource_id = parse_resource_id(f"{RG}/Microsoft.HDInsight/clusters/cl")
    client = FakeClient({"properties": {"clusterDefinition": {"kind": "Storm"}}})
    with pytest.raises(ResolveError) as info:
        resolve(resource_id, client)
    assert info.value.message.startswith('resolving "')
    assert "unknown cluster kind: Storm" in info.value.message
    assert isinstance(info.value.__cause__, ResolveError)