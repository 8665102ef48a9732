import pytest

from aztfresolve.resource_id import ResourceId, parse_resource_id

RG = "/subscriptions/sub1/resourceGroups/rg1"
VM = RG + "/providers/Microsoft.Compute/virtualMachines/vm1"
LAB_VM = RG + "/providers/Microsoft.DevTestLab/labs/lab1/virtualMachines/vm1"
SITE = RG + "/providers/Microsoft.Web/sites/site1"
RELAY = SITE + "/hybridConnectionNamespaces/ns1/relays/relay1"
CONNECTOR = (
    RG
    + "/providers/Microsoft.OperationalInsights/workspaces/ws1"
    + "/providers/Microsoft.SecurityInsights/dataConnectors/dc1"
)


@pytest.mark.parametrize("text", [RG, VM, LAB_VM, RELAY, CONNECTOR, "/subscriptions/sub1"])
def test_round_trip(text):
    assert str(parse_resource_id(text)) == text


def test_names_and_types():
    rid = parse_resource_id(LAB_VM)
    assert rid.names() == ["lab1", "vm1"]
    assert rid.types() == ["labs", "virtualMachines"]


def test_route_scope_string():
    assert parse_resource_id(VM).route_scope_string() == "/Microsoft.Compute/virtualMachines"
    assert parse_resource_id(LAB_VM).route_scope_string().upper() == "/MICROSOFT.DEVTESTLAB/LABS/VIRTUALMACHINES"


def test_parent_scope_of_resource_group_resource():
    rid = parse_resource_id(VM)
    assert rid.parent_scope().scope_string().upper() == "/SUBSCRIPTIONS/RESOURCEGROUPS"
    assert str(rid.parent_scope()) == RG


def test_extension_resource_scopes():
    rid = parse_resource_id(CONNECTOR)
    assert rid.route_scope_string().upper() == "/MICROSOFT.SECURITYINSIGHTS/DATACONNECTORS"
    scope = rid.parent_scope()
    assert scope.scope_string().upper() == "/SUBSCRIPTIONS/RESOURCEGROUPS/MICROSOFT.OPERATIONALINSIGHTS/WORKSPACES"
    assert scope.names() == ["ws1"]
    assert str(rid.root_scope()) == RG


def test_parent_chain():
    rid = parse_resource_id(RELAY)
    assert str(rid.parent().parent()) == SITE
    assert str(parse_resource_id(SITE).parent()) == RG


def test_subscription_scoped_resource():
    rid = parse_resource_id("/subscriptions/sub1/providers/Microsoft.CostManagement/scheduledActions/a1")
    assert rid.parent_scope().scope_string() == "/subscriptions"
    assert str(rid.root_scope()) == "/subscriptions/sub1"


def test_builtin_segments_are_normalised():
    rid = parse_resource_id("/SUBSCRIPTIONS/sub1/RESOURCEGROUPS/rg1")
    assert str(rid) == RG
    assert rid.types() == ["resourceGroups"]


def test_tenant_root():
    root = parse_resource_id("/")
    assert root == ResourceId()
    assert str(root) == "/"
    assert root.parent() is None
    assert root.root_scope() == root


def test_equality_and_hash():
    ids = {parse_resource_id(VM), parse_resource_id(VM), parse_resource_id(SITE)}
    assert len(ids) == 2
    lookup = {parse_resource_id(VM): "vm"}
    assert lookup[parse_resource_id(VM)] == "vm"
    assert (parse_resource_id(VM) == parse_resource_id(SITE)) is False


@pytest.mark.parametrize(
    "text",
    [
        "subscriptions/sub1",
        "/subscriptions",
        "/subscriptions/sub1/resourceGroups",
        "/subscriptions/sub1/providers/Microsoft.Compute",
        "/subscriptions/sub1/providers/Microsoft.Compute/virtualMachines",
        "/subscriptions//rg",
        "/foo/bar",
        RG + "/",
    ],
)
def test_malformed_ids(text):
    with pytest.raises(ValueError):
        parse_resource_id(text)