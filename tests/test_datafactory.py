import pytest

from aztfresolve.base import ResolveError
from aztfresolve.datafactory import (
    DATA_FACTORY_CREDENTIAL_TYPES,
    DATA_FACTORY_DATASET_TYPES,
    DATA_FACTORY_LINKED_SERVICE_TYPES,
    DATA_FACTORY_TRIGGER_TYPES,
    resolve_data_factory_credential,
    resolve_data_factory_data_flow,
    resolve_data_factory_dataset,
    resolve_data_factory_integration_runtime,
    resolve_data_factory_linked_service,
    resolve_data_factory_trigger,
)
from aztfresolve.resource_id import parse_resource_id

FACTORY = "/subscriptions/sub1/resourceGroups/rg1/providers/Microsoft.DataFactory/factories/df1"


class FakeClient:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, resource_id, api_version):
        self.calls.append((str(resource_id), api_version))
        return self.response


def _id(kind):
    return parse_resource_id(f"{FACTORY}/{kind}/item1")


def _props(**props):
    return FakeClient({"properties": props})


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("ManagedIdentity", "azurerm_data_factory_credential_user_managed_identity"),
        ("ServicePrincipal", "azurerm_data_factory_credential_service_principal"),
    ],
)
def test_credential(kind, expected):
    client = _props(type=kind)
    assert resolve_data_factory_credential(client, _id("credentials")) == expected
    assert client.calls[0][0] == f"{FACTORY}/credentials/item1"


def test_credential_unknown():
    with pytest.raises(ResolveError):
        resolve_data_factory_credential(_props(type="Other"), _id("credentials"))


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("Flowlet", "azurerm_data_factory_flowlet_data_flow"),
        ("MappingDataFlow", "azurerm_data_factory_data_flow"),
    ],
)
def test_data_flow(kind, expected):
    assert resolve_data_factory_data_flow(_props(type=kind), _id("dataflows")) == expected


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("AzurePostgreSqlTable", "azurerm_data_factory_dataset_postgresql"),
        ("Parquet", "azurerm_data_factory_dataset_parquet"),
        ("Json", "azurerm_data_factory_dataset_json"),
        ("DocumentDbCollection", "azurerm_data_factory_dataset_cosmosdb_sqlapi"),
        ("HttpFile", "azurerm_data_factory_dataset_http"),
        ("AzureSqlTable", "azurerm_data_factory_dataset_azure_sql_table"),
    ],
)
def test_dataset(kind, expected):
    result = resolve_data_factory_dataset(_props(type=kind), _id("datasets"))
    assert result == expected
    assert result in DATA_FACTORY_DATASET_TYPES


def test_dataset_missing_properties():
    with pytest.raises(ResolveError, match="unexpected nil property in response"):
        resolve_data_factory_dataset(FakeClient({}), _id("datasets"))


def test_dataset_unknown_type():
    with pytest.raises(ResolveError, match="unknown dataset type"):
        resolve_data_factory_dataset(_props(type="Avro"), _id("datasets"))


def test_integration_runtime_ssis():
    client = _props(type="Managed", typeProperties={"ssisProperties": {"edition": "Standard"}})
    assert (
        resolve_data_factory_integration_runtime(client, _id("integrationRuntimes"))
        == "azurerm_data_factory_integration_runtime_azure_ssis"
    )


def test_integration_runtime_azure():
    client = _props(type="Managed", typeProperties={})
    assert (
        resolve_data_factory_integration_runtime(client, _id("integrationRuntimes"))
        == "azurerm_data_factory_integration_runtime_azure"
    )


def test_integration_runtime_self_hosted():
    assert (
        resolve_data_factory_integration_runtime(_props(type="SelfHosted"), _id("integrationRuntimes"))
        == "azurerm_data_factory_integration_runtime_self_hosted"
    )


def test_integration_runtime_missing_type_properties():
    with pytest.raises(ResolveError, match="typeProperties"):
        resolve_data_factory_integration_runtime(_props(type="Managed"), _id("integrationRuntimes"))


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("AzureSqlDatabase", "azurerm_data_factory_linked_service_azure_sql_database"),
        ("AzureDataExplorer", "azurerm_data_factory_linked_service_kusto"),
        ("AzureBlobFS", "azurerm_data_factory_linked_service_data_lake_storage_gen2"),
        ("AzureSqlDW", "azurerm_data_factory_linked_service_synapse"),
        ("SqlServer", "azurerm_data_factory_linked_service_sql_server"),
    ],
)
def test_linked_service(kind, expected):
    assert resolve_data_factory_linked_service(_props(type=kind), _id("linkedservices")) == expected


@pytest.mark.parametrize("props", [{"type": "Salesforce"}, {}])
def test_linked_service_falls_back_to_custom(props):
    result = resolve_data_factory_linked_service(_props(**props), _id("linkedservices"))
    assert result == "azurerm_data_factory_linked_custom_service"
    assert result in DATA_FACTORY_LINKED_SERVICE_TYPES


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("BlobEventsTrigger", "azurerm_data_factory_trigger_blob_event"),
        ("ScheduleTrigger", "azurerm_data_factory_trigger_schedule"),
        ("CustomEventsTrigger", "azurerm_data_factory_trigger_custom_event"),
        ("TumblingWindowTrigger", "azurerm_data_factory_trigger_tumbling_window"),
    ],
)
def test_trigger(kind, expected):
    result = resolve_data_factory_trigger(_props(type=kind), _id("triggers"))
    assert result == expected
    assert result in DATA_FACTORY_TRIGGER_TYPES


def test_trigger_unknown():
    with pytest.raises(ResolveError, match="unknown trigger type"):
        resolve_data_factory_trigger(_props(type="RerunTumblingWindowTrigger"), _id("triggers"))


def test_error_carries_resource_id():
    rid = _id("credentials")
    with pytest.raises(ResolveError) as excinfo:
        resolve_data_factory_credential(_props(), rid)
    assert excinfo.value.resource_id == rid
    assert len(DATA_FACTORY_CREDENTIAL_TYPES) == 2