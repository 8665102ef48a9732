"""Resolvers for Data Factory credentials, data flows, datasets, runtimes, linked services and triggers."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_DATA_FACTORY_API_VERSION = "2018-06-01"

DATA_FACTORY_CREDENTIAL_TYPES = (
    "azurerm_data_factory_credential_user_managed_identity",
    "azurerm_data_factory_credential_service_principal",
)
DATA_FACTORY_DATA_FLOW_TYPES = (
    "azurerm_data_factory_data_flow",
    "azurerm_data_factory_flowlet_data_flow",
)
DATA_FACTORY_DATASET_TYPES = (
    "azurerm_data_factory_dataset_postgresql",
    "azurerm_data_factory_dataset_snowflake",
    "azurerm_data_factory_dataset_parquet",
    "azurerm_data_factory_custom_dataset",
    "azurerm_data_factory_dataset_json",
    "azurerm_data_factory_dataset_azure_blob",
    "azurerm_data_factory_dataset_delimited_text",
    "azurerm_data_factory_dataset_cosmosdb_sqlapi",
    "azurerm_data_factory_dataset_sql_server_table",
    "azurerm_data_factory_dataset_http",
    "azurerm_data_factory_dataset_binary",
    "azurerm_data_factory_dataset_mysql",
    "azurerm_data_factory_dataset_azure_sql_table",
)
DATA_FACTORY_INTEGRATION_RUNTIME_TYPES = (
    "azurerm_data_factory_integration_runtime_azure_ssis",
    "azurerm_data_factory_integration_runtime_azure",
    "azurerm_data_factory_integration_runtime_self_hosted",
)
DATA_FACTORY_LINKED_SERVICE_TYPES = (
    "azurerm_data_factory_linked_service_azure_sql_database",
    "azurerm_data_factory_linked_service_cosmosdb",
    "azurerm_data_factory_linked_service_azure_table_storage",
    "azurerm_data_factory_linked_service_web",
    "azurerm_data_factory_linked_service_kusto",
    "azurerm_data_factory_linked_service_azure_file_storage",
    "azurerm_data_factory_linked_service_azure_search",
    "azurerm_data_factory_linked_service_azure_databricks",
    "azurerm_data_factory_linked_service_key_vault",
    "azurerm_data_factory_linked_service_postgresql",
    "azurerm_data_factory_linked_service_mysql",
    "azurerm_data_factory_linked_service_data_lake_storage_gen2",
    "azurerm_data_factory_linked_service_sftp",
    "azurerm_data_factory_linked_service_cosmosdb_mongoapi",
    "azurerm_data_factory_linked_service_azure_function",
    "azurerm_data_factory_linked_service_synapse",
    "azurerm_data_factory_linked_service_snowflake",
    "azurerm_data_factory_linked_service_odbc",
    "azurerm_data_factory_linked_service_azure_blob_storage",
    "azurerm_data_factory_linked_service_odata",
    "azurerm_data_factory_linked_service_sql_server",
    "azurerm_data_factory_linked_custom_service",
)
DATA_FACTORY_TRIGGER_TYPES = (
    "azurerm_data_factory_trigger_blob_event",
    "azurerm_data_factory_trigger_schedule",
    "azurerm_data_factory_trigger_custom_event",
    "azurerm_data_factory_trigger_tumbling_window",
)

_CREDENTIALS = {
    "ManagedIdentity": "azurerm_data_factory_credential_user_managed_identity",
    "ServicePrincipal": "azurerm_data_factory_credential_service_principal",
}
_DATA_FLOWS = {
    "Flowlet": "azurerm_data_factory_flowlet_data_flow",
    "MappingDataFlow": "azurerm_data_factory_data_flow",
}
_DATASETS = {
    "AzurePostgreSqlTable": "azurerm_data_factory_dataset_postgresql",
    "SnowflakeTable": "azurerm_data_factory_dataset_snowflake",
    "Parquet": "azurerm_data_factory_dataset_parquet",
    "CustomDataset": "azurerm_data_factory_custom_dataset",
    "Json": "azurerm_data_factory_dataset_json",
    "AzureBlob": "azurerm_data_factory_dataset_azure_blob",
    "DelimitedText": "azurerm_data_factory_dataset_delimited_text",
    "DocumentDbCollection": "azurerm_data_factory_dataset_cosmosdb_sqlapi",
    "SqlServerTable": "azurerm_data_factory_dataset_sql_server_table",
    "HttpFile": "azurerm_data_factory_dataset_http",
    "Binary": "azurerm_data_factory_dataset_binary",
    "MySqlTable": "azurerm_data_factory_dataset_mysql",
    "AzureSqlTable": "azurerm_data_factory_dataset_azure_sql_table",
}
_LINKED_SERVICES = {
    "AzureSqlDatabase": "azurerm_data_factory_linked_service_azure_sql_database",
    "CosmosDb": "azurerm_data_factory_linked_service_cosmosdb",
    "AzureTableStorage": "azurerm_data_factory_linked_service_azure_table_storage",
    "Web": "azurerm_data_factory_linked_service_web",
    "AzureDataExplorer": "azurerm_data_factory_linked_service_kusto",
    "AzureFileStorage": "azurerm_data_factory_linked_service_azure_file_storage",
    "AzureSearch": "azurerm_data_factory_linked_service_azure_search",
    "AzureDatabricks": "azurerm_data_factory_linked_service_azure_databricks",
    "AzureKeyVault": "azurerm_data_factory_linked_service_key_vault",
    "PostgreSql": "azurerm_data_factory_linked_service_postgresql",
    "MySql": "azurerm_data_factory_linked_service_mysql",
    "AzureBlobFS": "azurerm_data_factory_linked_service_data_lake_storage_gen2",
    "Sftp": "azurerm_data_factory_linked_service_sftp",
    "CosmosDbMongoDbApi": "azurerm_data_factory_linked_service_cosmosdb_mongoapi",
    "AzureFunction": "azurerm_data_factory_linked_service_azure_function",
    "AzureSqlDW": "azurerm_data_factory_linked_service_synapse",
    "Snowflake": "azurerm_data_factory_linked_service_snowflake",
    "Odbc": "azurerm_data_factory_linked_service_odbc",
    "AzureBlobStorage": "azurerm_data_factory_linked_service_azure_blob_storage",
    "OData": "azurerm_data_factory_linked_service_odata",
    "SqlServer": "azurerm_data_factory_linked_service_sql_server",
}
_TRIGGERS = {
    "BlobEventsTrigger": "azurerm_data_factory_trigger_blob_event",
    "ScheduleTrigger": "azurerm_data_factory_trigger_schedule",
    "CustomEventsTrigger": "azurerm_data_factory_trigger_custom_event",
    "TumblingWindowTrigger": "azurerm_data_factory_trigger_tumbling_window",
}


def _value(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _need(obj: Any, key: str, resource_id: ResourceId, message: str) -> Any:
    value = _value(obj, key)
    if value is None:
        raise ResolveError(resource_id, message)
    return value


def _properties(client: Any, resource_id: ResourceId) -> Any:
    response = client.get(resource_id, _DATA_FACTORY_API_VERSION)
    return _need(response, "properties", resource_id, "unexpected nil property in response")


def _by_discriminator(client: Any, resource_id: ResourceId, table: dict[str, str], what: str) -> str:
    props = _properties(client, resource_id)
    kind = _value(props, "type")
    try:
        return table[kind]
    except (KeyError, TypeError):
        raise ResolveError(resource_id, f"unknown {what} type {kind}") from None


def resolve_data_factory_credential(client: Any, resource_id: ResourceId) -> str:
    """Resolve a credential by its managed identity or service principal type."""
    return _by_discriminator(client, resource_id, _CREDENTIALS, "credential")


def resolve_data_factory_data_flow(client: Any, resource_id: ResourceId) -> str:
    """Tell flowlets from mapping data flows."""
    return _by_discriminator(client, resource_id, _DATA_FLOWS, "data flow")


def resolve_data_factory_dataset(client: Any, resource_id: ResourceId) -> str:
    """Resolve a dataset by its type."""
    return _by_discriminator(client, resource_id, _DATASETS, "dataset")


def resolve_data_factory_integration_runtime(client: Any, resource_id: ResourceId) -> str:
    """Tell Azure, Azure-SSIS and self-hosted integration runtimes apart."""
    props = _properties(client, resource_id)
    kind = _value(props, "type")
    if kind == "Managed":
        type_props = _need(
            props, "typeProperties", resource_id, "unexpected nil properties.typeProperties in response"
        )
        if _value(type_props, "ssisProperties") is not None:
            return "azurerm_data_factory_integration_runtime_azure_ssis"
        return "azurerm_data_factory_integration_runtime_azure"
    if kind == "SelfHosted":
        return "azurerm_data_factory_integration_runtime_self_hosted"
    raise ResolveError(resource_id, f"unknown integration runtime type {kind}")


def resolve_data_factory_linked_service(client: Any, resource_id: ResourceId) -> str:
    """Resolve a linked service; unrecognised kinds map to the custom service."""
    props = _properties(client, resource_id)
    kind = _value(props, "type")
    if isinstance(kind, str) and kind in _LINKED_SERVICES:
        return _LINKED_SERVICES[kind]
    # The custom service resource supports every kind of linked service.
    return "azurerm_data_factory_linked_custom_service"


def resolve_data_factory_trigger(client: Any, resource_id: ResourceId) -> str:
    """Resolve a trigger by its type."""
    return _by_discriminator(client, resource_id, _TRIGGERS, "trigger")