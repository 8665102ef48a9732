"""Resolvers for Data Share datasets, Kusto connections, Synapse runtimes, HDInsight and SAP instances."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_DATA_SHARE_API_VERSION = "2021-08-01"
_KUSTO_API_VERSION = "2023-08-15"
_SYNAPSE_API_VERSION = "2021-06-01"
_HDINSIGHT_API_VERSION = "2021-06-01"
_WORKLOADS_API_VERSION = "2023-04-01"

DATA_SHARE_DATASET_TYPES = (
    "azurerm_data_share_dataset_kusto_cluster",
    "azurerm_data_share_dataset_data_lake_gen2",
    "azurerm_data_share_dataset_kusto_database",
    "azurerm_data_share_dataset_blob_storage",
)
KUSTO_DATA_CONNECTION_TYPES = (
    "azurerm_kusto_eventgrid_data_connection",
    "azurerm_kusto_eventhub_data_connection",
    "azurerm_kusto_iothub_data_connection",
    "azurerm_kusto_cosmosdb_data_connection",
)
SYNAPSE_INTEGRATION_RUNTIME_TYPES = (
    "azurerm_synapse_integration_runtime_azure",
    "azurerm_synapse_integration_runtime_self_hosted",
)
HDINSIGHT_CLUSTER_TYPES = (
    "azurerm_hdinsight_kafka_cluster",
    "azurerm_hdinsight_hadoop_cluster",
    "azurerm_hdinsight_spark_cluster",
    "azurerm_hdinsight_hbase_cluster",
    "azurerm_hdinsight_interactive_query_cluster",
)
SAP_VIRTUAL_INSTANCE_TYPES = (
    "azurerm_workloads_sap_single_node_virtual_instance",
    "azurerm_workloads_sap_three_tier_virtual_instance",
    "azurerm_workloads_sap_discovery_virtual_instance",
)

_DATASETS = {
    "KustoCluster": "azurerm_data_share_dataset_kusto_cluster",
    "AdlsGen2File": "azurerm_data_share_dataset_data_lake_gen2",
    "KustoDatabase": "azurerm_data_share_dataset_kusto_database",
    "Blob": "azurerm_data_share_dataset_blob_storage",
}
_KUSTO_CONNECTIONS = {
    "EventGrid": "azurerm_kusto_eventgrid_data_connection",
    "EventHub": "azurerm_kusto_eventhub_data_connection",
    "IotHub": "azurerm_kusto_iothub_data_connection",
    "CosmosDb": "azurerm_kusto_cosmosdb_data_connection",
}
_SYNAPSE_RUNTIMES = {
    "Managed": "azurerm_synapse_integration_runtime_azure",
    "SelfHosted": "azurerm_synapse_integration_runtime_self_hosted",
}
_HDINSIGHT_KINDS = {
    "KAFKA": "azurerm_hdinsight_kafka_cluster",
    "HADOOP": "azurerm_hdinsight_hadoop_cluster",
    "SPARK": "azurerm_hdinsight_spark_cluster",
    "HBASE": "azurerm_hdinsight_hbase_cluster",
    "INTERACTIVEHIVE": "azurerm_hdinsight_interactive_query_cluster",
}
_SAP_INFRASTRUCTURES = {
    "SingleServer": "azurerm_workloads_sap_single_node_virtual_instance",
    "ThreeTier": "azurerm_workloads_sap_three_tier_virtual_instance",
}


def _value(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _need(obj: Any, key: str, resource_id: ResourceId, message: str) -> Any:
    value = _value(obj, key)
    if value is None:
        raise ResolveError(resource_id, message)
    return value


def _lookup(table: dict[str, str], kind: Any, resource_id: ResourceId, message: str) -> str:
    try:
        return table[kind]
    except (KeyError, TypeError):
        raise ResolveError(resource_id, f"{message}{kind}") from None


def resolve_data_share_dataset(client: Any, resource_id: ResourceId) -> str:
    """Resolve a shared dataset by its kind."""
    response = client.get(resource_id, _DATA_SHARE_API_VERSION)
    if not isinstance(response, dict):
        raise ResolveError(resource_id, "unexpected nil model in response")
    return _lookup(_DATASETS, response.get("kind"), resource_id, "unknown dataset type: ")


def resolve_kusto_data_connection(client: Any, resource_id: ResourceId) -> str:
    """Resolve a Kusto data connection by its kind."""
    response = client.get(resource_id, _KUSTO_API_VERSION)
    if not isinstance(response, dict):
        raise ResolveError(resource_id, "unexpected nil model in response")
    return _lookup(_KUSTO_CONNECTIONS, response.get("kind"), resource_id, "unknown data connection type ")


def resolve_synapse_integration_runtime(client: Any, resource_id: ResourceId) -> str:
    """Tell managed (Azure) integration runtimes from self-hosted ones."""
    response = client.get(resource_id, _SYNAPSE_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    return _lookup(
        _SYNAPSE_RUNTIMES, _value(props, "type"), resource_id, "unknown integration runtime type: "
    )


def resolve_hdinsight_cluster(client: Any, resource_id: ResourceId) -> str:
    """Resolve an HDInsight cluster by the kind in its cluster definition."""
    response = client.get(resource_id, _HDINSIGHT_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    definition = _need(
        props, "clusterDefinition", resource_id, "unexpected nil properties.clusterDefinition in response"
    )
    kind = _need(
        definition, "kind", resource_id, "unexpected nil properties.clusterDefinition.kind in response"
    )
    kind = str(kind)
    if kind.upper() in _HDINSIGHT_KINDS:
        return _HDINSIGHT_KINDS[kind.upper()]
    raise ResolveError(resource_id, f"unknown cluster kind: {kind}")


def resolve_sap_virtual_instance(client: Any, resource_id: ResourceId) -> str:
    """Resolve an SAP virtual instance by its configuration and infrastructure layout."""
    response = client.get(resource_id, _WORKLOADS_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    config = _need(props, "configuration", resource_id, "unexpected nil Configuration in response")
    config_type = _value(config, "configurationType")
    if config_type == "Discovery":
        return "azurerm_workloads_sap_discovery_virtual_instance"
    if config_type == "DeploymentWithOSConfig":
        infra = _need(
            config,
            "infrastructureConfiguration",
            resource_id,
            "unexpected nil Configuration.InfrastructureConfiguration in response",
        )
        return _lookup(
            _SAP_INFRASTRUCTURES,
            _value(infra, "deploymentType"),
            resource_id,
            "unexpected Configuration.InfrastructureConfiguration type in response, got=",
        )
    raise ResolveError(resource_id, f"unexpected Configuration type in response, got={config_type}")