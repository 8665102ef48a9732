"""Resolvers for Stream Analytics job inputs, outputs and functions."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_STREAM_ANALYTICS_API_VERSION = "2020-03-01"

STREAM_ANALYTICS_INPUT_TYPES = (
    "azurerm_stream_analytics_stream_input_eventhub_v2",
    "azurerm_stream_analytics_stream_input_eventhub",
    "azurerm_stream_analytics_stream_input_blob",
    "azurerm_stream_analytics_stream_input_iothub",
    "azurerm_stream_analytics_reference_input_mssql",
    "azurerm_stream_analytics_reference_input_blob",
)
STREAM_ANALYTICS_OUTPUT_TYPES = (
    "azurerm_stream_analytics_output_servicebus_topic",
    "azurerm_stream_analytics_output_blob",
    "azurerm_stream_analytics_output_mssql",
    "azurerm_stream_analytics_output_table",
    "azurerm_stream_analytics_output_cosmosdb",
    "azurerm_stream_analytics_output_servicebus_queue",
    "azurerm_stream_analytics_output_eventhub",
    "azurerm_stream_analytics_output_powerbi",
    "azurerm_stream_analytics_output_synapse",
    "azurerm_stream_analytics_output_function",
)
STREAM_ANALYTICS_FUNCTION_TYPES = (
    "azurerm_stream_analytics_function_javascript_uda",
    "azurerm_stream_analytics_function_javascript_udf",
)

_EVENT_HUB_SOURCES = {
    "MICROSOFT.SERVICEBUS/EVENTHUB": "azurerm_stream_analytics_stream_input_eventhub",
    "MICROSOFT.EVENTHUB/EVENTHUB": "azurerm_stream_analytics_stream_input_eventhub_v2",
}
_STREAM_SOURCES = {
    "Microsoft.Storage/Blob": "azurerm_stream_analytics_stream_input_blob",
    "Microsoft.Devices/IotHubs": "azurerm_stream_analytics_stream_input_iothub",
}
_REFERENCE_SOURCES = {
    "Microsoft.Sql/Server/Database": "azurerm_stream_analytics_reference_input_mssql",
    "Microsoft.Storage/Blob": "azurerm_stream_analytics_reference_input_blob",
}
_OUTPUT_SOURCES = {
    "Microsoft.ServiceBus/Topic": "azurerm_stream_analytics_output_servicebus_topic",
    "Microsoft.Storage/Blob": "azurerm_stream_analytics_output_blob",
    "Microsoft.Sql/Server/Database": "azurerm_stream_analytics_output_mssql",
    "Microsoft.Storage/Table": "azurerm_stream_analytics_output_table",
    "Microsoft.Storage/DocumentDB": "azurerm_stream_analytics_output_cosmosdb",
    "Microsoft.ServiceBus/Queue": "azurerm_stream_analytics_output_servicebus_queue",
    "Microsoft.ServiceBus/EventHub": "azurerm_stream_analytics_output_eventhub",
    "PowerBI": "azurerm_stream_analytics_output_powerbi",
    "Microsoft.Sql/Server/DataWarehouse": "azurerm_stream_analytics_output_synapse",
    "Microsoft.AzureFunction": "azurerm_stream_analytics_output_function",
}
_FUNCTIONS = {
    "Aggregate": "azurerm_stream_analytics_function_javascript_uda",
    "Scalar": "azurerm_stream_analytics_function_javascript_udf",
}


def _value(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _need(obj: Any, key: str, resource_id: ResourceId, message: str) -> Any:
    value = _value(obj, key)
    if value is None:
        raise ResolveError(resource_id, message)
    return value


def _properties(client: Any, resource_id: ResourceId) -> Any:
    response = client.get(resource_id, _STREAM_ANALYTICS_API_VERSION)
    return _need(response, "properties", resource_id, "unexpected nil property in response")


def _stream_input(datasource: Any, resource_id: ResourceId) -> str:
    kind = _value(datasource, "type")
    if isinstance(kind, str):
        if kind.upper() in _EVENT_HUB_SOURCES:
            return _EVENT_HUB_SOURCES[kind.upper()]
        if kind in _STREAM_SOURCES:
            return _STREAM_SOURCES[kind]
    raise ResolveError(resource_id, f"unknown input property data source type: {kind}")


def _reference_input(datasource: Any, resource_id: ResourceId) -> str:
    kind = _value(datasource, "type")
    try:
        return _REFERENCE_SOURCES[kind]
    except (KeyError, TypeError):
        raise ResolveError(resource_id, f"unknown input property data source type: {kind}") from None


def resolve_stream_analytics_input(client: Any, resource_id: ResourceId) -> str:
    """Resolve a job input by whether it is a stream or reference input and its data source."""
    props = _properties(client, resource_id)
    kind = _value(props, "type")
    if kind not in ("Stream", "Reference"):
        raise ResolveError(resource_id, f"unknown input property type: {kind}")
    datasource = _need(props, "datasource", resource_id, "unexpected nil properties.datasource in response")
    if kind == "Stream":
        return _stream_input(datasource, resource_id)
    return _reference_input(datasource, resource_id)


def resolve_stream_analytics_output(client: Any, resource_id: ResourceId) -> str:
    """Resolve a job output by the type of its data source."""
    props = _properties(client, resource_id)
    datasource = _need(props, "datasource", resource_id, "unexpected nil properties.datasource in response")
    kind = _value(datasource, "type")
    try:
        return _OUTPUT_SOURCES[kind]
    except (KeyError, TypeError):
        raise ResolveError(resource_id, f"unknown output data source type: {kind}") from None


def resolve_stream_analytics_function(client: Any, resource_id: ResourceId) -> str:
    """Tell aggregate (UDA) functions from scalar (UDF) ones."""
    props = _properties(client, resource_id)
    kind = _value(props, "type")
    try:
        return _FUNCTIONS[kind]
    except (KeyError, TypeError):
        raise ResolveError(resource_id, f"unknown input property type: {kind}") from None