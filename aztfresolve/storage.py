"""Resolvers for HPC cache targets, storage mover endpoints, deployment scripts and Digital Twins endpoints."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_STORAGE_CACHE_API_VERSION = "2023-01-01"
_STORAGE_MOVER_API_VERSION = "2023-03-01"
_DEPLOYMENT_SCRIPTS_API_VERSION = "2020-10-01"
_DIGITAL_TWINS_API_VERSION = "2023-01-31"

STORAGE_CACHE_TARGET_TYPES = (
    "azurerm_hpc_cache_blob_nfs_target",
    "azurerm_hpc_cache_blob_target",
    "azurerm_hpc_cache_nfs_target",
)
STORAGE_MOVER_ENDPOINT_TYPES = (
    "azurerm_storage_mover_source_endpoint",
    "azurerm_storage_mover_target_endpoint",
)
DEPLOYMENT_SCRIPT_TYPES = (
    "azurerm_resource_deployment_script_azure_cli",
    "azurerm_resource_deployment_script_azure_power_shell",
)
DIGITAL_TWINS_ENDPOINT_TYPES = (
    "azurerm_digital_twins_endpoint_eventgrid",
    "azurerm_digital_twins_endpoint_eventhub",
    "azurerm_digital_twins_endpoint_servicebus",
)

_CACHE_TARGETS = {
    "blobNfs": "azurerm_hpc_cache_blob_nfs_target",
    "clfs": "azurerm_hpc_cache_blob_target",
    "nfs3": "azurerm_hpc_cache_nfs_target",
}
_MOVER_ENDPOINTS = {
    "NfsMount": "azurerm_storage_mover_source_endpoint",
    "AzureStorageBlobContainer": "azurerm_storage_mover_target_endpoint",
}
_DEPLOYMENT_SCRIPTS = {
    "AzureCLI": "azurerm_resource_deployment_script_azure_cli",
    "AzurePowerShell": "azurerm_resource_deployment_script_azure_power_shell",
}
_TWINS_ENDPOINTS = {
    "EventGrid": "azurerm_digital_twins_endpoint_eventgrid",
    "EventHub": "azurerm_digital_twins_endpoint_eventhub",
    "ServiceBus": "azurerm_digital_twins_endpoint_servicebus",
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
        raise ResolveError(resource_id, f"{message}: {kind}") from None


def resolve_storage_cache_target(client: Any, resource_id: ResourceId) -> str:
    """Resolve an HPC cache storage target by its target type."""
    response = client.get(resource_id, _STORAGE_CACHE_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    kind = _need(props, "targetType", resource_id, "unexpected nil targetType in response")
    return _lookup(_CACHE_TARGETS, kind, resource_id, "unknown resource type")


def resolve_storage_mover_endpoint(client: Any, resource_id: ResourceId) -> str:
    """NFS mount endpoints are sources, blob container endpoints are targets."""
    response = client.get(resource_id, _STORAGE_MOVER_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    kind = _value(props, "endpointType")
    return _lookup(_MOVER_ENDPOINTS, kind, resource_id, "unknown storage mover endpoint type")


def resolve_deployment_script(client: Any, resource_id: ResourceId) -> str:
    """Tell Azure CLI scripts from Azure PowerShell ones."""
    response = client.get(resource_id, _DEPLOYMENT_SCRIPTS_API_VERSION)
    if not isinstance(response, dict):
        raise ResolveError(resource_id, "unexpected nil model in response")
    kind = response.get("kind")
    return _lookup(_DEPLOYMENT_SCRIPTS, kind, resource_id, "unknown deployment scripts type")


def resolve_digital_twins_endpoint(client: Any, resource_id: ResourceId) -> str:
    """Resolve a Digital Twins endpoint by its endpoint type."""
    response = client.get(resource_id, _DIGITAL_TWINS_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    kind = _value(props, "endpointType")
    return _lookup(_TWINS_ENDPOINTS, kind, resource_id, "unknown endpoint type")