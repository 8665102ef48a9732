"""Resolvers for Machine Learning workspace computes and datastores."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_MACHINE_LEARNING_API_VERSION = "2022-10-01"

MACHINE_LEARNING_COMPUTE_TYPES = (
    "azurerm_machine_learning_compute_instance",
    "azurerm_machine_learning_synapse_spark",
    "azurerm_machine_learning_compute_cluster",
    "azurerm_machine_learning_inference_cluster",
)
MACHINE_LEARNING_DATASTORE_TYPES = (
    "azurerm_machine_learning_datastore_fileshare",
    "azurerm_machine_learning_datastore_blobstorage",
    "azurerm_machine_learning_datastore_datalake_gen2",
)

_COMPUTES = {
    "ComputeInstance": "azurerm_machine_learning_compute_instance",
    "SynapseSpark": "azurerm_machine_learning_synapse_spark",
    "AmlCompute": "azurerm_machine_learning_compute_cluster",
    "AKS": "azurerm_machine_learning_inference_cluster",
}
_DATASTORES = {
    "AzureBlob": "azurerm_machine_learning_datastore_blobstorage",
    "AzureFile": "azurerm_machine_learning_datastore_fileshare",
    "AzureDataLakeGen2": "azurerm_machine_learning_datastore_datalake_gen2",
}


def _properties(client: Any, resource_id: ResourceId) -> Any:
    response = client.get(resource_id, _MACHINE_LEARNING_API_VERSION)
    props = response.get("properties") if isinstance(response, dict) else None
    if props is None:
        raise ResolveError(resource_id, "unexpected nil property in response")
    return props


def _discriminator(props: Any, key: str) -> Any:
    return props.get(key) if isinstance(props, dict) else None


def resolve_machine_learning_compute(client: Any, resource_id: ResourceId) -> str:
    """Resolve a workspace compute by its compute type."""
    kind = _discriminator(_properties(client, resource_id), "computeType")
    try:
        return _COMPUTES[kind]
    except (KeyError, TypeError):
        raise ResolveError(resource_id, f"unknown compute resource type {kind}") from None


def resolve_machine_learning_datastore(client: Any, resource_id: ResourceId) -> str:
    """Resolve a workspace datastore by its datastore type."""
    kind = _discriminator(_properties(client, resource_id), "datastoreType")
    try:
        return _DATASTORES[kind]
    except (KeyError, TypeError):
        raise ResolveError(resource_id, f"unknown data store resource type {kind}") from None