"""Resolvers for Data Protection, Recovery Services backup and Site Recovery resources."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_DATA_PROTECTION_API_VERSION = "2022-04-01"
_BACKUP_API_VERSION = "2023-01-01"
_SITE_RECOVERY_API_VERSION = "2022-10-01"

DATA_PROTECTION_BACKUP_INSTANCE_TYPES = (
    "azurerm_data_protection_backup_instance_postgresql",
    "azurerm_data_protection_backup_instance_postgresql_flexible_server",
    "azurerm_data_protection_backup_instance_disk",
    "azurerm_data_protection_backup_instance_blob_storage",
    "azurerm_data_protection_backup_instance_kubernetes_cluster",
    "azurerm_data_protection_backup_instance_mysql_flexible_server",
)
DATA_PROTECTION_BACKUP_POLICY_TYPES = (
    "azurerm_data_protection_backup_policy_postgresql",
    "azurerm_data_protection_backup_policy_disk",
    "azurerm_data_protection_backup_policy_blob_storage",
    "azurerm_data_protection_backup_policy_kubernetes_cluster",
    "azurerm_data_protection_backup_policy_postgresql_flexible_server",
    "azurerm_data_protection_backup_policy_mysql_flexible_server",
)
BACKUP_PROTECTED_ITEM_TYPES = (
    "azurerm_backup_protected_vm",
    "azurerm_backup_protected_file_share",
)
BACKUP_PROTECTION_POLICY_TYPES = (
    "azurerm_backup_policy_vm",
    "azurerm_backup_policy_vm_workload",
    "azurerm_backup_policy_file_share",
)
REPLICATION_PROTECTED_ITEM_TYPES = (
    "azurerm_site_recovery_replicated_vm",
    "azurerm_site_recovery_vmware_replicated_vm",
)
REPLICATION_FABRIC_TYPES = (
    "azurerm_site_recovery_services_vault_hyperv_site",
    "azurerm_site_recovery_fabric",
)
REPLICATION_NETWORK_MAPPING_TYPES = (
    "azurerm_site_recovery_hyperv_network_mapping",
    "azurerm_site_recovery_network_mapping",
)
REPLICATION_POLICY_TYPES = (
    "azurerm_site_recovery_hyperv_replication_policy",
    "azurerm_site_recovery_replication_policy",
    "azurerm_site_recovery_vmware_replication_policy",
)
REPLICATION_PROTECTION_CONTAINER_MAPPING_TYPES = (
    "azurerm_site_recovery_hyperv_replication_policy_association",
    "azurerm_site_recovery_protection_container_mapping",
    # No provider specific details identify this one, so it is never resolved to.
    "azurerm_site_recovery_vmware_replication_policy_association",
)

_BACKUP_INSTANCE_SOURCES = {
    "MICROSOFT.DBFORPOSTGRESQL/SERVERS/DATABASES": "azurerm_data_protection_backup_instance_postgresql",
    "MICROSOFT.DBFORPOSTGRESQL/FLEXIBLESERVERS": (
        "azurerm_data_protection_backup_instance_postgresql_flexible_server"
    ),
    "MICROSOFT.COMPUTE/DISKS": "azurerm_data_protection_backup_instance_disk",
    "MICROSOFT.STORAGE/STORAGEACCOUNTS/BLOBSERVICES": "azurerm_data_protection_backup_instance_blob_storage",
    "MICROSOFT.CONTAINERSERVICE/MANAGEDCLUSTERS": "azurerm_data_protection_backup_instance_kubernetes_cluster",
    "MICROSOFT.DBFORMYSQL/FLEXIBLESERVERS": "azurerm_data_protection_backup_instance_mysql_flexible_server",
}
_BACKUP_POLICY_SOURCES = {
    "MICROSOFT.DBFORPOSTGRESQL/SERVERS/DATABASES": "azurerm_data_protection_backup_policy_postgresql",
    "MICROSOFT.COMPUTE/DISKS": "azurerm_data_protection_backup_policy_disk",
    "MICROSOFT.STORAGE/STORAGEACCOUNTS/BLOBSERVICES": "azurerm_data_protection_backup_policy_blob_storage",
    "MICROSOFT.CONTAINERSERVICE/MANAGEDCLUSTERS": "azurerm_data_protection_backup_policy_kubernetes_cluster",
    "MICROSOFT.DBFORPOSTGRESQL/FLEXIBLESERVERS": (
        "azurerm_data_protection_backup_policy_postgresql_flexible_server"
    ),
    "MICROSOFT.DBFORMYSQL/FLEXIBLESERVERS": "azurerm_data_protection_backup_policy_mysql_flexible_server",
}
_PROTECTED_ITEMS = {
    "Microsoft.Compute/virtualMachines": "azurerm_backup_protected_vm",
    "AzureFileShareProtectedItem": "azurerm_backup_protected_file_share",
}
_PROTECTION_POLICIES = {
    "AzureIaasVM": "azurerm_backup_policy_vm",
    "AzureStorage": "azurerm_backup_policy_file_share",
    "AzureWorkload": "azurerm_backup_policy_vm_workload",
}
_REPLICATED_ITEMS = {
    "A2ACrossClusterMigration": "azurerm_site_recovery_replicated_vm",
    "InMageRcm": "azurerm_site_recovery_vmware_replicated_vm",
}
_FABRICS = {
    "Azure": "azurerm_site_recovery_fabric",
    "HyperVSite": "azurerm_site_recovery_services_vault_hyperv_site",
}
_NETWORK_MAPPINGS = {
    "AzureToAzure": "azurerm_site_recovery_network_mapping",
    "VmmToAzure": "azurerm_site_recovery_hyperv_network_mapping",
}
_REPLICATION_POLICIES = {
    "HyperVReplicaAzure": "azurerm_site_recovery_hyperv_replication_policy",
    "A2A": "azurerm_site_recovery_replication_policy",
    "VMwareCbt": "azurerm_site_recovery_vmware_replication_policy",
}
# Container mapping details with their own shape that have no resource type of their own.
_UNSUPPORTED_CONTAINER_MAPPINGS = frozenset({"InMageRcm", "VMwareCbt"})


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


def resolve_data_protection_backup_instance(client: Any, resource_id: ResourceId) -> str:
    """Resolve a backup instance by the type of the data source it protects."""
    response = client.get(resource_id, _DATA_PROTECTION_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    info = _need(props, "dataSourceInfo", resource_id, "unexpected nil properties.dataSourceInfo in response")
    source_type = _need(
        info,
        "datasourceType",
        resource_id,
        "unexpected nil properties.dataSourceInfo.dataSourceType in response",
    )
    return _lookup(_BACKUP_INSTANCE_SOURCES, str(source_type).upper(), resource_id, "unknown data source type")


def resolve_data_protection_backup_policy(client: Any, resource_id: ResourceId) -> str:
    """Resolve a backup policy by its single data source type."""
    response = client.get(resource_id, _DATA_PROTECTION_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    object_type = _value(props, "objectType")
    if object_type != "BackupPolicy":
        raise ResolveError(resource_id, f"unknown type of the property: {object_type}")
    source_types = _value(props, "datasourceTypes")
    if not isinstance(source_types, list):
        source_types = []
    if len(source_types) != 1:
        raise ResolveError(
            resource_id,
            "provider only support backup policy that has exactly one datasourceType specified, "
            f"got={len(source_types)}",
        )
    (source_type,) = source_types
    if source_type is None:
        raise ResolveError(resource_id, "unexpected nil datasource type")
    upper = str(source_type).upper()
    if upper not in _BACKUP_POLICY_SOURCES:
        raise ResolveError(resource_id, f"unknown data source type: {source_type}")
    return _BACKUP_POLICY_SOURCES[upper]


def resolve_backup_protected_item(client: Any, resource_id: ResourceId) -> str:
    """Tell protected virtual machines from protected file shares."""
    response = client.get(resource_id, _BACKUP_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    kind = _value(props, "protectedItemType")
    return _lookup(_PROTECTED_ITEMS, kind, resource_id, "unknown protected item type")


def resolve_backup_protection_policy(client: Any, resource_id: ResourceId) -> str:
    """Resolve a protection policy by its backup management type."""
    response = client.get(resource_id, _BACKUP_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    kind = _value(props, "backupManagementType")
    return _lookup(_PROTECTION_POLICIES, kind, resource_id, "unknown policy type")


def resolve_replication_protected_item(client: Any, resource_id: ResourceId) -> str:
    """Resolve a replicated item by the instance type of its provider details."""
    response = client.get(resource_id, _SITE_RECOVERY_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    details = _need(
        props,
        "providerSpecificDetails",
        resource_id,
        "unexpected nil property.providerSpecificDetails in response",
    )
    kind = _need(
        details,
        "instanceType",
        resource_id,
        "unexpected nil property.providerSpecificDetails.instanceType in response",
    )
    return _lookup(_REPLICATED_ITEMS, kind, resource_id, "unknown replication protected items type")


def resolve_replication_fabric(client: Any, resource_id: ResourceId) -> str:
    """Tell Azure fabrics from Hyper-V sites."""
    response = client.get(resource_id, _SITE_RECOVERY_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil prop in response")
    kind = _value(_value(props, "customDetails"), "instanceType")
    return _lookup(_FABRICS, kind, resource_id, "unknown site recovery replication fabric detail type")


def resolve_replication_network_mapping(client: Any, resource_id: ResourceId) -> str:
    """Tell Azure-to-Azure network mappings from Hyper-V (VMM) ones."""
    response = client.get(resource_id, _SITE_RECOVERY_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil prop in response")
    kind = _value(_value(props, "fabricSpecificSettings"), "instanceType")
    return _lookup(
        _NETWORK_MAPPINGS, kind, resource_id, "unsupported site recovery replication network mapping detail type"
    )


def resolve_replication_policy(client: Any, resource_id: ResourceId) -> str:
    """Resolve a replication policy by its provider specific details."""
    response = client.get(resource_id, _SITE_RECOVERY_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil prop in response")
    kind = _value(_value(props, "providerSpecificDetails"), "instanceType")
    return _lookup(
        _REPLICATION_POLICIES, kind, resource_id, "unknown site recovery replication policy detail type"
    )


def resolve_replication_protection_container_mapping(client: Any, resource_id: ResourceId) -> str:
    """Tell A2A container mappings from Hyper-V replication policy associations."""
    response = client.get(resource_id, _SITE_RECOVERY_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil prop in response")
    details = _value(props, "providerSpecificDetails")
    kind = _value(details, "instanceType")
    if isinstance(details, dict):
        if kind == "A2A":
            return "azurerm_site_recovery_protection_container_mapping"
        if kind not in _UNSUPPORTED_CONTAINER_MAPPINGS:
            # Details of no specific shape are those of a Hyper-V association.
            return "azurerm_site_recovery_hyperv_replication_policy_association"
    raise ResolveError(
        resource_id, f"unsupported site recovery replication container mapping detail type: {kind}"
    )