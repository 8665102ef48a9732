"""Resolvers for virtual machines, scale sets, data disks and DevTest Labs machines."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_COMPUTE_API_VERSION = "2023-03-01"
_DEVTEST_API_VERSION = "2018-09-15"

VIRTUAL_MACHINE_TYPES = (
    "azurerm_linux_virtual_machine",
    "azurerm_windows_virtual_machine",
    "azurerm_virtual_machine",
)
VIRTUAL_MACHINE_DATA_DISK_TYPES = (
    "azurerm_virtual_machine_implicit_data_disk_from_source",
    "azurerm_virtual_machine_data_disk_attachment",
)
VIRTUAL_MACHINE_SCALE_SET_TYPES = (
    "azurerm_orchestrated_virtual_machine_scale_set",
    "azurerm_linux_virtual_machine_scale_set",
    "azurerm_windows_virtual_machine_scale_set",
)
DEV_TEST_VIRTUAL_MACHINE_TYPES = (
    "azurerm_dev_test_linux_virtual_machine",
    "azurerm_dev_test_windows_virtual_machine",
)


def _value(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _need(obj: Any, key: str, resource_id: ResourceId, message: str) -> Any:
    value = _value(obj, key)
    if value is None:
        raise ResolveError(resource_id, message)
    return value


def resolve_virtual_machine(client: Any, resource_id: ResourceId) -> str:
    """Tell a Linux or Windows VM from one managed by the legacy VM resource."""
    response = client.get(resource_id, _COMPUTE_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    if _value(props, "osProfile") is None:
        return "azurerm_virtual_machine"
    storage = _need(props, "storageProfile", resource_id, "unexpected nil storage profile in response")
    os_disk = _need(storage, "osDisk", resource_id, "unexpected nil OS Disk in storage profile")
    if _value(os_disk, "vhd") is not None:
        return "azurerm_virtual_machine"
    os_type = _need(os_disk, "osType", resource_id, "unexpected nil OS Type in OS Disk")
    if os_type == "Linux":
        return "azurerm_linux_virtual_machine"
    if os_type == "Windows":
        return "azurerm_windows_virtual_machine"
    raise ResolveError(resource_id, f"Unknown OS Type: {os_type}")


def resolve_virtual_machine_data_disk(client: Any, resource_id: ResourceId) -> str:
    """Resolve a VM data disk by the create option recorded on the VM."""
    response = client.get(resource_id.parent(), _COMPUTE_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    profile = _need(props, "storageProfile", resource_id, "unexpected nil storageProfile")
    disk_name = resource_id.names()[1]
    for disk in _value(profile, "dataDisks") or []:
        if _value(disk, "name") != disk_name:
            continue
        option = _need(
            disk, "createOption", resource_id, "unexpected nil storageProfile.dataDisks.*.createOption"
        )
        if option in ("Empty", "Attach"):
            return "azurerm_virtual_machine_data_disk_attachment"
        if option == "Copy":
            return "azurerm_virtual_machine_implicit_data_disk_from_source"
        raise ResolveError(resource_id, f"unexpected storageProfile.dataDisks.*.createOption: {option}")
    raise ResolveError(resource_id, f'data disk named "{disk_name}" not found')


def resolve_virtual_machine_scale_set(client: Any, resource_id: ResourceId) -> str:
    """Tell flexible scale sets from uniform Linux or Windows ones."""
    response = client.get(resource_id, _COMPUTE_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    # Uniform scale sets omit the orchestration mode from the response.
    if _value(props, "orchestrationMode") == "Flexible":
        return "azurerm_orchestrated_virtual_machine_scale_set"
    profile = _need(
        props, "virtualMachineProfile", resource_id, "unexpected nil virtualMachineProfile in response"
    )
    os_profile = _need(
        profile, "osProfile", resource_id, "unexpected nil virtualMachineProfile.osProfile in response"
    )
    if _value(os_profile, "linuxConfiguration") is not None:
        return "azurerm_linux_virtual_machine_scale_set"
    if _value(os_profile, "windowsConfiguration") is not None:
        return "azurerm_windows_virtual_machine_scale_set"
    raise ResolveError(resource_id, "both windowsConfiguration and linuxConfiguration in OS profile is null")


def resolve_dev_test_virtual_machine(client: Any, resource_id: ResourceId) -> str:
    """Resolve a DevTest Labs VM by the OS type of its gallery image."""
    response = client.get(resource_id, _DEVTEST_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    image = _need(
        props, "galleryImageReference", resource_id, "unexpected nil galleryImageReference in response"
    )
    os_type = _need(image, "osType", resource_id, "unexpected nil galleryImageReference.osType in response")
    if os_type == "Linux":
        return "azurerm_dev_test_linux_virtual_machine"
    if os_type == "Windows":
        return "azurerm_dev_test_windows_virtual_machine"
    raise ResolveError(resource_id, f"unknown os type: {os_type}")