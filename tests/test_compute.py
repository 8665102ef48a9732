import pytest

from aztfresolve.base import ResolveError
from aztfresolve.compute import (
    DEV_TEST_VIRTUAL_MACHINE_TYPES,
    VIRTUAL_MACHINE_DATA_DISK_TYPES,
    VIRTUAL_MACHINE_SCALE_SET_TYPES,
    VIRTUAL_MACHINE_TYPES,
    resolve_dev_test_virtual_machine,
    resolve_virtual_machine,
    resolve_virtual_machine_data_disk,
    resolve_virtual_machine_scale_set,
)
from aztfresolve.resource_id import parse_resource_id

RG = "/subscriptions/sub1/resourceGroups/rg1"
VM = RG + "/providers/Microsoft.Compute/virtualMachines/vm1"
DISK = VM + "/dataDisks/disk1"
VMSS = RG + "/providers/Microsoft.Compute/virtualMachineScaleSets/ss1"
LAB_VM = RG + "/providers/Microsoft.DevTestLab/labs/lab1/virtualMachines/vm1"


class FakeClient:
    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def get(self, resource_id, api_version):
        self.calls.append(str(resource_id))
        return self.responses[str(resource_id)]


def run(fn, rid, body):
    return fn(FakeClient({rid if rid != DISK else VM: body}), parse_resource_id(rid))


def vm_body(os_disk, os_profile=True):
    props = {"storageProfile": {"osDisk": os_disk}}
    if os_profile:
        props["osProfile"] = {"computerName": "vm1"}
    return {"properties": props}


@pytest.mark.parametrize(
    "body, expected",
    [
        (vm_body({"osType": "Linux"}, os_profile=False), "azurerm_virtual_machine"),
        (vm_body({"osType": "Linux", "vhd": {"uri": "x"}}), "azurerm_virtual_machine"),
        (vm_body({"osType": "Linux"}), "azurerm_linux_virtual_machine"),
        (vm_body({"osType": "Windows"}), "azurerm_windows_virtual_machine"),
    ],
)
def test_virtual_machine(body, expected):
    result = run(resolve_virtual_machine, VM, body)
    assert result == expected
    assert result in VIRTUAL_MACHINE_TYPES


@pytest.mark.parametrize(
    "body, message",
    [
        ({}, "unexpected nil property in response"),
        ({"properties": {"osProfile": {}}}, "unexpected nil storage profile"),
        (vm_body({}), "unexpected nil OS Type"),
        (vm_body({"osType": "Plan9"}), "Unknown OS Type: Plan9"),
    ],
)
def test_virtual_machine_errors(body, message):
    with pytest.raises(ResolveError, match=message):
        run(resolve_virtual_machine, VM, body)


def disk_body(option, name="disk1"):
    return {"properties": {"storageProfile": {"dataDisks": [{"name": "other"}, {"name": name, "createOption": option}]}}}


@pytest.mark.parametrize(
    "option, expected",
    [
        ("Empty", "azurerm_virtual_machine_data_disk_attachment"),
        ("Attach", "azurerm_virtual_machine_data_disk_attachment"),
        ("Copy", "azurerm_virtual_machine_implicit_data_disk_from_source"),
    ],
)
def test_data_disk(option, expected):
    client = FakeClient({VM: disk_body(option)})
    result = resolve_virtual_machine_data_disk(client, parse_resource_id(DISK))
    assert result == expected
    assert result in VIRTUAL_MACHINE_DATA_DISK_TYPES
    assert client.calls == [VM]


def test_data_disk_unexpected_option():
    with pytest.raises(ResolveError, match="createOption: FromImage"):
        run(resolve_virtual_machine_data_disk, DISK, disk_body("FromImage"))


def test_data_disk_not_found():
    with pytest.raises(ResolveError, match='data disk named "disk1" not found'):
        run(resolve_virtual_machine_data_disk, DISK, disk_body("Empty", name="disk2"))


def test_data_disk_missing_storage_profile():
    with pytest.raises(ResolveError, match="unexpected nil storageProfile"):
        run(resolve_virtual_machine_data_disk, DISK, {"properties": {}})


@pytest.mark.parametrize(
    "props, expected",
    [
        ({"orchestrationMode": "Flexible"}, "azurerm_orchestrated_virtual_machine_scale_set"),
        ({"virtualMachineProfile": {"osProfile": {"linuxConfiguration": {}}}}, "azurerm_linux_virtual_machine_scale_set"),
        (
            {"orchestrationMode": "Uniform", "virtualMachineProfile": {"osProfile": {"windowsConfiguration": {}}}},
            "azurerm_windows_virtual_machine_scale_set",
        ),
    ],
)
def test_scale_set(props, expected):
    result = run(resolve_virtual_machine_scale_set, VMSS, {"properties": props})
    assert result == expected
    assert result in VIRTUAL_MACHINE_SCALE_SET_TYPES


@pytest.mark.parametrize(
    "props, message",
    [
        ({}, "unexpected nil virtualMachineProfile"),
        ({"virtualMachineProfile": {}}, "unexpected nil virtualMachineProfile.osProfile"),
        ({"virtualMachineProfile": {"osProfile": {}}}, "both windowsConfiguration and linuxConfiguration"),
    ],
)
def test_scale_set_errors(props, message):
    with pytest.raises(ResolveError, match=message):
        run(resolve_virtual_machine_scale_set, VMSS, {"properties": props})


@pytest.mark.parametrize(
    "os_type, expected",
    [("Linux", "azurerm_dev_test_linux_virtual_machine"), ("Windows", "azurerm_dev_test_windows_virtual_machine")],
)
def test_dev_test_virtual_machine(os_type, expected):
    body = {"properties": {"galleryImageReference": {"osType": os_type}}}
    result = run(resolve_dev_test_virtual_machine, LAB_VM, body)
    assert result == expected
    assert result in DEV_TEST_VIRTUAL_MACHINE_TYPES


@pytest.mark.parametrize(
    "props, message",
    [
        ({}, "unexpected nil galleryImageReference in response"),
        ({"galleryImageReference": {}}, "unexpected nil galleryImageReference.osType"),
        ({"galleryImageReference": {"osType": "Solaris"}}, "unknown os type: Solaris"),
    ],
)
def test_dev_test_virtual_machine_errors(props, message):
    with pytest.raises(ResolveError, match=message):
        run(resolve_dev_test_virtual_machine, LAB_VM, {"properties": props})