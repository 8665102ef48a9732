"""Resolvers for virtual hubs, Front Door and CDN, packet captures and Palo Alto firewalls."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId, parse_resource_id

_NETWORK_API_VERSION = "2022-07-01"
_FRONTDOOR_API_VERSION = "2020-11-01"
_CDN_API_VERSION = "2021-06-01"
_PALO_ALTO_API_VERSION = "2023-09-01"

VIRTUAL_HUB_TYPES = ("azurerm_route_server", "azurerm_virtual_hub")
VIRTUAL_HUB_BGP_CONNECTION_TYPES = (
    "azurerm_route_server_bgp_connection",
    "azurerm_virtual_hub_bgp_connection",
)
FRONTDOOR_FIREWALL_POLICY_TYPES = (
    "azurerm_cdn_frontdoor_firewall_policy",
    "azurerm_frontdoor_firewall_policy",
)
PACKET_CAPTURE_TYPES = (
    "azurerm_virtual_machine_scale_set_packet_capture",
    "azurerm_virtual_machine_packet_capture",
)
CDN_PROFILE_TYPES = ("azurerm_cdn_frontdoor_profile", "azurerm_cdn_profile")
PALO_ALTO_FIREWALL_TYPES = (
    "azurerm_palo_alto_next_generation_firewall_virtual_network_panorama",
    "azurerm_palo_alto_next_generation_firewall_virtual_hub_panorama",
    "azurerm_palo_alto_next_generation_firewall_virtual_hub_local_rulestack",
    "azurerm_palo_alto_next_generation_firewall_virtual_network_local_rulestack",
)

_FRONTDOOR_POLICY_SKUS = {
    "Classic_AzureFrontDoor": "azurerm_frontdoor_firewall_policy",
    "Standard_AzureFrontDoor": "azurerm_cdn_frontdoor_firewall_policy",
    "Premium_AzureFrontDoor": "azurerm_cdn_frontdoor_firewall_policy",
}
_CDN_PROFILE_SKUS = {
    "Premium_AzureFrontDoor": "azurerm_cdn_frontdoor_profile",
    "Standard_AzureFrontDoor": "azurerm_cdn_frontdoor_profile",
    "Standard_Akamai": "azurerm_cdn_profile",
    "Standard_ChinaCdn": "azurerm_cdn_profile",
    "Standard_Verizon": "azurerm_cdn_profile",
    "Standard_Microsoft": "azurerm_cdn_profile",
    "Premium_Verizon": "azurerm_cdn_profile",
}
_PACKET_CAPTURE_TARGETS = {
    "VIRTUALMACHINESCALESETS": "azurerm_virtual_machine_scale_set_packet_capture",
    "VIRTUALMACHINES": "azurerm_virtual_machine_packet_capture",
}
_PANORAMA_FIREWALLS = {
    "VNET": "azurerm_palo_alto_next_generation_firewall_virtual_network_panorama",
    "VWAN": "azurerm_palo_alto_next_generation_firewall_vhub_panorama",
}
_LOCAL_RULESTACK_FIREWALLS = {
    "VNET": "azurerm_palo_alto_next_generation_firewall_virtual_network_local_rulestack",
    "VWAN": "azurerm_palo_alto_next_generation_firewall_virtual_hub_local_rulestack",
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


def resolve_virtual_hub(client: Any, resource_id: ResourceId) -> str:
    """A hub attached to a virtual WAN is a virtual hub, otherwise a route server."""
    response = client.get(resource_id, _NETWORK_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    if _value(props, "virtualWan") is None:
        return "azurerm_route_server"
    return "azurerm_virtual_hub"


def resolve_virtual_hub_bgp_connection(client: Any, resource_id: ResourceId) -> str:
    """Both connection types are the same resource; tell them apart by their hub."""
    hub_type = resolve_virtual_hub(client, resource_id.parent())
    if hub_type == "azurerm_route_server":
        return "azurerm_route_server_bgp_connection"
    if hub_type == "azurerm_virtual_hub":
        return "azurerm_virtual_hub_bgp_connection"
    raise ResolveError(resource_id, f"unknown parent resource type: {hub_type}")


def resolve_frontdoor_firewall_policy(client: Any, resource_id: ResourceId) -> str:
    """Tell classic Front Door firewall policies from Standard and Premium ones."""
    response = client.get(resource_id, _FRONTDOOR_API_VERSION)
    sku = _need(response, "sku", resource_id, "unexpected nil sku in response")
    name = _need(sku, "name", resource_id, "unexpected nil sku name in response")
    return _lookup(
        _FRONTDOOR_POLICY_SKUS, name, resource_id, "unknown frontdoor firewall policy sku name "
    )


def resolve_packet_capture(client: Any, resource_id: ResourceId) -> str:
    """Resolve a packet capture by the type of the resource it targets."""
    response = client.get(resource_id, _NETWORK_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    target = _need(props, "target", resource_id, "unexpected nil target id in response")
    try:
        target_id = parse_resource_id(str(target))
    except ValueError as exc:
        raise ResolveError(resource_id, f'parsing target id "{target}": {exc}') from exc
    types = target_id.types()
    if len(types) != 1:
        raise ResolveError(
            resource_id, f"un-supported resource types for this target id: [{' '.join(types)}]"
        )
    return _lookup(_PACKET_CAPTURE_TARGETS, types[0].upper(), resource_id, "unknown resource type: ")


def resolve_cdn_profile(client: Any, resource_id: ResourceId) -> str:
    """Tell Front Door Standard/Premium profiles from classic CDN profiles by SKU."""
    response = client.get(resource_id, _CDN_API_VERSION)
    sku = _need(response, "sku", resource_id, "unexpected nil properties.sku in response")
    name = _need(sku, "name", resource_id, "unexpected nil properties.sku.name in response")
    return _lookup(_CDN_PROFILE_SKUS, name, resource_id, "unknown sku name ")


def resolve_palo_alto_firewall(client: Any, resource_id: ResourceId) -> str:
    """Resolve a firewall by whether Panorama manages it and by its network type."""
    response = client.get(resource_id, _PALO_ALTO_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    profile = _need(props, "networkProfile", resource_id, "unexpected nil networkProfile in response")
    network_type = _need(
        profile, "networkType", resource_id, "unexpected nil networkProfile.networkType in response"
    )
    if _value(props, "isPanoramaManaged") == "TRUE":
        table = _PANORAMA_FIREWALLS
    else:
        table = _LOCAL_RULESTACK_FIREWALLS
    return _lookup(table, network_type, resource_id, "unknown network type: ")