"""Resolvers for App Service sites, slots and related resources, and Cognitive accounts."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_WEB_API_VERSION = "2022-03-01"
_COGNITIVE_API_VERSION = "2023-05-01"

APP_SERVICE_SITE_TYPES = (
    "azurerm_logic_app_standard",
    "azurerm_linux_function_app",
    "azurerm_windows_function_app",
    "azurerm_linux_web_app",
    "azurerm_windows_web_app",
)
APP_SERVICE_SITE_SLOT_TYPES = (
    "azurerm_linux_function_app_slot",
    "azurerm_windows_function_app_slot",
    "azurerm_linux_web_app_slot",
    "azurerm_windows_web_app_slot",
)
APP_SERVICE_HYBRID_CONNECTION_TYPES = (
    "azurerm_web_app_hybrid_connection",
    "azurerm_function_app_hybrid_connection",
)
APP_SERVICE_CERTIFICATE_TYPES = (
    "azurerm_app_service_certificate",
    "azurerm_app_service_managed_certificate",
)
SERVICE_CONNECTOR_TYPES = (
    "azurerm_function_app_connection",
    "azurerm_app_service_connection",
)
COGNITIVE_ACCOUNT_TYPES = ("azurerm_cognitive_account", "azurerm_ai_services")


def _value(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _need(obj: Any, key: str, resource_id: ResourceId, message: str) -> Any:
    value = _value(obj, key)
    if value is None:
        raise ResolveError(resource_id, message)
    return value


def _kinds(kind: Any) -> set[str]:
    return {part.lower() for part in str(kind).split(",")}


def resolve_app_service_site(client: Any, resource_id: ResourceId) -> str:
    """Resolve a site from the comma separated flags in its ``kind``."""
    response = client.get(resource_id, _WEB_API_VERSION)
    kind = _need(response, "kind", resource_id, "unexpected nil kind in response")
    kinds = _kinds(kind)
    if {"workflowapp", "functionapp"} <= kinds:
        return "azurerm_logic_app_standard"
    if "functionapp" in kinds:
        return "azurerm_linux_function_app" if "linux" in kinds else "azurerm_windows_function_app"
    if "app" in kinds:
        return "azurerm_linux_web_app" if "linux" in kinds else "azurerm_windows_web_app"
    raise ResolveError(resource_id, f"unknown kind: {kind}")


def resolve_app_service_site_slot(client: Any, resource_id: ResourceId) -> str:
    """Resolve a deployment slot from the flags in its ``kind``."""
    response = client.get(resource_id, _WEB_API_VERSION)
    kind = _need(response, "kind", resource_id, "unexpected nil kind in response")
    kinds = _kinds(kind)
    if "functionapp" in kinds:
        return "azurerm_linux_function_app_slot" if "linux" in kinds else "azurerm_windows_function_app_slot"
    if "app" in kinds:
        return "azurerm_linux_web_app_slot" if "linux" in kinds else "azurerm_windows_web_app_slot"
    raise ResolveError(resource_id, f"unknown kind: {kind}")


def resolve_app_service_hybrid_connection(client: Any, resource_id: ResourceId) -> str:
    """Resolve a hybrid connection by the type of the site that owns it."""
    site_type = resolve_app_service_site(client, resource_id.parent().parent())
    if site_type in ("azurerm_windows_web_app", "azurerm_linux_web_app"):
        return "azurerm_web_app_hybrid_connection"
    if site_type in ("azurerm_windows_function_app", "azurerm_linux_function_app"):
        return "azurerm_function_app_hybrid_connection"
    raise ResolveError(resource_id, f"unknown parent resource type: {site_type}")


def resolve_app_service_certificate(client: Any, resource_id: ResourceId) -> str:
    """A certificate bound to a server farm is a managed certificate."""
    response = client.get(resource_id, _WEB_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    if _value(props, "serverFarmId") is None:
        return "azurerm_app_service_certificate"
    return "azurerm_app_service_managed_certificate"


def resolve_service_connector(client: Any, resource_id: ResourceId) -> str:
    """Resolve a service linker by the type of the site it is attached to."""
    site_type = resolve_app_service_site(client, resource_id.parent_scope())
    if site_type in ("azurerm_logic_app_standard", "azurerm_linux_function_app", "azurerm_windows_function_app"):
        return "azurerm_function_app_connection"
    if site_type in ("azurerm_linux_web_app", "azurerm_windows_web_app"):
        return "azurerm_app_service_connection"
    raise ResolveError(resource_id, f"unknown app service site resource type: {site_type}")


def resolve_cognitive_account(client: Any, resource_id: ResourceId) -> str:
    """Accounts of kind AIServices get their own resource type."""
    response = client.get(resource_id, _COGNITIVE_API_VERSION)
    kind = _need(response, "kind", resource_id, "unexpected nil kind in response")
    if str(kind).casefold() == "aiservices":
        return "azurerm_ai_services"
    return "azurerm_cognitive_account"