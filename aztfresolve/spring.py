"""Resolvers for Spring Apps bindings, deployments and APM settings."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_SPRING_API_VERSION = "2022-11-01-preview"
_SPRING_APM_API_VERSION = "2023-11-01-preview"

SPRING_BINDING_TYPES = (
    "azurerm_spring_cloud_app_cosmosdb_association",
    "azurerm_spring_cloud_app_redis_association",
    "azurerm_spring_cloud_app_mysql_association",
)
SPRING_DEPLOYMENT_TYPES = (
    "azurerm_spring_cloud_build_deployment",
    "azurerm_spring_cloud_java_deployment",
    "azurerm_spring_cloud_container_deployment",
)
SPRING_APM_TYPES = (
    "azurerm_spring_cloud_dynatrace_application_performance_monitoring",
    "azurerm_spring_cloud_application_insights_application_performance_monitoring",
    "azurerm_spring_cloud_new_relic_application_performance_monitoring",
    "azurerm_spring_cloud_elastic_application_performance_monitoring",
    "azurerm_spring_cloud_app_dynamics_application_performance_monitoring",
)

_DEPLOYMENT_SOURCES = {
    "BuildResult": "azurerm_spring_cloud_build_deployment",
    "Jar": "azurerm_spring_cloud_java_deployment",
    "Container": "azurerm_spring_cloud_container_deployment",
}
_APMS = {
    "ElasticAPM": "azurerm_spring_cloud_elastic_application_performance_monitoring",
    "Dynatrace": "azurerm_spring_cloud_dynatrace_application_performance_monitoring",
    "NewRelic": "azurerm_spring_cloud_new_relic_application_performance_monitoring",
    "ApplicationInsights": "azurerm_spring_cloud_application_insights_application_performance_monitoring",
    "AppDynamics": "azurerm_spring_cloud_app_dynamics_application_performance_monitoring",
}


def _value(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _need(obj: Any, key: str, resource_id: ResourceId, message: str) -> Any:
    value = _value(obj, key)
    if value is None:
        raise ResolveError(resource_id, message)
    return value


def resolve_spring_binding(client: Any, resource_id: ResourceId) -> str:
    """Resolve an app binding from the parameters it carries."""
    response = client.get(resource_id, _SPRING_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    params = _need(
        props, "bindingParameters", resource_id, "unexpected nil properties.bindingParams in response"
    )
    if _value(params, "apiType") is not None:
        return "azurerm_spring_cloud_app_cosmosdb_association"
    if _value(params, "useSsl") is not None:
        return "azurerm_spring_cloud_app_redis_association"
    if _value(params, "databaseName") is not None and _value(params, "username") is not None:
        return "azurerm_spring_cloud_app_mysql_association"
    raise ResolveError(resource_id, "unknown spring binding type")


def resolve_spring_deployment(client: Any, resource_id: ResourceId) -> str:
    """Resolve a deployment from the type of its user source."""
    response = client.get(resource_id, _SPRING_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    source = _need(props, "source", resource_id, "unexpected nil properties.source in response")
    kind = _value(source, "type")
    try:
        return _DEPLOYMENT_SOURCES[kind]
    except (KeyError, TypeError):
        raise ResolveError(resource_id, f"unknown spring cloud deployment source type: {kind}") from None


def resolve_spring_apm(client: Any, resource_id: ResourceId) -> str:
    """Resolve an APM setting from ``properties.type`` in the raw response."""
    response = client.get(resource_id, _SPRING_APM_API_VERSION)
    if not isinstance(response, dict):
        raise ResolveError(
            resource_id, f'GET on "{resource_id}": response is not a map: {type(response).__name__}'
        )
    if "properties" not in response:
        raise ResolveError(resource_id, f'response of GET on "{resource_id}" has no `properties`')
    props = response["properties"]
    if not isinstance(props, dict):
        raise ResolveError(
            resource_id, f'GET on "{resource_id}": response.properties is not a map: {type(props).__name__}'
        )
    kind = props.get("type")
    if not isinstance(kind, str):
        raise ResolveError(
            resource_id,
            f'GET on "{resource_id}": response.properties.type is not a string: {type(kind).__name__}',
        )
    try:
        return _APMS[kind]
    except KeyError:
        raise ResolveError(resource_id, f"unknown spring APM type: {kind}") from None