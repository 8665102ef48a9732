"""Resolvers for alert processing rules, web tests, query rules, data sources and cost actions."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_ALERTS_MANAGEMENT_API_VERSION = "2021-08-08"
_APPLICATION_INSIGHTS_API_VERSION = "2022-06-15"
_SCHEDULED_QUERY_RULES_API_VERSION = "2018-04-16"
_OPERATIONAL_INSIGHTS_API_VERSION = "2020-08-01"
_COST_MANAGEMENT_API_VERSION = "2022-10-01"

ALERT_PROCESSING_RULE_TYPES = (
    "azurerm_monitor_alert_processing_rule_suppression",
    "azurerm_monitor_alert_processing_rule_action_group",
)
WEB_TEST_TYPES = (
    "azurerm_application_insights_web_test",
    "azurerm_application_insights_standard_web_test",
)
SCHEDULED_QUERY_RULE_TYPES = (
    "azurerm_monitor_scheduled_query_rules_log",
    "azurerm_monitor_scheduled_query_rules_alert_v2",
)
LOG_ANALYTICS_DATA_SOURCE_TYPES = (
    "azurerm_log_analytics_datasource_windows_performance_counter",
    "azurerm_log_analytics_datasource_windows_event",
)
COST_SCHEDULED_ACTION_TYPES = (
    "azurerm_cost_anomaly_alert",
    "azurerm_cost_management_scheduled_action",
)

_PROCESSING_RULE_ACTIONS = {
    "AddActionGroups": "azurerm_monitor_alert_processing_rule_action_group",
    "RemoveAllActionGroups": "azurerm_monitor_alert_processing_rule_suppression",
}
_CLASSIC_WEB_TEST_KINDS = frozenset({"ping", "multistep"})
_QUERY_RULE_ACTION_PREFIX = (
    "Microsoft.WindowsAzure.Management.Monitoring.Alerts.Models."
    "Microsoft.AppInsights.Nexus.DataContracts.Resources.ScheduledQueryRules."
)
_QUERY_RULE_ACTIONS = {
    _QUERY_RULE_ACTION_PREFIX + "AlertingAction": "azurerm_monitor_scheduled_query_rules_alert_v2",
    _QUERY_RULE_ACTION_PREFIX + "LogToMetricAction": "azurerm_monitor_scheduled_query_rules_log",
}
_DATA_SOURCES = {
    "WindowsPerformanceCounter": "azurerm_log_analytics_datasource_windows_performance_counter",
    "WindowsEvent": "azurerm_log_analytics_datasource_windows_event",
}
_SCHEDULED_ACTIONS = {
    "Email": "azurerm_cost_management_scheduled_action",
    "InsightAlert": "azurerm_cost_anomaly_alert",
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


def resolve_alert_processing_rule(client: Any, resource_id: ResourceId) -> str:
    """Resolve a processing rule by its single action: add action groups or suppress them."""
    response = client.get(resource_id, _ALERTS_MANAGEMENT_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    actions = _value(props, "actions")
    if not isinstance(actions, list):
        actions = []
    if len(actions) != 1:
        raise ResolveError(resource_id, f"expect 1 action, got={len(actions)}")
    (action,) = actions
    return _lookup(_PROCESSING_RULE_ACTIONS, _value(action, "actionType"), resource_id, "unknown action type")


def resolve_web_test(client: Any, resource_id: ResourceId) -> str:
    """Ping and multistep tests are classic web tests; any other kind is a standard test."""
    response = client.get(resource_id, _APPLICATION_INSIGHTS_API_VERSION)
    kind = _need(response, "kind", resource_id, "unexpected nil kind in response")
    if kind in _CLASSIC_WEB_TEST_KINDS:
        return "azurerm_application_insights_web_test"
    return "azurerm_application_insights_standard_web_test"


def resolve_scheduled_query_rule(client: Any, resource_id: ResourceId) -> str:
    """Tell alerting query rules from log-to-metric ones by their action."""
    response = client.get(resource_id, _SCHEDULED_QUERY_RULES_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    action = _need(props, "action", resource_id, "unexpected nil properties.action in response")
    return _lookup(
        _QUERY_RULE_ACTIONS,
        _value(action, "odata.type"),
        resource_id,
        "unknown monitor scheduled query rule action type",
    )


def resolve_log_analytics_data_source(client: Any, resource_id: ResourceId) -> str:
    """Resolve a workspace data source by its kind."""
    response = client.get(resource_id, _OPERATIONAL_INSIGHTS_API_VERSION)
    kind = _need(response, "kind", resource_id, "unexpected nil kind in response")
    return _lookup(_DATA_SOURCES, kind, resource_id, "unknown data source kind")


def resolve_cost_scheduled_action(client: Any, resource_id: ResourceId) -> str:
    """Tell e-mailed scheduled actions from anomaly alerts."""
    response = client.get(resource_id, _COST_MANAGEMENT_API_VERSION)
    kind = _need(response, "kind", resource_id, "unexpected nil kind in response")
    return _lookup(_SCHEDULED_ACTIONS, kind, resource_id, "unknown costmanagement scheduled action kind")