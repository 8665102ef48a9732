import pytest

from aztfresolve.base import ResolveError
from aztfresolve.monitor import (
    ALERT_PROCESSING_RULE_TYPES,
    WEB_TEST_TYPES,
    resolve_alert_processing_rule,
    resolve_cost_scheduled_action,
    resolve_log_analytics_data_source,
    resolve_scheduled_query_rule,
    resolve_web_test,
)
from aztfresolve.resource_id import parse_resource_id

RG = "/subscriptions/sub/resourceGroups/rg"
RULE = parse_resource_id(RG + "/providers/Microsoft.AlertsManagement/actionRules/rule")
WEBTEST = parse_resource_id(RG + "/providers/Microsoft.Insights/webTests/wt")
QUERY = parse_resource_id(RG + "/providers/Microsoft.Insights/scheduledQueryRules/q")
SOURCE = parse_resource_id(
    RG + "/providers/Microsoft.OperationalInsights/workspaces/ws/dataSources/ds"
)
COST = parse_resource_id("/subscriptions/sub/providers/Microsoft.CostManagement/scheduledActions/a")

PREFIX = (
    "Microsoft.WindowsAzure.Management.Monitoring.Alerts.Models."
    "Microsoft.AppInsights.Nexus.DataContracts.Resources.ScheduledQueryRules."
)


class FakeClient:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, resource_id, api_version):
        self.calls.append(str(resource_id))
        return self.response


@pytest.mark.parametrize(
    "action, expected",
    [
        ("AddActionGroups", "azurerm_monitor_alert_processing_rule_action_group"),
        ("RemoveAllActionGroups", "azurerm_monitor_alert_processing_rule_suppression"),
    ],
)
def test_alert_processing_rule(action, expected):
    client = FakeClient({"properties": {"actions": [{"actionType": action}]}})
    result = resolve_alert_processing_rule(client, RULE)
    assert result == expected
    assert result in ALERT_PROCESSING_RULE_TYPES
    assert client.calls == [str(RULE)]


def test_alert_processing_rule_needs_exactly_one_action():
    two = {"properties": {"actions": [{"actionType": "AddActionGroups"}] * 2}}
    with pytest.raises(ResolveError, match="expect 1 action, got=2"):
        resolve_alert_processing_rule(FakeClient(two), RULE)
    with pytest.raises(ResolveError, match="expect 1 action, got=0"):
        resolve_alert_processing_rule(FakeClient({"properties": {}}), RULE)


def test_alert_processing_rule_errors():
    with pytest.raises(ResolveError, match="unexpected nil property in response"):
        resolve_alert_processing_rule(FakeClient({}), RULE)
    with pytest.raises(ResolveError, match="unknown action type"):
        resolve_alert_processing_rule(
            FakeClient({"properties": {"actions": [{"actionType": "Other"}]}}), RULE
        )


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("ping", "azurerm_application_insights_web_test"),
        ("multistep", "azurerm_application_insights_web_test"),
        ("standard", "azurerm_application_insights_standard_web_test"),
    ],
)
def test_web_test(kind, expected):
    result = resolve_web_test(FakeClient({"kind": kind}), WEBTEST)
    assert result == expected
    assert result in WEB_TEST_TYPES


def test_web_test_missing_kind():
    with pytest.raises(ResolveError, match="unexpected nil kind in response"):
        resolve_web_test(FakeClient({}), WEBTEST)


@pytest.mark.parametrize(
    "action, expected",
    [
        ("AlertingAction", "azurerm_monitor_scheduled_query_rules_alert_v2"),
        ("LogToMetricAction", "azurerm_monitor_scheduled_query_rules_log"),
    ],
)
def test_scheduled_query_rule(action, expected):
    client = FakeClient({"properties": {"action": {"odata.type": PREFIX + action}}})
    assert resolve_scheduled_query_rule(client, QUERY) == expected


def test_scheduled_query_rule_errors():
    with pytest.raises(ResolveError, match="unexpected nil properties.action in response"):
        resolve_scheduled_query_rule(FakeClient({"properties": {}}), QUERY)
    with pytest.raises(ResolveError, match="unknown monitor scheduled query rule action type"):
        resolve_scheduled_query_rule(
            FakeClient({"properties": {"action": {"odata.type": "x"}}}), QUERY
        )


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("WindowsPerformanceCounter", "azurerm_log_analytics_datasource_windows_performance_counter"),
        ("WindowsEvent", "azurerm_log_analytics_datasource_windows_event"),
    ],
)
def test_log_analytics_data_source(kind, expected):
    assert resolve_log_analytics_data_source(FakeClient({"kind": kind}), SOURCE) == expected


def test_log_analytics_data_source_unknown():
    with pytest.raises(ResolveError, match="unknown data source kind: LinuxSyslog"):
        resolve_log_analytics_data_source(FakeClient({"kind": "LinuxSyslog"}), SOURCE)


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("Email", "azurerm_cost_management_scheduled_action"),
        ("InsightAlert", "azurerm_cost_anomaly_alert"),
    ],
)
def test_cost_scheduled_action(kind, expected):
    client = FakeClient({"kind": kind})
    assert resolve_cost_scheduled_action(client, COST) == expected
    assert client.calls == [str(COST)]


def test_cost_scheduled_action_errors():
    with pytest.raises(ResolveError, match="unexpected nil kind in response"):
        resolve_cost_scheduled_action(FakeClient({}), COST)
    with pytest.raises(ResolveError, match="unknown costmanagement scheduled action kind: Other"):
        resolve_cost_scheduled_action(FakeClient({"kind": "Other"}), COST)