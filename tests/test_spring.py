import pytest

from aztfresolve.base import ResolveError
from aztfresolve.resource_id import parse_resource_id
from aztfresolve.spring import (
    SPRING_APM_TYPES,
    SPRING_BINDING_TYPES,
    SPRING_DEPLOYMENT_TYPES,
    resolve_spring_apm,
    resolve_spring_binding,
    resolve_spring_deployment,
)

SPRING = "/subscriptions/sub1/resourceGroups/rg1/providers/Microsoft.AppPlatform/Spring/svc1"


class FakeClient:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, resource_id, api_version):
        self.calls.append((str(resource_id), api_version))
        return self.response


BINDING_ID = parse_resource_id(f"{SPRING}/apps/app1/bindings/b1")
DEPLOYMENT_ID = parse_resource_id(f"{SPRING}/apps/app1/deployments/d1")
APM_ID = parse_resource_id(f"{SPRING}/apms/apm1")


@pytest.mark.parametrize(
    "params, expected",
    [
        ({"apiType": "sql"}, "azurerm_spring_cloud_app_cosmosdb_association"),
        ({"useSsl": "true"}, "azurerm_spring_cloud_app_redis_association"),
        ({"databaseName": "db", "username": "admin"}, "azurerm_spring_cloud_app_mysql_association"),
    ],
)
def test_binding(params, expected):
    client = FakeClient({"properties": {"bindingParameters": params}})
    result = resolve_spring_binding(client, BINDING_ID)
    assert result == expected
    assert result in SPRING_BINDING_TYPES
    assert client.calls[0][0] == str(BINDING_ID)


def test_binding_cosmos_takes_precedence():
    params = {"apiType": "mongo", "useSsl": "true"}
    client = FakeClient({"properties": {"bindingParameters": params}})
    assert resolve_spring_binding(client, BINDING_ID) == "azurerm_spring_cloud_app_cosmosdb_association"


def test_binding_mysql_needs_username():
    client = FakeClient({"properties": {"bindingParameters": {"databaseName": "db"}}})
    with pytest.raises(ResolveError, match="unknown spring binding type"):
        resolve_spring_binding(client, BINDING_ID)


def test_binding_missing_parameters():
    with pytest.raises(ResolveError, match="bindingParams"):
        resolve_spring_binding(FakeClient({"properties": {}}), BINDING_ID)


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("BuildResult", "azurerm_spring_cloud_build_deployment"),
        ("Jar", "azurerm_spring_cloud_java_deployment"),
        ("Container", "azurerm_spring_cloud_container_deployment"),
    ],
)
def test_deployment(kind, expected):
    client = FakeClient({"properties": {"source": {"type": kind}}})
    result = resolve_spring_deployment(client, DEPLOYMENT_ID)
    assert result == expected
    assert result in SPRING_DEPLOYMENT_TYPES


def test_deployment_missing_source():
    with pytest.raises(ResolveError, match="properties.source"):
        resolve_spring_deployment(FakeClient({"properties": {}}), DEPLOYMENT_ID)


def test_deployment_unknown_source():
    client = FakeClient({"properties": {"source": {"type": "Source"}}})
    with pytest.raises(ResolveError, match="unknown spring cloud deployment source type"):
        resolve_spring_deployment(client, DEPLOYMENT_ID)


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("ElasticAPM", "azurerm_spring_cloud_elastic_application_performance_monitoring"),
        ("Dynatrace", "azurerm_spring_cloud_dynatrace_application_performance_monitoring"),
        ("NewRelic", "azurerm_spring_cloud_new_relic_application_performance_monitoring"),
        ("ApplicationInsights", "azurerm_spring_cloud_application_insights_application_performance_monitoring"),
        ("AppDynamics", "azurerm_spring_cloud_app_dynamics_application_performance_monitoring"),
    ],
)
def test_apm(kind, expected):
    client = FakeClient({"properties": {"type": kind}})
    result = resolve_spring_apm(client, APM_ID)
    assert result == expected
    assert result in SPRING_APM_TYPES
    assert client.calls == [(str(APM_ID), "2023-11-01-preview")]


@pytest.mark.parametrize(
    "response, pattern",
    [
        ([], "response is not a map"),
        ({}, "has no `properties`"),
        ({"properties": "x"}, "response.properties is not a map"),
        ({"properties": {"type": 3}}, "response.properties.type is not a string"),
        ({"properties": {"type": "Unknown"}}, "unknown spring APM type: Unknown"),
    ],
)
def test_apm_errors(response, pattern):
    with pytest.raises(ResolveError, match=pattern):
        resolve_spring_apm(FakeClient(response), APM_ID)