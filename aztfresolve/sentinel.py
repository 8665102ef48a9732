"""Resolvers for Microsoft Sentinel data connectors, alert rules and ML analytics settings."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_SECURITY_INSIGHTS_API_VERSION = "2022-09-01-preview"

SENTINEL_DATA_CONNECTOR_TYPES = (
    "azurerm_sentinel_data_connector_microsoft_cloud_app_security",
    "azurerm_sentinel_data_connector_azure_active_directory",
    "azurerm_sentinel_data_connector_office_365",
    "azurerm_sentinel_data_connector_office_atp",
    "azurerm_sentinel_data_connector_threat_intelligence",
    "azurerm_sentinel_data_connector_aws_s3",
    "azurerm_sentinel_data_connector_aws_cloud_trail",
    "azurerm_sentinel_data_connector_azure_security_center",
    "azurerm_sentinel_data_connector_microsoft_defender_advanced_threat_protection",
    "azurerm_sentinel_data_connector_azure_advanced_threat_protection",
    "azurerm_sentinel_data_connector_office_365_project",
    "azurerm_sentinel_data_connector_dynamics_365",
    "azurerm_sentinel_data_connector_iot",
    "azurerm_sentinel_data_connector_office_irm",
    "azurerm_sentinel_data_connector_office_power_bi",
    "azurerm_sentinel_data_connector_microsoft_threat_protection",
    "azurerm_sentinel_data_connector_threat_intelligence_taxii",
    "azurerm_sentinel_data_connector_microsoft_threat_intelligence",
)
SENTINEL_ALERT_RULE_TYPES = (
    "azurerm_sentinel_alert_rule_nrt",
    "azurerm_sentinel_alert_rule_fusion",
    "azurerm_sentinel_alert_rule_machine_learning_behavior_analytics",
    "azurerm_sentinel_alert_rule_ms_security_incident",
    "azurerm_sentinel_alert_rule_scheduled",
    "azurerm_sentinel_alert_rule_threat_intelligence",
)
SENTINEL_ML_ANALYTICS_SETTING_TYPES = (
    "azurerm_sentinel_alert_rule_anomaly_built_in",
    "azurerm_sentinel_alert_rule_anomaly_duplicate",
)

_DATA_CONNECTORS = {
    "MicrosoftCloudAppSecurity": "azurerm_sentinel_data_connector_microsoft_cloud_app_security",
    "AzureActiveDirectory": "azurerm_sentinel_data_connector_azure_active_directory",
    "Office365": "azurerm_sentinel_data_connector_office_365",
    "OfficeIRM": "azurerm_sentinel_data_connector_office_irm",
    "OfficePowerBI": "azurerm_sentinel_data_connector_office_power_bi",
    "Office365Project": "azurerm_sentinel_data_connector_office_365_project",
    "OfficeATP": "azurerm_sentinel_data_connector_office_atp",
    "ThreatIntelligence": "azurerm_sentinel_data_connector_threat_intelligence",
    "AmazonWebServicesS3": "azurerm_sentinel_data_connector_aws_s3",
    "AmazonWebServicesCloudTrail": "azurerm_sentinel_data_connector_aws_cloud_trail",
    "AzureSecurityCenter": "azurerm_sentinel_data_connector_azure_security_center",
    "MicrosoftDefenderAdvancedThreatProtection": (
        "azurerm_sentinel_data_connector_microsoft_defender_advanced_threat_protection"
    ),
    "AzureAdvancedThreatProtection": "azurerm_sentinel_data_connector_azure_advanced_threat_protection",
    "Dynamics365": "azurerm_sentinel_data_connector_dynamics_365",
    "IOT": "azurerm_sentinel_data_connector_iot",
    "MicrosoftThreatProtection": "azurerm_sentinel_data_connector_microsoft_threat_protection",
    "ThreatIntelligenceTaxii": "azurerm_sentinel_data_connector_threat_intelligence_taxii",
    "MicrosoftThreatIntelligence": "azurerm_sentinel_data_connector_microsoft_threat_intelligence",
}
_ALERT_RULES = {
    "NRT": "azurerm_sentinel_alert_rule_nrt",
    "Fusion": "azurerm_sentinel_alert_rule_fusion",
    "MLBehaviorAnalytics": "azurerm_sentinel_alert_rule_machine_learning_behavior_analytics",
    "MicrosoftSecurityIncidentCreation": "azurerm_sentinel_alert_rule_ms_security_incident",
    "Scheduled": "azurerm_sentinel_alert_rule_scheduled",
    "ThreatIntelligence": "azurerm_sentinel_alert_rule_threat_intelligence",
}
_ML_ANALYTICS_SETTINGS = {
    # Built-in and duplicated anomaly rules share one kind; the built-in one is assumed.
    "Anomaly": "azurerm_sentinel_alert_rule_anomaly_built_in",
}


def _by_kind(client: Any, resource_id: ResourceId, table: dict[str, str], what: str) -> str:
    response = client.get(resource_id, _SECURITY_INSIGHTS_API_VERSION)
    if not isinstance(response, dict):
        raise ResolveError(resource_id, "unexpected nil model in response")
    kind = response.get("kind")
    try:
        return table[kind]
    except (KeyError, TypeError):
        raise ResolveError(resource_id, f"unknown {what} type: {kind}") from None


def resolve_sentinel_data_connector(client: Any, resource_id: ResourceId) -> str:
    """Resolve a Sentinel data connector by its kind."""
    return _by_kind(client, resource_id, _DATA_CONNECTORS, "data connector")


def resolve_sentinel_alert_rule(client: Any, resource_id: ResourceId) -> str:
    """Resolve a Sentinel alert rule by its kind."""
    return _by_kind(client, resource_id, _ALERT_RULES, "alert rule")


def resolve_sentinel_ml_analytics_setting(client: Any, resource_id: ResourceId) -> str:
    """Resolve a Sentinel security ML analytics setting by its kind."""
    return _by_kind(client, resource_id, _ML_ANALYTICS_SETTINGS, "security ML analytics setting")