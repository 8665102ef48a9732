"""The table of resolvers by resource route and parent scope, and the entry point to resolve an ID."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from . import (
    appservice,
    automation,
    compute,
    data,
    datafactory,
    machine_learning,
    monitor,
    network,
    recovery,
    sentinel,
    services,
    spring,
    storage,
    stream_analytics,
)
from .base import ResolveError, Resolver
from .client import ArmError
from .resource_id import ResourceId

# Parent scopes, written as ARM spells them; keys are built case-insensitively.
IN_RESOURCE_GROUP = "subscriptions/resourceGroups"
IN_SUBSCRIPTION = "subscriptions"
IN_LOG_WORKSPACE = "subscriptions/resourceGroups/Microsoft.OperationalInsights/workspaces"
IN_WEB_SITE = "subscriptions/resourceGroups/Microsoft.Web/sites"

_Entry = tuple[str, str, Callable[[Any, ResourceId], str], tuple[str, ...]]

_ENTRIES: list[_Entry] = [
    (
        "Microsoft.Compute/virtualMachines",
        IN_RESOURCE_GROUP,
        compute.resolve_virtual_machine,
        ("azurerm_linux_virtual_machine", "azurerm_windows_virtual_machine", "azurerm_virtual_machine"),
    ),
    (
        "Microsoft.Compute/virtualMachineScaleSets",
        IN_RESOURCE_GROUP,
        compute.resolve_virtual_machine_scale_set,
        (
            "azurerm_orchestrated_virtual_machine_scale_set",
            "azurerm_linux_virtual_machine_scale_set",
            "azurerm_windows_virtual_machine_scale_set",
        ),
    ),
    (
        "Microsoft.Compute/virtualMachines/dataDisks",
        IN_RESOURCE_GROUP,
        compute.resolve_virtual_machine_data_disk,
        (
            "azurerm_virtual_machine_implicit_data_disk_from_source",
            "azurerm_virtual_machine_data_disk_attachment",
        ),
    ),
    (
        "Microsoft.DevTestLab/labs/virtualMachines",
        IN_RESOURCE_GROUP,
        compute.resolve_dev_test_virtual_machine,
        ("azurerm_dev_test_linux_virtual_machine", "azurerm_dev_test_windows_virtual_machine"),
    ),
    (
        "Microsoft.Web/certificates",
        IN_RESOURCE_GROUP,
        appservice.resolve_app_service_certificate,
        ("azurerm_app_service_certificate", "azurerm_app_service_managed_certificate"),
    ),
    (
        "Microsoft.Web/sites",
        IN_RESOURCE_GROUP,
        appservice.resolve_app_service_site,
        (
            "azurerm_logic_app_standard",
            "azurerm_linux_function_app",
            "azurerm_windows_function_app",
            "azurerm_linux_web_app",
            "azurerm_windows_web_app",
        ),
    ),
    (
        "Microsoft.Web/sites/slots",
        IN_RESOURCE_GROUP,
        appservice.resolve_app_service_site_slot,
        (
            "azurerm_linux_function_app_slot",
            "azurerm_windows_function_app_slot",
            "azurerm_linux_web_app_slot",
            "azurerm_windows_web_app_slot",
        ),
    ),
    (
        "Microsoft.Web/sites/hybridConnectionNamespaces/relays",
        IN_RESOURCE_GROUP,
        appservice.resolve_app_service_hybrid_connection,
        ("azurerm_web_app_hybrid_connection", "azurerm_function_app_hybrid_connection"),
    ),
    (
        "Microsoft.ServiceLinker/linkers",
        IN_WEB_SITE,
        appservice.resolve_service_connector,
        ("azurerm_function_app_connection", "azurerm_app_service_connection"),
    ),
    (
        "Microsoft.CognitiveServices/accounts",
        IN_RESOURCE_GROUP,
        appservice.resolve_cognitive_account,
        ("azurerm_cognitive_account", "azurerm_ai_services"),
    ),
    (
        "Microsoft.ApiManagement/service/identityProviders",
        IN_RESOURCE_GROUP,
        services.resolve_api_management_identity_provider,
        services.API_MANAGEMENT_IDENTITY_PROVIDER_TYPES,
    ),
    ("Microsoft.BotService/botServices", IN_RESOURCE_GROUP, services.resolve_bot, services.BOT_TYPES),
    (
        "Microsoft.BotService/botServices/channels",
        IN_RESOURCE_GROUP,
        services.resolve_bot_channel,
        services.BOT_CHANNEL_TYPES,
    ),
    (
        "Microsoft.RecoveryServices/vaults/backupPolicies",
        IN_RESOURCE_GROUP,
        recovery.resolve_backup_protection_policy,
        recovery.BACKUP_PROTECTION_POLICY_TYPES,
    ),
    (
        "Microsoft.RecoveryServices/vaults/backupFabrics/protectionContainers/protectedItems",
        IN_RESOURCE_GROUP,
        recovery.resolve_backup_protected_item,
        recovery.BACKUP_PROTECTED_ITEM_TYPES,
    ),
    (
        "Microsoft.RecoveryServices/vaults/replicationFabrics/replicationProtectionContainers"
        "/replicationProtectedItems",
        IN_RESOURCE_GROUP,
        recovery.resolve_replication_protected_item,
        recovery.REPLICATION_PROTECTED_ITEM_TYPES,
    ),
    (
        "Microsoft.RecoveryServices/vaults/replicationPolicies",
        IN_RESOURCE_GROUP,
        recovery.resolve_replication_policy,
        recovery.REPLICATION_POLICY_TYPES,
    ),
    (
        "Microsoft.RecoveryServices/vaults/replicationFabrics",
        IN_RESOURCE_GROUP,
        recovery.resolve_replication_fabric,
        recovery.REPLICATION_FABRIC_TYPES,
    ),
    (
        "Microsoft.RecoveryServices/vaults/replicationFabrics/replicationProtectionContainers"
        "/replicationProtectionContainerMappings",
        IN_RESOURCE_GROUP,
        recovery.resolve_replication_protection_container_mapping,
        recovery.REPLICATION_PROTECTION_CONTAINER_MAPPING_TYPES,
    ),
    (
        "Microsoft.RecoveryServices/vaults/replicationFabrics/replicationNetworks/replicationNetworkMappings",
        IN_RESOURCE_GROUP,
        recovery.resolve_replication_network_mapping,
        recovery.REPLICATION_NETWORK_MAPPING_TYPES,
    ),
    (
        "Microsoft.DataProtection/backupVaults/backupPolicies",
        IN_RESOURCE_GROUP,
        recovery.resolve_data_protection_backup_policy,
        recovery.DATA_PROTECTION_BACKUP_POLICY_TYPES,
    ),
    (
        "Microsoft.DataProtection/backupVaults/backupInstances",
        IN_RESOURCE_GROUP,
        recovery.resolve_data_protection_backup_instance,
        recovery.DATA_PROTECTION_BACKUP_INSTANCE_TYPES,
    ),
    (
        "Microsoft.Synapse/workspaces/integrationRuntimes",
        IN_RESOURCE_GROUP,
        data.resolve_synapse_integration_runtime,
        data.SYNAPSE_INTEGRATION_RUNTIME_TYPES,
    ),
    (
        "Microsoft.Kusto/clusters/databases/dataConnections",
        IN_RESOURCE_GROUP,
        data.resolve_kusto_data_connection,
        data.KUSTO_DATA_CONNECTION_TYPES,
    ),
    (
        "Microsoft.DataShare/accounts/shares/dataSets",
        IN_RESOURCE_GROUP,
        data.resolve_data_share_dataset,
        data.DATA_SHARE_DATASET_TYPES,
    ),
    ("Microsoft.HDInsight/clusters", IN_RESOURCE_GROUP, data.resolve_hdinsight_cluster, data.HDINSIGHT_CLUSTER_TYPES),
    (
        "Microsoft.Workloads/sapVirtualInstances",
        IN_RESOURCE_GROUP,
        data.resolve_sap_virtual_instance,
        data.SAP_VIRTUAL_INSTANCE_TYPES,
    ),
    (
        "Microsoft.DigitalTwins/digitalTwinsInstances/endpoints",
        IN_RESOURCE_GROUP,
        storage.resolve_digital_twins_endpoint,
        storage.DIGITAL_TWINS_ENDPOINT_TYPES,
    ),
    (
        "Microsoft.StorageCache/caches/storageTargets",
        IN_RESOURCE_GROUP,
        storage.resolve_storage_cache_target,
        storage.STORAGE_CACHE_TARGET_TYPES,
    ),
    (
        "Microsoft.StorageMover/storageMovers/endpoints",
        IN_RESOURCE_GROUP,
        storage.resolve_storage_mover_endpoint,
        storage.STORAGE_MOVER_ENDPOINT_TYPES,
    ),
    (
        "Microsoft.Resources/deploymentScripts",
        IN_RESOURCE_GROUP,
        storage.resolve_deployment_script,
        storage.DEPLOYMENT_SCRIPT_TYPES,
    ),
    (
        "Microsoft.DataFactory/factories/triggers",
        IN_RESOURCE_GROUP,
        datafactory.resolve_data_factory_trigger,
        datafactory.DATA_FACTORY_TRIGGER_TYPES,
    ),
    (
        "Microsoft.DataFactory/factories/datasets",
        IN_RESOURCE_GROUP,
        datafactory.resolve_data_factory_dataset,
        datafactory.DATA_FACTORY_DATASET_TYPES,
    ),
    (
        "Microsoft.DataFactory/factories/dataflows",
        IN_RESOURCE_GROUP,
        datafactory.resolve_data_factory_data_flow,
        datafactory.DATA_FACTORY_DATA_FLOW_TYPES,
    ),
    (
        "Microsoft.DataFactory/factories/linkedservices",
        IN_RESOURCE_GROUP,
        datafactory.resolve_data_factory_linked_service,
        datafactory.DATA_FACTORY_LINKED_SERVICE_TYPES,
    ),
    (
        "Microsoft.DataFactory/factories/integrationRuntimes",
        IN_RESOURCE_GROUP,
        datafactory.resolve_data_factory_integration_runtime,
        datafactory.DATA_FACTORY_INTEGRATION_RUNTIME_TYPES,
    ),
    (
        "Microsoft.DataFactory/factories/credentials",
        IN_RESOURCE_GROUP,
        datafactory.resolve_data_factory_credential,
        datafactory.DATA_FACTORY_CREDENTIAL_TYPES,
    ),
    (
        "Microsoft.MachineLearningServices/workspaces/computes",
        IN_RESOURCE_GROUP,
        machine_learning.resolve_machine_learning_compute,
        machine_learning.MACHINE_LEARNING_COMPUTE_TYPES,
    ),
    (
        "Microsoft.MachineLearningServices/workspaces/datastores",
        IN_RESOURCE_GROUP,
        machine_learning.resolve_machine_learning_datastore,
        machine_learning.MACHINE_LEARNING_DATASTORE_TYPES,
    ),
    (
        "Microsoft.Automation/automationAccounts/connections",
        IN_RESOURCE_GROUP,
        automation.resolve_automation_connection,
        automation.AUTOMATION_CONNECTION_TYPES,
    ),
    (
        "Microsoft.Automation/automationAccounts/variables",
        IN_RESOURCE_GROUP,
        automation.resolve_automation_variable,
        automation.AUTOMATION_VARIABLE_TYPES,
    ),
    (
        "Microsoft.Logic/workflows/actions",
        IN_RESOURCE_GROUP,
        automation.resolve_logic_app_action,
        automation.LOGIC_APP_ACTION_TYPES,
    ),
    (
        "Microsoft.Logic/workflows/triggers",
        IN_RESOURCE_GROUP,
        automation.resolve_logic_app_trigger,
        automation.LOGIC_APP_TRIGGER_TYPES,
    ),
    (
        "Microsoft.SecurityInsights/dataConnectors",
        IN_LOG_WORKSPACE,
        sentinel.resolve_sentinel_data_connector,
        sentinel.SENTINEL_DATA_CONNECTOR_TYPES,
    ),
    (
        "Microsoft.SecurityInsights/alertRules",
        IN_LOG_WORKSPACE,
        sentinel.resolve_sentinel_alert_rule,
        sentinel.SENTINEL_ALERT_RULE_TYPES,
    ),
    (
        "Microsoft.SecurityInsights/securityMLAnalyticsSettings",
        IN_LOG_WORKSPACE,
        sentinel.resolve_sentinel_ml_analytics_setting,
        sentinel.SENTINEL_ML_ANALYTICS_SETTING_TYPES,
    ),
    (
        "Microsoft.OperationalInsights/workspaces/dataSources",
        IN_RESOURCE_GROUP,
        monitor.resolve_log_analytics_data_source,
        monitor.LOG_ANALYTICS_DATA_SOURCE_TYPES,
    ),
    (
        "Microsoft.Insights/scheduledQueryRules",
        IN_RESOURCE_GROUP,
        monitor.resolve_scheduled_query_rule,
        monitor.SCHEDULED_QUERY_RULE_TYPES,
    ),
    ("Microsoft.Insights/webtests", IN_RESOURCE_GROUP, monitor.resolve_web_test, monitor.WEB_TEST_TYPES),
    (
        "Microsoft.AlertsManagement/actionRules",
        IN_RESOURCE_GROUP,
        monitor.resolve_alert_processing_rule,
        monitor.ALERT_PROCESSING_RULE_TYPES,
    ),
    (
        "Microsoft.CostManagement/scheduledActions",
        IN_SUBSCRIPTION,
        monitor.resolve_cost_scheduled_action,
        monitor.COST_SCHEDULED_ACTION_TYPES,
    ),
    (
        "Microsoft.AppPlatform/Spring/apps/bindings",
        IN_RESOURCE_GROUP,
        spring.resolve_spring_binding,
        spring.SPRING_BINDING_TYPES,
    ),
    (
        "Microsoft.AppPlatform/Spring/apps/deployments",
        IN_RESOURCE_GROUP,
        spring.resolve_spring_deployment,
        spring.SPRING_DEPLOYMENT_TYPES,
    ),
    ("Microsoft.AppPlatform/Spring/apms", IN_RESOURCE_GROUP, spring.resolve_spring_apm, spring.SPRING_APM_TYPES),
    (
        "Microsoft.StreamAnalytics/streamingJobs/inputs",
        IN_RESOURCE_GROUP,
        stream_analytics.resolve_stream_analytics_input,
        stream_analytics.STREAM_ANALYTICS_INPUT_TYPES,
    ),
    (
        "Microsoft.StreamAnalytics/streamingJobs/outputs",
        IN_RESOURCE_GROUP,
        stream_analytics.resolve_stream_analytics_output,
        stream_analytics.STREAM_ANALYTICS_OUTPUT_TYPES,
    ),
    (
        "Microsoft.StreamAnalytics/streamingJobs/functions",
        IN_RESOURCE_GROUP,
        stream_analytics.resolve_stream_analytics_function,
        stream_analytics.STREAM_ANALYTICS_FUNCTION_TYPES,
    ),
    ("Microsoft.Cdn/profiles", IN_RESOURCE_GROUP, network.resolve_cdn_profile, network.CDN_PROFILE_TYPES),
    ("Microsoft.Network/virtualHubs", IN_RESOURCE_GROUP, network.resolve_virtual_hub, network.VIRTUAL_HUB_TYPES),
    (
        "Microsoft.Network/virtualHubs/bgpConnections",
        IN_RESOURCE_GROUP,
        network.resolve_virtual_hub_bgp_connection,
        network.VIRTUAL_HUB_BGP_CONNECTION_TYPES,
    ),
    (
        "Microsoft.Network/frontDoorWebApplicationFirewallPolicies",
        IN_RESOURCE_GROUP,
        network.resolve_frontdoor_firewall_policy,
        network.FRONTDOOR_FIREWALL_POLICY_TYPES,
    ),
    (
        "Microsoft.Network/networkWatchers/packetCaptures",
        IN_RESOURCE_GROUP,
        network.resolve_packet_capture,
        network.PACKET_CAPTURE_TYPES,
    ),
    (
        "PaloAltoNetworks.Cloudngfw/firewalls",
        IN_RESOURCE_GROUP,
        network.resolve_palo_alto_firewall,
        network.PALO_ALTO_FIREWALL_TYPES,
    ),
]


def _key(path: str) -> str:
    return "/" + path.upper()


def _build(entries: Iterable[_Entry]) -> dict[str, dict[str, Resolver]]:
    table: dict[str, dict[str, Resolver]] = {}
    for route, scope, fn, types in entries:
        table.setdefault(_key(route), {})[_key(scope)] = Resolver(fn, tuple(types))
    return table


RESOLVERS: dict[str, dict[str, Resolver]] = _build(_ENTRIES)


def get_resolver(resource_id: ResourceId) -> Resolver | None:
    """The resolver for ``resource_id``, or None if its type needs no API call to resolve."""
    route_key = resource_id.route_scope_string().upper()
    parent = resource_id.parent_scope()
    parent_key = parent.scope_string().upper() if parent is not None else ""
    return RESOLVERS.get(route_key, {}).get(parent_key)


def needs_api(resource_id: ResourceId) -> bool:
    """Whether resolving ``resource_id`` takes a call to the Azure API."""
    return get_resolver(resource_id) is not None


def resolve(resource_id: ResourceId, client: Any) -> str:
    """Resolve ``resource_id`` through the API to a single Terraform resource type."""
    resolver = get_resolver(resource_id)
    if resolver is None:
        raise ResolveError(resource_id, f'no resolver found for "{resource_id}"')
    try:
        return resolver.resolve(client, resource_id)
    except ResolveError as exc:
        raise ResolveError(resource_id, f'resolving "{resource_id}": {exc.message}') from exc
    except ArmError as exc:
        raise ResolveError(resource_id, f'resolving "{resource_id}": {exc}') from exc