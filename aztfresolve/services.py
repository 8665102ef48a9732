"""Resolvers for Bot Service bots and channels and API Management identity providers."""

from __future__ import annotations

from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_BOT_SERVICE_API_VERSION = "2022-09-15"

BOT_TYPES = (
    "azurerm_bot_service_azure_bot",
    "azurerm_bot_channels_registration",
    "azurerm_bot_web_app",
)
BOT_CHANNEL_TYPES = (
    "azurerm_bot_channel_directline",
    "azurerm_bot_channel_sms",
    "azurerm_bot_channel_line",
    "azurerm_bot_channel_alexa",
    "azurerm_bot_channel_direct_line_speech",
    "azurerm_bot_channel_slack",
    "azurerm_bot_channel_facebook",
    "azurerm_bot_channel_email",
    "azurerm_bot_channel_ms_teams",
    "azurerm_bot_channel_web_chat",
)
API_MANAGEMENT_IDENTITY_PROVIDER_TYPES = (
    "azurerm_api_management_identity_provider_aad",
    "azurerm_api_management_identity_provider_aadb2c",
    "azurerm_api_management_identity_provider_facebook",
    "azurerm_api_management_identity_provider_google",
    "azurerm_api_management_identity_provider_microsoft",
    "azurerm_api_management_identity_provider_twitter",
)

_BOTS = {
    "azurebot": "azurerm_bot_service_azure_bot",
    "bot": "azurerm_bot_channels_registration",
    "sdk": "azurerm_bot_web_app",
}
_CHANNELS = {
    "DirectLineChannel": "azurerm_bot_channel_directline",
    "SmsChannel": "azurerm_bot_channel_sms",
    "LineChannel": "azurerm_bot_channel_line",
    "AlexaChannel": "azurerm_bot_channel_alexa",
    "DirectLineSpeechChannel": "azurerm_bot_channel_direct_line_speech",
    "SlackChannel": "azurerm_bot_channel_slack",
    "FacebookChannel": "azurerm_bot_channel_facebook",
    "EmailChannel": "azurerm_bot_channel_email",
    "MsTeamsChannel": "azurerm_bot_channel_ms_teams",
    "WebChatChannel": "azurerm_bot_channel_web_chat",
}
_IDENTITY_PROVIDERS = {
    "AAD": "azurerm_api_management_identity_provider_aad",
    "AADB2C": "azurerm_api_management_identity_provider_aadb2c",
    "FACEBOOK": "azurerm_api_management_identity_provider_facebook",
    "GOOGLE": "azurerm_api_management_identity_provider_google",
    "MICROSOFT": "azurerm_api_management_identity_provider_microsoft",
    "TWITTER": "azurerm_api_management_identity_provider_twitter",
}


def _value(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def resolve_bot(client: Any, resource_id: ResourceId) -> str:
    """Resolve a bot by its kind."""
    response = client.get(resource_id, _BOT_SERVICE_API_VERSION)
    kind = _value(response, "kind")
    if kind is None:
        raise ResolveError(resource_id, "unexpected nil kind in response")
    try:
        return _BOTS[kind]
    except (KeyError, TypeError):
        raise ResolveError(resource_id, f"unknown bot kind: {kind}") from None


def resolve_bot_channel(client: Any, resource_id: ResourceId) -> str:
    """Resolve a bot channel by the channel name in its properties."""
    response = client.get(resource_id, _BOT_SERVICE_API_VERSION)
    props = _value(response, "properties")
    if props is None:
        raise ResolveError(resource_id, "unexpected nil properties in response")
    channel = _value(props, "channelName")
    try:
        return _CHANNELS[channel]
    except (KeyError, TypeError):
        raise ResolveError(resource_id, f"unknown bot channel: {channel}") from None


def resolve_api_management_identity_provider(client: Any, resource_id: ResourceId) -> str:
    """Resolve an identity provider from its name, which is its type; no request is made."""
    provider = resource_id.names()[1]
    try:
        return _IDENTITY_PROVIDERS[provider.upper()]
    except KeyError:
        raise ResolveError(resource_id, f"unknown identity provider type: {provider}") from None