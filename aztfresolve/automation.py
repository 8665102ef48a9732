"""Resolvers for Automation connections and variables and Logic App actions and triggers."""

from __future__ import annotations

import json
import re
from typing import Any

from .base import ResolveError
from .resource_id import ResourceId

_AUTOMATION_API_VERSION = "2022-08-08"
_LOGIC_API_VERSION = "2019-05-01"

AUTOMATION_CONNECTION_TYPES = (
    "azurerm_automation_connection_service_principal",
    "azurerm_automation_connection_certificate",
    "azurerm_automation_connection_classic_certificate",
    "azurerm_automation_connection",
)
AUTOMATION_VARIABLE_TYPES = (
    "azurerm_automation_variable_datetime",
    "azurerm_automation_variable_string",
    "azurerm_automation_variable_bool",
    "azurerm_automation_variable_int",
    "azurerm_automation_variable_object",
)
LOGIC_APP_ACTION_TYPES = ("azurerm_logic_app_action_custom", "azurerm_logic_app_action_http")
LOGIC_APP_TRIGGER_TYPES = (
    "azurerm_logic_app_trigger_recurrence",
    "azurerm_logic_app_trigger_custom",
    "azurerm_logic_app_trigger_http_request",
)

_CONNECTIONS = {
    "AzureServicePrincipal": "azurerm_automation_connection_service_principal",
    "Azure": "azurerm_automation_connection_certificate",
    "AzureClassicCertificate": "azurerm_automation_connection_classic_certificate",
}
_TRIGGERS = {
    "request": "azurerm_logic_app_trigger_http_request",
    "recurrence": "azurerm_logic_app_trigger_recurrence",
}

# The form the provider uses for datetime variables.
_DATE_PATTERN = re.compile(r'"\\/Date\((-?[0-9]+)\)\\/"')
_DECIMAL_PATTERN = re.compile(r"[+-]?[0-9]+")
_BOOL_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True", "0", "f", "F", "FALSE", "false", "False"})
_SIMPLE_ESCAPES = frozenset("abfnrtv\\")
_HEX = frozenset("0123456789abcdefABCDEF")
_OCTAL = frozenset("01234567")


def _value(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _need(obj: Any, key: str, resource_id: ResourceId, message: str) -> Any:
    value = _value(obj, key)
    if value is None:
        raise ResolveError(resource_id, message)
    return value


def resolve_automation_connection(client: Any, resource_id: ResourceId) -> str:
    """Resolve a connection by the name of its connection type."""
    response = client.get(resource_id, _AUTOMATION_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    conn_type = _need(
        props, "connectionType", resource_id, "unexpected nil properties.connectionType in response"
    )
    name = _need(
        conn_type, "name", resource_id, "unexpected nil property.connectionType.name in response"
    )
    if isinstance(name, str) and name in _CONNECTIONS:
        return _CONNECTIONS[name]
    return "azurerm_automation_connection"


def _in_range(text: str, bits: int) -> bool:
    if not _DECIMAL_PATTERN.fullmatch(text):
        return False
    number = int(text)
    return -(2 ** (bits - 1)) <= number < 2 ** (bits - 1)


def _escape_length(body: str, index: int, quote: str) -> int:
    """Length of the escape sequence at ``index``, or 0 if it is not a valid one."""
    if index + 1 >= len(body):
        return 0
    marker = body[index + 1]
    if marker in _SIMPLE_ESCAPES or marker == quote:
        return 2
    widths = {"x": 2, "u": 4, "U": 8}
    if marker in widths:
        digits = body[index + 2 : index + 2 + widths[marker]]
        if len(digits) != widths[marker] or not set(digits) <= _HEX:
            return 0
        code = int(digits, 16)
        if marker != "x" and (code > 0x10FFFF or 0xD800 <= code <= 0xDFFF):
            return 0
        return 2 + widths[marker]
    if marker in _OCTAL:
        digits = body[index + 1 : index + 4]
        if len(digits) != 3 or not set(digits) <= _OCTAL or int(digits, 8) > 255:
            return 0
        return 4
    return 0


def _is_quoted_literal(text: str) -> bool:
    """Whether ``text`` is a double-, single- or back-quoted string literal."""
    if len(text) < 2 or text[0] != text[-1] or text[0] not in "\"'`":
        return False
    quote, body = text[0], text[1:-1]
    if quote == "`":
        return "`" not in body
    if "\n" in body:
        return False
    index = 0
    characters = 0
    while index < len(body):
        char = body[index]
        if char == quote:
            return False
        if char == "\\":
            length = _escape_length(body, index, quote)
            if length == 0:
                return False
            index += length
        else:
            index += 1
        characters += 1
    return characters == 1 if quote == "'" else True


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _is_json(text: str) -> bool:
    try:
        json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return False
    return True


def resolve_automation_variable(client: Any, resource_id: ResourceId) -> str:
    """Resolve a variable by the shape of its serialized value."""
    response = client.get(resource_id, _AUTOMATION_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    value = _need(props, "value", resource_id, "unexpected nil properties.value in response")
    value = str(value)

    match = _DATE_PATTERN.fullmatch(value)
    if match and _in_range(match.group(1), 64):
        return "azurerm_automation_variable_datetime"
    if _is_quoted_literal(value):
        return "azurerm_automation_variable_string"
    if _in_range(value, 32):
        return "azurerm_automation_variable_int"
    if value in _BOOL_WORDS:
        return "azurerm_automation_variable_bool"
    if _is_json(value):
        return "azurerm_automation_variable_object"
    raise ResolveError(resource_id, f"can't resolve resource type from value: {json.dumps(value)}")


def _field(obj: dict, name: str) -> Any:
    """The value of ``name`` in ``obj``, matched case-insensitively; the last match wins."""
    found = None
    for key, value in obj.items():
        if key.lower() == name.lower():
            found = value
    if name in obj:
        found = obj[name]
    return found


def _workflow_entries(client: Any, resource_id: ResourceId, field: str) -> dict:
    response = client.get(resource_id.parent(), _LOGIC_API_VERSION)
    props = _need(response, "properties", resource_id, "unexpected nil property in response")
    definition = _value(props, "definition")
    if definition is None:
        return {}
    if not isinstance(definition, dict):
        raise ResolveError(resource_id, "unmarshaling definition: definition is not an object")
    entries = _field(definition, field)
    if entries is None:
        return {}
    if not isinstance(entries, dict):
        raise ResolveError(resource_id, f"unmarshaling definition: {field} is not an object")
    return entries


def _entry_type(entry: Any, resource_id: ResourceId) -> str:
    if entry is None:
        return ""
    if not isinstance(entry, dict):
        raise ResolveError(resource_id, "unmarshaling definition: entry is not an object")
    kind = _field(entry, "type")
    if kind is None:
        return ""
    if not isinstance(kind, str):
        raise ResolveError(resource_id, "unmarshaling definition: type is not a string")
    return kind


def resolve_logic_app_action(client: Any, resource_id: ResourceId) -> str:
    """Resolve an action from its type in the workflow definition."""
    actions = _workflow_entries(client, resource_id, "actions")
    if not actions:
        raise ResolveError(resource_id, "unexpected nil actions")
    name = resource_id.names()[1]
    if name not in actions:
        raise ResolveError(resource_id, f"can't find action with name {name}")
    if _entry_type(actions[name], resource_id).lower() == "http":
        return "azurerm_logic_app_action_http"
    return "azurerm_logic_app_action_custom"


def resolve_logic_app_trigger(client: Any, resource_id: ResourceId) -> str:
    """Resolve a trigger from its type in the workflow definition."""
    triggers = _workflow_entries(client, resource_id, "triggers")
    if not triggers:
        raise ResolveError(resource_id, "unexpected nil triggers")
    name = resource_id.names()[1]
    if name not in triggers:
        raise ResolveError(resource_id, f"can't find trigger with name {name}")
    kind = _entry_type(triggers[name], resource_id).lower()
    return _TRIGGERS.get(kind, "azurerm_logic_app_trigger_custom")