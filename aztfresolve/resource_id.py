"""Parsing and navigation of Azure Resource Manager resource IDs."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, replace
from typing import Optional

_SUBSCRIPTIONS = "subscriptions"
_RESOURCE_GROUPS = "resourceGroups"
_PROVIDERS = "providers"


@dataclass(frozen=True)
class ResourceId:
    """An ARM resource ID: a provider namespace, typed name segments and the scope it lives in.

    Built-in scopes (the tenant root, subscriptions and resource groups) have an
    empty provider. The tenant root has no segments and no scope.
    """

    provider: str = ""
    segments: tuple[tuple[str, str], ...] = ()
    scope: Optional[ResourceId] = None

    def names(self) -> list[str]:
        """Names of this ID's own segments, outermost first."""
        return [name for _, name in self.segments]

    def types(self) -> list[str]:
        """Resource types of this ID's own segments, outermost first."""
        return [rtype for rtype, _ in self.segments]

    def parent(self) -> Optional[ResourceId]:
        """The enclosing resource, or the enclosing scope for a top-level resource."""
        if self.provider and len(self.segments) > 1:
            return replace(self, segments=self.segments[:-1])
        return self.scope

    def parent_scope(self) -> Optional[ResourceId]:
        """The scope this resource is placed in."""
        return self.scope

    def root_scope(self) -> ResourceId:
        """The nearest built-in scope: a resource group, a subscription or the tenant root."""
        current = self
        while current.provider and current.scope is not None:
            current = current.scope
        return current

    def route_scope_string(self) -> str:
        """The provider namespace and resource types, e.g. ``/Microsoft.Web/sites/slots``."""
        prefix = f"/{self.provider}" if self.provider else ""
        return prefix + "".join(f"/{rtype}" for rtype in self.types())

    def scope_string(self) -> str:
        """The route of this ID prefixed by the routes of all enclosing scopes."""
        outer = self.scope.scope_string() if self.scope is not None else ""
        return outer + self.route_scope_string()

    def _path(self) -> str:
        prefix = self.scope._path() if self.scope is not None else ""
        if self.provider:
            prefix += f"/{_PROVIDERS}/{self.provider}"
        return prefix + "".join(f"/{rtype}/{name}" for rtype, name in self.segments)

    def __str__(self) -> str:
        return self._path() or "/"


def _take_name(queue: deque[str], rtype: str, text: str) -> str:
    if not queue:
        raise ValueError(f"resource type {rtype!r} has no name in {text!r}")
    return queue.popleft()


def parse_resource_id(text: str) -> ResourceId:
    """Parse an ARM resource ID string, raising ValueError when it is malformed."""
    if not text.startswith("/"):
        raise ValueError(f"resource id {text!r} must start with '/'")
    parts = text[1:].split("/") if len(text) > 1 else []
    if any(not part for part in parts):
        raise ValueError(f"resource id {text!r} has an empty segment")

    queue = deque(parts)
    node = ResourceId()
    if queue and queue[0].lower() == _SUBSCRIPTIONS.lower():
        queue.popleft()
        name = _take_name(queue, _SUBSCRIPTIONS, text)
        node = ResourceId(segments=((_SUBSCRIPTIONS, name),), scope=node)
        if queue and queue[0].lower() == _RESOURCE_GROUPS.lower():
            queue.popleft()
            name = _take_name(queue, _RESOURCE_GROUPS, text)
            node = ResourceId(segments=((_RESOURCE_GROUPS, name),), scope=node)

    while queue:
        keyword = queue.popleft()
        if keyword.lower() != _PROVIDERS:
            raise ValueError(f"expected {_PROVIDERS!r} segment, got {keyword!r} in {text!r}")
        if not queue:
            raise ValueError(f"missing provider namespace in {text!r}")
        namespace = queue.popleft()
        segments: list[tuple[str, str]] = []
        while queue and queue[0].lower() != _PROVIDERS:
            rtype = queue.popleft()
            segments.append((rtype, _take_name(queue, rtype, text)))
        if not segments:
            raise ValueError(f"no resource type under provider {namespace!r} in {text!r}")
        node = ResourceId(provider=namespace, segments=tuple(segments), scope=node)
    return node