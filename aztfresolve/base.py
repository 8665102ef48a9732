"""Common types for resolving a resource ID to a single Terraform resource type."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


class ResolveError(Exception):
    """A resource ID could not be resolved to one Terraform resource type."""

    def __init__(self, resource_id: Any, message: str) -> None:
        super().__init__(f"{resource_id}: {message}")
        self.resource_id = resource_id
        self.message = message


@dataclass(frozen=True)
class Resolver:
    """A resolving function together with the resource types it can produce."""

    resolve_fn: Callable[[Any, Any], str]
    resource_types: tuple[str, ...]

    def resolve(self, client: Any, resource_id: Any) -> str:
        """Return the Terraform resource type for ``resource_id``."""
        return self.resolve_fn(client, resource_id)