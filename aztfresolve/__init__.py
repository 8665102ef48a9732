"""Resolve Azure resource IDs to a single Terraform azurerm resource type via the ARM API."""

__version__ = "0.1.0"