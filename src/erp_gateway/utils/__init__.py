"""Shared utilities for erp-gateway."""
