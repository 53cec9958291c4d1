#!/usr/bin/env python3
"""Utility functions for au-revoir-bitbucket."""

from typing import FrozenSet


def strip_org_prefix(full_name: str, organization: str) -> str:
    """Map a Bitbucket full name to the bare repository name.

    Example: 'acme/billing-api' with organization 'acme' -> 'billing-api'.
    Names outside the organization are returned unchanged.
    """
    prefix = f"{organization}/"
    if full_name.startswith(prefix):
        return full_name[len(prefix):]
    return full_name


def parse_name_list(value: str) -> FrozenSet[str]:
    """Parse a comma-separated list of repository names."""
    return frozenset(part.strip() for part in value.split(",") if part.strip())
