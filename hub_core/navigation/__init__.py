"""
Role-based navigation for MediGo Hub.

Usage:
    from hub_core.navigation import get_filtered_navigation

    entries = get_filtered_navigation(
        "STAFF", ["billing_manage", "reports_view"],
        staff_type="FINANCE", parent_entity_type="PLATFORM",
    )
"""

from .entries import NavigationEntry, NavigationSet, NAVIGATION_SETS, entry_from_module
from .table import NAVIGATION_TABLE
from .filter import get_filtered_navigation, navigation_for, resolve_navigation_set

__all__ = [
    "NavigationEntry",
    "NavigationSet",
    "NAVIGATION_SETS",
    "NAVIGATION_TABLE",
    "entry_from_module",
    "get_filtered_navigation",
    "navigation_for",
    "resolve_navigation_set",
]
