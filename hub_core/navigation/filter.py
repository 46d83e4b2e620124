# =============================================================================
# hub_core/navigation/filter.py
# Navigation Filter Engine
# =============================================================================
"""
Turns an identity's role, sub-types, verification status and permissions
into the ordered list of navigation entries for the header and sidebar.

Everything here runs during page render, so it never raises: unknown or
inconsistent input produces an empty list.
"""

from __future__ import annotations
from typing import Any, Iterable, List, Optional, Union

from hub_core.errors import MediGoHubError, fail_closed
from hub_core.identity import (
    Identity,
    ParentEntityType,
    PermissionSet,
    ProviderType,
    Role,
    StaffType,
    VerificationStatus,
    parse_enum,
    parse_role,
)
from hub_core.logging import get_logger

from .entries import NAVIGATION_SETS, NavigationEntry, NavigationSet
from .table import lookup

logger = get_logger(__name__)

Permissions = Union[PermissionSet, Iterable[str], None]


def resolve_navigation_set(
    role: Any,
    staff_type: Any = None,
    provider_type: Any = None,
    parent_entity_type: Any = None,
    verification_status: Any = None,
) -> Optional[NavigationSet]:
    """
    Pick the navigation set for the given discriminants, or None.

    Providers that are not VERIFIED always get the pending-verification
    set, whatever their provider type.
    """
    try:
        role = parse_role(role)
        provider = parse_enum(ProviderType, provider_type, "provider_type")
        staff = parse_enum(StaffType, staff_type, "staff_type")
        parent = parse_enum(ParentEntityType, parent_entity_type, "parent_entity_type")
        verification = parse_enum(
            VerificationStatus, verification_status, "verification_status"
        )
    except MediGoHubError as e:
        logger.warning(f"Navigation unavailable: {e}")
        return None

    if role is Role.STAFF and staff is None:
        staff = StaffType.ADMIN

    if role is Role.PROVIDER and verification is not VerificationStatus.VERIFIED:
        if staff is not None or parent is not None:
            return None
        return NavigationSet.PENDING_VERIFICATION

    nav_set = lookup((role, provider, staff, parent))
    if nav_set is None:
        logger.warning(
            f"No navigation for role={role.value} provider_type={provider} "
            f"staff_type={staff} parent_entity_type={parent}"
        )
    return nav_set


@fail_closed(list)
def get_filtered_navigation(
    role: Any,
    permissions: Permissions,
    staff_type: Any = None,
    provider_type: Any = None,
    parent_entity_type: Any = None,
    verification_status: Any = None,
) -> List[NavigationEntry]:
    """
    Ordered navigation entries visible to an identity.

    An entry is kept when it is core or when ``permissions`` intersect its
    required permissions. Order is the declaration order of the navigation
    set, independent of the permissions.
    """
    nav_set = resolve_navigation_set(
        role,
        staff_type=staff_type,
        provider_type=provider_type,
        parent_entity_type=parent_entity_type,
        verification_status=verification_status,
    )
    if nav_set is None:
        return []

    granted = PermissionSet.of(permissions)
    return [entry for entry in NAVIGATION_SETS[nav_set] if entry.is_visible_to(granted)]


def navigation_for(identity: Optional[Identity]) -> List[NavigationEntry]:
    """Navigation for a full identity; anonymous sessions get nothing."""
    if identity is None:
        return []
    return get_filtered_navigation(
        identity.role,
        identity.permissions,
        staff_type=identity.staff_type,
        provider_type=identity.provider_type,
        parent_entity_type=identity.parent_entity_type,
        verification_status=identity.verification_status,
    )
