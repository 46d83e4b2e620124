"""
Identity model for MediGo Hub.

An Identity carries exactly one Role, the sub-type discriminators that belong
to that role, a verification status for providers and a PermissionSet.
"""

from .models import (
    Role,
    ProviderType,
    StaffType,
    ParentEntityType,
    VerificationStatus,
    AccountStatus,
    Wildcard,
    Named,
    Permission,
    WILDCARD,
    WILDCARD_TOKEN,
    PermissionSet,
    EMPTY_PERMISSIONS,
    Identity,
    parse_enum,
    parse_role,
    parse_permission,
)

__all__ = [
    "Role",
    "ProviderType",
    "StaffType",
    "ParentEntityType",
    "VerificationStatus",
    "AccountStatus",
    "Wildcard",
    "Named",
    "Permission",
    "WILDCARD",
    "WILDCARD_TOKEN",
    "PermissionSet",
    "EMPTY_PERMISSIONS",
    "Identity",
    "parse_enum",
    "parse_role",
    "parse_permission",
]
