# =============================================================================
# hub_core/navigation/table.py
# Decision table: identity discriminants -> navigation set
# =============================================================================

from typing import Dict, Optional, Tuple

from hub_core.identity import ParentEntityType, ProviderType, Role, StaffType

from .entries import NavigationSet

# (role, provider_type, staff_type, parent_entity_type)
NavigationKey = Tuple[
    Role,
    Optional[ProviderType],
    Optional[StaffType],
    Optional[ParentEntityType],
]

# Tuples missing from this table have no navigation at all
NAVIGATION_TABLE: Dict[NavigationKey, NavigationSet] = {
    (Role.PLATFORM, None, None, None): NavigationSet.PLATFORM_ADMIN,

    (Role.STAFF, None, StaffType.FINANCE, ParentEntityType.PLATFORM):
        NavigationSet.PLATFORM_FINANCE_STAFF,
    (Role.STAFF, None, StaffType.SUPPORT, ParentEntityType.PLATFORM):
        NavigationSet.PLATFORM_SUPPORT_STAFF,
    (Role.STAFF, None, StaffType.ADMIN, ParentEntityType.PLATFORM):
        NavigationSet.PLATFORM_ADMIN_STAFF,
    (Role.STAFF, None, StaffType.FINANCE, ParentEntityType.PROVIDER):
        NavigationSet.PROVIDER_FINANCE_STAFF,
    (Role.STAFF, None, StaffType.SUPPORT, ParentEntityType.PROVIDER):
        NavigationSet.PROVIDER_SUPPORT_STAFF,
    (Role.STAFF, None, StaffType.ADMIN, ParentEntityType.PROVIDER):
        NavigationSet.PROVIDER_ADMIN_STAFF,

    (Role.PROVIDER, ProviderType.PHARMACY, None, None): NavigationSet.PHARMACY,
    (Role.PROVIDER, ProviderType.LABORATORY, None, None): NavigationSet.LABORATORY,
    (Role.PROVIDER, ProviderType.MEDICAL_CENTER, None, None): NavigationSet.MEDICAL_CENTER,
    (Role.PROVIDER, ProviderType.EMERGENCY, None, None): NavigationSet.EMERGENCY,
    (Role.PROVIDER, ProviderType.HOMECARE, None, None): NavigationSet.HOMECARE,
    (Role.PROVIDER, ProviderType.OFFICE_SPECIALIST, None, None): NavigationSet.SPECIALIST,
    (Role.PROVIDER, ProviderType.VIRTUAL_SPECIALIST, None, None): NavigationSet.SPECIALIST,
}


def lookup(key: NavigationKey) -> Optional[NavigationSet]:
    return NAVIGATION_TABLE.get(key)
