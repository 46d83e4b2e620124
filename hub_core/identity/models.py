# =============================================================================
# hub_core/identity/models.py
# Identity Model: roles, sub-types, permissions and the session identity
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple, Type, TypeVar, Union

from hub_core.errors import IdentityError, UnknownRoleError


# =============================================================================
# ENUMERATIONS
# =============================================================================

class Role(str, Enum):
    """The closed set of roles that may sign in to the hub."""
    PLATFORM = "PLATFORM"
    PROVIDER = "PROVIDER"
    STAFF = "STAFF"


class ProviderType(str, Enum):
    MEDICAL_CENTER = "MEDICAL_CENTER"
    PHARMACY = "PHARMACY"
    LABORATORY = "LABORATORY"
    EMERGENCY = "EMERGENCY"
    HOMECARE = "HOMECARE"
    OFFICE_SPECIALIST = "OFFICE_SPECIALIST"
    VIRTUAL_SPECIALIST = "VIRTUAL_SPECIALIST"


class StaffType(str, Enum):
    FINANCE = "FINANCE"
    SUPPORT = "SUPPORT"
    ADMIN = "ADMIN"  # staff records without an explicit type


class ParentEntityType(str, Enum):
    """Whose organization a staff member belongs to."""
    PLATFORM = "PLATFORM"
    PROVIDER = "PROVIDER"


class VerificationStatus(str, Enum):
    PENDING = "PENDING"
    IN_REVIEW = "IN_REVIEW"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: Type[E], value: Any, field_name: str) -> Optional[E]:
    """
    Parse ``value`` into ``enum_cls``; ``None`` and "" mean absent.

    Raises:
        IdentityError: if the value is not a member of the enum
    """
    if value is None or value == "":
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise IdentityError(
            f"Unknown {field_name}: {value!r}",
            field=field_name,
        ) from None


def parse_role(value: Any) -> Role:
    """Parse a role, raising UnknownRoleError outside the closed set."""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        raise UnknownRoleError(f"Unknown role: {value!r}", role=str(value)) from None


# =============================================================================
# PERMISSIONS
# =============================================================================

WILDCARD_TOKEN = "all"


@dataclass(frozen=True)
class Wildcard:
    """Universal grant. Serialized as the token ``"all"``."""

    @property
    def token(self) -> str:
        return WILDCARD_TOKEN


@dataclass(frozen=True)
class Named:
    """A single named permission such as ``billing_manage``."""
    name: str

    @property
    def token(self) -> str:
        return self.name


Permission = Union[Wildcard, Named]

WILDCARD = Wildcard()


def parse_permission(token: Union[str, Wildcard, Named]) -> Permission:
    if isinstance(token, (Wildcard, Named)):
        return token
    if not isinstance(token, str) or not token:
        raise IdentityError(f"Invalid permission token: {token!r}", field="permissions")
    if token == WILDCARD_TOKEN:
        return WILDCARD
    return Named(token)


@dataclass(frozen=True)
class PermissionSet:
    """
    Immutable set of granted permissions.

    All permission checks in the hub go through ``allows`` / ``intersects``
    so that the wildcard short-circuit is applied in exactly one place.
    """
    wildcard: bool = False
    names: FrozenSet[str] = frozenset()

    @classmethod
    def of(cls, tokens: Optional[Iterable[Union[str, Permission]]] = None) -> PermissionSet:
        if isinstance(tokens, PermissionSet):
            return tokens
        if isinstance(tokens, str):
            # A bare string is one token, not an iterable of characters
            tokens = [tokens]
        wildcard = False
        names = set()
        for token in tokens or ():
            permission = parse_permission(token)
            if isinstance(permission, Wildcard):
                wildcard = True
            else:
                names.add(permission.name)
        return cls(wildcard=wildcard, names=frozenset(names))

    def allows(self, permission: Union[str, Permission]) -> bool:
        """True if the wildcard is held or the permission is named."""
        if self.wildcard:
            return True
        if isinstance(permission, Wildcard):
            return False
        name = permission.name if isinstance(permission, Named) else permission
        return name in self.names

    def intersects(self, required: Iterable[str]) -> bool:
        """True if any of ``required`` is granted. Empty ``required`` is never satisfied."""
        required = list(required)
        if not required:
            return False
        if self.wildcard:
            return True
        return any(name in self.names for name in required)

    def tokens(self) -> Tuple[str, ...]:
        """Serialized form: sorted names, wildcard first when held."""
        head = (WILDCARD_TOKEN,) if self.wildcard else ()
        return head + tuple(sorted(self.names))

    def __bool__(self) -> bool:
        return self.wildcard or bool(self.names)

    def __len__(self) -> int:
        return len(self.names) + (1 if self.wildcard else 0)


EMPTY_PERMISSIONS = PermissionSet()


# =============================================================================
# IDENTITY
# =============================================================================

@dataclass(frozen=True)
class Identity:
    """
    The authenticated user for the current session.

    Sub-type fields are only accepted for the role they belong to:
    ``provider_type`` for PROVIDER, ``staff_type`` and ``parent_entity_type``
    for STAFF. STAFF without a staff type becomes ``StaffType.ADMIN``.
    """
    id: str
    role: Role
    email: str = ""
    permissions: PermissionSet = field(default_factory=PermissionSet)
    name: Optional[str] = None
    display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_names: Optional[str] = None
    organization_name: Optional[str] = None
    license_number: Optional[str] = None
    provider_type: Optional[ProviderType] = None
    staff_type: Optional[StaffType] = None
    parent_entity_type: Optional[ParentEntityType] = None
    verification_status: Optional[VerificationStatus] = None
    status: AccountStatus = AccountStatus.ACTIVE

    def __post_init__(self):
        if not self.id:
            raise IdentityError("Identity requires an id", field="id")

        # Normalize plain strings passed by callers into enums
        object.__setattr__(self, "role", parse_role(self.role))
        object.__setattr__(self, "permissions", PermissionSet.of(self.permissions))
        object.__setattr__(
            self, "provider_type", parse_enum(ProviderType, self.provider_type, "provider_type")
        )
        object.__setattr__(
            self, "staff_type", parse_enum(StaffType, self.staff_type, "staff_type")
        )
        object.__setattr__(
            self,
            "parent_entity_type",
            parse_enum(ParentEntityType, self.parent_entity_type, "parent_entity_type"),
        )
        object.__setattr__(
            self,
            "verification_status",
            parse_enum(VerificationStatus, self.verification_status, "verification_status"),
        )
        object.__setattr__(
            self, "status", parse_enum(AccountStatus, self.status, "status") or AccountStatus.ACTIVE
        )

        if self.role is not Role.PROVIDER and self.provider_type is not None:
            raise IdentityError("provider_type is only valid for PROVIDER", field="provider_type")
        if self.role is not Role.STAFF:
            if self.staff_type is not None:
                raise IdentityError("staff_type is only valid for STAFF", field="staff_type")
            if self.parent_entity_type is not None:
                raise IdentityError(
                    "parent_entity_type is only valid for STAFF", field="parent_entity_type"
                )
        elif self.staff_type is None:
            object.__setattr__(self, "staff_type", StaffType.ADMIN)

        if self.role is Role.PROVIDER and self.verification_status is None:
            object.__setattr__(self, "verification_status", VerificationStatus.PENDING)

    # -------------------------------------------------------------------------
    # DERIVED VALUES
    # -------------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.status is AccountStatus.ACTIVE

    @property
    def is_verified_provider(self) -> bool:
        return (
            self.role is Role.PROVIDER
            and self.verification_status is VerificationStatus.VERIFIED
        )

    def label(self, placeholder: str = "Usuario") -> str:
        """
        Display name fallback chain: display_name, name, first + last names,
        organization name, then ``placeholder``. Never empty.
        """
        if self.display_name:
            return self.display_name
        if self.name:
            return self.name
        if self.first_name and self.last_names:
            return f"{self.first_name} {self.last_names}"
        if self.organization_name:
            return self.organization_name
        return placeholder

    # -------------------------------------------------------------------------
    # SERIALIZATION
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role.value,
            "email": self.email,
            "permissions": list(self.permissions.tokens()),
            "name": self.name,
            "display_name": self.display_name,
            "first_name": self.first_name,
            "last_names": self.last_names,
            "organization_name": self.organization_name,
            "license_number": self.license_number,
            "provider_type": self.provider_type.value if self.provider_type else None,
            "staff_type": self.staff_type.value if self.staff_type else None,
            "parent_entity_type": (
                self.parent_entity_type.value if self.parent_entity_type else None
            ),
            "verification_status": (
                self.verification_status.value if self.verification_status else None
            ),
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Identity:
        """
        Rebuild an identity from ``to_dict`` output.

        Raises:
            IdentityError: missing fields, wrong types or unknown sub-types
            UnknownRoleError: role outside the closed set
        """
        if not isinstance(raw, dict):
            raise IdentityError(f"Identity record must be a mapping, got {type(raw).__name__}")

        for required in ("id", "role"):
            if not raw.get(required):
                raise IdentityError(f"Identity record is missing '{required}'", field=required)

        permissions = raw.get("permissions", [])
        if not isinstance(permissions, list):
            raise IdentityError("permissions must be a list", field="permissions")

        optional_text = (
            "name", "display_name", "first_name", "last_names",
            "organization_name", "license_number",
        )
        for key in optional_text + ("email",):
            value = raw.get(key)
            if value is not None and not isinstance(value, str):
                raise IdentityError(f"{key} must be a string", field=key)

        return cls(
            id=str(raw["id"]),
            role=raw["role"],
            email=raw.get("email") or "",
            permissions=PermissionSet.of(permissions),
            provider_type=raw.get("provider_type"),
            staff_type=raw.get("staff_type"),
            parent_entity_type=raw.get("parent_entity_type"),
            verification_status=raw.get("verification_status"),
            status=raw.get("status") or AccountStatus.ACTIVE,
            **{key: raw.get(key) for key in optional_text},
        )
