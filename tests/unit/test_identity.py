# =============================================================================
# tests/unit/test_identity.py
# Unit Tests for the Identity Model
# =============================================================================

import pytest


class TestPermissionSet:
    """Test wildcard and named permission semantics"""

    def test_wildcard_allows_undeclared_permissions(self):
        """Holding 'all' grants strings no registry declares"""
        from hub_core.identity import PermissionSet

        granted = PermissionSet.of(["all"])

        assert granted.allows("all")
        assert granted.allows("billing_manage")
        assert granted.allows("definitely_not_a_permission")

    def test_named_permission_is_literal(self):
        """Without the wildcard only the exact token matches"""
        from hub_core.identity import PermissionSet

        granted = PermissionSet.of(["reports_view"])

        assert granted.allows("reports_view")
        assert not granted.allows("reports")
        assert not granted.allows("dashboard_access")
        assert not granted.allows("all")

    def test_bare_string_is_one_token(self):
        """A string is not iterated character by character"""
        from hub_core.identity import PermissionSet

        granted = PermissionSet.of("all")

        assert granted.wildcard
        assert not granted.names

    def test_intersects_empty_requirement_is_false(self):
        """An entry with no required permissions is never unlocked by grants"""
        from hub_core.identity import PermissionSet

        assert not PermissionSet.of(["all"]).intersects([])
        assert not PermissionSet.of(["reports_view"]).intersects(set())

    def test_intersects_any_match(self):
        from hub_core.identity import PermissionSet

        granted = PermissionSet.of(["orders_process"])

        assert granted.intersects(["orders_view", "orders_process"])
        assert not granted.intersects(["inventory_view", "inventory_manage"])

    def test_tokens_serialize_wildcard_first(self):
        from hub_core.identity import PermissionSet

        granted = PermissionSet.of(["reports_view", "all", "billing_manage"])

        assert granted.tokens() == ("all", "billing_manage", "reports_view")

    def test_tagged_union_members(self):
        """Tokens parse into Wildcard or Named"""
        from hub_core.identity import WILDCARD, Named, parse_permission

        assert parse_permission("all") is WILDCARD
        assert parse_permission("reports_view") == Named("reports_view")
        assert parse_permission(Named("x")).token == "x"

    @pytest.mark.parametrize("token", ["", None, 42])
    def test_invalid_token_raises(self, token):
        from hub_core.errors import IdentityError
        from hub_core.identity import PermissionSet

        with pytest.raises(IdentityError):
            PermissionSet.of([token])

    def test_empty_set_is_falsy(self):
        from hub_core.identity import EMPTY_PERMISSIONS, PermissionSet

        assert not EMPTY_PERMISSIONS
        assert len(PermissionSet.of(["all", "reports_view"])) == 2


class TestIdentityConstruction:
    """Test role and sub-type invariants"""

    def test_strings_are_normalized_to_enums(self, make_identity):
        from hub_core.identity import ProviderType, Role, VerificationStatus

        identity = make_identity(
            "PROVIDER", provider_type="LABORATORY", verification_status="VERIFIED"
        )

        assert identity.role is Role.PROVIDER
        assert identity.provider_type is ProviderType.LABORATORY
        assert identity.verification_status is VerificationStatus.VERIFIED

    def test_unknown_role_raises(self, make_identity):
        from hub_core.errors import UnknownRoleError

        with pytest.raises(UnknownRoleError) as exc_info:
            make_identity("PATIENT")

        assert exc_info.value.code == "ROLE_001"
        assert exc_info.value.details["role"] == "PATIENT"

    def test_provider_type_rejected_outside_provider(self, make_identity):
        from hub_core.errors import IdentityError

        with pytest.raises(IdentityError):
            make_identity("STAFF", provider_type="PHARMACY")

    def test_staff_fields_rejected_outside_staff(self, make_identity):
        from hub_core.errors import IdentityError

        with pytest.raises(IdentityError):
            make_identity("PLATFORM", staff_type="FINANCE")
        with pytest.raises(IdentityError):
            make_identity("PROVIDER", parent_entity_type="PLATFORM")

    def test_unknown_sub_type_raises(self, make_identity):
        from hub_core.errors import IdentityError

        with pytest.raises(IdentityError) as exc_info:
            make_identity("PROVIDER", provider_type="VETERINARY")

        assert exc_info.value.details["field"] == "provider_type"

    def test_staff_without_type_defaults_to_admin(self, make_identity):
        from hub_core.identity import StaffType

        identity = make_identity("STAFF", parent_entity_type="PROVIDER")

        assert identity.staff_type is StaffType.ADMIN

    def test_provider_without_status_is_pending(self, make_identity):
        from hub_core.identity import VerificationStatus

        identity = make_identity("PROVIDER", provider_type="HOMECARE")

        assert identity.verification_status is VerificationStatus.PENDING
        assert not identity.is_verified_provider

    def test_missing_id_raises(self):
        from hub_core.errors import IdentityError
        from hub_core.identity import Identity

        with pytest.raises(IdentityError):
            Identity(id="", role="PLATFORM")

    def test_identity_is_immutable(self, platform_admin):
        from dataclasses import FrozenInstanceError

        with pytest.raises(FrozenInstanceError):
            platform_admin.role = "STAFF"


class TestIdentityLabel:
    """Test the display name fallback chain"""

    def test_display_name_wins(self, make_identity):
        identity = make_identity(display_name="Dra. Ruiz", name="Ruiz", organization_name="Org")
        assert identity.label() == "Dra. Ruiz"

    def test_name_before_full_name(self, make_identity):
        identity = make_identity(name="Ruiz", first_name="Ana", last_names="Ruiz Paz")
        assert identity.label() == "Ruiz"

    def test_first_and_last_names(self, make_identity):
        identity = make_identity(first_name="Ana", last_names="Ruiz Paz")
        assert identity.label() == "Ana Ruiz Paz"

    def test_first_name_alone_is_skipped(self, make_identity):
        identity = make_identity(first_name="Ana", organization_name="Clínica Paz")
        assert identity.label() == "Clínica Paz"

    def test_placeholder_when_nothing_set(self, make_identity):
        identity = make_identity()
        assert identity.label() == "Usuario"
        assert identity.label("Invitado") == "Invitado"


class TestIdentitySerialization:
    """Test the persisted record shape"""

    def test_round_trip(self, verified_pharmacy):
        from hub_core.identity import Identity

        record = verified_pharmacy.to_dict()

        assert record["role"] == "PROVIDER"
        assert record["provider_type"] == "PHARMACY"
        assert Identity.from_dict(record) == verified_pharmacy

    def test_staff_round_trip_keeps_sub_types(self, platform_finance_staff):
        from hub_core.identity import Identity

        restored = Identity.from_dict(platform_finance_staff.to_dict())

        assert restored.staff_type == platform_finance_staff.staff_type
        assert restored.parent_entity_type == platform_finance_staff.parent_entity_type
        assert restored.permissions.allows("billing_manage")

    @pytest.mark.parametrize("record", [
        None,
        ["PLATFORM"],
        {"role": "PLATFORM"},
        {"id": "1"},
        {"id": "1", "role": "PLATFORM", "permissions": "all"},
        {"id": "1", "role": "PLATFORM", "email": 7},
    ])
    def test_malformed_records_raise_identity_error(self, record):
        from hub_core.errors import IdentityError
        from hub_core.identity import Identity

        with pytest.raises(IdentityError):
            Identity.from_dict(record)

    def test_unknown_role_in_record(self):
        from hub_core.errors import UnknownRoleError
        from hub_core.identity import Identity

        with pytest.raises(UnknownRoleError):
            Identity.from_dict({"id": "1", "role": "ROOT", "permissions": []})
