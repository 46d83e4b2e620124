# =============================================================================
# tests/unit/test_navigation.py
# Unit Tests for the Navigation Filter Engine
# =============================================================================

import pytest

PROVIDER_TYPES = [
    "MEDICAL_CENTER", "PHARMACY", "LABORATORY", "EMERGENCY", "HOMECARE",
    "OFFICE_SPECIALIST", "VIRTUAL_SPECIALIST",
]
UNVERIFIED_STATUSES = ["PENDING", "IN_REVIEW", "REJECTED", None]


def _titles(entries):
    return [entry.title for entry in entries]


class TestDecisionTable:
    """Test discriminants -> navigation set resolution"""

    @pytest.mark.parametrize("args,expected", [
        (("PLATFORM",), "platform_admin"),
        (("STAFF", "FINANCE", None, "PLATFORM"), "platform_finance_staff"),
        (("STAFF", "SUPPORT", None, "PLATFORM"), "platform_support_staff"),
        (("STAFF", None, None, "PLATFORM"), "platform_admin_staff"),
        (("STAFF", "FINANCE", None, "PROVIDER"), "provider_finance_staff"),
        (("STAFF", "SUPPORT", None, "PROVIDER"), "provider_support_staff"),
        (("STAFF", "ADMIN", None, "PROVIDER"), "provider_admin_staff"),
        (("PROVIDER", None, "PHARMACY", None, "VERIFIED"), "pharmacy"),
        (("PROVIDER", None, "MEDICAL_CENTER", None, "VERIFIED"), "medical_center"),
        (("PROVIDER", None, "OFFICE_SPECIALIST", None, "VERIFIED"), "specialist"),
        (("PROVIDER", None, "VIRTUAL_SPECIALIST", None, "VERIFIED"), "specialist"),
        (("PROVIDER", None, "EMERGENCY", None, "PENDING"), "pending_verification"),
    ])
    def test_known_tuples(self, args, expected):
        from hub_core.navigation import resolve_navigation_set

        assert resolve_navigation_set(*args).value == expected

    @pytest.mark.parametrize("args", [
        ("STAFF", "FINANCE"),                              # no parent entity
        ("PLATFORM", None, "PHARMACY"),                    # sub-type on wrong role
        ("PROVIDER", None, None, None, "VERIFIED"),        # provider without type
        ("PROVIDER", "FINANCE", "PHARMACY", None, "PENDING"),
        ("GUEST",),
        ("STAFF", "JANITOR", None, "PLATFORM"),
    ])
    def test_missing_tuples_resolve_to_nothing(self, args):
        from hub_core.navigation import resolve_navigation_set

        assert resolve_navigation_set(*args) is None

    def test_every_set_is_reachable(self):
        """Each declared navigation set has at least one table row"""
        from hub_core.navigation import NAVIGATION_TABLE, NavigationSet

        reachable = set(NAVIGATION_TABLE.values()) | {NavigationSet.PENDING_VERIFICATION}

        assert reachable == set(NavigationSet)


class TestFilteredNavigation:
    """Test get_filtered_navigation"""

    def test_platform_finance_staff_scenario(self):
        """Finance staff sees billing/finance but no provider operational modules"""
        from hub_core.navigation import get_filtered_navigation

        entries = get_filtered_navigation(
            "STAFF", ["billing_manage", "reports_view"],
            staff_type="FINANCE", parent_entity_type="PLATFORM",
        )
        titles = _titles(entries)

        assert "Facturación" in titles
        assert "Finanzas" in titles
        assert "Inventario" not in titles
        assert "Paramédicos" not in titles
        assert titles == ["Inicio", "Facturación", "Finanzas", "Reportes", "Configuración"]

    def test_platform_admin_with_wildcard_sees_whole_set(self):
        from hub_core.navigation import NAVIGATION_SETS, NavigationSet, get_filtered_navigation

        entries = get_filtered_navigation("PLATFORM", ["all"])

        assert entries == list(NAVIGATION_SETS[NavigationSet.PLATFORM_ADMIN])

    def test_core_entries_survive_empty_permissions(self):
        from hub_core.navigation import get_filtered_navigation

        entries = get_filtered_navigation("PROVIDER", [], provider_type="PHARMACY",
                                          verification_status="VERIFIED")

        assert entries
        assert all(entry.is_core for entry in entries)
        assert "Inventario" in _titles(entries)

    def test_medical_center_adds_clinical_entries_before_settings(self):
        from hub_core.navigation import get_filtered_navigation

        entries = get_filtered_navigation(
            "PROVIDER", ["medical_records_manage", "consultations_manage"],
            provider_type="MEDICAL_CENTER", verification_status="VERIFIED",
        )
        titles = _titles(entries)

        assert titles[-3:] == ["Consultas", "Expedientes", "Configuración"]

    def test_provider_modules_carry_registry_routes(self):
        from hub_core.navigation import get_filtered_navigation

        entries = get_filtered_navigation(
            "PROVIDER", ["all"], provider_type="EMERGENCY", verification_status="VERIFIED",
        )

        assert entries[0].href == "/dashboard/emergency"
        assert all(entry.module_id for entry in entries)
        assert "Paramédicos" in _titles(entries)

    @pytest.mark.parametrize("provider_type", PROVIDER_TYPES)
    @pytest.mark.parametrize("status", UNVERIFIED_STATUSES)
    def test_unverified_provider_gets_no_operational_entry(self, provider_type, status):
        """Even the wildcard does not unlock navigation before verification"""
        from hub_core.navigation import get_filtered_navigation

        entries = get_filtered_navigation(
            "PROVIDER", ["all"], provider_type=provider_type, verification_status=status,
        )

        assert len(entries) == 1
        assert not entries[0].operational
        assert entries[0].module_id is None

    def test_deterministic_including_order(self):
        from hub_core.navigation import get_filtered_navigation

        args = ("STAFF", ["user_assistance", "patients_read", "reports_view"])
        kwargs = {"staff_type": "SUPPORT", "parent_entity_type": "PLATFORM"}

        first = get_filtered_navigation(*args, **kwargs)
        second = get_filtered_navigation(*args, **kwargs)

        assert first == second
        assert first is not second

    def test_permission_order_does_not_change_menu_order(self):
        from hub_core.navigation import get_filtered_navigation

        a = get_filtered_navigation("PLATFORM", ["reports_view", "users_manage"])
        b = get_filtered_navigation("PLATFORM", ["users_manage", "reports_view"])

        assert a == b

    def test_inputs_are_not_mutated(self):
        from hub_core.navigation import get_filtered_navigation

        permissions = ["billing_basic", "reports_view"]
        get_filtered_navigation("STAFF", permissions, staff_type="FINANCE",
                                parent_entity_type="PROVIDER")

        assert permissions == ["billing_basic", "reports_view"]

    def test_enum_inputs_match_string_inputs(self):
        from hub_core.identity import ParentEntityType, Role, StaffType
        from hub_core.navigation import get_filtered_navigation

        as_enums = get_filtered_navigation(
            Role.STAFF, ["billing_basic"], staff_type=StaffType.FINANCE,
            parent_entity_type=ParentEntityType.PROVIDER,
        )
        as_strings = get_filtered_navigation(
            "STAFF", ["billing_basic"], staff_type="FINANCE", parent_entity_type="PROVIDER",
        )

        assert as_enums == as_strings

    @pytest.mark.parametrize("permissions", [[""], [None], 17])
    def test_garbage_permissions_fail_closed(self, permissions):
        from hub_core.navigation import get_filtered_navigation

        assert get_filtered_navigation("PLATFORM", permissions) == []

    def test_unknown_role_fails_closed(self):
        from hub_core.navigation import get_filtered_navigation

        assert get_filtered_navigation("SUPERUSER", ["all"]) == []


class TestNavigationFor:
    """Test the identity convenience wrapper"""

    def test_anonymous_gets_nothing(self):
        from hub_core.navigation import navigation_for

        assert navigation_for(None) == []

    def test_matches_explicit_call(self, platform_finance_staff):
        from hub_core.navigation import get_filtered_navigation, navigation_for

        assert navigation_for(platform_finance_staff) == get_filtered_navigation(
            "STAFF", ["billing_manage", "reports_view"],
            staff_type="FINANCE", parent_entity_type="PLATFORM",
        )

    def test_pending_identity(self, pending_pharmacy):
        from hub_core.navigation import navigation_for

        entries = navigation_for(pending_pharmacy)

        assert _titles(entries) == ["Verificación pendiente"]
