# =============================================================================
# tests/unit/test_registry.py
# Unit Tests for the Provider Capability Registry
# =============================================================================

import pytest

CATEGORIES = ["pharmacy", "laboratory", "medical-center", "emergency", "homecare"]


class TestCategoryLookup:
    """Test category configuration lookup"""

    def test_all_categories_registered_in_order(self):
        from hub_core.registry import list_categories

        assert [c.category.value for c in list_categories()] == CATEGORIES

    def test_lookup_accepts_enum_and_string(self):
        from hub_core.registry import ProviderCategory, get_category_config

        assert get_category_config("pharmacy") is get_category_config(ProviderCategory.PHARMACY)

    def test_unknown_category_raises(self):
        from hub_core.errors import UnknownCategoryError
        from hub_core.registry import get_category_config

        with pytest.raises(UnknownCategoryError) as exc_info:
            get_category_config("veterinary")

        assert exc_info.value.code == "REG_001"

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_module_permissions_belong_to_vocabulary(self, category):
        """Every module requirement is part of its category's permission set"""
        from hub_core.registry import get_category_config

        config = get_category_config(category)
        for module in config.modules:
            assert module.required_permissions <= config.permissions, module.id

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_module_routes_live_under_dashboard_route(self, category):
        from hub_core.registry import get_category_config, route_has_prefix

        config = get_category_config(category)
        assert config.modules[0].route == config.dashboard_route
        for module in config.modules:
            assert route_has_prefix(module.route, config.dashboard_route)


class TestVisibleModules:
    """Test core / permission-intersection filtering"""

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_no_grants_yields_exactly_core_modules(self, category):
        from hub_core.registry import get_category_config, get_visible_modules

        config = get_category_config(category)
        visible = get_visible_modules(category, set())

        assert visible == [m for m in config.modules if m.is_core]

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_wildcard_yields_every_module_in_order(self, category):
        from hub_core.registry import get_category_config, get_visible_modules

        config = get_category_config(category)

        assert get_visible_modules(category, ["all"]) == list(config.modules)

    def test_one_matching_permission_is_enough(self):
        from hub_core.registry import get_visible_modules

        visible = [m.id for m in get_visible_modules("pharmacy", ["couriers_manage"])]

        assert visible == ["dashboard", "orders", "inventory", "couriers", "settings"]

    def test_order_does_not_depend_on_grants(self):
        """Declaration order is kept whatever order permissions arrive in"""
        from hub_core.registry import get_visible_modules

        a = get_visible_modules("emergency", ["reports_view", "vehicles_manage"])
        b = get_visible_modules("emergency", ["vehicles_manage", "reports_view"])

        assert a == b
        assert [m.id for m in a].index("vehicles") < [m.id for m in a].index("reports")


class TestHasPermission:
    """Test category-scoped permission checks"""

    def test_wildcard_short_circuits(self):
        from hub_core.registry import has_permission

        assert has_permission("laboratory", ["all"], "results_validate")
        assert has_permission("laboratory", ["all"], "not_in_any_registry")

    def test_literal_membership(self):
        from hub_core.registry import has_permission

        assert has_permission("laboratory", ["results_enter"], "results_enter")
        assert not has_permission("laboratory", ["results_enter"], "results_validate")

    def test_unknown_category_raises(self):
        from hub_core.errors import UnknownCategoryError
        from hub_core.registry import has_permission

        with pytest.raises(UnknownCategoryError):
            has_permission("dental", ["all"], "x")


class TestRouteResolution:
    """Test get_config_by_route prefix matching"""

    def test_module_route_resolves_to_pharmacy(self):
        from hub_core.registry import ProviderCategory, get_config_by_route

        config = get_config_by_route("/dashboard/pharmacy/orders")

        assert config is not None
        assert config.category is ProviderCategory.PHARMACY

    @pytest.mark.parametrize("route,expected", [
        ("/dashboard/pharmacy", "pharmacy"),
        ("/dashboard/pharmacy/", "pharmacy"),
        ("/dashboard/pharmacy/orders?status=open", "pharmacy"),
        ("/dashboard/medical-center/doctors", "medical-center"),
        ("/dashboard/homecare/care-plans#top", "homecare"),
    ])
    def test_known_routes(self, route, expected):
        from hub_core.registry import get_config_by_route

        assert get_config_by_route(route).category.value == expected

    @pytest.mark.parametrize("route", [
        "", "/", "/dashboard", "/dashboard/pharmacyx", "/dashboard/farmacia", "/pharmacy",
    ])
    def test_unowned_routes(self, route):
        from hub_core.registry import get_config_by_route

        assert get_config_by_route(route) is None

    def test_longest_dashboard_route_wins(self, monkeypatch):
        import dataclasses
        import hub_core.registry.providers as providers
        from hub_core.registry import ProviderCategory, get_config_by_route

        pharmacy = providers.PROVIDER_CONFIGS[ProviderCategory.PHARMACY]
        laboratory = providers.PROVIDER_CONFIGS[ProviderCategory.LABORATORY]
        monkeypatch.setattr(providers, "PROVIDER_CONFIGS", {
            ProviderCategory.PHARMACY: dataclasses.replace(pharmacy, dashboard_route="/dashboard/x"),
            ProviderCategory.LABORATORY: dataclasses.replace(laboratory, dashboard_route="/dashboard/x/y"),
        })

        assert get_config_by_route("/dashboard/x/y/results").category is ProviderCategory.LABORATORY
        assert get_config_by_route("/dashboard/x/y").category is ProviderCategory.LABORATORY
        assert get_config_by_route("/dashboard/x/z").category is ProviderCategory.PHARMACY
        assert get_config_by_route("/dashboard/x/yz").category is ProviderCategory.PHARMACY

    def test_equal_routes_resolve_in_registry_order(self, monkeypatch):
        import dataclasses
        import hub_core.registry.providers as providers
        from hub_core.registry import ProviderCategory, get_config_by_route

        laboratory = providers.PROVIDER_CONFIGS[ProviderCategory.LABORATORY]
        emergency = providers.PROVIDER_CONFIGS[ProviderCategory.EMERGENCY]
        monkeypatch.setattr(providers, "PROVIDER_CONFIGS", {
            ProviderCategory.EMERGENCY: dataclasses.replace(emergency, dashboard_route="/dashboard/shared"),
            ProviderCategory.LABORATORY: dataclasses.replace(laboratory, dashboard_route="/dashboard/shared"),
        })

        assert get_config_by_route("/dashboard/shared/orders").category is ProviderCategory.EMERGENCY

    def test_module_for_route_picks_most_specific(self):
        from hub_core.registry import get_category_config

        config = get_category_config("pharmacy")

        assert config.module_for_route("/dashboard/pharmacy/inventory/123").id == "inventory"
        assert config.module_for_route("/dashboard/pharmacy/unknown").id == "dashboard"
        assert config.module_for_route("/dashboard/laboratory") is None


class TestProviderTypeMapping:
    """Test provider type -> category mapping"""

    @pytest.mark.parametrize("provider_type,expected", [
        ("PHARMACY", "pharmacy"),
        ("LABORATORY", "laboratory"),
        ("MEDICAL_CENTER", "medical-center"),
        ("EMERGENCY", "emergency"),
        ("HOMECARE", "homecare"),
    ])
    def test_category_provider_types(self, provider_type, expected):
        from hub_core.registry import category_for_provider_type

        assert category_for_provider_type(provider_type).value == expected

    @pytest.mark.parametrize("provider_type", [
        "OFFICE_SPECIALIST", "VIRTUAL_SPECIALIST", None, "UNKNOWN",
    ])
    def test_no_category(self, provider_type):
        from hub_core.registry import category_for_provider_type

        assert category_for_provider_type(provider_type) is None


class TestModuleMatrix:
    """Test the tabular view used by the capabilities page"""

    def test_one_row_per_module_in_order(self):
        from hub_core.registry import build_module_matrix, get_category_config

        config = get_category_config("emergency")
        matrix = build_module_matrix("emergency")

        assert len(matrix) == len(config.modules)
        assert list(matrix["module"]) == [m.display_name for m in config.modules]
        assert list(matrix["order"]) == list(range(1, len(config.modules) + 1))

    def test_columns_cover_vocabulary(self):
        from hub_core.registry import build_module_matrix, get_category_config

        config = get_category_config("pharmacy")
        matrix = build_module_matrix("pharmacy")

        assert list(matrix.columns[:4]) == ["order", "module", "route", "core"]
        assert set(matrix.columns[4:]) == set(config.permissions)

    def test_cells_mark_required_permissions(self):
        from hub_core.registry import build_module_matrix

        matrix = build_module_matrix("emergency").set_index("route")
        row = matrix.loc["/dashboard/emergency/paramedics"]

        assert bool(row["paramedics_manage"])
        assert not bool(row["vehicles_manage"])
        assert bool(row["core"])
