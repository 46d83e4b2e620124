# =============================================================================
# hub_core/registry/providers.py
# Provider Capability Registry
# Static catalog of feature modules per provider category
# =============================================================================
"""
Every provider category declares an ordered list of capability modules and
the full permission vocabulary of the category. Declaration order is the
menu order: filtering removes modules but never reorders them.

A module is visible when it is core, or when the granted permissions
intersect its required permissions.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

import pandas as pd

from hub_core.errors import UnknownCategoryError
from hub_core.identity import PermissionSet, ProviderType
from hub_core.logging import get_logger

logger = get_logger(__name__)


class ProviderCategory(str, Enum):
    PHARMACY = "pharmacy"
    LABORATORY = "laboratory"
    MEDICAL_CENTER = "medical-center"
    EMERGENCY = "emergency"
    HOMECARE = "homecare"


@dataclass(frozen=True)
class CapabilityModule:
    id: str
    display_name: str
    description: str
    route: str
    icon: str
    required_permissions: FrozenSet[str]
    is_core: bool = False

    def is_visible_to(self, granted: PermissionSet) -> bool:
        return self.is_core or granted.intersects(self.required_permissions)


@dataclass(frozen=True)
class CategoryConfig:
    category: ProviderCategory
    display_name: str
    description: str
    icon: str
    color: str
    features: Tuple[str, ...]
    modules: Tuple[CapabilityModule, ...]
    permissions: FrozenSet[str]
    dashboard_route: str

    def module(self, module_id: str) -> Optional[CapabilityModule]:
        for module in self.modules:
            if module.id == module_id:
                return module
        return None

    def module_for_route(self, route: str) -> Optional[CapabilityModule]:
        """Module owning ``route``; the most specific route wins."""
        route = normalize_route(route)
        matches = [m for m in self.modules if route_has_prefix(route, m.route)]
        if not matches:
            return None
        return max(matches, key=lambda m: len(m.route))


def _module(
    module_id: str,
    display_name: str,
    description: str,
    route: str,
    icon: str,
    permissions: Iterable[str],
    is_core: bool,
) -> CapabilityModule:
    return CapabilityModule(
        id=module_id,
        display_name=display_name,
        description=description,
        route=route,
        icon=icon,
        required_permissions=frozenset(permissions),
        is_core=is_core,
    )


# =============================================================================
# CATEGORY DECLARATIONS
# =============================================================================

PHARMACY = CategoryConfig(
    category=ProviderCategory.PHARMACY,
    display_name="Farmacia",
    description="Gestión completa de farmacia con inventario, órdenes y entregas",
    icon="Package",
    color="blue",
    features=(
        "Gestión de inventario de medicamentos",
        "Procesamiento de órdenes y recetas",
        "Verificación digital de prescripciones",
        "Gestión de repartidores y entregas",
        "Control de stock y alertas",
        "Reportes de ventas y productos",
    ),
    modules=(
        _module("dashboard", "Dashboard", "Panel principal con métricas y resumen",
                "/dashboard/pharmacy", "BarChart3", ["dashboard_access"], True),
        _module("orders", "Órdenes", "Gestión de órdenes de medicamentos",
                "/dashboard/pharmacy/orders", "ShoppingCart",
                ["orders_view", "orders_process"], True),
        _module("inventory", "Inventario", "Control de stock de medicamentos",
                "/dashboard/pharmacy/inventory", "Package",
                ["inventory_view", "inventory_manage"], True),
        _module("couriers", "Repartidores", "Gestión de personal de entrega",
                "/dashboard/pharmacy/couriers", "Truck", ["couriers_manage"], False),
        _module("clients", "Clientes", "Base de datos de clientes",
                "/dashboard/pharmacy/clients", "Users", ["clients_view"], False),
        _module("reports", "Reportes", "Análisis y reportes de ventas",
                "/dashboard/pharmacy/reports", "FileText", ["reports_view"], False),
        _module("settings", "Configuración", "Configuración de la farmacia",
                "/dashboard/pharmacy/settings", "Settings", ["pharmacy_configure"], True),
    ),
    permissions=frozenset({
        "dashboard_access", "inventory_view", "inventory_manage", "orders_view",
        "orders_process", "prescriptions_verify", "couriers_manage", "clients_view",
        "reports_view", "pharmacy_configure",
    }),
    dashboard_route="/dashboard/pharmacy",
)

LABORATORY = CategoryConfig(
    category=ProviderCategory.LABORATORY,
    display_name="Laboratorio",
    description="Gestión completa de laboratorio clínico con análisis y resultados",
    icon="TestTube",
    color="green",
    features=(
        "Gestión de órdenes de laboratorio",
        "Administración de técnicos especializados",
        "Procesamiento de muestras",
        "Validación de resultados",
        "Control de calidad",
        "Reportes de rendimiento",
    ),
    modules=(
        _module("dashboard", "Dashboard", "Panel principal con métricas de laboratorio",
                "/dashboard/laboratory", "BarChart3", ["dashboard_access"], True),
        _module("orders", "Órdenes", "Gestión de órdenes de análisis",
                "/dashboard/laboratory/orders", "ClipboardList",
                ["orders_view", "orders_manage"], True),
        _module("tests", "Catálogo de Pruebas", "Gestión del catálogo de análisis",
                "/dashboard/laboratory/tests", "TestTube", ["tests_manage"], True),
        _module("technicians", "Técnicos", "Gestión de personal técnico",
                "/dashboard/laboratory/technicians", "User", ["technicians_manage"], False),
        _module("results", "Resultados", "Validación y entrega de resultados",
                "/dashboard/laboratory/results", "FileText",
                ["results_enter", "results_validate"], True),
        _module("reports", "Reportes", "Análisis de desempeño del laboratorio",
                "/dashboard/laboratory/reports", "FileText", ["reports_view"], False),
        _module("settings", "Configuración", "Configuración del laboratorio",
                "/dashboard/laboratory/settings", "Settings", ["laboratory_configure"], True),
    ),
    permissions=frozenset({
        "dashboard_access", "orders_view", "orders_manage", "samples_process",
        "results_enter", "results_validate", "tests_manage", "technicians_manage",
        "reports_view", "laboratory_configure",
    }),
    dashboard_route="/dashboard/laboratory",
)

MEDICAL_CENTER = CategoryConfig(
    category=ProviderCategory.MEDICAL_CENTER,
    display_name="Centro Médico",
    description="Gestión hospitalaria integral con citas, pacientes y personal médico",
    icon="Building2",
    color="purple",
    features=(
        "Gestión de citas médicas",
        "Registro y seguimiento de pacientes",
        "Administración de personal médico",
        "Gestión de departamentos",
        "Control de instalaciones",
        "Reportes médicos y administrativos",
    ),
    modules=(
        _module("dashboard", "Dashboard", "Panel principal del centro médico",
                "/dashboard/medical-center", "BarChart3", ["dashboard_access"], True),
        _module("appointments", "Citas", "Gestión de citas médicas",
                "/dashboard/medical-center/appointments", "Calendar",
                ["appointments_view", "appointments_manage"], True),
        _module("patients", "Pacientes", "Registro y seguimiento de pacientes",
                "/dashboard/medical-center/patients", "Users",
                ["patients_view", "patients_manage"], True),
        _module("doctors", "Médicos", "Gestión del personal médico",
                "/dashboard/medical-center/doctors", "User", ["doctors_manage"], False),
        _module("departments", "Departamentos", "Gestión de departamentos médicos",
                "/dashboard/medical-center/departments", "Building2",
                ["departments_manage"], False),
        _module("facilities", "Instalaciones", "Gestión de espacios y recursos",
                "/dashboard/medical-center/facilities", "Building2",
                ["facilities_manage"], False),
        _module("reports", "Reportes", "Reportes médicos y administrativos",
                "/dashboard/medical-center/reports", "FileText", ["reports_view"], False),
        _module("settings", "Configuración", "Configuración del centro médico",
                "/dashboard/medical-center/settings", "Settings", ["center_configure"], True),
    ),
    permissions=frozenset({
        "dashboard_access", "appointments_view", "appointments_manage", "patients_view",
        "patients_manage", "records_access", "doctors_manage", "departments_manage",
        "facilities_manage", "reports_view", "center_configure",
    }),
    dashboard_route="/dashboard/medical-center",
)

EMERGENCY = CategoryConfig(
    category=ProviderCategory.EMERGENCY,
    display_name="Servicios de Emergencia",
    description="Gestión de servicios médicos de emergencia y ambulancias",
    icon="Truck",
    color="red",
    features=(
        "Gestión de solicitudes de emergencia",
        "Despacho de unidades médicas",
        "Administración de paramédicos",
        "Control de vehículos y equipos",
        "Protocolos médicos de emergencia",
        "Reportes de tiempo de respuesta",
    ),
    modules=(
        _module("dashboard", "Dashboard", "Centro de control de emergencias",
                "/dashboard/emergency", "BarChart3", ["dashboard_access"], True),
        _module("requests", "Solicitudes", "Gestión de llamadas de emergencia",
                "/dashboard/emergency/requests", "AlertTriangle",
                ["requests_view", "requests_manage"], True),
        _module("paramedics", "Paramédicos", "Gestión de personal paramédico",
                "/dashboard/emergency/paramedics", "User", ["paramedics_manage"], True),
        _module("vehicles", "Vehículos", "Gestión de ambulancias y equipos",
                "/dashboard/emergency/vehicles", "Truck", ["vehicles_manage"], False),
        _module("protocols", "Protocolos", "Protocolos médicos de emergencia",
                "/dashboard/emergency/protocols", "FileText", ["protocols_access"], False),
        _module("reports", "Reportes", "Análisis de desempeño y tiempos",
                "/dashboard/emergency/reports", "FileText", ["reports_view"], False),
        _module("settings", "Configuración", "Configuración del servicio de emergencia",
                "/dashboard/emergency/settings", "Settings", ["emergency_configure"], True),
    ),
    permissions=frozenset({
        "dashboard_access", "requests_view", "requests_manage", "units_dispatch",
        "paramedics_manage", "vehicles_manage", "protocols_access", "reports_view",
        "emergency_configure",
    }),
    dashboard_route="/dashboard/emergency",
)

HOMECARE = CategoryConfig(
    category=ProviderCategory.HOMECARE,
    display_name="Atención Domiciliaria",
    description="Gestión de servicios de cuidado y atención médica en el hogar",
    icon="Heart",
    color="pink",
    features=(
        "Gestión de servicios a domicilio",
        "Administración de cuidadores",
        "Planes de cuidado personalizados",
        "Seguimiento de pacientes",
        "Coordinación familiar",
        "Reportes de calidad de atención",
    ),
    modules=(
        _module("dashboard", "Dashboard", "Panel de control de atención domiciliaria",
                "/dashboard/homecare", "BarChart3", ["dashboard_access"], True),
        _module("bookings", "Servicios", "Gestión de citas y servicios",
                "/dashboard/homecare/bookings", "Calendar",
                ["bookings_view", "bookings_manage"], True),
        _module("caregivers", "Cuidadores", "Gestión del personal de cuidado",
                "/dashboard/homecare/caregivers", "User", ["caregivers_manage"], True),
        _module("clients", "Clientes", "Registro y seguimiento de clientes",
                "/dashboard/homecare/clients", "Users",
                ["clients_view", "clients_manage"], True),
        _module("care-plans", "Planes de Cuidado", "Gestión de planes personalizados",
                "/dashboard/homecare/care-plans", "FileText",
                ["care_plans_view", "care_plans_manage"], False),
        _module("reports", "Reportes", "Análisis de calidad y desempeño",
                "/dashboard/homecare/reports", "FileText", ["reports_view"], False),
        _module("settings", "Configuración", "Configuración del servicio domiciliario",
                "/dashboard/homecare/settings", "Settings", ["homecare_configure"], True),
    ),
    permissions=frozenset({
        "dashboard_access", "bookings_view", "bookings_manage", "clients_view",
        "clients_manage", "caregivers_manage", "care_plans_view", "care_plans_manage",
        "services_manage", "reports_view", "homecare_configure",
    }),
    dashboard_route="/dashboard/homecare",
)

# Registry order is precedence order for route resolution
PROVIDER_CONFIGS: Dict[ProviderCategory, CategoryConfig] = {
    ProviderCategory.PHARMACY: PHARMACY,
    ProviderCategory.LABORATORY: LABORATORY,
    ProviderCategory.MEDICAL_CENTER: MEDICAL_CENTER,
    ProviderCategory.EMERGENCY: EMERGENCY,
    ProviderCategory.HOMECARE: HOMECARE,
}

PROVIDER_TYPE_CATEGORIES: Dict[ProviderType, ProviderCategory] = {
    ProviderType.PHARMACY: ProviderCategory.PHARMACY,
    ProviderType.LABORATORY: ProviderCategory.LABORATORY,
    ProviderType.MEDICAL_CENTER: ProviderCategory.MEDICAL_CENTER,
    ProviderType.EMERGENCY: ProviderCategory.EMERGENCY,
    ProviderType.HOMECARE: ProviderCategory.HOMECARE,
}


# =============================================================================
# ROUTE HELPERS
# =============================================================================

def normalize_route(route: str) -> str:
    """Drop query string, fragment and trailing slash."""
    route = route.split("?", 1)[0].split("#", 1)[0].strip()
    if len(route) > 1:
        route = route.rstrip("/")
    return route or "/"


def route_has_prefix(route: str, prefix: str) -> bool:
    """Prefix match on whole path segments: /a/b matches /a, /ab does not."""
    return route == prefix or route.startswith(prefix.rstrip("/") + "/")


# =============================================================================
# REGISTRY OPERATIONS
# =============================================================================

def _parse_category(category: Union[ProviderCategory, str]) -> ProviderCategory:
    if isinstance(category, ProviderCategory):
        return category
    try:
        return ProviderCategory(category)
    except ValueError:
        raise UnknownCategoryError(
            f"Unknown provider category: {category!r}", category=str(category)
        ) from None


def list_categories() -> List[CategoryConfig]:
    return list(PROVIDER_CONFIGS.values())


def get_category_config(category: Union[ProviderCategory, str]) -> CategoryConfig:
    """
    Return the configuration for ``category``.

    Raises:
        UnknownCategoryError: for anything outside the category enum
    """
    return PROVIDER_CONFIGS[_parse_category(category)]


def get_visible_modules(
    category: Union[ProviderCategory, str],
    granted_permissions: Union[PermissionSet, Iterable[str], None],
) -> List[CapabilityModule]:
    """
    Modules of ``category`` visible for ``granted_permissions``, in
    declaration order. Core modules are always included.
    """
    config = get_category_config(category)
    granted = PermissionSet.of(granted_permissions)
    return [module for module in config.modules if module.is_visible_to(granted)]


def has_permission(
    category: Union[ProviderCategory, str],
    granted_permissions: Union[PermissionSet, Iterable[str], None],
    permission: str,
) -> bool:
    """
    Membership test for ``permission``; the wildcard grants everything.

    ``category`` must be a known category, but the permission does not have
    to belong to its vocabulary.
    """
    get_category_config(category)
    return PermissionSet.of(granted_permissions).allows(permission)


def get_config_by_route(route: str) -> Optional[CategoryConfig]:
    """
    Resolve the category owning ``route``.

    The longest matching dashboard route wins; among equally long matches
    the first one in registry order wins.
    """
    if not route:
        return None
    route = normalize_route(route)

    best: Optional[CategoryConfig] = None
    for config in PROVIDER_CONFIGS.values():
        if not route_has_prefix(route, config.dashboard_route):
            continue
        if best is None or len(config.dashboard_route) > len(best.dashboard_route):
            best = config

    if best is None:
        logger.debug(f"No provider category owns route {route}")
    return best


def category_for_provider_type(
    provider_type: Union[ProviderType, str, None],
) -> Optional[ProviderCategory]:
    """Category for a provider type; specialists have none."""
    if provider_type is None:
        return None
    try:
        provider_type = ProviderType(provider_type)
    except ValueError:
        return None
    return PROVIDER_TYPE_CATEGORIES.get(provider_type)


def build_module_matrix(category: Union[ProviderCategory, str]) -> pd.DataFrame:
    """
    Tabular view of a category's modules for the capabilities page.

    One row per module in declaration order; one boolean column per
    permission of the category telling whether the module accepts it.
    """
    config = get_category_config(category)
    vocabulary = sorted(config.permissions)

    rows = []
    for order, module in enumerate(config.modules, start=1):
        row = {
            "order": order,
            "module": module.display_name,
            "route": module.route,
            "core": module.is_core,
        }
        for permission in vocabulary:
            row[permission] = permission in module.required_permissions
        rows.append(row)

    return pd.DataFrame(rows, columns=["order", "module", "route", "core", *vocabulary])
