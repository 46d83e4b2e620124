# =============================================================================
# hub_core/navigation/entries.py
# Navigation entries and the named navigation sets they compose into
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from hub_core.identity import PermissionSet
from hub_core.registry import CapabilityModule, ProviderCategory, get_category_config


@dataclass(frozen=True)
class NavigationEntry:
    """
    One item of the header/sidebar menu.

    ``icon`` is a symbolic key resolved by the presentation layer.
    ``operational`` is False only for informational entries such as the
    pending-verification notice.
    """
    title: str
    href: str
    icon: str
    description: str
    required_permissions: FrozenSet[str] = frozenset()
    is_core: bool = False
    operational: bool = True
    module_id: Optional[str] = None

    def is_visible_to(self, granted: PermissionSet) -> bool:
        return self.is_core or granted.intersects(self.required_permissions)


def _entry(
    title: str,
    href: str,
    icon: str,
    description: str,
    permissions: Iterable[str] = (),
    is_core: bool = False,
) -> NavigationEntry:
    return NavigationEntry(
        title=title,
        href=href,
        icon=icon,
        description=description,
        required_permissions=frozenset(permissions),
        is_core=is_core,
    )


def entry_from_module(module: CapabilityModule) -> NavigationEntry:
    return NavigationEntry(
        title=module.display_name,
        href=module.route,
        icon=module.icon,
        description=module.description,
        required_permissions=module.required_permissions,
        is_core=module.is_core,
        module_id=module.id,
    )


# =============================================================================
# SHARED ENTRIES
# =============================================================================

HOME = _entry("Inicio", "/dashboard", "Home", "Panel principal del sistema",
              ["dashboard_access"], is_core=True)
CONSULTATIONS = _entry("Consultas", "/dashboard/consultas", "Video",
                       "Gestión de consultas médicas",
                       ["consultations_manage", "appointments_manage"])
PATIENTS = _entry("Pacientes", "/dashboard/pacientes", "Users",
                  "Registro y gestión de pacientes",
                  ["patients_read", "patients_manage"])
RECORDS = _entry("Expedientes", "/dashboard/expedientes", "FileText",
                 "Gestión de expedientes médicos",
                 ["medical_records_manage", "medical_records_view"])
DOCTORS = _entry("Médicos", "/dashboard/medicos", "UserCog",
                 "Gestión de profesionales médicos", ["doctors_manage"])
DEPARTMENTS = _entry("Departamentos", "/dashboard/departamentos", "Building2",
                     "Organización departamental", ["departments_manage"])
REGISTRIES = _entry("Registros", "/dashboard/registros", "FileText",
                    "Registros médicos y archivos", ["records_access"])
PHARMACY = _entry("Farmacia", "/dashboard/farmacia", "Pill",
                  "Gestión de medicamentos y prescripciones", ["pharmacy_oversight"])
LABORATORY = _entry("Laboratorio", "/dashboard/laboratorio", "TestTube",
                    "Gestión de pruebas diagnósticas", ["laboratory_oversight"])
EMERGENCY = _entry("Emergencias", "/dashboard/emergencias", "Ambulance",
                   "Servicios de emergencias médicas", ["emergency_oversight"])
HOMECARE = _entry("Cuidado Domiciliario", "/dashboard/homecare", "HeartHandshake",
                  "Servicios de salud a domicilio", ["homecare_oversight"])
USERS = _entry("Usuarios", "/dashboard/usuarios", "Users",
               "Gestión de usuarios del sistema", ["users_manage"])
PROVIDERS = _entry("Proveedores", "/dashboard/proveedores", "Building2",
                   "Gestión de proveedores de servicios",
                   ["providers_manage", "provider_verification"])
STAFF = _entry("Personal", "/dashboard/personal", "UserCog",
               "Gestión de staff y personal", ["staff_manage"])
BILLING = _entry("Facturación", "/dashboard/facturacion", "CreditCard",
                 "Sistema de facturación", ["billing_manage", "billing_basic"])
FINANCE = _entry("Finanzas", "/dashboard/finanzas", "CreditCard",
                 "Gestión financiera y reportes",
                 ["billing_manage", "financial_reports", "provider_payouts"])
SUPPORT = _entry("Soporte", "/dashboard/soporte", "HeartHandshake",
                 "Atención al cliente y soporte técnico",
                 ["user_assistance", "dispute_resolution"])
REPORTS = _entry("Reportes", "/dashboard/reportes", "BarChart3",
                 "Reportes y analíticas", ["reports_view"])
SYSTEM_SETTINGS = _entry("Configuración", "/dashboard/configuracion", "Settings",
                         "Configuración del sistema", ["platform_configure"])
PROFILE_SETTINGS = _entry("Configuración", "/dashboard/configuracion", "Settings",
                          "Configuración del perfil y organización", is_core=True)
HISTORY = _entry("Historiales", "/dashboard/historiales", "Activity",
                 "Historiales de actividad", ["activity_logs_view"])
VISITS = _entry("Visitas", "/dashboard/visitas", "Calendar",
                "Registro de visitas", ["visits_view"])

PENDING_VERIFICATION = NavigationEntry(
    title="Verificación pendiente",
    href="/dashboard/verificacion",
    icon="ShieldAlert",
    description="Su cuenta está en revisión; los módulos se habilitan al ser verificada",
    is_core=True,
    operational=False,
)


# =============================================================================
# NAVIGATION SETS
# =============================================================================

class NavigationSet(str, Enum):
    PLATFORM_ADMIN = "platform_admin"
    PLATFORM_FINANCE_STAFF = "platform_finance_staff"
    PLATFORM_SUPPORT_STAFF = "platform_support_staff"
    PLATFORM_ADMIN_STAFF = "platform_admin_staff"
    PROVIDER_FINANCE_STAFF = "provider_finance_staff"
    PROVIDER_SUPPORT_STAFF = "provider_support_staff"
    PROVIDER_ADMIN_STAFF = "provider_admin_staff"
    PHARMACY = "pharmacy"
    LABORATORY = "laboratory"
    MEDICAL_CENTER = "medical_center"
    EMERGENCY = "emergency"
    HOMECARE = "homecare"
    SPECIALIST = "specialist"
    PENDING_VERIFICATION = "pending_verification"


def _provider_set(
    category: ProviderCategory,
    extra: Tuple[NavigationEntry, ...] = (),
) -> Tuple[NavigationEntry, ...]:
    """Category modules as entries; ``extra`` goes right before the settings module."""
    entries = []
    for module in get_category_config(category).modules:
        if module.id == "settings":
            entries.extend(extra)
            extra = ()
        entries.append(entry_from_module(module))
    entries.extend(extra)
    return tuple(entries)


NAVIGATION_SETS: Dict[NavigationSet, Tuple[NavigationEntry, ...]] = {
    NavigationSet.PLATFORM_ADMIN: (
        HOME, CONSULTATIONS, PATIENTS, RECORDS, DOCTORS, DEPARTMENTS, REGISTRIES,
        PHARMACY, LABORATORY, EMERGENCY, HOMECARE,
        USERS, PROVIDERS, STAFF, BILLING, FINANCE, SUPPORT,
        REPORTS, SYSTEM_SETTINGS, HISTORY, VISITS,
    ),
    NavigationSet.PLATFORM_FINANCE_STAFF: (
        HOME, BILLING, FINANCE, REPORTS, PROFILE_SETTINGS,
    ),
    NavigationSet.PLATFORM_SUPPORT_STAFF: (
        HOME, CONSULTATIONS, PATIENTS, PROVIDERS, SUPPORT, REPORTS, PROFILE_SETTINGS,
    ),
    NavigationSet.PLATFORM_ADMIN_STAFF: (
        HOME, USERS, PROVIDERS, STAFF, REPORTS, HISTORY, PROFILE_SETTINGS,
    ),
    NavigationSet.PROVIDER_FINANCE_STAFF: (
        HOME, BILLING, REPORTS, PROFILE_SETTINGS,
    ),
    NavigationSet.PROVIDER_SUPPORT_STAFF: (
        HOME, CONSULTATIONS, PATIENTS, SUPPORT, PROFILE_SETTINGS,
    ),
    NavigationSet.PROVIDER_ADMIN_STAFF: (
        HOME, STAFF, REPORTS, PROFILE_SETTINGS,
    ),
    NavigationSet.PHARMACY: _provider_set(ProviderCategory.PHARMACY),
    NavigationSet.LABORATORY: _provider_set(ProviderCategory.LABORATORY),
    NavigationSet.MEDICAL_CENTER: _provider_set(
        ProviderCategory.MEDICAL_CENTER, extra=(CONSULTATIONS, RECORDS)
    ),
    NavigationSet.EMERGENCY: _provider_set(ProviderCategory.EMERGENCY),
    NavigationSet.HOMECARE: _provider_set(ProviderCategory.HOMECARE),
    NavigationSet.SPECIALIST: (
        HOME, CONSULTATIONS, RECORDS, PROFILE_SETTINGS,
    ),
    NavigationSet.PENDING_VERIFICATION: (PENDING_VERIFICATION,),
}
