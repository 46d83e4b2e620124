# =============================================================================
# hub_core/ui/labels.py
# Human-readable role labels and badge colours
# =============================================================================

from typing import Optional

from hub_core.identity import (
    Identity,
    ParentEntityType,
    ProviderType,
    Role,
    StaffType,
    VerificationStatus,
)

PROVIDER_TYPE_LABELS = {
    ProviderType.MEDICAL_CENTER: "Centro Médico",
    ProviderType.PHARMACY: "Farmacia",
    ProviderType.LABORATORY: "Laboratorio",
    ProviderType.EMERGENCY: "Emergencias",
    ProviderType.HOMECARE: "Atención Domiciliaria",
    ProviderType.OFFICE_SPECIALIST: "Especialista Consultorio",
    ProviderType.VIRTUAL_SPECIALIST: "Especialista Virtual",
}

STAFF_TYPE_LABELS = {
    StaffType.FINANCE: "Personal Financiero",
    StaffType.SUPPORT: "Personal de Soporte",
    StaffType.ADMIN: "Personal Administrativo",
}

PARENT_ENTITY_LABELS = {
    ParentEntityType.PLATFORM: "Plataforma",
    ParentEntityType.PROVIDER: "Proveedor",
}

VERIFICATION_LABELS = {
    VerificationStatus.PENDING: "Pendiente",
    VerificationStatus.IN_REVIEW: "En revisión",
    VerificationStatus.VERIFIED: "Verificado",
    VerificationStatus.REJECTED: "Rechazado",
}

# Hex colours for the sidebar role badge
ROLE_COLORS = {
    Role.PLATFORM: "#7c3aed",
    Role.PROVIDER: "#2563eb",
    Role.STAFF: "#16a34a",
}
DEFAULT_ROLE_COLOR = "#6b7280"


def detailed_role_name(identity: Identity) -> str:
    """
    E.g. "Proveedor - Farmacia" or "Personal Financiero - Plataforma".
    """
    if identity.role is Role.PLATFORM:
        return "Administrador de Plataforma"

    if identity.role is Role.PROVIDER:
        label = PROVIDER_TYPE_LABELS.get(identity.provider_type)
        return f"Proveedor - {label}" if label else "Proveedor"

    name = STAFF_TYPE_LABELS.get(identity.staff_type, STAFF_TYPE_LABELS[StaffType.ADMIN])
    parent = PARENT_ENTITY_LABELS.get(identity.parent_entity_type)
    return f"{name} - {parent}" if parent else name


def role_color(role: Optional[Role]) -> str:
    return ROLE_COLORS.get(role, DEFAULT_ROLE_COLOR)


def verification_label(status: Optional[VerificationStatus]) -> str:
    return VERIFICATION_LABELS.get(status, "")
