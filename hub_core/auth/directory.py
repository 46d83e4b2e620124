"""
User directory and credential store for MediGo Hub.

⚠️ DEMO ONLY - NOT FOR PRODUCTION USE
The accounts below exist so the hub can be explored without a backend.
Passwords are hashed with bcrypt when the store is built; the plain-text
seeds never leave this module.

Demo credentials:
- Platform admin:      admin@medgohub.com / platform123
- Platform finance:    finance@medgohub.com / finance123
- Platform support:    support@medgohub.com / support123
- Medical center:      provider.medical@medgohub.com / medical123
- Pharmacy:            provider.pharmacy@medgohub.com / pharmacy123
- Laboratory:          provider.lab@medgohub.com / lab123
- Emergency:           provider.emergency@medgohub.com / emergency123
- Homecare:            provider.homecare@medgohub.com / homecare123
- Office specialist:   provider.specialist@medgohub.com / specialist123
- Virtual specialist:  provider.virtual@medgohub.com / virtual123
- Provider finance:    staff.finance.provider@medgohub.com / stafffinance123
- Provider support:    staff.support.provider@medgohub.com / staffsupport123
- Pending provider:    provider.pending@medgohub.com / pending123
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Tuple

import bcrypt

from hub_core.errors import InvalidCredentialsError
from hub_core.identity import Identity
from hub_core.logging import get_logger

logger = get_logger(__name__)


# ==================== DEMO ACCOUNTS ====================

DEMO_ACCOUNTS: List[Dict[str, Any]] = [
    {
        "password": "platform123",
        "profile": {
            "id": "1",
            "email": "admin@medgohub.com",
            "role": "PLATFORM",
            "name": "Administrador Sistema",
            "display_name": "Administrador Sistema",
            "first_name": "Administrador",
            "last_names": "Sistema",
            "permissions": ["all"],
        },
    },
    {
        "password": "finance123",
        "profile": {
            "id": "2",
            "email": "finance@medgohub.com",
            "role": "STAFF",
            "staff_type": "FINANCE",
            "parent_entity_type": "PLATFORM",
            "name": "Ana Financiera",
            "display_name": "Ana Financiera López",
            "first_name": "Ana",
            "last_names": "Financiera López",
            "permissions": [
                "billing_manage", "financial_reports", "provider_payouts",
                "transaction_records", "refund_processing", "reports_view",
                "dashboard_access", "patients_read",
            ],
        },
    },
    {
        "password": "support123",
        "profile": {
            "id": "3",
            "email": "support@medgohub.com",
            "role": "STAFF",
            "staff_type": "SUPPORT",
            "parent_entity_type": "PLATFORM",
            "name": "Carlos Soporte",
            "display_name": "Carlos Soporte Mendoza",
            "first_name": "Carlos",
            "last_names": "Soporte Mendoza",
            "permissions": [
                "user_assistance", "provider_verification", "dispute_resolution",
                "content_management", "reports_view", "dashboard_access",
                "patients_read", "consultations_manage", "appointments_manage",
            ],
        },
    },
    {
        "password": "medical123",
        "profile": {
            "id": "4",
            "email": "provider.medical@medgohub.com",
            "role": "PROVIDER",
            "provider_type": "MEDICAL_CENTER",
            "name": "Dr. María González",
            "display_name": "Dr. María González Rodríguez",
            "first_name": "María",
            "last_names": "González Rodríguez",
            "organization_name": "Centro Médico González",
            "license_number": "LIC-MED-001",
            "verification_status": "VERIFIED",
            "permissions": [
                "dashboard_access", "appointments_manage", "patients_manage",
                "medical_records_manage", "consultations_manage", "doctors_manage",
                "departments_manage", "staff_manage", "reports_view",
                "center_configure", "billing_basic",
            ],
        },
    },
    {
        "password": "pharmacy123",
        "profile": {
            "id": "5",
            "email": "provider.pharmacy@medgohub.com",
            "role": "PROVIDER",
            "provider_type": "PHARMACY",
            "name": "Farmacia Central",
            "display_name": "Farmacia Central",
            "organization_name": "Farmacia Central S.A.",
            "license_number": "LIC-PHARM-001",
            "verification_status": "VERIFIED",
            "permissions": [
                "dashboard_access", "orders_process", "inventory_manage",
                "prescriptions_verify", "couriers_manage", "staff_manage",
                "reports_view", "pharmacy_configure", "billing_basic",
            ],
        },
    },
    {
        "password": "lab123",
        "profile": {
            "id": "6",
            "email": "provider.lab@medgohub.com",
            "role": "PROVIDER",
            "provider_type": "LABORATORY",
            "name": "Laboratorio Clínico",
            "display_name": "Laboratorio Clínico Avanzado",
            "organization_name": "Laboratorio Clínico Avanzado",
            "license_number": "LIC-LAB-001",
            "verification_status": "VERIFIED",
            "permissions": [
                "dashboard_access", "orders_manage", "samples_process",
                "results_enter", "results_validate", "tests_manage",
                "technicians_manage", "staff_manage", "reports_view",
                "laboratory_configure",
            ],
        },
    },
    {
        "password": "emergency123",
        "profile": {
            "id": "7",
            "email": "provider.emergency@medgohub.com",
            "role": "PROVIDER",
            "provider_type": "EMERGENCY",
            "name": "Servicios de Emergencia",
            "display_name": "Servicios de Emergencia MedRápido",
            "organization_name": "Servicios de Emergencia MedRápido",
            "license_number": "LIC-EMR-001",
            "verification_status": "VERIFIED",
            "permissions": [
                "dashboard_access", "requests_manage", "units_dispatch",
                "paramedics_manage", "vehicles_manage", "protocols_access",
                "staff_manage", "reports_view", "emergency_configure",
            ],
        },
    },
    {
        "password": "homecare123",
        "profile": {
            "id": "8",
            "email": "provider.homecare@medgohub.com",
            "role": "PROVIDER",
            "provider_type": "HOMECARE",
            "name": "Atención Domiciliaria",
            "display_name": "HomeCare Plus",
            "organization_name": "HomeCare Plus S.A.",
            "license_number": "LIC-HOME-001",
            "verification_status": "VERIFIED",
            "permissions": [
                "dashboard_access", "bookings_manage", "caregivers_manage",
                "clients_manage", "care_plans_manage", "services_manage",
                "staff_manage", "reports_view", "homecare_configure",
            ],
        },
    },
    {
        "password": "specialist123",
        "profile": {
            "id": "9",
            "email": "provider.specialist@medgohub.com",
            "role": "PROVIDER",
            "provider_type": "OFFICE_SPECIALIST",
            "first_name": "Luis",
            "last_names": "Herrera Campos",
            "organization_name": "Consultorio Dr. Herrera",
            "license_number": "LIC-ESP-001",
            "verification_status": "VERIFIED",
            "permissions": [
                "dashboard_access", "consultations_manage", "appointments_manage",
                "medical_records_manage",
            ],
        },
    },
    {
        "password": "virtual123",
        "profile": {
            "id": "10",
            "email": "provider.virtual@medgohub.com",
            "role": "PROVIDER",
            "provider_type": "VIRTUAL_SPECIALIST",
            "organization_name": "TeleSalud Integral",
            "license_number": "LIC-VIRT-001",
            "verification_status": "VERIFIED",
            "permissions": [
                "dashboard_access", "consultations_manage", "medical_records_view",
            ],
        },
    },
    {
        "password": "stafffinance123",
        "profile": {
            "id": "11",
            "email": "staff.finance.provider@medgohub.com",
            "role": "STAFF",
            "staff_type": "FINANCE",
            "parent_entity_type": "PROVIDER",
            "first_name": "Sofía",
            "last_names": "Ramírez Ortega",
            "permissions": ["dashboard_access", "billing_basic", "reports_view"],
        },
    },
    {
        "password": "staffsupport123",
        "profile": {
            "id": "12",
            "email": "staff.support.provider@medgohub.com",
            "role": "STAFF",
            "staff_type": "SUPPORT",
            "parent_entity_type": "PROVIDER",
            "first_name": "Diego",
            "last_names": "Castillo Vega",
            "permissions": [
                "dashboard_access", "user_assistance", "patients_read",
                "appointments_manage",
            ],
        },
    },
    {
        "password": "pending123",
        "profile": {
            "id": "13",
            "email": "provider.pending@medgohub.com",
            "role": "PROVIDER",
            "provider_type": "PHARMACY",
            "organization_name": "Farmacia Nueva Esperanza",
            "license_number": "LIC-PHARM-014",
            "verification_status": "PENDING",
            # Seeded with a full grant on purpose: verification must still win
            "permissions": [
                "dashboard_access", "orders_process", "inventory_manage",
                "couriers_manage", "clients_view", "reports_view",
                "pharmacy_configure",
            ],
        },
    },
]


# ==================== PASSWORD HASHING ====================

def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hash a password using bcrypt.

    Example:
        >>> hash_password("mypassword123")
        '$2b$12$...'
    """
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        # Malformed hash in the store
        logger.error("Stored password hash is not a valid bcrypt hash")
        return False


def normalize_email(email: str) -> str:
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


# ==================== CREDENTIAL STORE ====================

class CredentialStore:
    """
    Email/password lookup returning the matching Identity.

    Usage:
        store = CredentialStore.from_accounts(DEMO_ACCOUNTS)
        identity = store.verify("admin@medgohub.com", "platform123")
    """

    def __init__(self, entries: Mapping[str, Tuple[str, Identity]]):
        self._entries: Dict[str, Tuple[str, Identity]] = {
            normalize_email(email): entry for email, entry in entries.items()
        }

    @classmethod
    def from_accounts(
        cls,
        accounts: Optional[List[Mapping[str, Any]]] = None,
        rounds: int = 12,
    ) -> CredentialStore:
        entries = {}
        for account in DEMO_ACCOUNTS if accounts is None else accounts:
            identity = Identity.from_dict(dict(account["profile"]))
            entries[identity.email] = (hash_password(account["password"], rounds), identity)
        logger.info(f"Credential store ready with {len(entries)} accounts")
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, email: str) -> bool:
        return normalize_email(email) in self._entries

    def identities(self) -> List[Identity]:
        return [identity for _, identity in self._entries.values()]

    def verify(self, email: str, password: str) -> Identity:
        """
        Return the identity for a matching, active account.

        Raises:
            InvalidCredentialsError: unknown email, wrong password or
                inactive account; the message does not say which
        """
        entry = self._entries.get(normalize_email(email))
        if entry is None or not isinstance(password, str):
            raise InvalidCredentialsError("Invalid email or password", email=email)

        hashed, identity = entry
        if not check_password(password, hashed):
            raise InvalidCredentialsError("Invalid email or password", email=email)

        if not identity.is_active:
            raise InvalidCredentialsError("Invalid email or password", email=email)

        return identity
