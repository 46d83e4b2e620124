# =============================================================================
# hub_core/errors/exceptions.py
# Exception Hierarchy for MediGo Hub
# =============================================================================

from typing import Optional, Dict, Any


class MediGoHubError(Exception):
    """
    Base exception for all MediGo Hub errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (e.g., "AUTH_001")
        details: Additional context as a dictionary
        recoverable: Whether the error can be recovered from
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "HUB_000"
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# IDENTITY EXCEPTIONS
# =============================================================================

class IdentityError(MediGoHubError):
    """Raised when an identity record is structurally invalid"""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field

        super().__init__(message=message, code="ID_001", details=details, **kwargs)


class UnknownRoleError(MediGoHubError):
    """Raised when a role string is outside the closed role set"""

    def __init__(self, message: str, role: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if role is not None:
            details["role"] = role

        super().__init__(message=message, code="ROLE_001", details=details, **kwargs)


# =============================================================================
# REGISTRY EXCEPTIONS
# =============================================================================

class UnknownCategoryError(MediGoHubError):
    """Raised when a provider category is not in the capability registry"""

    def __init__(self, message: str, category: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if category is not None:
            details["category"] = category

        super().__init__(message=message, code="REG_001", details=details, **kwargs)


# =============================================================================
# AUTHENTICATION EXCEPTIONS
# =============================================================================

class InvalidCredentialsError(MediGoHubError):
    """Raised by the credential store when an email/password pair does not match"""

    def __init__(self, message: str, email: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if email:
            details["email"] = email

        super().__init__(message=message, code="AUTH_001", details=details, **kwargs)


class LoginInProgressError(MediGoHubError):
    """Raised when login() is called while another login is still pending"""

    def __init__(self, message: str = "A login is already in progress", **kwargs):
        super().__init__(message=message, code="AUTH_002", **kwargs)


class UnverifiedProviderError(MediGoHubError):
    """Raised when an unverified provider reaches an operational area"""

    def __init__(
        self,
        message: str,
        verification_status: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if verification_status:
            details["verification_status"] = verification_status

        super().__init__(message=message, code="AUTH_003", details=details, **kwargs)


# =============================================================================
# STORAGE EXCEPTIONS
# =============================================================================

class StorageCorruptError(MediGoHubError):
    """Raised when the persisted identity record cannot be parsed"""

    def __init__(self, message: str, key: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        if key:
            details["key"] = key

        super().__init__(message=message, code="STORE_001", details=details, **kwargs)


class StorageError(MediGoHubError):
    """Raised when the session storage backend fails to read or write"""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        operation: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if key:
            details["key"] = key
        if operation:
            details["operation"] = operation

        super().__init__(message=message, code="STORE_002", details=details, **kwargs)


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(MediGoHubError):
    """Raised when configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        expected_type: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if expected_type:
            details["expected_type"] = expected_type

        super().__init__(
            message=message,
            code="CONFIG_001",
            details=details,
            recoverable=False,
            **kwargs,
        )
