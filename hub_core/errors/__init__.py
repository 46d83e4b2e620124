# =============================================================================
# hub_core/errors/__init__.py
# Centralized Error Handling for MediGo Hub
# =============================================================================

from .exceptions import (
    MediGoHubError,
    IdentityError,
    UnknownRoleError,
    UnknownCategoryError,
    InvalidCredentialsError,
    LoginInProgressError,
    UnverifiedProviderError,
    StorageCorruptError,
    StorageError,
    ConfigurationError,
)

from .handlers import (
    handle_error,
    safe_execute,
    ErrorContext,
    fail_closed,
)

__all__ = [
    # Exceptions
    "MediGoHubError",
    "IdentityError",
    "UnknownRoleError",
    "UnknownCategoryError",
    "InvalidCredentialsError",
    "LoginInProgressError",
    "UnverifiedProviderError",
    "StorageCorruptError",
    "StorageError",
    "ConfigurationError",
    # Handlers
    "handle_error",
    "safe_execute",
    "ErrorContext",
    "fail_closed",
]
