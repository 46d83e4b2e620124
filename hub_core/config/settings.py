"""
Hub Settings
Application settings loaded from Streamlit secrets, with demo defaults.
"""
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional
import streamlit as st

from hub_core.errors import ConfigurationError
from hub_core.logging import get_logger

logger = get_logger(__name__)

SECRETS_SECTION = "hub"


@dataclass(frozen=True)
class HubSettings:
    """
    Runtime settings for the access core.

    Expected secrets.toml format:
    [hub]
    storage_key = "medigo_hub.identity"
    login_delay_seconds = 1.0
    bcrypt_rounds = 12
    placeholder_name = "Usuario"
    log_level = "INFO"
    log_to_file = false
    """
    storage_key: str = "medigo_hub.identity"
    login_delay_seconds: float = 1.0
    bcrypt_rounds: int = 12
    placeholder_name: str = "Usuario"
    log_level: str = "INFO"
    log_to_file: bool = False

    def __post_init__(self):
        if not isinstance(self.storage_key, str) or not self.storage_key:
            raise ConfigurationError(
                "storage_key must be a non-empty string",
                config_key="storage_key",
                expected_type="str",
            )
        if self.login_delay_seconds < 0:
            raise ConfigurationError(
                "login_delay_seconds cannot be negative",
                config_key="login_delay_seconds",
                expected_type="float >= 0",
            )
        # bcrypt only accepts cost factors between 4 and 31
        if not 4 <= self.bcrypt_rounds <= 31:
            raise ConfigurationError(
                "bcrypt_rounds must be between 4 and 31",
                config_key="bcrypt_rounds",
                expected_type="int",
            )
        if not self.placeholder_name:
            raise ConfigurationError(
                "placeholder_name cannot be empty",
                config_key="placeholder_name",
                expected_type="str",
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "HubSettings":
        """Build settings from a mapping, ignoring unknown keys."""
        defaults = {f.name: f.default for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in values.items():
            if key not in defaults:
                logger.warning(f"Ignoring unknown setting '{key}'")
                continue
            kwargs[key] = _coerce(key, value, defaults[key])
        return cls(**kwargs)

    def with_overrides(self, **overrides) -> "HubSettings":
        return replace(self, **overrides)


def _coerce(key: str, value: Any, default: Any) -> Any:
    target = type(default)
    if isinstance(value, target):
        return value
    try:
        if target is bool:
            if isinstance(value, str):
                return value.strip().lower() in ("1", "true", "yes", "on")
            return bool(value)
        return target(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Invalid value for '{key}': {value!r}",
            config_key=key,
            expected_type=target.__name__,
        ) from e


def _load_settings_from_secrets() -> Optional[Dict[str, Any]]:
    try:
        if hasattr(st, "secrets") and SECRETS_SECTION in st.secrets:
            return dict(st.secrets[SECRETS_SECTION])
    except Exception:
        # No secrets.toml at all: Streamlit raises instead of returning empty
        return None
    return None


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> HubSettings:
    """
    Load settings from Streamlit secrets, falling back to defaults.

    Args:
        overrides: Values that take precedence over secrets (tests, scripts)
    """
    values = _load_settings_from_secrets() or {}
    if overrides:
        values.update(overrides)

    if not values:
        logger.info("No [hub] secrets configured, using default settings")
        return HubSettings()

    return HubSettings.from_mapping(values)
