"""
Configuration for the MediGo Hub access core.
Settings come from the [hub] table of .streamlit/secrets.toml when present.
"""

from .settings import HubSettings, load_settings

__all__ = ["HubSettings", "load_settings"]
