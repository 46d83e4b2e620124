# =============================================================================
# hub_core/ui/icons.py
# Symbolic icon keys -> emoji used by the sidebar and page headers
# =============================================================================

from typing import Optional

ICON_MAP = {
    "Activity": "📈",
    "AlertTriangle": "⚠️",
    "Ambulance": "🚑",
    "BarChart3": "📊",
    "Building2": "🏢",
    "Calendar": "📅",
    "ClipboardList": "📋",
    "CreditCard": "💳",
    "FileText": "📄",
    "Heart": "❤️",
    "HeartHandshake": "🤝",
    "Home": "🏠",
    "Package": "📦",
    "Pill": "💊",
    "Settings": "⚙️",
    "ShieldAlert": "🛡️",
    "ShoppingCart": "🛒",
    "TestTube": "🧪",
    "Truck": "🚚",
    "User": "👤",
    "UserCog": "🧑‍⚕️",
    "Users": "👥",
    "Video": "🎥",
}


def resolve_icon(key: Optional[str]) -> str:
    """Emoji for ``key``; unknown keys render with no icon."""
    if not key:
        return ""
    return ICON_MAP.get(key, "")


def with_icon(key: Optional[str], label: str) -> str:
    icon = resolve_icon(key)
    return f"{icon} {label}" if icon else label
