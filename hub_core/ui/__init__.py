"""
Presentation helpers for MediGo Hub pages.
"""

from .icons import ICON_MAP, resolve_icon, with_icon
from .labels import (
    detailed_role_name,
    role_color,
    verification_label,
    PROVIDER_TYPE_LABELS,
    ROLE_COLORS,
)
from .sidebar import (
    ACTIVE_ROUTE_KEY,
    active_route,
    entry_header,
    open_route,
    render_sidebar,
)

__all__ = [
    "ICON_MAP",
    "resolve_icon",
    "with_icon",
    "detailed_role_name",
    "role_color",
    "verification_label",
    "PROVIDER_TYPE_LABELS",
    "ROLE_COLORS",
    "ACTIVE_ROUTE_KEY",
    "active_route",
    "entry_header",
    "open_route",
    "render_sidebar",
]
