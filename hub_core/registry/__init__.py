"""
Provider capability registry.
"""

from .providers import (
    ProviderCategory,
    CapabilityModule,
    CategoryConfig,
    PROVIDER_CONFIGS,
    PROVIDER_TYPE_CATEGORIES,
    list_categories,
    get_category_config,
    get_visible_modules,
    has_permission,
    get_config_by_route,
    category_for_provider_type,
    build_module_matrix,
    normalize_route,
    route_has_prefix,
)

__all__ = [
    "ProviderCategory",
    "CapabilityModule",
    "CategoryConfig",
    "PROVIDER_CONFIGS",
    "PROVIDER_TYPE_CATEGORIES",
    "list_categories",
    "get_category_config",
    "get_visible_modules",
    "has_permission",
    "get_config_by_route",
    "category_for_provider_type",
    "build_module_matrix",
    "normalize_route",
    "route_has_prefix",
]
