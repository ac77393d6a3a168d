from .loader import ShopRestrictionSettings, load_settings

__all__ = [
    "ShopRestrictionSettings",
    "load_settings",
]
