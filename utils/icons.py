"""Symbolic icon names stored on categories, mapped to the glyphs the UI draws.

The table is fixed at import time. Unknown names resolve to the fallback
glyph instead of failing.
"""
from types import MappingProxyType

from utils.constants import FALLBACK_ICON

ICONS = MappingProxyType({
    "Utensils":    "🍴",
    "Car":         "🚗",
    "Popcorn":     "🍿",
    "Zap":         "⚡",
    "ShoppingBag": "🛍",
    "Heart":       "❤",
    "BookOpen":    "📖",
    "Package":     "📦",
    "Briefcase":   "💼",
    "Laptop":      "💻",
    "TrendingUp":  "📈",
    "Gift":        "🎁",
    "DollarSign":  "💲",
    "Tag":         "🏷",
    "Home":        "🏠",
    "Coffee":      "☕",
    "Plane":       "✈",
    "Music":       "🎵",
    "Smartphone":  "📱",
    "PiggyBank":   "🐷",
})

ICON_NAMES = tuple(ICONS)


def is_known_icon(name: str | None) -> bool:
    return bool(name) and name in ICONS


def normalize_icon_name(name: str | None) -> str:
    """Return name if it is registered, else the fallback icon name."""
    return name if is_known_icon(name) else FALLBACK_ICON


def resolve_icon(name: str | None) -> str:
    return ICONS[normalize_icon_name(name)]
