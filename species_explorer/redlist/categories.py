"""IUCN Red List category display attributes."""

from ..types import CategoryInfo

# Severity order, most severe first
CATEGORY_CODES = ("EX", "EW", "CR", "EN", "VU", "NT", "LC", "DD", "NE")

_NAMES = {
    "EX": "Extinct",
    "EW": "Extinct in the Wild",
    "CR": "Critically Endangered",
    "EN": "Endangered",
    "VU": "Vulnerable",
    "NT": "Near Threatened",
    "LC": "Least Concern",
    "DD": "Data Deficient",
    "NE": "Not Evaluated",
}

_COLORS = {
    "EX": "bg-black text-white",
    "EW": "bg-purple-900 text-white",
    "CR": "bg-red-600 text-white",
    "EN": "bg-orange-500 text-white",
    "VU": "bg-yellow-500 text-black",
    "NT": "bg-green-400 text-black",
    "LC": "bg-green-600 text-white",
    "DD": "bg-gray-500 text-white",
    "NE": "bg-gray-300 text-black",
}

DEFAULT_COLOR = "bg-gray-400 text-black"


def category_color(code: str) -> str:
    return _COLORS.get(code, DEFAULT_COLOR)


def category_name(code: str) -> str:
    """Full category name; unknown codes are returned unchanged."""
    return _NAMES.get(code, code)


def category_info(code: str) -> CategoryInfo:
    return CategoryInfo(code=code, name=category_name(code), color=category_color(code))
