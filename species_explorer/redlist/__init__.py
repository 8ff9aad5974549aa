"""IUCN Red List domain service and category helpers."""

from .categories import CATEGORY_CODES, category_color, category_info, category_name
from .service import RedListService

__all__ = [
    "CATEGORY_CODES",
    "RedListService",
    "category_color",
    "category_info",
    "category_name",
]
