from .database import ItemDatabase
from .models import ItemKind, SellableEntry, extract_markers

__all__ = [
    "ItemDatabase",
    "ItemKind",
    "SellableEntry",
    "extract_markers",
]
