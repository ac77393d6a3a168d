from __future__ import annotations

from typing import Any, Optional, Sequence


class ShopRestrictionError(Exception):
    """Base exception for the shop restrictions package."""


class ParseError(ShopRestrictionError):
    """Raised when a restriction declaration cannot be parsed.

    The declaring command has no effect when this is raised.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.field = field
        if field:
            message = f"{field}: {message}"
        super().__init__(message)


class ItemDataError(ShopRestrictionError):
    """Raised when a host data record fails schema validation."""

    def __init__(self, message: str, errors: Optional[Sequence[Any]] = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])

    def to_human(self) -> str:
        parts = [str(self)]
        for e in self.errors:
            path = "/".join(str(p) for p in e.path) or "<root>"
            parts.append(f" - at {path}: {e.message}")
        return "\n".join(parts)


class SettingsError(ShopRestrictionError):
    """Raised when the settings file is malformed."""


class SellRejectedError(ShopRestrictionError):
    """Raised when the party tries to sell something the shop will not buy."""
