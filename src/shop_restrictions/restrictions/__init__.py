"""Restriction rule model, parsers and evaluator."""

from .evaluator import allowed_entries, is_allowed
from .models import RestrictionSet
from .parser import parse_command_args, parse_structured_fields, parse_tokens

__all__ = [
    "RestrictionSet",
    "allowed_entries",
    "is_allowed",
    "parse_command_args",
    "parse_structured_fields",
    "parse_tokens",
]
