"""Parsers for the two restriction declaration forms.

Token form (older plugin-command surface)::

    BUY_ONLY i1 it2 w1 w2 wt3 et5 health poison

Structured form (newer plugin-command surface): a mapping of field name to
an encoded list literal, e.g. ``{"weaponId": "[\\"1\\",\\"2\\"]", "meta": ""}``.

Both produce a :class:`RestrictionSet`.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ParseError
from .models import RestrictionSet

logger = logging.getLogger(__name__)

_MARKER_CHARS = re.compile(r'["<>\s]')
_INTEGER = re.compile(r"[+-]?[0-9]+")

# Order matters: two-letter prefixes must be tried before "i", "a" and "w".
_TOKEN_RULES = (
    (re.compile(r"it([0-9]+)"), "item_type_ids"),
    (re.compile(r"at([0-9]+)"), "armor_type_ids"),
    (re.compile(r"wt([0-9]+)"), "weapon_type_ids"),
    (re.compile(r"et([0-9]+)"), "equipment_type_ids"),
    (re.compile(r"i([0-9]+)"), "item_ids"),
    (re.compile(r"a([0-9]+)"), "armor_ids"),
    (re.compile(r"w([0-9]+)"), "weapon_ids"),
)


def strip_marker(text: str) -> str:
    """Remove quotes, angle brackets and whitespace from a tag."""
    return _MARKER_CHARS.sub("", text)


def classify_token(token: str) -> tuple[str, Union[int, str]]:
    """Return the RestrictionSet field a token belongs to and its value."""
    for pattern, field_name in _TOKEN_RULES:
        match = pattern.fullmatch(token)
        if match:
            return field_name, int(match.group(1))
    return "tags", strip_marker(token)


def parse_tokens(tokens: Union[str, Iterable[str]]) -> RestrictionSet:
    """Parse whitespace-separated short codes into a RestrictionSet.

    A string is split on whitespace first. Tokens are case-sensitive; anything
    not matching a prefix rule (including a bare ``e5``) becomes a tag.
    """
    if isinstance(tokens, str):
        tokens = tokens.split()
    values: Dict[str, List[Union[int, str]]] = {}
    for token in tokens:
        field_name, value = classify_token(token)
        values.setdefault(field_name, []).append(value)
    restrictions = RestrictionSet.from_lists(values)
    logger.debug("Parsed token restrictions: %s", restrictions.to_dict())
    return restrictions


def _decode_list(raw: Any) -> List[Any]:
    if raw is None:
        return []
    if isinstance(raw, str):
        if not raw.strip():
            return []
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"not a valid list literal ({e.msg}): {raw!r}") from e
    elif isinstance(raw, (list, tuple)):
        decoded = list(raw)
    else:
        raise ValueError(f"expected an encoded list, got {type(raw).__name__}")
    if not isinstance(decoded, list):
        raise ValueError(f"expected a list literal, got {raw!r}")
    return decoded


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER.fullmatch(value.strip()):
        return int(value.strip())
    raise ValueError(f"not an integer: {value!r}")


class StructuredRestrictions(BaseModel):
    """Structured-form fields, keyed by their authoring names."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    weapon_ids: List[int] = Field(default_factory=list, alias="weaponId")
    weapon_type_ids: List[int] = Field(default_factory=list, alias="wType")
    armor_ids: List[int] = Field(default_factory=list, alias="armourId")
    armor_type_ids: List[int] = Field(default_factory=list, alias="aType")
    equipment_type_ids: List[int] = Field(default_factory=list, alias="eType")
    item_ids: List[int] = Field(default_factory=list, alias="itemId")
    item_type_ids: List[int] = Field(default_factory=list, alias="iType")
    tags: List[str] = Field(default_factory=list, alias="meta")

    @field_validator(
        "weapon_ids",
        "weapon_type_ids",
        "armor_ids",
        "armor_type_ids",
        "equipment_type_ids",
        "item_ids",
        "item_type_ids",
        mode="before",
    )
    @classmethod
    def decode_numbers(cls, v: Any) -> List[int]:
        return [_to_int(x) for x in _decode_list(v)]

    @field_validator("tags", mode="before")
    @classmethod
    def decode_tags(cls, v: Any) -> List[str]:
        tags = []
        for x in _decode_list(v):
            if not isinstance(x, str):
                raise ValueError(f"tags must be strings, got {x!r}")
            tags.append(strip_marker(x))
        return tags

    def to_restriction_set(self) -> RestrictionSet:
        return RestrictionSet.from_lists(self.model_dump())


def _first_error(exc: ValidationError) -> ParseError:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ())) or None
    message = err.get("msg", str(exc))
    return ParseError(message, field=loc)


def parse_structured_fields(fields: Mapping[str, Any]) -> RestrictionSet:
    """Parse the structured form into a RestrictionSet.

    Blank values give empty fields. Malformed list literals or non-integer
    numeric elements raise ParseError.
    """
    if not isinstance(fields, Mapping):
        raise ParseError(f"expected a mapping of fields, got {type(fields).__name__}")
    try:
        model = StructuredRestrictions.model_validate(dict(fields))
    except ValidationError as e:
        raise _first_error(e) from e
    restrictions = model.to_restriction_set()
    logger.debug("Parsed structured restrictions: %s", restrictions.to_dict())
    return restrictions


def parse_command_args(args: Mapping[str, Any]) -> RestrictionSet:
    """Parse plugin-command arguments carrying an encoded ``restrictions`` object."""
    if "restrictions" not in args:
        raise ParseError("missing 'restrictions' argument")
    raw = args["restrictions"]
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError(f"not a valid object literal ({e.msg})", field="restrictions") from e
    if not isinstance(raw, Mapping):
        raise ParseError("expected an object", field="restrictions")
    return parse_structured_fields(raw)


__all__ = [
    "StructuredRestrictions",
    "classify_token",
    "parse_command_args",
    "parse_structured_fields",
    "parse_tokens",
    "strip_marker",
]
