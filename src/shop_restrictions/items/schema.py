import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Dict

from jsonschema import Draft202012Validator

from ..exceptions import ItemDataError

logger = logging.getLogger(__name__)

_SCHEMA_FILE = "entry.schema.json"


@lru_cache(maxsize=1)
def _load_entry_schema() -> Dict[str, Any]:
    """
    Load the bundled record schema from the package's schemas directory.

    Cached since the schema is static.
    """
    ref = resources.files("shop_restrictions.items").joinpath("schemas").joinpath(_SCHEMA_FILE)
    with ref.open("r", encoding="utf-8") as f:
        logger.debug("Loading entry schema from %s", ref)
        return json.load(f)


@lru_cache(maxsize=None)
def _validator_for(kind: str) -> Draft202012Validator:
    root = _load_entry_schema()
    if kind not in root["$defs"]:
        raise ValueError(f"No schema for record kind {kind!r}")
    schema = dict(root)
    schema["$ref"] = f"#/$defs/{kind}"
    return Draft202012Validator(schema)


def validate_record(data: Dict[str, Any], kind: str) -> None:
    """
    Validate a host database record for the given kind (item, weapon, armor).

    Raises:
        ItemDataError carrying every validation error found.
    """
    validator = _validator_for(kind)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        for err in errors:
            logger.error("%s record validation error at %s: %s", kind, list(err.path), err.message)
        raise ItemDataError(f"{kind} record validation failed", errors)


__all__ = [
    "validate_record",
]
