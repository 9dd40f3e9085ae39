# moviehub/utils/helpers.py

import logging
from typing import Any, Dict, Optional

from bson import ObjectId

logger = logging.getLogger(__name__)

# --- Identifiers ---

def parse_object_id(id_str: str) -> Optional[ObjectId]:
    """
    Validates a string as a MongoDB ObjectId.

    Only the 24 hex character form is accepted; anything else yields None so
    the caller can reject the request before touching the database.

    Args:
        id_str: Raw identifier, usually a path parameter.

    Returns:
        The parsed ObjectId, or None if the format is invalid.
    """
    if isinstance(id_str, str) and len(id_str) == 24 and ObjectId.is_valid(id_str):
        return ObjectId(id_str)
    logger.warning(f"Invalid ObjectId format: {id_str!r}")
    return None

# --- Serialization ---

def serialize_value(value: Any) -> Any:
    """Recursively renders ObjectIds as hex strings."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return value


def serialize_document(doc: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Convert a MongoDB document into an API-friendly dictionary.

    Args:
        doc: Document as returned by the driver.

    Returns:
        The document with every ObjectId (including nested ones) as a string.
    """
    if not doc:
        return {}
    return serialize_value(doc)
