"""
JSON encoding for concept documents.

Documents carry bson ObjectIds and timezone-aware datetimes; the HTTP layer
sends ids as hex strings and datetimes as ISO 8601.
"""
from datetime import datetime
from typing import Any

from bson import ObjectId
from fastapi.encoders import jsonable_encoder

from socialapp.utils.datetime_utils import to_iso

CUSTOM_ENCODERS = {
    ObjectId: str,
    datetime: to_iso,
}


def encode(value: Any) -> Any:
    """Convert documents (or lists/dicts of them) into JSON-compatible data."""
    return jsonable_encoder(value, custom_encoder=CUSTOM_ENCODERS)
