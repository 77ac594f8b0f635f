from datetime import datetime, date
from typing import Any, Dict, Optional
from bson import ObjectId


def serialize_value(value: Any) -> Any:
    """Recursively serialize non-JSON-serializable values"""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    elif isinstance(value, ObjectId):
        return str(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return value


def serialize_document(document: Optional[Dict]) -> Optional[Dict]:
    """Convert a Mongo document to JSON, exposing _id as id"""
    if document is None:
        return None

    document = dict(document)
    if "_id" in document:
        document["id"] = str(document.pop("_id"))

    return {key: serialize_value(value) for key, value in document.items()}
