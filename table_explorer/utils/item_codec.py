"""
Item Codec

Converts between DynamoDB's native Python representation (as returned by the
boto3 resource API) and plain JSON-friendly rows.
"""

import base64
from decimal import Decimal
from typing import Any, Dict

from boto3.dynamodb.types import Binary


def from_dynamo(value: Any) -> Any:
    """Convert a value read from DynamoDB into a JSON-serializable value."""
    if isinstance(value, Decimal):
        # Integral numbers come back as Decimal('42'); keep them ints
        if value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, Binary):
        return base64.b64encode(value.value).decode("ascii")
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, dict):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted((from_dynamo(v) for v in value), key=str)
    if isinstance(value, (list, tuple)):
        return [from_dynamo(v) for v in value]
    return value


def to_dynamo(value: Any) -> Any:
    """Convert a Python value into something the boto3 serializer accepts."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        # boto3 refuses floats; go through str to avoid binary noise
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_dynamo(v) for v in value]
    return value


def row_from_item(item: Dict[str, Any]) -> Dict[str, Any]:
    """Decode one DynamoDB item into a row."""
    return {key: from_dynamo(value) for key, value in item.items()}


def item_from_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """Encode one row for a DynamoDB write."""
    return {key: to_dynamo(value) for key, value in row.items()}
