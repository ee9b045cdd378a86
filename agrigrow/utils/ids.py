# agrigrow/utils/ids.py
import uuid

from agrigrow.domain.errors import InvalidInput


def new_id() -> str:
    return str(uuid.uuid4())


def parse_id(value, field: str = "id") -> str:
    """Normalise an opaque identifier, raising InvalidInput when it is malformed."""
    if value is None or value == "":
        raise InvalidInput(f"Invalid {field} format.")
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, AttributeError, TypeError):
        raise InvalidInput(f"Invalid {field} format.")
