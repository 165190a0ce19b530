"""Path identifier parsing."""

from uuid import UUID

from core.exceptions import InvalidIdError


def parse_object_id(value: str) -> UUID:
    """Parse a path id, rejecting malformed values with a 400."""
    try:
        return UUID(value)
    except ValueError:
        raise InvalidIdError(value) from None
